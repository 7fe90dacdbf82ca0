from core.context import DetectionRecord, ScanContext, ScanResult, dedupe_records
from core.errors import KeywordIndexError, RegistryError, ScanoError, SummError
from core.utils import debug, warn, error

__version__ = "0.1.0"

__all__ = [
    "DetectionRecord",
    "ScanContext",
    "ScanResult",
    "dedupe_records",
    "ScanoError",
    "RegistryError",
    "KeywordIndexError",
    "SummError",
    "debug",
    "warn",
    "error",
]
