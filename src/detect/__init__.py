"""
Per-file feature detectors.

Scripts go through the syntax-tree detector, style and markup files through
the line-based detector. Both return a ScanResult.
"""

from detect.script import SCRIPT_EXTENSIONS, detect_script_features, parse_script_source
from detect.style import STYLE_EXTENSIONS, detect_style_features

SUPPORTED_EXTENSIONS = SCRIPT_EXTENSIONS + STYLE_EXTENSIONS

__all__ = [
    "SCRIPT_EXTENSIONS",
    "STYLE_EXTENSIONS",
    "SUPPORTED_EXTENSIONS",
    "detect_script_features",
    "detect_style_features",
    "parse_script_source",
]
