import os
import sys
from pathlib import Path

import pytest

# Disable colors before any module reads SCANO_NO_COLORS (evaluated at import time)
os.environ["SCANO_NO_COLORS"] = "1"

# Ensure the project `src` directory is on sys.path so tests can import
# modules like `registry`, `detect`, `reporter`, etc.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep user configuration out of tests."""
    for name in ("SCANO_REGISTRY", "SCANO_OUTPUT_DIR", "SCANO_SUMM_URL", "SCANO_SUMM_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    yield
