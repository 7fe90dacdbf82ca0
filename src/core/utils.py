import os
import re
import sys
from datetime import datetime
from typing import Optional

_DEBUG_ENABLED = bool(os.getenv("SCANO_DEBUG"))

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")


def debug(*args, **kwargs):
    if _DEBUG_ENABLED:
        prefix = "\033[1m[DEBUG]\033[0m"
        print(prefix, *args, file=sys.stderr, **kwargs)


def info(*args, **kwargs):
    prefix = "\033[1;34m[INFO]\033[0m"
    print(prefix, *args, file=sys.stderr, **kwargs)


def warn(*args, **kwargs):
    prefix = "\033[1;33m[WARNING]\033[0m"
    print(prefix, *args, file=sys.stderr, **kwargs)


def error(*args, **kwargs):
    prefix = "\033[1;31m[ERROR]\033[0m"
    print(prefix, *args, file=sys.stderr, **kwargs)


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences (colors, bold) from text."""
    return _ANSI_RE.sub("", text)


def run_timestamp(now: Optional[datetime] = None) -> str:
    """Timestamp used in output file names: YYMMDDhhmmss + milliseconds."""
    now = now or datetime.now()
    return now.strftime("%y%m%d%H%M%S") + f"{now.microsecond // 1000:03d}"
