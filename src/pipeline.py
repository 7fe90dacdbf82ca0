"""
Scan pass: route each candidate file to its detector and collect results.

Files are scanned one at a time in the given order. Parse failures are
reported as warnings and never stop the scan.
"""

import os
from typing import List, Optional

from core.context import ScanContext, ScanResult
from core.utils import debug
from detect.script import SCRIPT_EXTENSIONS, detect_script_features
from detect.style import STYLE_EXTENSIONS, detect_style_features
from registry.keywords import KeywordIndex


def read_source(path: str) -> str:
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return f.read()


def scan_file(file_path: str, content: str, index: KeywordIndex) -> Optional[ScanResult]:
    """Run the detector matching the file extension; None for unsupported files."""
    ext = os.path.splitext(file_path)[1].lower()
    if ext in SCRIPT_EXTENSIONS:
        return detect_script_features(file_path, content, index)
    if ext in STYLE_EXTENSIONS:
        return detect_style_features(file_path, content, index)
    debug(f"Skipping {file_path}: unsupported extension")
    return None


def run_scan(
    ctx: ScanContext,
    files: List[str],
    index: KeywordIndex,
    base_dir: Optional[str] = None,
) -> List[ScanResult]:
    """
    Scan files and accumulate their records into ctx.

    Paths are reported as given; base_dir, when set, is where relative paths
    are read from.
    """
    results: List[ScanResult] = []
    for file_path in files:
        disk_path = os.path.join(base_dir, file_path) if base_dir else file_path
        result = scan_file(file_path, read_source(disk_path), index)
        if result is None:
            continue
        if not result.ok:
            ctx.warn(f"⚠️  Failed to parse {file_path}: {result.error}")
        ctx.add_records(result.records)
        results.append(result)
    return results
