"""
CLI helper functions: environment validation, ignore patterns, file collection.
"""

import os
import sys
from fnmatch import fnmatch
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from core.utils import debug, error
from detect import SUPPORTED_EXTENSIONS

DEFAULT_IGNORES = ["node_modules/**", "dist/**"]


def validate_environment(require_summ: bool = False) -> None:
    """
    Validate that the environment is properly configured.
    Exits with error if validation fails.
    """
    errors = []

    if require_summ and not os.getenv("SCANO_SUMM_URL"):
        errors.append(
            "SCANO_SUMM_URL not set. Either:\n"
            "  1. Set environment variable: export SCANO_SUMM_URL=https://...\n"
            "  2. Add SCANO_SUMM_URL=... to a .env file in the working directory"
        )

    registry_path = os.getenv("SCANO_REGISTRY")
    if registry_path and not Path(registry_path).is_file():
        errors.append(f"SCANO_REGISTRY points to a missing file: {registry_path}")

    if errors:
        error("Environment validation failed:\n")
        for i, err in enumerate(errors, 1):
            error(f"\n{i}. {err}\n")
        sys.exit(1)


def normalize_ignore_patterns(patterns: Iterable[str], base_dir: str) -> List[str]:
    """
    Expand --ignore values into glob patterns relative to base_dir.

    Values may be comma-separated. Directories (and paths without an
    extension) are expanded to "<dir>/**".
    """
    normalized: List[str] = []
    for pattern in patterns:
        for entry in pattern.split(","):
            cleaned = entry.strip()
            while cleaned.startswith(("./", "/")):
                cleaned = cleaned[1:] if cleaned.startswith("/") else cleaned[2:]
            cleaned = cleaned.rstrip("/")
            if not cleaned:
                continue
            full_path = Path(base_dir) / cleaned
            if full_path.is_dir() or (not full_path.exists() and not Path(cleaned).suffix):
                cleaned = f"{cleaned}/**"
            normalized.append(cleaned)
    return normalized


def is_ignored(rel_path: str, patterns: Iterable[str]) -> bool:
    return any(fnmatch(rel_path, pattern) for pattern in patterns)


def _is_candidate(path: Path) -> bool:
    return path.is_file() and path.suffix.lower() in SUPPORTED_EXTENSIONS


def read_manifest(manifest_path: str) -> List[str]:
    """Read candidate paths from a manifest file (one per line, '#' comments)."""
    with open(manifest_path, "r", encoding="utf-8") as f:
        lines = [line.strip() for line in f]
    return [line for line in lines if line and not line.startswith("#")]


def collect_source_files(
    input_path: str,
    ignore: Optional[List[str]] = None,
    manifest: Optional[str] = None,
) -> Tuple[str, List[str]]:
    """
    Collect .js/.mjs/.cjs/.css/.html files from a path (file or directory).

    Returns (base_dir, files) with files as posix paths relative to base_dir.
    """
    path = Path(input_path)
    if not path.exists():
        return str(path), []

    if path.is_file():
        if not _is_candidate(path):
            return str(path.parent), []
        return str(path.parent), [path.name]

    patterns = DEFAULT_IGNORES + normalize_ignore_patterns(ignore or [], str(path))
    debug(f"Ignore patterns: {patterns}")

    if manifest:
        candidates = [path / entry for entry in read_manifest(manifest)]
    else:
        candidates = list(path.rglob("*"))

    source_files = []
    for file_path in candidates:
        if not _is_candidate(file_path):
            continue
        try:
            rel_path = file_path.relative_to(path).as_posix()
        except ValueError:
            # Manifest entry outside the scan root
            rel_path = file_path.as_posix()
        if is_ignored(rel_path, patterns):
            continue
        source_files.append(rel_path)

    return str(path), sorted(set(source_files))
