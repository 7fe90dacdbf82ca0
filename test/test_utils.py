"""Shared test utilities."""
import json
import textwrap
from typing import Any, Dict, List, Optional, Tuple

from core.context import ScanResult
from detect.script import detect_script_features
from detect.style import detect_style_features
from registry.keywords import KeywordIndex, build_keyword_index
from registry.loader import FeatureRegistry

__all__ = ["SUPPORTED", "feature", "make_registry", "make_index", "scan_script", "scan_style", "hits", "write_registry"]

SUPPORTED = {"chrome": "100", "firefox": "100", "safari": "16"}


def feature(title: Optional[str] = None, support: Optional[Dict[str, Any]] = SUPPORTED, **fields) -> Dict[str, Any]:
    """Build raw feature metadata in web-features layout."""
    metadata: Dict[str, Any] = dict(fields)
    if title is not None:
        metadata["title"] = title
    if support is not None:
        metadata["status"] = {"support": dict(support)}
    return metadata


def make_registry(features: Optional[Dict[str, Dict[str, Any]]] = None) -> FeatureRegistry:
    return FeatureRegistry(features or {})


def make_index(features: Optional[Dict[str, Dict[str, Any]]] = None, overrides: Optional[Dict[str, str]] = None) -> KeywordIndex:
    return build_keyword_index(make_registry(features), overrides)


def scan_script(source: str, index: Optional[KeywordIndex] = None, path: str = "app.js") -> ScanResult:
    source = textwrap.dedent(source)
    return detect_script_features(path, source, index or make_index())


def scan_style(source: str, index: Optional[KeywordIndex] = None, path: str = "style.css") -> ScanResult:
    source = textwrap.dedent(source)
    return detect_style_features(path, source, index or make_index())


def hits(result: ScanResult) -> List[Tuple[Optional[str], str, int]]:
    """(feature_id, keyword, line) of every record."""
    return [(r.feature_id, r.keyword, r.line) for r in result.records]


def write_registry(path, features: Dict[str, Dict[str, Any]]) -> str:
    path.write_text(json.dumps({"features": features}), encoding="utf-8")
    return str(path)
