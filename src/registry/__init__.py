"""
Feature registry access: loading, keyword indexing and support resolution.
"""

from registry.loader import Feature, FeatureRegistry, load_registry
from registry.keywords import KeywordIndex, MANUAL_OVERRIDES, build_keyword_index
from registry.support import SupportVerdict, resolve_support

__all__ = [
    "Feature",
    "FeatureRegistry",
    "load_registry",
    "KeywordIndex",
    "MANUAL_OVERRIDES",
    "build_keyword_index",
    "SupportVerdict",
    "resolve_support",
]
