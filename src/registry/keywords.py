"""
Keyword index: lowercase token -> feature id.

Registry keywords are registered first-writer-wins in registry order. The
manual table below is applied afterwards and always wins; it covers operators,
symbols and phrases the registry does not index.
"""

import re
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from core.errors import KeywordIndexError
from registry.loader import FeatureRegistry

# Phrases the script detector emits for syntax nodes
OPTIONAL_CHAINING = "optional chaining"
NULLISH_COALESCING = "nullish coalescing"
TOP_LEVEL_AWAIT = "top-level await"
DYNAMIC_IMPORT = "dynamic import"

REQUIRED_SYNTAX_KEYWORDS = (OPTIONAL_CHAINING, NULLISH_COALESCING, TOP_LEVEL_AWAIT, DYNAMIC_IMPORT)

MANUAL_OVERRIDES: Dict[str, str] = {
    # JavaScript
    OPTIONAL_CHAINING: "js-optional-chaining",
    NULLISH_COALESCING: "js-nullish-coalescing",
    TOP_LEVEL_AWAIT: "js-top-level-await",
    DYNAMIC_IMPORT: "js-dynamic-import",
    "structuredclone": "structured-clone",
    "bigint": "js-bigint",
    "globalthis": "js-global-this",
    "import.meta": "js-import-meta",
    "finalizationregistry": "js-finalization-registry",
    "weakref": "js-weakref",
    "promise.allsettled": "js-promise-allsettled",
    # CSS
    ":has": "has",
    "@layer": "cascade-layers",
    "@scope": "css-scope",
    "accent-color": "css-accent-color",
    "color-mix": "css-color-mix",
    "scroll-timeline": "css-scroll-timeline",
    ":is": "css-is",
    ":where": "css-where",
    "@container": "css-container-queries",
    "container-type": "css-container-queries",
    "@property": "css-properties-values-api",
    "@import layer": "css-cascade-layers",
    "@scroll-timeline": "css-scroll-linked-animations",
    "@counter-style": "css-counter-styles",
    "@font-feature-values": "css-font-feature-values",
    "@supports": "css-featurequeries",
    "@viewport": "css-viewport-rule",
    "@charset": "css-charset-rule",
    # Web APIs / platform
    "navigator.bluetooth": "web-bluetooth",
    "navigator.credentials": "web-authentication",
    "navigator.share": "web-share",
    "file system access": "file-system-access",
    "notification": "notifications",
    "permissions api": "permissions-api",
    "webxr": "webxr",
    "webgpu": "webgpu",
    # Operators and syntax
    "??": "js-nullish-coalescing",
    "?.": "js-optional-chaining",
    "=>": "js-arrow-functions",
    "...": "js-spread-operator",
    "??=": "js-logical-assignment-operators",
    "||=": "js-logical-assignment-operators",
    "&&=": "js-logical-assignment-operators",
    "**": "js-exponentiation-operator",
    "async": "js-async-functions",
    "await": "js-top-level-await",
}

# (keyword, feature_id, line predicate)
LineMatcher = Tuple[str, str, Callable[[str], bool]]


def _line_predicate(keyword: str) -> Callable[[str], bool]:
    # Pseudo-classes and at-rules match as plain substrings
    if keyword.startswith((":", "@")):
        return lambda line: keyword in line
    return re.compile(rf"\b{re.escape(keyword)}\b", re.IGNORECASE | re.ASCII).search


class KeywordIndex:
    """Read-only keyword -> feature id mapping, in registration order."""

    def __init__(self, mapping: Dict[str, str]):
        self._mapping = dict(mapping)
        self._line_matchers: Optional[List[LineMatcher]] = None

    def __contains__(self, keyword: object) -> bool:
        return keyword in self._mapping

    def __getitem__(self, keyword: str) -> str:
        return self._mapping[keyword]

    def __len__(self) -> int:
        return len(self._mapping)

    def __iter__(self) -> Iterator[str]:
        return iter(self._mapping)

    def get(self, keyword: str) -> Optional[str]:
        return self._mapping.get(keyword)

    def items(self):
        return self._mapping.items()

    def line_matchers(self) -> List[LineMatcher]:
        """Per-keyword line predicates, compiled on first use."""
        if self._line_matchers is None:
            self._line_matchers = [
                (keyword, feature_id, _line_predicate(keyword)) for keyword, feature_id in self._mapping.items()
            ]
        return self._line_matchers


def build_keyword_index(
    registry: FeatureRegistry,
    overrides: Optional[Dict[str, str]] = None,
) -> KeywordIndex:
    """
    Build the keyword index from registry features and the override table.

    Raises KeywordIndexError if the result lacks one of the syntax phrases
    the script detector maps nodes to.
    """
    if overrides is None:
        overrides = MANUAL_OVERRIDES

    mapping: Dict[str, str] = {}
    for feature in registry:
        for keyword in feature.keywords:
            mapping.setdefault(keyword, feature.id)

    for keyword, feature_id in overrides.items():
        mapping[keyword.lower()] = feature_id

    missing = [k for k in REQUIRED_SYNTAX_KEYWORDS if k not in mapping]
    if missing:
        raise KeywordIndexError(f"Keyword index is missing required syntax keyword(s): {', '.join(missing)}")

    return KeywordIndex(mapping)
