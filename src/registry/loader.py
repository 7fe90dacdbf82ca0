"""
Feature registry adapter.

Wraps a web-features style database: a JSON object mapping feature id to
metadata, either at the top level or under a "features" key (the layout of
the web-features package's data.json). Each feature may carry:

- keyword sources: api, aliases, cssProperties, htmlElements, htmlAttributes,
  keywords, title, name (string or list of strings)
- status.support: {environment: version} where a falsy version means the
  environment lacks the feature
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

from core.errors import RegistryError
from core.utils import debug

KEYWORD_FIELDS = (
    "api",
    "aliases",
    "cssProperties",
    "htmlElements",
    "htmlAttributes",
    "keywords",
    "title",
    "name",
)

# Snapshot shipped with the package, used when no registry path is given
BUNDLED_REGISTRY = Path(__file__).resolve().parent / "data" / "features.json"


@dataclass(frozen=True)
class Feature:
    id: str
    title: Optional[str]
    keywords: Tuple[str, ...]
    support: Optional[Dict[str, Any]]  # None when status.support is missing or malformed


def extract_keywords(metadata: Dict[str, Any]) -> List[str]:
    """Collect lowercased keywords from a feature's metadata fields."""
    raw: List[str] = []
    for field_name in KEYWORD_FIELDS:
        values = metadata.get(field_name)
        if isinstance(values, list):
            raw.extend(v for v in values if isinstance(v, str) and v)
        elif isinstance(values, str) and values:
            raw.append(values)
    return list(dict.fromkeys(k.lower() for k in raw))


def _extract_support(metadata: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    status = metadata.get("status")
    if not isinstance(status, dict):
        return None
    support = status.get("support")
    if not isinstance(support, dict):
        return None
    return dict(support)


def _to_feature(feature_id: str, metadata: Dict[str, Any]) -> Feature:
    title = metadata.get("title")
    return Feature(
        id=feature_id,
        title=title if isinstance(title, str) and title else None,
        keywords=tuple(extract_keywords(metadata)),
        support=_extract_support(metadata),
    )


class FeatureRegistry:
    """Read-only view over feature metadata, in the source's iteration order."""

    def __init__(self, features: Dict[str, Any]):
        self._features: Dict[str, Feature] = {}
        for feature_id, metadata in features.items():
            if not isinstance(metadata, dict):
                debug(f"registry: skipping malformed entry {feature_id!r}")
                continue
            self._features[feature_id] = _to_feature(feature_id, metadata)

    def __len__(self) -> int:
        return len(self._features)

    def __iter__(self) -> Iterator[Feature]:
        return iter(self._features.values())

    def __contains__(self, feature_id: object) -> bool:
        return feature_id in self._features

    def get(self, feature_id: Optional[str]) -> Optional[Feature]:
        if feature_id is None:
            return None
        return self._features.get(feature_id)

    @classmethod
    def from_file(cls, path: str) -> "FeatureRegistry":
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise RegistryError(f"Cannot read feature registry {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise RegistryError(f"Feature registry {path} is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise RegistryError(f"Feature registry {path} must contain a JSON object")
        features = data.get("features", data)
        if not isinstance(features, dict):
            raise RegistryError(f"'features' in {path} must be a JSON object")

        registry = cls(features)
        debug(f"Loaded {len(registry)} feature(s) from {path}")
        return registry


def load_registry(path: Optional[str] = None) -> FeatureRegistry:
    """Load the registry from path, $SCANO_REGISTRY, or the bundled snapshot."""
    path = path or os.environ.get("SCANO_REGISTRY") or str(BUNDLED_REGISTRY)
    return FeatureRegistry.from_file(path)
