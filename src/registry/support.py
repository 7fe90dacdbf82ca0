"""
Support resolution: feature id -> SupportVerdict.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from core.utils import warn as _warn
from registry.loader import FeatureRegistry

UNTRACKED = "Unknown (feature not tracked in baseline)"


@dataclass
class SupportVerdict:
    supported: bool
    title: str
    unsupported: List[str] = field(default_factory=list)
    versions: Dict[str, Any] = field(default_factory=dict)


def resolve_support(
    registry: FeatureRegistry,
    feature_id: Optional[str],
    warn: Callable[[str], None] = _warn,
) -> SupportVerdict:
    """
    Resolve a feature's support across environments.

    Environments with a truthy version are supported; falsy versions mean
    the environment lacks the feature. Unknown features, or features without
    a support table, get a degraded "untracked" verdict and a warning.
    """
    feature = registry.get(feature_id)

    if feature is None:
        warn(f"⚠️ Feature data not found for: {feature_id}")
        return SupportVerdict(supported=False, title=str(feature_id), unsupported=[UNTRACKED])

    title = feature.title or feature.id

    if feature.support is None:
        warn(f"⚠️ Support info missing or invalid for: {feature_id}")
        return SupportVerdict(supported=False, title=title, unsupported=[UNTRACKED])

    unsupported = [env for env, version in feature.support.items() if not version]
    versions = {env: version for env, version in feature.support.items() if version}

    return SupportVerdict(
        supported=not unsupported,
        title=title,
        unsupported=unsupported,
        versions=versions,
    )
