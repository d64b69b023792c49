"""Dotted-path addressing into option feature mappings.

Features are nested mappings, so ``"storage.iops"`` addresses
``features["storage"]["iops"]``. Reading an absent path returns None;
a malformed path raises FeaturePathError.
"""

from collections.abc import Mapping, MutableMapping
from typing import Any, Optional

from .exceptions import FeaturePathError

PATH_SEPARATOR = "."


def split_path(path: str) -> list[str]:
    """Split a dotted path into its keys, rejecting malformed paths."""
    if not isinstance(path, str) or not path.strip():
        raise FeaturePathError(path)

    keys = path.split(PATH_SEPARATOR)
    if any(not key for key in keys):
        raise FeaturePathError(path, f"Feature path has an empty segment: {path!r}")
    return keys


def get_feature(features: Mapping[str, Any], path: str) -> Optional[Any]:
    """Read the value at a dotted path.

    Returns None when any key along the path is missing, when an
    intermediate value is not a mapping, or when the stored value is None.
    """
    current: Any = features
    for key in split_path(path):
        if not isinstance(current, Mapping) or key not in current:
            return None
        current = current[key]
    return current


def set_feature(features: MutableMapping[str, Any], path: str, value: Any) -> None:
    """Write a value at a dotted path, creating intermediate mappings.

    Non-mapping values found along the way are replaced by new mappings.
    Callers pass a copy they own; option features are never written.
    """
    keys = split_path(path)
    target = features
    for key in keys[:-1]:
        child = target.get(key)
        if not isinstance(child, MutableMapping):
            child = {}
            target[key] = child
        target = child
    target[keys[-1]] = value


def collect_feature_paths(features: Mapping[str, Any], prefix: str = "") -> set[str]:
    """Collect every dotted path in a feature mapping, including nested parents."""
    paths: set[str] = set()
    for key, value in features.items():
        full_key = f"{prefix}{PATH_SEPARATOR}{key}" if prefix else str(key)
        paths.add(full_key)
        if isinstance(value, Mapping):
            paths |= collect_feature_paths(value, full_key)
    return paths
