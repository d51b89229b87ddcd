"""Helpers for profile data and file locations."""

from collections.abc import Mapping
from copy import deepcopy
from pathlib import Path
from typing import Any


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``base`` with ``override`` merged in, recursing into nested mappings.

    Used for partial updates such as ``{'branding': {'primaryColor': ...}}``,
    where only the given leaves change. Neither argument is modified.
    """
    merged = deepcopy(dict(base))
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = deepcopy(value)
    return merged

def resolve_path(path: str | Path, base_dir: str | Path | None = None, create_parent: bool = False) -> Path:
    """Expand ``~`` and anchor relative paths at ``base_dir`` when one is given."""
    resolved = Path(path).expanduser()
    if base_dir is not None and not resolved.is_absolute():
        resolved = Path(base_dir) / resolved
    if create_parent:
        resolved.parent.mkdir(parents=True, exist_ok=True)
    return resolved
