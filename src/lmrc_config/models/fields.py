"""Field-level helpers shared by the schema validators."""

from collections.abc import Callable, Mapping
from typing import Any

from lmrc_config.exceptions import FieldViolation, FormatError, RequiredFieldError
from lmrc_config.validators import is_non_empty


def field_path(parent: str, name: str | int) -> str:
    """Join a parent path and a key or list index: ``sessions[0].startTime``."""
    if isinstance(name, int):
        return f"{parent}[{name}]"
    return f"{parent}.{name}" if parent else name

def require_mapping(data: Any, path: str, violations: list[FieldViolation]) -> Mapping[str, Any] | None:
    """Return data if it is a mapping, otherwise record a violation."""
    if data is None:
        violations.append(RequiredFieldError(path))
        return None
    if not isinstance(data, Mapping):
        violations.append(FormatError(path, f"must be an object, got {type(data).__name__}"))
        return None
    return data

def check_string(
    data: Mapping[str, Any],
    key: str,
    parent: str,
    violations: list[FieldViolation],
    predicate: Callable[[Any], bool] | None = None,
    description: str = "",
) -> None:
    """Require a non-empty string at ``data[key]`` and optionally check its format."""
    path = field_path(parent, key)
    value = data.get(key)
    if value is None or (isinstance(value, str) and not is_non_empty(value)):
        violations.append(RequiredFieldError(path))
        return
    if not isinstance(value, str):
        violations.append(FormatError(path, f"must be a string, got {type(value).__name__}"))
        return
    if predicate is not None and not predicate(value):
        violations.append(FormatError(path, f"'{value}' is not {description}"))
