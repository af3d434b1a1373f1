"""Layering and validation of client configuration."""

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def deep_merge(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``overrides`` into ``base``, recursing into nested mappings."""
    merged = dict(base)
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def merge_config(base: ModelT, overrides: Any) -> ModelT:
    """Apply configuration file data on top of an existing model.

    Nested sections (such as ``retry``) only replace the keys they name, so
    values set on ``base`` survive a partial override.

    Args:
        base: Configuration to start from
        overrides: Data loaded from a config file (``None`` means no overrides)

    Returns:
        A new, validated instance of ``base``'s class

    Raises:
        ValueError: If the overrides are not a mapping or fail validation
    """
    if overrides is None:
        return base
    if not isinstance(overrides, Mapping):
        raise ValueError(
            f"Configuration must be a mapping, got {type(overrides).__name__}"
        )

    try:
        return type(base).model_validate(deep_merge(base.model_dump(), overrides))
    except ValidationError as e:
        raise ValueError(f"Configuration validation failed: {e}") from e
