# This file converts record keys between the store's snake_case and the application's camelCase.
# It exists so every service applies the same rule at the store boundary instead of renaming fields by hand.
# Conversion walks nested dictionaries and lists and leaves every other value untouched.
# Both directions are idempotent, so applying them twice is harmless.

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Any

_UPPER_RE = re.compile(r"([A-Z])")
_UNDERSCORE_LOWER_RE = re.compile(r"_([a-z])")


def to_snake_case(name: str) -> str:
    """Convert one camelCase identifier to snake_case."""

    return _UPPER_RE.sub(r"_\1", name).lower()


def to_camel_case(name: str) -> str:
    """Convert one snake_case identifier to camelCase."""

    return _UNDERSCORE_LOWER_RE.sub(lambda match: match.group(1).upper(), name)


def _transform_keys(value: Any, convert: Callable[[str], str]) -> Any:
    if isinstance(value, Mapping):
        return {
            (convert(key) if isinstance(key, str) else key): _transform_keys(item, convert)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [_transform_keys(item, convert) for item in value]
    if isinstance(value, tuple):
        return tuple(_transform_keys(item, convert) for item in value)
    return value


def to_store_case(obj: Any) -> Any:
    """Return a copy of ``obj`` with camelCase keys rewritten to snake_case."""

    return _transform_keys(obj, to_snake_case)


def to_app_case(obj: Any) -> Any:
    """Return a copy of ``obj`` with snake_case keys rewritten to camelCase."""

    return _transform_keys(obj, to_camel_case)
