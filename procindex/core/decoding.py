"""
Decoding — Typed reads of heterogeneous metadata values

The metadata bag is untyped. A value of the wrong type behind a
well-known key is a pipeline contract violation, so every read here
either returns a correctly typed value or raises MetadataDecodeError.
None always decodes to "no contribution".
"""

from collections.abc import Iterable, Mapping
from typing import Any, Optional, Set, Type

from .errors import MetadataDecodeError


def decode_instance(key: str, value: Any, expected: Type) -> Any:
    """Require value to be an instance of expected."""
    if not isinstance(value, expected):
        raise MetadataDecodeError(key, expected.__name__, value)
    return value


def decode_string_set(key: str, value: Any) -> Optional[Set[str]]:
    """
    Decode a collection of strings into a fresh set.

    A bare string is rejected: it is iterable but almost always a
    single name passed where a collection was expected.
    """
    if value is None:
        return None
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        raise MetadataDecodeError(key, "a collection of strings", value)
    result = set()
    for item in value:
        if not isinstance(item, str):
            raise MetadataDecodeError(key, "a collection of strings", item)
        result.add(item)
    return result


def decode_mapping(key: str, value: Any, value_type: Optional[Type] = None) -> Optional[Mapping]:
    """Decode a string-keyed mapping, optionally checking every value's type."""
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise MetadataDecodeError(key, "a mapping", value)
    for k, v in value.items():
        if not isinstance(k, str):
            raise MetadataDecodeError(key, "a mapping with string keys", k)
        if value_type is not None and not isinstance(v, value_type):
            raise MetadataDecodeError(key, f"a mapping of {value_type.__name__}", v)
    return value
