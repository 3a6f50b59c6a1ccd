# Argmatch Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Coercion of raw command-line tokens into annotated Python types.

`TypeRegistry.resolve()` wraps `coerce_value` for any `type=` that is a class or
a typing construct, so `type=Mode`, `type=Literal["a", "b"]`, `type=int | None`
and `type=datetime` all work without a registered converter.

Functions:
- coerce_bool: 'yes'/'no' style strings to bool.
- coerce_enum: member name, member or member value to an Enum member.
- coerce_datetime: free-form dates through dateutil.
- coerce_value: dispatch on the target type, recursing into unions.
"""
import types
from datetime import datetime
from enum import EnumMeta
from typing import Any, Literal, Union, get_args, get_origin

from dateutil import parser as date_parser

TRUE_STRINGS = frozenset({"true", "t", "1", "yes", "y", "on"})
FALSE_STRINGS = frozenset({"false", "f", "0", "no", "n", "off"})


def coerce_bool(value: Any) -> bool:
    """Map 'true'/'yes'/'on'/'1' and 'false'/'no'/'off'/'0' to bools; anything else by truthiness."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_STRINGS:
        return True
    if text in FALSE_STRINGS:
        return False
    return bool(text)


def coerce_enum(value: Any, enum_type: EnumMeta) -> Any:
    """
    Resolve `value` to a member of `enum_type`.

    Lookup order: an existing member, a member name, then a member value after
    converting `value` to the type of the first member's value.

    Raises:
        ValueError: If no member matches.
    """
    if isinstance(value, enum_type):
        return value
    if isinstance(value, str) and value in enum_type.__members__:
        return enum_type[value]

    value_type = type(next(iter(enum_type)).value)
    try:
        return enum_type(value_type(value))
    except (ValueError, TypeError):
        allowed = ", ".join(str(member.value) for member in enum_type)
        raise ValueError(f"'{value}' should be one of {{{allowed}}}") from None


def coerce_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    try:
        return date_parser.parse(value)
    except (ValueError, OverflowError) as error:
        raise ValueError(f"'{value}' is not a recognizable date") from error


def _is_union(target_type: Any) -> bool:
    return isinstance(target_type, types.UnionType) or get_origin(target_type) is Union


def coerce_value(value: Any, target_type: Any) -> Any:
    """
    Convert `value` to `target_type`.

    Union members are tried left to right and the first that accepts the
    value wins. Any other class is called with the value.

    Raises:
        ValueError: If the value fits no member of a union, is not one of a
            Literal's values, or the target type rejects it.
    """
    if get_origin(target_type) is Literal:
        allowed = get_args(target_type)
        if value not in allowed:
            raise ValueError(f"'{value}' is not one of {list(allowed)}")
        return value

    if _is_union(target_type):
        members = get_args(target_type)
        for member in members:
            try:
                return coerce_value(value, member)
            except (ValueError, TypeError):
                continue
        names = ", ".join(getattr(member, "__name__", str(member)) for member in members)
        raise ValueError(f"'{value}' could not be coerced to any of: {names}")

    if isinstance(target_type, EnumMeta):
        return coerce_enum(value, target_type)
    if target_type is bool:
        return coerce_bool(value)
    if target_type is datetime:
        return coerce_datetime(value)
    return target_type(value)
