# Argmatch Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ArgumentAction`, an enum naming what happens to the result mapping
when an argument fires.

Supports alias coercion for shorthand or config-friendly values, and provides
a consistent interface for downstream argument handling logic.

Exports:
    - ArgumentAction: Enum of allowed actions for arguments.

Example:
    ArgumentAction("store_true") → ArgumentAction.STORE_TRUE
    ArgumentAction("true")       → ArgumentAction.STORE_TRUE (via alias)
    ArgumentAction("const")      → ArgumentAction.STORE_CONST
"""
from __future__ import annotations

from enum import Enum


class ArgumentAction(Enum):
    """
    Defines the action to be taken when the argument is encountered.

    Members:
        STORE: Store the converted value (default).
        STORE_CONST: Store the argument's `const`.
        STORE_TRUE: Store `True` if the flag is present.
        STORE_FALSE: Store `False` if the flag is present.
        APPEND: Append the value to a list.
        APPEND_CONST: Append the argument's `const` to a list.
        EXTEND: Extend a list with multiple values.
        COUNT: Count the number of occurrences.
        HELP: Display help and stop.
        VERSION: Display the version and stop.
        PARSERS: Hand the remaining tokens to a sub-command parser.

    Aliases:
        - "true" → "store_true"
        - "false" → "store_false"
        - "const" → "store_const"
    """

    STORE = "store"
    STORE_CONST = "store_const"
    STORE_TRUE = "store_true"
    STORE_FALSE = "store_false"
    APPEND = "append"
    APPEND_CONST = "append_const"
    EXTEND = "extend"
    COUNT = "count"
    HELP = "help"
    VERSION = "version"
    PARSERS = "parsers"

    @classmethod
    def choices(cls) -> list[ArgumentAction]:
        """Return a list of all argument actions."""
        return list(cls)

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "true": "store_true",
            "false": "store_false",
            "const": "store_const",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> ArgumentAction:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    def __str__(self) -> str:
        """Return the string representation of the argument action."""
        return self.value
