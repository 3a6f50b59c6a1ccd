# Argmatch Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ArityKind` and `Arity`, the closed description of how many input tokens
an argument consumes.

`Arity.from_nargs()` accepts the familiar argparse-style `nargs` values and
normalizes them once, at registration time:

    None   → ArityKind.SINGLE        exactly one token, stored as a scalar
    int n  → ArityKind.EXACTLY (n)   exactly n tokens, stored as a list
    "?"    → ArityKind.OPTIONAL      zero or one token
    "*"    → ArityKind.ZERO_OR_MORE  any number of tokens
    "+"    → ArityKind.ONE_OR_MORE   at least one token
    "..."  → ArityKind.REMAINDER     everything that is left, options included
    "A..." → ArityKind.PARSER        a sub-command name plus everything after it

Example:
    Arity.from_nargs("+")  → Arity(kind=ArityKind.ONE_OR_MORE, count=1)
    Arity.from_nargs(3)    → Arity(kind=ArityKind.EXACTLY, count=3)
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from argmatch.exceptions import SchemaError

OPTIONAL = "?"
ZERO_OR_MORE = "*"
ONE_OR_MORE = "+"
REMAINDER = "..."
PARSER = "A..."


class ArityKind(Enum):
    """The kinds of token counts an argument may declare."""

    SINGLE = "single"
    OPTIONAL = OPTIONAL
    ZERO_OR_MORE = ZERO_OR_MORE
    ONE_OR_MORE = ONE_OR_MORE
    EXACTLY = "exactly"
    REMAINDER = REMAINDER
    PARSER = PARSER

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Arity:
    """
    How many tokens an argument consumes.

    Attributes:
        kind (ArityKind): The arity kind.
        count (int): The fixed token count; only meaningful for `EXACTLY`.
    """

    kind: ArityKind = ArityKind.SINGLE
    count: int = 1

    @classmethod
    def from_nargs(cls, nargs: int | str | ArityKind | Arity | None) -> Arity:
        """Normalize an argparse-style `nargs` value."""
        if isinstance(nargs, Arity):
            return nargs
        if nargs is None:
            return cls(ArityKind.SINGLE)
        if isinstance(nargs, bool):
            raise SchemaError(f"Invalid nargs value: {nargs!r}")
        if isinstance(nargs, int):
            if nargs < 0:
                raise SchemaError("nargs must be a non-negative integer")
            return cls(ArityKind.EXACTLY, nargs)
        if isinstance(nargs, ArityKind):
            if nargs is ArityKind.EXACTLY:
                raise SchemaError("ArityKind.EXACTLY needs a count, pass an int")
            return cls(nargs)
        if isinstance(nargs, str):
            try:
                kind = ArityKind(nargs)
            except ValueError:
                kind = None
            if kind is not None and kind not in (ArityKind.SINGLE, ArityKind.EXACTLY):
                return cls(kind)
        raise SchemaError(
            f"Invalid nargs value: {nargs!r}. Must be None, an int, or one of "
            f"{', '.join(repr(value) for value in cls.nargs_choices())}"
        )

    @staticmethod
    def nargs_choices() -> tuple[str, ...]:
        return (OPTIONAL, ZERO_OR_MORE, ONE_OR_MORE, REMAINDER, PARSER)

    @classmethod
    def exactly(cls, count: int) -> Arity:
        return cls(ArityKind.EXACTLY, count)

    @property
    def takes_no_tokens(self) -> bool:
        return self.kind is ArityKind.EXACTLY and self.count == 0

    @property
    def passes_separator(self) -> bool:
        """True if `--` tokens are kept in this arity's values."""
        return self.kind in (ArityKind.REMAINDER, ArityKind.PARSER)

    def __str__(self) -> str:
        if self.kind is ArityKind.EXACTLY:
            return str(self.count)
        if self.kind is ArityKind.SINGLE:
            return "1"
        return self.kind.value
