# Argmatch Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Small value types shared by the parsing stages.

Contents:
- `SUPPRESS`: Sentinel for defaults and destinations that must never be written.
- `OptionTuple`: The resolution of one option-shaped token.
- `TokenPattern`: The `A`/`O`/`-` classification of a whole token list.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from argmatch.parser.argument import Argument

SUPPRESS = "==SUPPRESS=="

ARGUMENT = "A"
OPTION = "O"
SEPARATOR = "-"


class OptionTuple(NamedTuple):
    """
    An option-shaped token resolved against the option map.

    `argument` is None when the token looked like an option but matched nothing;
    the consumption loop reports it at the point of use.
    """

    argument: Argument | None
    option_string: str
    explicit_arg: str | None = None


@dataclass(frozen=True)
class TokenPattern:
    """Per-parse classification of the input tokens, index aligned."""

    pattern: str
    option_tuples: dict[int, OptionTuple] = field(default_factory=dict)

    @property
    def max_option_index(self) -> int:
        return max(self.option_tuples, default=-1)

    def next_option_index(self, start: int) -> int | None:
        """Return the first option index at or after `start`."""
        return min((index for index in self.option_tuples if index >= start), default=None)

    def __len__(self) -> int:
        return len(self.pattern)
