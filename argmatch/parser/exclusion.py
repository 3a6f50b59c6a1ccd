# Argmatch Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Conflict tracking between arguments that must not be used together.

`ConflictGraph` is a symmetric adjacency relation between argument indices.
Linking `a` with `b` always links `b` with `a`, so a conflict is found no matter
which of the two arguments fires first.

`MutuallyExclusiveGroup` is the registration front-end: every argument added
through the group is linked with every earlier member, and a required group must
see at least one member with a non-default value.

Example:
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--json", action="store_true")
    group.add_argument("--yaml", action="store_true")
    parser.parse_args(["--json", "--yaml"])  # ConflictingArgumentsError
"""
from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING, Any, Iterable

from argmatch.exceptions import SchemaError
from argmatch.parser.argument import Argument

if TYPE_CHECKING:
    from argmatch.parser.argument_parser import ArgumentParser


class ConflictGraph:
    """Bidirectional conflict relation keyed by argument index."""

    def __init__(self) -> None:
        self._edges: defaultdict[int, set[int]] = defaultdict(set)

    def link(self, first: int, second: int) -> None:
        if first == second:
            raise SchemaError("An argument cannot conflict with itself")
        self._edges[first].add(second)
        self._edges[second].add(first)

    def conflicts_of(self, index: int) -> frozenset[int]:
        return frozenset(self._edges.get(index, ()))

    def find_conflict(self, index: int, seen: Iterable[int]) -> int | None:
        """Return the lowest seen index that conflicts with `index`, if any."""
        conflicts = self.conflicts_of(index).intersection(seen)
        return min(conflicts) if conflicts else None

    def __contains__(self, index: object) -> bool:
        return index in self._edges

    def __len__(self) -> int:
        return sum(len(edges) for edges in self._edges.values()) // 2


class MutuallyExclusiveGroup:
    """A set of arguments of which at most one may be given."""

    def __init__(self, parser: ArgumentParser, required: bool = False) -> None:
        self.parser = parser
        self.required = required
        self.arguments: list[Argument] = []

    def add_argument(self, *flags: str, **kwargs: Any) -> Argument:
        """Register an argument on the parser and make it exclusive with the group."""
        positional = self.parser._is_positional(flags)
        if kwargs.get("required") or (
            positional and kwargs.get("nargs") not in ("?", "*")
        ):
            raise SchemaError("mutually exclusive arguments must be optional")
        argument = self.parser.add_argument(*flags, **kwargs)
        for member in self.arguments:
            self.parser.conflicts.link(member.index, argument.index)
        self.arguments.append(argument)
        return argument

    def is_satisfied(self, seen_non_default: Iterable[int]) -> bool:
        seen = set(seen_non_default)
        return any(argument.index in seen for argument in self.arguments)

    def get_names(self) -> list[str]:
        names = [argument.get_name() for argument in self.arguments]
        return [name for name in names if name]
