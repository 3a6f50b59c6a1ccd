# Argmatch Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Arity matching over pattern strings.

Every `ArityKind` maps to a small regular grammar over the `A`/`O`/`-` alphabet.
Positionals may absorb `--` separators; options never see one as their own value,
so their grammars drop every `-`:

    kind            positional        option
    SINGLE          -*A-*             A
    OPTIONAL        -*A?-*            A?
    ZERO_OR_MORE    -*[A-]*           [A]*
    ONE_OR_MORE     -*A[A-]*          A[A]*
    EXACTLY (n)     -*(-*A){n}-*      A{n}
    REMAINDER       [-AO]*            [AO]*
    PARSER          -*A[-AO]*         A[AO]*

Each grammar is wrapped in one capture group and matched at the start of the window,
so a concatenation of grammars yields one token count per argument.
"""
from __future__ import annotations

import re
from functools import lru_cache
from typing import Sequence

from argmatch.exceptions import ArityMismatchError
from argmatch.parser.argument import Argument
from argmatch.parser.arity import Arity, ArityKind


@lru_cache(maxsize=None)
def nargs_pattern(arity: Arity, is_optional: bool) -> str:
    """Return the capture-group grammar for `arity`."""
    kind = arity.kind
    if kind is ArityKind.SINGLE:
        pattern = "(-*A-*)"
    elif kind is ArityKind.OPTIONAL:
        pattern = "(-*A?-*)"
    elif kind is ArityKind.ZERO_OR_MORE:
        pattern = "(-*[A-]*)"
    elif kind is ArityKind.ONE_OR_MORE:
        pattern = "(-*A[A-]*)"
    elif kind is ArityKind.REMAINDER:
        pattern = "([-AO]*)"
    elif kind is ArityKind.PARSER:
        pattern = "(-*A[-AO]*)"
    elif kind is ArityKind.EXACTLY:
        pattern = "(-*" + "-*A" * arity.count + "-*)"
    else:
        raise ValueError(f"Unknown arity kind: {kind!r}")

    if is_optional:
        pattern = pattern.replace("-*", "").replace("-", "")
    return pattern


def _mismatch_message(arity: Arity) -> str:
    kind = arity.kind
    if kind is ArityKind.SINGLE:
        return "expected one argument"
    if kind is ArityKind.OPTIONAL:
        return "expected at most one argument"
    if kind in (ArityKind.ONE_OR_MORE, ArityKind.PARSER):
        return "expected at least one argument"
    if kind is ArityKind.EXACTLY:
        plural = "" if arity.count == 1 else "s"
        return f"expected {arity.count} argument{plural}"
    return f"expected {arity} arguments"


def match_argument(argument: Argument, window: str) -> int:
    """
    Count how many tokens at the start of `window` belong to `argument`.

    Raises:
        ArityMismatchError: If the argument's grammar cannot match the window.
    """
    match = re.match(nargs_pattern(argument.arity, argument.is_optional), window)
    if match is None:
        raise ArityMismatchError(_mismatch_message(argument.arity), argument=argument)
    return len(match.group(1))


def match_arguments_partial(arguments: Sequence[Argument], window: str) -> list[int]:
    """
    Match as many of `arguments` as possible against `window`.

    The largest prefix of `arguments` whose concatenated grammar matches wins.

    Returns:
        list[int]: Token counts for the satisfied prefix; empty if none matched.
    """
    for size in range(len(arguments), 0, -1):
        pattern = "".join(
            nargs_pattern(argument.arity, argument.is_optional)
            for argument in arguments[:size]
        )
        match = re.match(pattern, window)
        if match is not None:
            return [len(group) for group in match.groups()]
    return []
