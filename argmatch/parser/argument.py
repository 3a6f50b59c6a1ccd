# Argmatch Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `Argument` dataclass used by `ArgumentParser` to represent
individual command-line parameters in a structured, introspectable format.

Each `Argument` instance describes one CLI input: its flags, arity, converter,
default, choices and what firing it does to the result mapping.

Arguments should be created using `ArgumentParser.add_argument()`; the parser
resolves the converter and arity once, at registration time, and treats the
argument as read-only while parsing.

Key Attributes:
- `flags`: Option strings (e.g. `-v`, `--verbose`); empty for positionals
- `dest`: Key under which the parsed value is stored
- `action`: `ArgumentAction` describing the effect on the result mapping
- `arity`: `Arity` describing how many tokens are consumed
- `type`: Converter callable, `type_name` its display name
- `default` / `const`: Values used when the argument is absent / takes no token
- `choices`: Allowed values, if restricted
- `index`: Position in the parser's argument list (used by conflict checks)
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable

from argmatch.parser.argument_action import ArgumentAction
from argmatch.parser.arity import Arity, ArityKind
from argmatch.parser.parser_types import SUPPRESS

if TYPE_CHECKING:
    from argmatch.parser.subparsers import SubParsers


def _identity(value: Any) -> Any:
    return value


@dataclass(eq=False)
class Argument:
    """
    Represents a command-line argument.

    Attributes:
        flags (tuple[str, ...]): Option strings; empty for positionals.
        dest (str): The destination key for the argument.
        action (ArgumentAction): What firing the argument does.
        arity (Arity): How many tokens the argument consumes.
        type (Callable[[Any], Any]): Converter applied to each raw token.
        type_name (str): Name of the converter used in error messages.
        default (Any): Value used when the argument is not provided.
        const (Any): Value used by flags and by `?` options given without a token.
        choices (list[Any] | None): Allowed converted values.
        required (bool): True if the argument must be provided.
        help (str): Help text for the argument.
        metavar (str | None): Display name for values in help output.
        version (str | None): Version string for the `version` action.
        index (int): Position in the owning parser's argument list.
        subparsers (SubParsers | None): Dispatcher for the `parsers` action.
    """

    flags: tuple[str, ...]
    dest: str
    action: ArgumentAction = ArgumentAction.STORE
    arity: Arity = field(default_factory=Arity)
    type: Callable[[Any], Any] = _identity
    type_name: str = "auto"
    default: Any = None
    const: Any = None
    choices: list[Any] | None = None
    required: bool = False
    help: str = ""
    metavar: str | None = None
    version: str | None = None
    index: int = -1
    subparsers: SubParsers | None = None

    @property
    def is_optional(self) -> bool:
        """True for arguments selected by an option string."""
        return bool(self.flags)

    @property
    def positional(self) -> bool:
        return not self.flags

    def get_name(self) -> str | None:
        """Name used to identify the argument in error messages."""
        if self.flags:
            return "/".join(self.flags)
        if self.metavar not in (None, SUPPRESS):
            return self.metavar
        if self.dest not in (None, SUPPRESS):
            return self.dest
        return None

    def get_positional_text(self) -> str:
        """Get the positional text for the argument."""
        text = ""
        if self.positional:
            if self.metavar:
                text = self.metavar
            elif self.choices:
                text = f"{{{','.join([str(choice) for choice in self.choices])}}}"
            else:
                text = self.dest
        return text

    def get_choice_text(self) -> str:
        """Get the value placeholder text shown in usage and help output."""
        if self.arity.takes_no_tokens:
            return ""
        if self.metavar:
            choice_text = self.metavar
        elif self.choices:
            choice_text = f"{{{','.join([str(choice) for choice in self.choices])}}}"
        elif self.positional:
            choice_text = self.dest
        else:
            choice_text = self.dest.upper()

        kind = self.arity.kind
        if kind is ArityKind.OPTIONAL:
            choice_text = f"[{choice_text}]"
        elif kind is ArityKind.ZERO_OR_MORE:
            choice_text = f"[{choice_text} ...]"
        elif kind is ArityKind.ONE_OR_MORE:
            choice_text = f"{choice_text} [{choice_text} ...]"
        elif kind is ArityKind.REMAINDER:
            choice_text = "..."
        elif kind is ArityKind.PARSER:
            choice_text = f"{choice_text} ..."
        elif kind is ArityKind.EXACTLY:
            choice_text = " ".join([choice_text] * self.arity.count)
        return choice_text

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Argument):
            return False
        return (
            self.flags == other.flags
            and self.dest == other.dest
            and self.action == other.action
            and self.arity == other.arity
            and self.type_name == other.type_name
            and self.choices == other.choices
            and self.required == other.required
            and self.default == other.default
            and self.help == other.help
        )

    def __hash__(self) -> int:
        return hash(
            (
                tuple(self.flags),
                self.dest,
                self.action,
                self.arity,
                self.type_name,
                self.required,
                self.help,
            )
        )
