# Argmatch Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by argmatch.

Registration mistakes (bad flags, duplicate destinations, invalid nargs) raise
`SchemaError` while the argument schema is being built. Problems found while
matching input tokens raise a subclass of `ArgumentError`, which carries the
offending `Argument` and raw token so callers can render their own message.

All exceptions inherit from `ArgmatchError`, the base exception for the package.

Exception Hierarchy:
- ArgmatchError
    ├── SchemaError
    ├── ArgumentTypeError
    └── ArgumentError
        ├── UnrecognizedOptionError
        ├── UnrecognizedArgumentsError
        ├── AmbiguousOptionError
        ├── ArityMismatchError
        ├── InvalidExplicitArgumentError
        ├── TypeConversionError
        ├── InvalidChoiceError
        ├── MissingRequiredArgumentError
        ├── TooFewArgumentsError
        └── ConflictingArgumentsError

The parser never prints or exits on these; catching and rendering them is left
to the caller (see `ArgumentParser.render_error`).
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

if TYPE_CHECKING:
    from argmatch.parser.argument import Argument


class ArgmatchError(Exception):
    """Base exception for argmatch."""


class SchemaError(ArgmatchError):
    """Exception raised when an argument definition is invalid."""


class ArgumentTypeError(ArgmatchError):
    """Raised by custom type converters to report a rejected value verbatim."""


class ArgumentError(ArgmatchError):
    """
    Base class for errors found while parsing input tokens.

    Attributes:
        message (str): Description of the problem.
        argument (Argument | None): The argument the problem relates to, if any.
        token (str | None): The raw token that triggered the problem, if any.
    """

    def __init__(
        self,
        message: str,
        argument: Argument | None = None,
        token: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.argument = argument
        self.token = token

    @property
    def argument_name(self) -> str | None:
        if self.argument is None:
            return None
        return self.argument.get_name()

    def __str__(self) -> str:
        name = self.argument_name
        if name:
            return f"argument {name}: {self.message}"
        return self.message


class UnrecognizedOptionError(ArgumentError):
    """Exception raised when an option-shaped token matches no argument."""

    def __init__(self, token: str, suggestions: Sequence[str] = ()) -> None:
        self.suggestions = list(suggestions)
        if self.suggestions:
            message = (
                f"unrecognized option '{token}'. "
                f"Did you mean one of: {', '.join(self.suggestions)}?"
            )
        else:
            message = f"unrecognized option '{token}'"
        super().__init__(message, token=token)


class UnrecognizedArgumentsError(ArgumentError):
    """Exception raised by strict parsing when tokens were left unconsumed."""

    def __init__(self, tokens: Sequence[str]) -> None:
        self.tokens = list(tokens)
        plural = "s" if len(self.tokens) > 1 else ""
        super().__init__(
            f"unrecognized argument{plural}: {' '.join(self.tokens)}",
            token=self.tokens[0] if self.tokens else None,
        )


class AmbiguousOptionError(ArgumentError):
    """Exception raised when an abbreviated option matches several options."""

    def __init__(self, token: str, candidates: Sequence[str]) -> None:
        self.candidates = list(candidates)
        super().__init__(
            f"ambiguous option: '{token}' could match {', '.join(self.candidates)}",
            token=token,
        )


class ArityMismatchError(ArgumentError):
    """Exception raised when too few or too many values are available."""


class InvalidExplicitArgumentError(ArgumentError):
    """Exception raised when an inline value is given to an argument that rejects it."""

    def __init__(self, argument: Argument, explicit_arg: str) -> None:
        super().__init__(
            f"ignored explicit argument '{explicit_arg}'",
            argument=argument,
            token=explicit_arg,
        )


class TypeConversionError(ArgumentError):
    """Exception raised when an argument's converter rejects a raw value."""

    def __init__(
        self,
        argument: Argument,
        value: Any,
        type_name: str,
        message: str | None = None,
    ) -> None:
        self.value = value
        self.type_name = type_name
        super().__init__(
            message or f"invalid {type_name} value: {value!r}",
            argument=argument,
            token=value if isinstance(value, str) else None,
        )


class InvalidChoiceError(ArgumentError):
    """Exception raised when a converted value is outside the allowed choices."""

    def __init__(self, argument: Argument, value: Any, choices: Sequence[Any]) -> None:
        self.value = value
        self.choices = list(choices)
        choices_text = ", ".join(str(choice) for choice in self.choices)
        super().__init__(
            f"invalid choice: {value!r} (choose from {choices_text})",
            argument=argument,
            token=value if isinstance(value, str) else None,
        )


class MissingRequiredArgumentError(ArgumentError):
    """Exception raised when a required argument or group never fired."""


class TooFewArgumentsError(ArgumentError):
    """Exception raised when positional arguments are left without values."""


class ConflictingArgumentsError(ArgumentError):
    """Exception raised when mutually exclusive arguments are used together."""

    def __init__(self, argument: Argument, conflict: Argument) -> None:
        self.conflict = conflict
        super().__init__(
            f"not allowed with argument {conflict.get_name()}",
            argument=argument,
        )
