# Argmatch Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Turns the raw tokens matched for an argument into its typed value.

The consumption loop has already removed the `--` separator from the tokens
unless the arity is REMAINDER or PARSER.

Shaping rules, in priority order:
- no tokens and OPTIONAL: the const (options) or default (positionals)
- no tokens and ZERO_OR_MORE on an option: the default, or an empty list
- one token and SINGLE/OPTIONAL arity: a single converted value
- REMAINDER/PARSER: every token converted, only the first checked against choices
- anything else: a list of converted values, each checked against choices
"""
from __future__ import annotations

from typing import Any, Sequence

from argmatch.exceptions import ArgumentTypeError, InvalidChoiceError, TypeConversionError
from argmatch.parser.argument import Argument
from argmatch.parser.arity import ArityKind


class ValueConverter:
    """Converts and validates argument values."""

    def get_values(self, argument: Argument, arg_strings: Sequence[str]) -> Any:
        kind = argument.arity.kind

        if not arg_strings and kind is ArityKind.OPTIONAL:
            value = argument.const if argument.is_optional else argument.default
            if isinstance(value, str):
                value = self.get_value(argument, value)
                self.check_value(argument, value)

        elif not arg_strings and kind is ArityKind.ZERO_OR_MORE and argument.is_optional:
            value = argument.default if argument.default is not None else []
            if isinstance(value, list):
                for item in value:
                    self.check_value(argument, item)
            else:
                self.check_value(argument, value)

        elif len(arg_strings) == 1 and kind in (ArityKind.SINGLE, ArityKind.OPTIONAL):
            value = self.get_value(argument, arg_strings[0])
            self.check_value(argument, value)

        elif kind in (ArityKind.REMAINDER, ArityKind.PARSER):
            value = [self.get_value(argument, arg_string) for arg_string in arg_strings]
            if value:
                self.check_value(argument, value[0])

        else:
            value = [self.get_value(argument, arg_string) for arg_string in arg_strings]
            for item in value:
                self.check_value(argument, item)

        return value

    def get_value(self, argument: Argument, arg_string: str) -> Any:
        """Convert one raw token with the argument's converter."""
        try:
            return argument.type(arg_string)
        except ArgumentTypeError as error:
            raise TypeConversionError(
                argument, arg_string, argument.type_name, message=str(error)
            ) from error
        except (TypeError, ValueError) as error:
            raise TypeConversionError(argument, arg_string, argument.type_name) from error

    def check_value(self, argument: Argument, value: Any) -> None:
        """Reject values outside the argument's choices."""
        if argument.choices and value not in argument.choices:
            raise InvalidChoiceError(argument, value, argument.choices)
