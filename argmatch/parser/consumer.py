# Argmatch Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
The consumption loop: the driver that walks the classified tokens left to right.

It alternates between two steps until the last option has been consumed:
- a positional run: as many queued positionals as the tokens before the next
  option allow (largest prefix of the queue first)
- one option: its explicit or following values, including clustered
  single-character flags such as `-abc`

Afterwards the tail is offered to the remaining positionals, leftover tokens go
to the extras list, and missing positionals, required arguments and required
exclusive groups are reported.

Each fired argument goes through `take_action()`: conversion, conflict checks
against previously seen non-default arguments, and finally the argument's
`ArgumentAction` applied to the result mapping.
"""
from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any, Sequence

from argmatch.exceptions import (
    ArityMismatchError,
    ConflictingArgumentsError,
    InvalidExplicitArgumentError,
    MissingRequiredArgumentError,
    TooFewArgumentsError,
)
from argmatch.logger import logger
from argmatch.parser.argument import Argument
from argmatch.parser.argument_action import ArgumentAction
from argmatch.parser.arity import ArityKind
from argmatch.parser.classifier import classify_tokens
from argmatch.parser.matcher import match_argument, match_arguments_partial
from argmatch.parser.parser_types import ARGUMENT, SEPARATOR, SUPPRESS
from argmatch.signals import HelpSignal, VersionSignal

if TYPE_CHECKING:
    from argmatch.parser.argument_parser import ArgumentParser


class ConsumptionLoop:
    """
    State of one parse call.

    Attributes:
        result (dict[str, Any]): The result mapping, updated in place.
        extras (list[str]): Tokens that matched no argument.
        unrecognized_options (list[str]): Option-shaped tokens that matched nothing.
        seen (set[int]): Indices of arguments that fired.
        seen_non_default (set[int]): Indices of arguments that fired with a non-default value.
    """

    def __init__(
        self,
        parser: ArgumentParser,
        tokens: Sequence[str],
        result: dict[str, Any],
    ) -> None:
        self.parser = parser
        self.tokens: list[str] = list(tokens)
        self.result = result
        self.resolver = parser.build_resolver()
        self.converter = parser.converter
        self.conflicts = parser.conflicts
        self.token_pattern = classify_tokens(self.tokens, self.resolver)
        self.positionals: list[Argument] = parser.get_positional_arguments()
        self.extras: list[str] = []
        self.unrecognized_options: list[str] = []
        self.seen: set[int] = set()
        self.seen_non_default: set[int] = set()

    @property
    def pattern(self) -> str:
        return self.token_pattern.pattern

    def run(self) -> ConsumptionLoop:
        option_tuples = self.token_pattern.option_tuples
        max_option_index = self.token_pattern.max_option_index
        start = 0

        while start <= max_option_index:
            next_option_index = self.token_pattern.next_option_index(start)
            assert next_option_index is not None, "next option index should exist"

            if start < next_option_index:
                positionals_end = self.consume_positionals(start)
                if positionals_end > start:
                    start = positionals_end
                    continue
                start = positionals_end

            if start not in option_tuples:
                self.extras.extend(self.tokens[start:next_option_index])
                start = next_option_index

            start = self.consume_optional(start)

        stop = self.consume_positionals(start)
        self.extras.extend(self.tokens[stop:])

        # an optional sub-command may stay queued
        missing = [argument for argument in self.positionals if argument.required]
        if missing:
            names = ", ".join(argument.get_name() or argument.dest for argument in missing)
            raise TooFewArgumentsError(
                f"too few arguments, missing: {names}", argument=missing[0]
            )

        self.check_required()
        return self

    def check_required(self) -> None:
        for argument in self.parser.arguments:
            if argument.required and argument.index not in self.seen:
                help_text = f" help: {argument.help}" if argument.help else ""
                raise MissingRequiredArgumentError(
                    f"the argument is required{help_text}".rstrip(), argument=argument
                )

        for group in self.parser.mutually_exclusive_groups:
            if group.required and not group.is_satisfied(self.seen_non_default):
                raise MissingRequiredArgumentError(
                    f"one of the arguments {' '.join(group.get_names())} is required"
                )

    def consume_positionals(self, start: int) -> int:
        """Match as many queued positionals as possible starting at `start`."""
        arg_counts = match_arguments_partial(self.positionals, self.pattern[start:])
        for argument, arg_count in zip(self.positionals, arg_counts):
            arg_strings = self.get_arg_strings(argument, start, start + arg_count)
            start += arg_count
            self.take_action(argument, arg_strings)
        if arg_counts:
            logger.debug(
                "Positional run satisfied %d argument(s) with counts %s",
                len(arg_counts),
                arg_counts,
            )
        self.positionals = self.positionals[len(arg_counts) :]
        return start

    def get_arg_strings(self, argument: Argument, start: int, stop: int) -> list[str]:
        """Slice the tokens for `argument`, dropping the `--` separator unless it passes through."""
        arg_strings = self.tokens[start:stop]
        if argument.arity.passes_separator:
            return arg_strings
        kinds = self.pattern[start:stop]
        return [token for token, kind in zip(arg_strings, kinds) if kind != SEPARATOR]

    def consume_optional(self, start: int) -> int:
        """Consume the option at `start` and its values; return the next index."""
        argument, option_string, explicit_arg = self.token_pattern.option_tuples[start]
        chars = self.resolver.prefix_chars
        option_map = self.resolver.option_map
        action_tuples: list[tuple[Argument, list[str], str]] = []

        while True:
            if argument is None:
                self.extras.append(self.tokens[start])
                self.unrecognized_options.append(self.tokens[start])
                return start + 1

            if explicit_arg is not None:
                try:
                    arg_count = match_argument(argument, ARGUMENT)
                except ArityMismatchError as error:
                    raise InvalidExplicitArgumentError(argument, explicit_arg) from error

                # a single-dash flag that takes no value: the rest of the token
                # holds more single-dash flags (-xyz is -x -y -z)
                if arg_count == 0 and option_string[1] not in chars and explicit_arg:
                    action_tuples.append((argument, [], option_string))
                    option_string = option_string[0] + explicit_arg[0]
                    next_explicit_arg = explicit_arg[1:] or None
                    if option_string in option_map:
                        argument = option_map[option_string]
                        explicit_arg = next_explicit_arg
                    else:
                        raise InvalidExplicitArgumentError(argument, explicit_arg)

                elif arg_count == 1:
                    stop = start + 1
                    action_tuples.append((argument, [explicit_arg], option_string))
                    break

                else:
                    raise InvalidExplicitArgumentError(argument, explicit_arg)

            else:
                values_start = start + 1
                arg_count = match_argument(argument, self.pattern[values_start:])
                stop = values_start + arg_count
                action_tuples.append(
                    (argument, self.tokens[values_start:stop], option_string)
                )
                break

        for action_argument, arg_strings, action_option_string in action_tuples:
            logger.debug(
                "Consumed option '%s' with %d value(s)",
                action_option_string,
                len(arg_strings),
            )
            self.take_action(action_argument, arg_strings, action_option_string)
        return stop

    def take_action(
        self,
        argument: Argument,
        arg_strings: list[str],
        option_string: str | None = None,
    ) -> None:
        """Convert, conflict-check and apply one argument."""
        self.seen.add(argument.index)
        values = self.converter.get_values(argument, arg_strings)

        if values is not argument.default and not self.is_empty_variadic(
            argument, arg_strings
        ):
            self.seen_non_default.add(argument.index)
            conflict = self.conflicts.find_conflict(argument.index, self.seen_non_default)
            if conflict is not None:
                raise ConflictingArgumentsError(argument, self.parser.arguments[conflict])

        if values is SUPPRESS:
            return
        # the result never shares objects with the schema
        if values is argument.default or values is argument.const:
            values = copy.deepcopy(values)
        self.apply(argument, values, option_string)

    @staticmethod
    def is_empty_variadic(argument: Argument, arg_strings: list[str]) -> bool:
        """A `*` positional that matched nothing counts as not given."""
        return (
            not arg_strings
            and not argument.is_optional
            and argument.arity.kind is ArityKind.ZERO_OR_MORE
        )

    def apply(
        self,
        argument: Argument,
        values: Any,
        option_string: str | None = None,
    ) -> None:
        """Apply the argument's action to the result mapping."""
        action = argument.action
        dest = argument.dest
        if action == ArgumentAction.STORE:
            self.result[dest] = values
        elif action in (
            ArgumentAction.STORE_CONST,
            ArgumentAction.STORE_TRUE,
            ArgumentAction.STORE_FALSE,
        ):
            self.result[dest] = copy.deepcopy(argument.const)
        elif action == ArgumentAction.APPEND:
            items = list(self.result.get(dest) or [])
            items.append(values)
            self.result[dest] = items
        elif action == ArgumentAction.APPEND_CONST:
            items = list(self.result.get(dest) or [])
            items.append(copy.deepcopy(argument.const))
            self.result[dest] = items
        elif action == ArgumentAction.EXTEND:
            items = list(self.result.get(dest) or [])
            items.extend(values if isinstance(values, list) else [values])
            self.result[dest] = items
        elif action == ArgumentAction.COUNT:
            self.result[dest] = (self.result.get(dest) or 0) + 1
        elif action == ArgumentAction.HELP:
            self.parser.render_help()
            raise HelpSignal()
        elif action == ArgumentAction.VERSION:
            self.parser.render_version(argument.version)
            raise VersionSignal()
        elif action == ArgumentAction.PARSERS:
            subparsers = argument.subparsers
            assert subparsers is not None, "parsers action needs a SubParsers"
            if dest is not SUPPRESS:
                self.result[dest] = values[0]
            nested = subparsers.run(values)
            subparsers.merge(self.result, nested.result)
            self.extras.extend(nested.extras)
            self.unrecognized_options.extend(nested.unrecognized_options)
        else:
            raise ValueError(f"Unsupported action: {action}")
