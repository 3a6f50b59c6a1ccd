# Argmatch Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `OptionResolver`, which decides whether a single token names an option
and, if so, which `Argument` it refers to.

Resolution order (first match wins):
1. Empty tokens and tokens not starting with a prefix character are positional.
2. An exact option string resolves immediately.
3. A lone prefix character (e.g. `-`) is positional.
4. `--name=value` resolves `--name` with an explicit argument.
5. Prefix search: unique abbreviations resolve, and `-xVALUE` attaches `VALUE`
   to the two-character flag `-x`. Several candidates are an ambiguity error.
6. Negative numbers are positional unless an option looks like one.
7. Tokens containing a space are positional.
8. Anything else is an unknown option, resolved to `OptionTuple(None, token)`.
"""
from __future__ import annotations

import re
from typing import Mapping

from argmatch.exceptions import AmbiguousOptionError
from argmatch.parser.argument import Argument
from argmatch.parser.parser_types import OptionTuple

NEGATIVE_NUMBER = re.compile(r"^-\d+$|^-\d*\.\d+$")


class OptionResolver:
    """
    Resolves tokens against a snapshot of the option-string map.

    Args:
        option_map (Mapping[str, Argument]): Every option string and its argument.
        prefix_chars (str): Characters that start an option string.
        allow_abbrev (bool): Whether unique prefixes of long options resolve.
    """

    def __init__(
        self,
        option_map: Mapping[str, Argument],
        prefix_chars: str = "-",
        allow_abbrev: bool = True,
    ) -> None:
        self.option_map: dict[str, Argument] = dict(option_map)
        self.prefix_chars = prefix_chars
        self.allow_abbrev = allow_abbrev
        self.has_negative_number_optionals = any(
            NEGATIVE_NUMBER.match(option_string) for option_string in self.option_map
        )

    def resolve(self, token: str) -> OptionTuple | None:
        """
        Classify `token` as an option.

        Returns:
            OptionTuple | None: None when the token is an argument value.

        Raises:
            AmbiguousOptionError: If the token abbreviates several option strings.
        """
        if not token or token[0] not in self.prefix_chars:
            return None

        if token in self.option_map:
            return OptionTuple(self.option_map[token], token, None)

        if len(token) == 1:
            return None

        if "=" in token:
            option_string, _, explicit_arg = token.partition("=")
            if option_string in self.option_map:
                return OptionTuple(self.option_map[option_string], option_string, explicit_arg)

        option_tuples = self.get_option_tuples(token)
        if len(option_tuples) > 1:
            raise AmbiguousOptionError(
                token, [option_tuple.option_string for option_tuple in option_tuples]
            )
        elif len(option_tuples) == 1:
            return option_tuples[0]

        if NEGATIVE_NUMBER.match(token) and not self.has_negative_number_optionals:
            return None

        if " " in token:
            return None

        return OptionTuple(None, token, None)

    def get_option_tuples(self, token: str) -> list[OptionTuple]:
        """Collect every option string `token` could abbreviate."""
        result: list[OptionTuple] = []
        chars = self.prefix_chars

        # double-prefix tokens are only split at the '='
        if token[0] in chars and token[1] in chars:
            if not self.allow_abbrev:
                return result
            if "=" in token:
                option_prefix, _, explicit = token.partition("=")
                explicit_arg: str | None = explicit
            else:
                option_prefix, explicit_arg = token, None
            for option_string, argument in self.option_map.items():
                if option_string.startswith(option_prefix):
                    result.append(OptionTuple(argument, option_string, explicit_arg))

        # single character options can be concatenated with their arguments
        # but multiple character options always have to have their argument separate
        elif token[0] in chars:
            short_prefix, short_explicit = token[:2], token[2:]
            for option_string, argument in self.option_map.items():
                if option_string == short_prefix:
                    result.append(OptionTuple(argument, option_string, short_explicit))
                elif self.allow_abbrev and option_string.startswith(token):
                    result.append(OptionTuple(argument, option_string, None))

        else:
            raise ValueError(f"Unexpected option string: {token}")

        return result

    def suggest(self, token: str) -> list[str]:
        """Return option strings sharing the token's leading characters."""
        stem = token.partition("=")[0]
        while len(stem) > 1:
            matches = sorted(
                option_string
                for option_string in self.option_map
                if option_string.startswith(stem)
            )
            if matches:
                return matches
            stem = stem[:-1]
            if stem.strip(self.prefix_chars) == "":
                break
        return []
