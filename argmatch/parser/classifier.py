# Argmatch Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Classifies raw input tokens into the pattern string consumed by the arity matcher.

Each token becomes one character:
- `O`: an option-shaped token (resolved or not), recorded in the option-tuple map
- `A`: an argument value
- `-`: the `--` separator; every token after it is an `A`

Example:
    ["--env", "prod", "--", "-x"] → "OA-A"
"""
from __future__ import annotations

from typing import Sequence

from argmatch.logger import logger
from argmatch.parser.parser_types import ARGUMENT, OPTION, SEPARATOR, TokenPattern
from argmatch.parser.resolver import OptionResolver


def classify_tokens(tokens: Sequence[str], resolver: OptionResolver) -> TokenPattern:
    """
    Scan `tokens` once and build their `TokenPattern`.

    Raises:
        AmbiguousOptionError: If a token abbreviates several option strings.
    """
    parts: list[str] = []
    option_tuples = {}
    for index, token in enumerate(tokens):
        if token == "--":
            parts.append(SEPARATOR)
            parts.extend(ARGUMENT for _ in tokens[index + 1 :])
            break
        option_tuple = resolver.resolve(token)
        if option_tuple is None:
            parts.append(ARGUMENT)
        else:
            option_tuples[index] = option_tuple
            parts.append(OPTION)

    pattern = "".join(parts)
    logger.debug("Classified %d token(s) as '%s'", len(tokens), pattern)
    return TokenPattern(pattern=pattern, option_tuples=option_tuples)
