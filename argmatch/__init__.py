"""
Argmatch Argument Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .exceptions import (
    AmbiguousOptionError,
    ArgmatchError,
    ArgumentError,
    ArgumentTypeError,
    ArityMismatchError,
    ConflictingArgumentsError,
    InvalidChoiceError,
    InvalidExplicitArgumentError,
    MissingRequiredArgumentError,
    SchemaError,
    TooFewArgumentsError,
    TypeConversionError,
    UnrecognizedArgumentsError,
    UnrecognizedOptionError,
)
from .parser import (
    SUPPRESS,
    Argument,
    ArgumentAction,
    ArgumentParser,
    Arity,
    ArityKind,
    TypeRegistry,
)
from .signals import FlowSignal, HelpSignal, VersionSignal
from .utils import setup_logging

logger = logging.getLogger("argmatch")


__all__ = [
    "ArgumentParser",
    "Argument",
    "ArgumentAction",
    "Arity",
    "ArityKind",
    "TypeRegistry",
    "SUPPRESS",
    "ArgmatchError",
    "SchemaError",
    "ArgumentTypeError",
    "ArgumentError",
    "UnrecognizedOptionError",
    "UnrecognizedArgumentsError",
    "AmbiguousOptionError",
    "ArityMismatchError",
    "InvalidExplicitArgumentError",
    "TypeConversionError",
    "InvalidChoiceError",
    "MissingRequiredArgumentError",
    "TooFewArgumentsError",
    "ConflictingArgumentsError",
    "FlowSignal",
    "HelpSignal",
    "VersionSignal",
    "setup_logging",
]
