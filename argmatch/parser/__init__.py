"""
Argmatch Argument Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .argument import Argument
from .argument_action import ArgumentAction
from .argument_parser import ArgumentParser
from .arity import Arity, ArityKind
from .exclusion import ConflictGraph, MutuallyExclusiveGroup
from .parser_types import SUPPRESS
from .subparsers import SubParsers
from .type_registry import TypeRegistry

__all__ = [
    "Argument",
    "ArgumentAction",
    "ArgumentParser",
    "Arity",
    "ArityKind",
    "ConflictGraph",
    "MutuallyExclusiveGroup",
    "SubParsers",
    "SUPPRESS",
    "TypeRegistry",
]
