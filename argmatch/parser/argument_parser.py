# Argmatch Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `ArgumentParser`, the schema and entry point of argmatch.
It collects argument definitions, validates them once at registration time, and
runs the grammar-driven matcher over input tokens.

Key Features:
- Declarative argument registration via `add_argument()`
- argparse-style arities: fixed counts, `?`, `*`, `+`, remainder and sub-commands
- Exact, abbreviated (`--verb`), inline (`--level=high`) and clustered (`-abc`,
  `-n5`) option spellings
- `--` separator handling and negative-number awareness
- Per-parser type registry for named converters
- Mutually exclusive groups with bidirectional conflict checks
- Tolerant (`parse_known_args`) and strict (`parse_args`) parsing
- Rich-powered help, version and error rendering

Public Interface:
- `add_argument(...)`: Register a new argument with type, flags, and behavior.
- `add_mutually_exclusive_group(...)`: Group arguments that exclude each other.
- `add_subparsers(...)`: Register nested parsers selected by a command name.
- `parse_known_args(...)`: Return `(result, extras)` without failing on leftovers.
- `parse_args(...)`: Parse and fail on any unrecognized token.
- `render_help()` / `render_error(...)`: Rich output for callers.

Example Usage:
    parser = ArgumentParser(prog="deploy")
    parser.add_argument("--env", choices=["prod", "dev"], required=True)
    parser.add_argument("path", type=Path)

    args = parser.parse_args(["--env", "prod", "./config.yml"])

    # args == {'env': 'prod', 'path': Path('./config.yml')}
"""
from __future__ import annotations

import os
import sys
from copy import deepcopy
from typing import Any, Callable, Iterable, Sequence

from rich.console import Console
from rich.markup import escape

from argmatch.console import console, error_console
from argmatch.exceptions import (
    ArgmatchError,
    SchemaError,
    UnrecognizedArgumentsError,
    UnrecognizedOptionError,
)
from argmatch.logger import logger
from argmatch.parser.argument import Argument
from argmatch.parser.argument_action import ArgumentAction
from argmatch.parser.arity import Arity, ArityKind
from argmatch.parser.consumer import ConsumptionLoop
from argmatch.parser.converter import ValueConverter
from argmatch.parser.exclusion import ConflictGraph, MutuallyExclusiveGroup
from argmatch.parser.parser_types import SUPPRESS
from argmatch.parser.resolver import OptionResolver
from argmatch.parser.subparsers import SubParsers
from argmatch.parser.type_registry import TypeRegistry

FLAG_ACTIONS = (
    ArgumentAction.STORE_CONST,
    ArgumentAction.STORE_TRUE,
    ArgumentAction.STORE_FALSE,
    ArgumentAction.APPEND_CONST,
    ArgumentAction.COUNT,
    ArgumentAction.HELP,
    ArgumentAction.VERSION,
)


class ArgumentParser:
    """
    Grammar-driven command-line argument parser.

    Features:
    - Customizable prefix characters and abbreviation policy.
    - Type conversion through a per-parser registry.
    - Support for positional and option arguments with any arity.
    - Support for default values and constants.
    - Clustered single-character flags.
    - Mutually exclusive groups and sub-commands.
    - Render Help using Rich library.
    """

    def __init__(
        self,
        prog: str | None = None,
        description: str = "",
        epilog: str = "",
        usage: str | None = None,
        prefix_chars: str = "-",
        add_help: bool = True,
        allow_abbrev: bool = True,
        version: str | None = None,
        type_registry: TypeRegistry | None = None,
    ) -> None:
        """Initialize the ArgumentParser."""
        if not prefix_chars:
            raise SchemaError("prefix_chars must not be empty")
        self.console: Console = console
        self.error_console: Console = error_console
        self.prog: str = prog or os.path.basename(sys.argv[0]) or "prog"
        self.description: str = description
        self.epilog: str = epilog
        self.usage: str | None = usage
        self.prefix_chars: str = prefix_chars
        self.allow_abbrev: bool = allow_abbrev
        self.version: str | None = version
        self.type_registry: TypeRegistry = type_registry or TypeRegistry()
        self.converter: ValueConverter = ValueConverter()
        self.conflicts: ConflictGraph = ConflictGraph()
        self._arguments: list[Argument] = []
        self._positional: dict[str, Argument] = {}
        self._keyword: dict[str, Argument] = {}
        self._keyword_list: list[Argument] = []
        self._dest_set: set[str] = set()
        self._defaults: dict[str, Any] = {}
        self._groups: list[MutuallyExclusiveGroup] = []
        self._subparsers: SubParsers | None = None
        if add_help:
            self._add_help()
        if version is not None:
            self._add_version()

    def _default_prefix(self) -> str:
        return "-" if "-" in self.prefix_chars else self.prefix_chars[0]

    def _add_help(self) -> None:
        """Add help argument to the parser."""
        prefix = self._default_prefix()
        self.add_argument(
            f"{prefix}h",
            f"{prefix * 2}help",
            action=ArgumentAction.HELP,
            help="Show this help message.",
            dest="help",
        )

    def _add_version(self) -> None:
        """Add version argument to the parser."""
        prefix = self._default_prefix()
        self.add_argument(
            f"{prefix * 2}version",
            action=ArgumentAction.VERSION,
            version=self.version,
            help="Show the program's version number.",
            dest="version",
        )

    def register_type(self, name: str, converter: Callable[[Any], Any]) -> None:
        """Register a named converter usable as `type=name` on this parser."""
        self.type_registry.register(name, converter)

    def _is_positional(self, flags: Sequence[str]) -> bool:
        """Check if the flags are positional."""
        positional = any(
            isinstance(flag, str) and (not flag or flag[0] not in self.prefix_chars)
            for flag in flags
        )
        if positional and len(flags) > 1:
            raise SchemaError("Positional arguments cannot have multiple flags")
        return positional

    def _validate_flags(self, flags: tuple[str, ...], positional: bool) -> None:
        """Validate the flags provided for the argument."""
        if not flags:
            raise SchemaError("No flags provided")
        for flag in flags:
            if not isinstance(flag, str):
                raise SchemaError(f"Flag '{flag}' must be a string")
            if not flag:
                raise SchemaError("Flags must not be empty")
            if positional:
                continue
            if len(flag) < 2 or flag.strip(self.prefix_chars) == "":
                raise SchemaError(f"Flag '{flag}' must have a name after its prefix")
            if " " in flag:
                raise SchemaError(f"Flag '{flag}' must not contain spaces")
            if flag in self._keyword:
                existing = self._keyword[flag]
                raise SchemaError(
                    f"Flag '{flag}' is already used by argument '{existing.dest}'"
                )

    def _get_dest_from_flags(
        self, flags: tuple[str, ...], dest: str | None, positional: bool
    ) -> str:
        """Convert flags to a destination name."""
        if positional:
            if dest is not None:
                raise SchemaError("dest supplied twice for positional argument")
            return flags[0]
        if dest:
            return dest
        long_flags = [
            flag
            for flag in flags
            if len(flag) > 2 and flag[0] in self.prefix_chars and flag[1] in self.prefix_chars
        ]
        flag = long_flags[0] if long_flags else flags[0]
        dest = flag.lstrip(self.prefix_chars).replace("-", "_")
        if not dest:
            raise SchemaError(f"Cannot derive dest from flags {flags}, pass dest=")
        return dest

    def _validate_action(
        self, action: ArgumentAction | str, positional: bool
    ) -> ArgumentAction:
        if not isinstance(action, ArgumentAction):
            try:
                action = ArgumentAction(action)
            except ValueError:
                raise SchemaError(
                    f"Invalid action '{action}' is not a valid ArgumentAction"
                ) from None
        if action == ArgumentAction.PARSERS:
            raise SchemaError("Use add_subparsers() to register sub-commands")
        if action in FLAG_ACTIONS and positional:
            raise SchemaError(
                f"Action '{action}' cannot be used with positional arguments"
            )
        return action

    def _resolve_arity(
        self,
        nargs: int | str | ArityKind | None,
        action: ArgumentAction,
    ) -> Arity:
        if action in FLAG_ACTIONS:
            if nargs is not None:
                raise SchemaError(f"nargs cannot be specified for {action} actions")
            return Arity.exactly(0)
        arity = Arity.from_nargs(nargs)
        if arity.takes_no_tokens:
            raise SchemaError(
                f"nargs for {action} actions must be != 0; use a flag action instead"
            )
        if arity.kind is ArityKind.PARSER:
            raise SchemaError("nargs='A...' is reserved for add_subparsers()")
        return arity

    def _resolve_default(self, default: Any, action: ArgumentAction) -> Any:
        """Get the default value for the argument."""
        if default is None:
            if action == ArgumentAction.STORE_TRUE:
                return False
            elif action == ArgumentAction.STORE_FALSE:
                return True
            elif action == ArgumentAction.COUNT:
                return 0
            elif action in (
                ArgumentAction.APPEND,
                ArgumentAction.APPEND_CONST,
                ArgumentAction.EXTEND,
            ):
                return []
            return None
        elif action in (ArgumentAction.STORE_TRUE, ArgumentAction.STORE_FALSE):
            raise SchemaError(
                f"Default value cannot be set for action {action}. It is a boolean flag."
            )
        return default

    def _resolve_const(
        self, const: Any, action: ArgumentAction, arity: Arity, positional: bool
    ) -> Any:
        if action == ArgumentAction.STORE_TRUE:
            return True
        if action == ArgumentAction.STORE_FALSE:
            return False
        if action in (ArgumentAction.STORE_CONST, ArgumentAction.APPEND_CONST):
            return const
        if const is not None and (arity.kind is not ArityKind.OPTIONAL or positional):
            raise SchemaError("const is only allowed with nargs='?' on options")
        return const

    def _normalize_choices(
        self, choices: Iterable | None, action: ArgumentAction
    ) -> list[Any] | None:
        if choices is None:
            return None
        if action in FLAG_ACTIONS:
            raise SchemaError(f"choices cannot be specified for {action} actions")
        if isinstance(choices, dict):
            raise SchemaError("choices cannot be a dict")
        if isinstance(choices, str):
            raise SchemaError("choices must be a collection of values, not a string")
        try:
            return list(choices)
        except TypeError:
            raise SchemaError(
                "choices must be iterable (like list, tuple, or set)"
            ) from None

    def _determine_required(
        self,
        required: bool | None,
        positional: bool,
        arity: Arity,
        action: ArgumentAction,
    ) -> bool:
        """Determine if the argument is required."""
        if positional:
            if required is not None:
                raise SchemaError("'required' is not allowed for positional arguments")
            return arity.kind not in (
                ArityKind.OPTIONAL,
                ArityKind.ZERO_OR_MORE,
                ArityKind.REMAINDER,
            )
        if required and action in FLAG_ACTIONS:
            raise SchemaError(f"Argument with action {action} cannot be required")
        return bool(required)

    def _register_argument(self, argument: Argument) -> None:
        argument.index = len(self._arguments)
        for flag in argument.flags:
            self._keyword[flag] = argument
        self._dest_set.add(argument.dest)
        self._arguments.append(argument)
        if argument.positional:
            self._positional[argument.dest] = argument
        else:
            self._keyword_list.append(argument)
        logger.debug(
            "Registered argument '%s' (action=%s, nargs=%s)",
            argument.get_name(),
            argument.action,
            argument.arity,
        )

    def add_argument(
        self,
        *flags: str,
        action: str | ArgumentAction = "store",
        nargs: int | str | ArityKind | None = None,
        const: Any = None,
        default: Any = None,
        type: Any = None,
        choices: Iterable | None = None,
        required: bool | None = None,
        help: str = "",
        metavar: str | None = None,
        dest: str | None = None,
        version: str | None = None,
        conflicts_with: Iterable[str] | None = None,
    ) -> Argument:
        """
        Define a new argument for the parser.

        Args:
            *flags (str): The option strings (e.g., "-v", "--verbose") or a positional name.
            action (str | ArgumentAction): The argument action type (default: "store").
            nargs (int | str | None): Number of values the argument consumes.
            const (Any): Value used by const actions and by `?` options given bare.
            default (Any): Default value if the argument is not provided.
            type (Any): Registered converter name, type, or callable.
            choices (Iterable | None): Optional set of allowed values.
            required (bool | None): Whether an option is mandatory.
            help (str): Help text for rendering in help output.
            metavar (str | None): Placeholder shown for the argument's values.
            dest (str | None): Custom destination key in the result mapping.
            version (str | None): Version string for the "version" action.
            conflicts_with (Iterable[str] | None): Dests of earlier arguments that
                must not be used together with this one.

        Returns:
            Argument: The registered argument.
        """
        positional = self._is_positional(flags)
        self._validate_flags(flags, positional)
        dest = self._get_dest_from_flags(flags, dest, positional)
        if dest in self._dest_set:
            raise SchemaError(
                f"Destination '{dest}' is already defined. "
                "Define a unique 'dest' for each argument."
            )
        action = self._validate_action(action, positional)
        arity = self._resolve_arity(nargs, action)
        default = self._resolve_default(default, action)
        const = self._resolve_const(const, action, arity, positional)
        choices = self._normalize_choices(choices, action)
        required = self._determine_required(required, positional, arity, action)
        converter, type_name = self.type_registry.resolve(type)
        if action == ArgumentAction.HELP:
            default = SUPPRESS
        if action == ArgumentAction.VERSION:
            version = version or self.version
            if version is None:
                raise SchemaError("version action requires a version string")
            default = SUPPRESS

        conflicting = [self._get_conflict_target(name) for name in conflicts_with or ()]

        argument = Argument(
            flags=() if positional else tuple(flags),
            dest=dest,
            action=action,
            arity=arity,
            type=converter,
            type_name=type_name,
            default=default,
            const=const,
            choices=choices,
            required=required,
            help=help,
            metavar=metavar,
            version=version,
        )
        self._register_argument(argument)
        for other in conflicting:
            self.conflicts.link(other.index, argument.index)
        return argument

    def _get_conflict_target(self, dest: str) -> Argument:
        target = self.get_argument(dest)
        if target is None:
            raise SchemaError(f"conflicts_with refers to unknown dest '{dest}'")
        return target

    def add_mutually_exclusive_group(self, required: bool = False) -> MutuallyExclusiveGroup:
        """Create a group whose members may not be used together."""
        group = MutuallyExclusiveGroup(self, required=required)
        self._groups.append(group)
        return group

    def add_subparsers(
        self,
        dest: str | None = None,
        namespace_key: str | None = None,
        required: bool = True,
        title: str = "commands",
        description: str = "",
        help: str = "",
        metavar: str | None = None,
        parser_class: type[ArgumentParser] | None = None,
    ) -> SubParsers:
        """
        Register a sub-command argument.

        Args:
            dest (str | None): Key storing the selected command name, if any.
            namespace_key (str | None): Store the nested result under this key instead
                of merging it into the outer result.
            required (bool): Whether a sub-command must be given.
            title (str): Section title in help output.
            description (str): Section description in help output.
            help (str): Help text for the command argument.
            metavar (str | None): Placeholder shown for the command name.
            parser_class (type[ArgumentParser] | None): Class used for nested parsers.

        Returns:
            SubParsers: The registry used to add nested parsers.
        """
        if self._subparsers is not None:
            raise SchemaError("Cannot have multiple subparser arguments")
        if dest is not None and dest in self._dest_set:
            raise SchemaError(f"Destination '{dest}' is already defined.")
        subparsers = SubParsers(
            self,
            namespace_key=namespace_key,
            title=title,
            description=description,
            parser_class=parser_class,
        )
        converter, type_name = self.type_registry.resolve(None)
        argument = Argument(
            flags=(),
            dest=dest or SUPPRESS,
            action=ArgumentAction.PARSERS,
            arity=Arity(ArityKind.PARSER),
            type=converter,
            type_name=type_name,
            default=None if dest else SUPPRESS,
            choices=subparsers.choices,
            required=required,
            help=help,
            metavar=metavar or dest,
            subparsers=subparsers,
        )
        subparsers.argument = argument
        self._register_argument(argument)
        self._subparsers = subparsers
        return subparsers

    def set_defaults(self, **kwargs: Any) -> None:
        """Set parser-level defaults; matching arguments take the new default."""
        self._defaults.update(kwargs)
        for argument in self._arguments:
            if argument.dest in kwargs:
                argument.default = kwargs[argument.dest]

    def get_default(self, dest: str) -> Any:
        for argument in self._arguments:
            if argument.dest == dest and argument.default is not None:
                return argument.default
        return self._defaults.get(dest)

    def get_argument(self, dest: str) -> Argument | None:
        """Return the Argument object for a given destination name."""
        return next((a for a in self._arguments if a.dest == dest), None)

    @property
    def arguments(self) -> tuple[Argument, ...]:
        return tuple(self._arguments)

    @property
    def mutually_exclusive_groups(self) -> tuple[MutuallyExclusiveGroup, ...]:
        return tuple(self._groups)

    def get_positional_arguments(self) -> list[Argument]:
        return [argument for argument in self._arguments if argument.positional]

    def get_optional_arguments(self) -> list[Argument]:
        return [argument for argument in self._arguments if argument.is_optional]

    def build_resolver(self) -> OptionResolver:
        """Snapshot the option map for one parse call."""
        return OptionResolver(
            self._keyword,
            prefix_chars=self.prefix_chars,
            allow_abbrev=self.allow_abbrev,
        )

    def _seed_defaults(self, namespace: dict[str, Any] | None) -> dict[str, Any]:
        result = dict(namespace or {})
        for argument in self._arguments:
            if argument.dest is SUPPRESS or argument.dest in result:
                continue
            if argument.default is SUPPRESS:
                continue
            default = argument.default
            if isinstance(default, str):
                default = self.converter.get_value(argument, default)
            else:
                default = deepcopy(default)
            result[argument.dest] = default
        for dest, value in self._defaults.items():
            if dest not in result:
                result[dest] = value
        return result

    def _run(
        self, args: Sequence[str] | None, namespace: dict[str, Any] | None
    ) -> ConsumptionLoop:
        if args is None:
            args = sys.argv[1:]
        for arg in args:
            if not isinstance(arg, str):
                raise ArgmatchError(f"Tokens must be strings, got {arg!r}")
        result = self._seed_defaults(namespace)
        return ConsumptionLoop(self, args, result).run()

    def parse_known_args(
        self,
        args: Sequence[str] | None = None,
        namespace: dict[str, Any] | None = None,
    ) -> tuple[dict[str, Any], list[str]]:
        """
        Parse arguments, returning unrecognized tokens instead of failing on them.

        Args:
            args (Sequence[str] | None): The CLI-style tokens; defaults to `sys.argv[1:]`.
            namespace (dict[str, Any] | None): Mapping to seed the result with.

        Returns:
            tuple[dict[str, Any], list[str]]: The result mapping and the extras list.
        """
        loop = self._run(args, namespace)
        return loop.result, loop.extras

    def parse_args(
        self,
        args: Sequence[str] | None = None,
        namespace: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Parse arguments into a dictionary of resolved values.

        Raises:
            UnrecognizedOptionError: If an option-shaped token matched no argument.
            UnrecognizedArgumentsError: If any other token was left unconsumed.

        Returns:
            dict[str, Any]: Parsed argument result mapping.
        """
        loop = self._run(args, namespace)
        if loop.extras:
            if loop.unrecognized_options:
                token = loop.unrecognized_options[0]
                raise UnrecognizedOptionError(token, loop.resolver.suggest(token))
            raise UnrecognizedArgumentsError(loop.extras)
        return loop.result

    def get_options_text(self, plain_text: bool = False) -> str:
        """
        Render all defined arguments as a usage-style string.

        Returns:
            str: A visual description of argument flags and structure.
        """
        options_list = []
        for arg in self._keyword_list:
            choice_text = arg.get_choice_text()
            text = f"{arg.flags[0]} {choice_text}" if choice_text else arg.flags[0]
            options_list.append(text if arg.required else f"[{text}]")

        for arg in self._positional.values():
            options_list.append(arg.get_choice_text())

        text = " ".join(options_list)
        return text if plain_text else escape(text)

    def get_usage(self, plain_text: bool = False) -> str:
        """
        Render the usage string for this parser.

        Returns:
            str: A formatted usage line showing syntax and argument structure.
        """
        if self.usage:
            return self.usage if plain_text else escape(self.usage)
        prog = self.prog if plain_text else escape(self.prog)
        options_text = self.get_options_text(plain_text)
        if options_text:
            return f"{prog} {options_text}"
        return prog

    def render_help(self) -> None:
        """
        Print formatted help text for this parser using Rich output.

        Includes usage, description, argument sections, sub-commands and epilog.
        """
        usage = self.get_usage()
        self.console.print(f"[bold]usage: {usage}[/bold]\n")

        if self.description:
            self.console.print(escape(self.description) + "\n")

        if self._positional:
            self.console.print("[bold]positional:[/bold]")
            for arg in self._positional.values():
                self._print_help_line(arg.get_positional_text(), arg.help)

        if self._keyword_list:
            self.console.print("[bold]options:[/bold]")
            for arg in self._keyword_list:
                flags = ", ".join(arg.flags)
                choice_text = arg.get_choice_text()
                flags_choice = f"{flags} {choice_text}" if choice_text else flags
                self._print_help_line(flags_choice, arg.help)

        if self._subparsers is not None:
            self.console.print(f"[bold]{escape(self._subparsers.title)}:[/bold]")
            if self._subparsers.description:
                self.console.print(f"  {escape(self._subparsers.description)}")
            for name, help_text in self._subparsers.iter_help():
                self._print_help_line(name, help_text)

        if self.epilog:
            self.console.print("\n" + escape(self.epilog), style="dim")

    def _print_help_line(self, label: str, help_text: str) -> None:
        arg_line = f"  {label:<30} "
        help_text = help_text or ""
        if help_text and len(label) > 30:
            help_text = f"\n{'':<33}{help_text}"
        self.console.print(escape(f"{arg_line}{help_text}"))

    def render_version(self, version: str | None = None) -> None:
        """Print the version string."""
        self.console.print(escape(version or self.version or ""))

    def render_error(self, error: BaseException) -> None:
        """Print the usage line and `error` to stderr."""
        self.error_console.print(f"[bold]usage: {self.get_usage()}[/bold]")
        self.error_console.print(
            f"{escape(self.prog)}: [bold red]error:[/bold red] {escape(str(error))}"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ArgumentParser):
            return False

        def sorted_args(parser):
            return sorted(parser._arguments, key=lambda a: str(a.dest))

        return sorted_args(self) == sorted_args(other)

    def __hash__(self) -> int:
        return hash(tuple(sorted(self._arguments, key=lambda a: str(a.dest))))

    def __str__(self) -> str:
        """Return a human-readable summary of the parser state."""
        positional = sum(arg.positional for arg in self._arguments)
        required = sum(arg.required for arg in self._arguments)
        return (
            f"ArgumentParser(args={len(self._arguments)}, "
            f"flags={len(self._keyword)}, positional={positional}, "
            f"required={required})"
        )

    def __repr__(self) -> str:
        return str(self)
