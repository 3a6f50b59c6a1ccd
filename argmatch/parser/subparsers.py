# Argmatch Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Sub-command dispatch.

`ArgumentParser.add_subparsers()` registers a positional argument with PARSER
arity: it consumes the sub-command name plus every token after it. When that
argument fires, `SubParsers.run()` hands the remaining tokens to the nested
parser registered under the name, and `SubParsers.merge()` folds the nested
result mapping into the outer one.

Merging is explicit. By default nested keys are written straight into the outer
mapping (nested values win); with `namespace_key` the nested mapping is stored
as a single value under that key instead.

Example:
    parser = ArgumentParser(prog="tool")
    commands = parser.add_subparsers(dest="command")
    build = commands.add_parser("build", aliases=["b"])
    build.add_argument("--release", action="store_true")

    parser.parse_args(["b", "--release"])
    # {'command': 'b', 'release': True}
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable

from argmatch.exceptions import InvalidChoiceError, SchemaError
from argmatch.logger import logger
from argmatch.parser.argument import Argument

if TYPE_CHECKING:
    from argmatch.parser.argument_parser import ArgumentParser
    from argmatch.parser.consumer import ConsumptionLoop


class SubParsers:
    """Registry of nested parsers selected by the first token of a PARSER argument."""

    def __init__(
        self,
        parent: ArgumentParser,
        namespace_key: str | None = None,
        title: str = "commands",
        description: str = "",
        parser_class: type[ArgumentParser] | None = None,
    ) -> None:
        self.parent = parent
        self.namespace_key = namespace_key
        self.title = title
        self.description = description
        self.parser_class = parser_class or type(parent)
        self.choices: list[str] = []
        self.argument: Argument | None = None
        self._name_map: dict[str, ArgumentParser] = {}
        self._help: dict[str, str] = {}

    def add_parser(
        self,
        name: str,
        aliases: Iterable[str] = (),
        help: str = "",
        **kwargs: Any,
    ) -> ArgumentParser:
        """
        Create and register a nested parser.

        Args:
            name (str): The sub-command name.
            aliases (Iterable[str]): Alternative names selecting the same parser.
            help (str): One-line description shown in the parent's help.
            **kwargs: Passed to the nested parser's constructor.

        Returns:
            ArgumentParser: The nested parser.
        """
        aliases = list(aliases)
        for key in [name, *aliases]:
            if key in self._name_map:
                raise SchemaError(f"Sub-command '{key}' is already defined")
        kwargs.setdefault("prog", f"{self.parent.prog} {name}")
        kwargs.setdefault("prefix_chars", self.parent.prefix_chars)
        kwargs.setdefault("description", help)
        parser = self.parser_class(**kwargs)
        for key in [name, *aliases]:
            self._name_map[key] = parser
            self.choices.append(key)
        self._help[name] = help
        logger.debug("Registered sub-command '%s' (aliases: %s)", name, aliases)
        return parser

    def get_parser(self, name: str) -> ArgumentParser | None:
        return self._name_map.get(name)

    def iter_help(self) -> Iterable[tuple[str, str]]:
        return self._help.items()

    def run(self, values: list[Any]) -> ConsumptionLoop:
        """Parse the tokens after the sub-command name with the selected parser."""
        name, *arg_strings = values
        parser = self._name_map.get(name)
        if parser is None:
            raise InvalidChoiceError(self.argument, name, self.choices)
        logger.debug("Dispatching %d token(s) to sub-command '%s'", len(arg_strings), name)
        return parser._run([str(arg_string) for arg_string in arg_strings], {})

    def merge(self, result: dict[str, Any], nested: dict[str, Any]) -> None:
        """Fold a nested result mapping into `result`."""
        if self.namespace_key:
            result[self.namespace_key] = nested
        else:
            result.update(nested)
