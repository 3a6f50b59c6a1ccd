# Argmatch Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `TypeRegistry`, the per-parser mapping from converter names to callables.

Every `ArgumentParser` owns its own registry, so registering a custom converter
never leaks into other parsers. Converters are resolved once, when an argument is
added, and the resolved callable is stored on the `Argument`.

Built-in names:
- "auto" (and None): identity, values stay strings
- "int", "float"
- "string" / "str"
- "bool": truthy/falsy words via `coerce_bool`
- "datetime": flexible parsing via python-dateutil

Any other callable is accepted as-is. Types and typing constructs (`Enum`
subclasses, `Literal[...]`, unions, `bool`, `datetime`, `Path`, ...) are routed
through `coerce_value` so they convert the same way everywhere.

Example:
    registry = TypeRegistry()
    registry.register("upper", str.upper)
    converter, name = registry.resolve("upper")
    converter("abc")  # "ABC"
"""
from __future__ import annotations

import types
from functools import partial
from typing import Any, Callable, Iterator, get_origin

from argmatch.exceptions import SchemaError
from argmatch.parser.utils import coerce_bool, coerce_datetime, coerce_value


def _identity(value: Any) -> Any:
    return value


class TypeRegistry:
    """Instance-scoped registry of named value converters."""

    def __init__(
        self,
        converters: dict[str, Callable[[Any], Any]] | None = None,
        include_builtins: bool = True,
    ) -> None:
        self._converters: dict[str, Callable[[Any], Any]] = {}
        if include_builtins:
            self._converters.update(
                {
                    "auto": _identity,
                    "int": int,
                    "float": float,
                    "string": str,
                    "str": str,
                    "bool": coerce_bool,
                    "datetime": coerce_datetime,
                }
            )
        for name, converter in (converters or {}).items():
            self.register(name, converter)

    def register(self, name: str, converter: Callable[[Any], Any]) -> None:
        """Register `converter` under `name`, replacing any previous entry."""
        if not isinstance(name, str) or not name:
            raise SchemaError("Converter name must be a non-empty string")
        if not callable(converter):
            raise SchemaError(f"Converter '{name}' is not callable")
        self._converters[name] = converter

    def get(self, name: str) -> Callable[[Any], Any]:
        try:
            return self._converters[name]
        except KeyError:
            known = ", ".join(sorted(self._converters))
            raise SchemaError(
                f"Unknown type '{name}'. Registered types: {known}"
            ) from None

    def resolve(self, spec: Any) -> tuple[Callable[[Any], Any], str]:
        """
        Resolve a `type=` value into a converter and its display name.

        Args:
            spec (Any): None, a registered name, a type, a typing construct or a callable.

        Returns:
            tuple[Callable[[Any], Any], str]: The converter and its display name.
        """
        if spec is None:
            return self.get("auto"), "auto"
        if isinstance(spec, str):
            return self.get(spec), spec
        name = getattr(spec, "__name__", None) or str(spec)
        if (
            isinstance(spec, type)
            or isinstance(spec, types.UnionType)
            or get_origin(spec) is not None
        ):
            return partial(coerce_value, target_type=spec), name
        if callable(spec):
            return spec, name
        raise SchemaError(f"{spec!r} is not callable")

    def __contains__(self, name: object) -> bool:
        return name in self._converters

    def __iter__(self) -> Iterator[str]:
        return iter(self._converters)

    def __len__(self) -> int:
        return len(self._converters)
