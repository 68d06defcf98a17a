"""Custom converter resolution.

A field either relies on built-in parsing, selected by its declared type, or
names a custom converter that turns the literal into a value on its own. A
custom converter can be referenced as:

* a callable taking the literal, like ``lambda s: s.split(",")``
* a class with a ``convert`` method, instantiated without arguments
* any other class, called with the literal like ``decimal.Decimal``
* a name registered with a `ConverterRegistry`
* a dotted import path, like ``"myapp.converters.parse_money"``
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Protocol, runtime_checkable

from prefill.exceptions import ConverterError
from prefill.fields.spec import BUILT_IN, Init
from prefill.utils import describe
from prefill.utils.importlib import import_from_string

logger = logging.getLogger(__name__)


@runtime_checkable
class StringConverter(Protocol):
    """Class-based converter, turning a literal into a value"""

    def convert(self, s: str) -> Any: ...


class Strategy(Enum):
    BUILT_IN = "built_in"
    CUSTOM = "custom"


@dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome of resolving the converter of a default declaration.

    Attributes:
        strategy: Whether to dispatch on the declared type or use a custom converter
        converter: The custom converter reference, `None` for built-in parsing
    """

    strategy: Strategy
    converter: Any = None

    @property
    def is_custom(self) -> bool:
        return self.strategy is Strategy.CUSTOM


def resolve(spec: Init) -> Resolution:
    """Decide how the literal of ``spec`` is converted.

    A custom converter always wins over built-in parsing. The declared type
    and the format of the field play no part once one is present.
    """
    if spec.converter is BUILT_IN:
        return Resolution(Strategy.BUILT_IN)
    return Resolution(Strategy.CUSTOM, spec.converter)


@dataclass(slots=True)
class ConverterRecord:
    """A record of a registered converter.

    Attributes:
        name: The name the converter was registered under
        qualname: The fully qualified name of the converter
        func: The callable that converts a literal
    """

    name: str
    qualname: str
    func: Callable[[str], Any]

    def __repr__(self) -> str:
        return f"<converter {self.name}: {self.qualname}>"


class ConverterRegistry:
    """Registry of named custom converters.

    Lookups fall back to importing a dotted path when a name is not
    registered. Registration is expected to happen at import time, after
    which the registry is only read.
    """

    __slots__ = ("_converters",)

    def __init__(self) -> None:
        self._converters: Dict[str, ConverterRecord] = {}

    def _reset(self) -> None:
        """Reset the registry, clearing all registered converters."""
        self._converters.clear()

    def register(self, name: str, converter: Any) -> Callable[[str], Any]:
        """Register a converter under ``name``.

        Args:
            name: The name fields refer to the converter by
            converter: A callable or a converter class

        Raises:
            ConverterError: If the converter cannot be turned into a callable
        """
        func = self._as_callable(converter)

        if name in self._converters:
            logger.debug(f"Replacing converter registered as `{name}`")

        self._converters[name] = ConverterRecord(
            name=name, qualname=describe(converter), func=func
        )
        return func

    def unregister(self, name: str) -> None:
        self._converters.pop(name, None)

    def converter(self, name: Optional[str] = None) -> Callable:
        """Decorator registering a function or class as a converter.

        Uses the decorated object's name when ``name`` is omitted.
        """

        def decorator(obj):
            self.register(name or obj.__name__, obj)
            return obj

        return decorator

    def __contains__(self, name: str) -> bool:
        return name in self._converters

    def __iter__(self):
        return iter(self._converters.values())

    def __len__(self) -> int:
        return len(self._converters)

    def lookup(self, ref: Any) -> Callable[[str], Any]:
        """Return the callable a converter reference stands for.

        Raises:
            ConverterError: If the reference cannot be resolved
        """
        if ref is BUILT_IN:
            raise ConverterError("The built-in strategy has no converter", converter=ref)

        if isinstance(ref, str):
            if ref in self._converters:
                return self._converters[ref].func

            try:
                ref = import_from_string(ref)
            except ImportError as exc:
                raise ConverterError(
                    f"Converter `{describe(ref)}` is not registered and could not be imported",
                    converter=ref,
                ) from exc

        return self._as_callable(ref)

    def convert(self, ref: Any, literal: str) -> Any:
        """Resolve ``ref`` and run it against ``literal``.

        Raises:
            ConverterError: If the converter cannot be resolved or fails
        """
        func = self.lookup(ref)

        try:
            return func(literal)
        except Exception as exc:
            raise ConverterError(
                f"Converter `{describe(ref)}` failed on {literal!r}: {exc}",
                converter=ref,
            ) from exc

    @staticmethod
    def _as_callable(converter: Any) -> Callable[[str], Any]:
        if inspect.isclass(converter):
            # Classes without `convert`, like `Decimal`, convert through their constructor
            if not issubclass(converter, StringConverter):
                return converter

            try:
                converter = converter()
            except Exception as exc:
                raise ConverterError(
                    f"Converter class `{describe(converter)}` could not be instantiated: {exc}",
                    converter=converter,
                ) from exc

        if isinstance(converter, StringConverter):
            return converter.convert
        if callable(converter):
            return converter

        raise ConverterError(
            f"Converter `{describe(converter)}` is not callable", converter=converter
        )

    def __repr__(self) -> str:
        return f"<ConverterRegistry: {sorted(self._converters)}>"


registry = ConverterRegistry()


def resolve_converter(ref: Any) -> Callable[[str], Any]:
    """Look up a converter in the default registry"""
    return registry.lookup(ref)
