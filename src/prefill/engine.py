"""Default-value resolution engine.

The engine walks the fields of a target, leaves populated fields alone and
writes a resolved default into every unset field that declares one::

    @dataclass
    class Order:
        quantity: Annotated[Int, Init("1")] = None
        placed_on: Annotated[datetime.date, Init("2021-03-23")] = None

    order = init(Order())

Each field is resolved on its own. A failing field is recorded in the
`InitResult` and never stops the remaining fields from being processed.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Any, Optional, TypeVar

from prefill.config import Config
from prefill.converters import ConverterRegistry, resolve
from prefill.converters import registry as default_registry
from prefill.exceptions import (
    ConverterError,
    InitError,
    ParseError,
    ReadError,
    WriteError,
)
from prefill.fields.parsers import LiteralParser
from prefill.fields.spec import FieldDescriptor
from prefill.reflection import get_field, is_unset, list_fields, set_field

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Failures recorded against a field instead of being raised
FIELD_ERRORS = (ParseError, ConverterError, ReadError, WriteError)


class FieldState(Enum):
    SKIPPED = "skipped"  # Populated, or no default declared
    SKIPPED_WRITE = "skipped_write"  # Default resolved to nothing
    WRITTEN = "written"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class FieldOutcome:
    name: str
    state: FieldState
    value: Any = None
    error: Optional[Exception] = None


@dataclass(slots=True)
class InitResult:
    """The target after a scan, with the outcome of every field visited."""

    target: Any
    outcomes: list[FieldOutcome] = field(default_factory=list)

    @property
    def errors(self) -> dict[str, Exception]:
        return {
            outcome.name: outcome.error
            for outcome in self.outcomes
            if outcome.state is FieldState.FAILED
        }

    @property
    def written(self) -> dict[str, Any]:
        return {
            outcome.name: outcome.value
            for outcome in self.outcomes
            if outcome.state is FieldState.WRITTEN
        }

    @property
    def ok(self) -> bool:
        return not self.errors

    def outcome(self, name: str) -> FieldOutcome:
        for outcome in self.outcomes:
            if outcome.name == name:
                return outcome
        raise KeyError(name)

    def messages(self) -> dict[str, list[str]]:
        messages = defaultdict(list)
        for name, error in self.errors.items():
            messages[name].append(str(error))
        return dict(messages)

    def raise_for_errors(self) -> None:
        """Raise `InitError` if any field failed to resolve"""
        if not self.ok:
            raise InitError(self.messages())


class InitEngine:
    """Resolve and write declared defaults into unset fields.

    :param config: A `Config`, or a dictionary of configuration values
    :param registry: Registry used to look up named custom converters
    """

    def __init__(
        self,
        config: Config | dict | None = None,
        registry: ConverterRegistry | None = None,
    ) -> None:
        if not isinstance(config, Config):
            config = Config.load_from_dict(config)

        self.config = config
        self.registry = registry if registry is not None else default_registry
        self.parser = LiteralParser(
            formats=config["formats"], timezone=config["timezone"]
        )

    def resolve_default(self, descriptor: FieldDescriptor) -> Any:
        """Produce the default value of a field, `None` if there is nothing to write.

        Raises:
            ParseError: If the literal is malformed for the field's kind
            ConverterError: If a custom converter cannot be resolved or fails
        """
        spec = descriptor.default
        if spec is None:
            return None

        resolution = resolve(spec)
        if resolution.is_custom:
            return self.registry.convert(resolution.converter, spec.literal)

        return self.parser.parse(descriptor.kind, spec.literal, spec.format)

    def _visit(self, target: Any, descriptor: FieldDescriptor) -> FieldOutcome:
        name = descriptor.name

        if not descriptor.has_default:
            return FieldOutcome(name, FieldState.SKIPPED)

        try:
            # An existing value always wins
            if not is_unset(get_field(target, name)):
                return FieldOutcome(name, FieldState.SKIPPED)

            value = self.resolve_default(descriptor)
            if value is None:
                return FieldOutcome(name, FieldState.SKIPPED_WRITE)

            set_field(target, name, value)
        except FIELD_ERRORS as exc:
            return FieldOutcome(name, FieldState.FAILED, error=exc)

        logger.debug(f"Default {value!r} written to `{type(target).__name__}.{name}`")
        return FieldOutcome(name, FieldState.WRITTEN, value=value)

    def run(self, target: T) -> InitResult:
        """Visit every field of ``target`` and report what happened to each.

        Field failures are recorded in the result, never raised.
        """
        result = InitResult(target)
        for descriptor in list_fields(target):
            result.outcomes.append(self._visit(target, descriptor))
        return result

    def init(self, target: T) -> T:
        """Populate unset fields of ``target`` in place and return it.

        All fields are visited before failures are acted upon. Under the
        ``raise`` error policy an `InitError` listing every failed field is
        raised; under ``log`` each failure is logged and the target returned.
        """
        result = self.run(target)

        if not result.ok:
            if self.config["error_policy"] == "raise":
                result.raise_for_errors()

            for name, error in result.errors.items():
                logger.warning(
                    f"No default for `{type(target).__name__}.{name}`: {error}"
                )

        return target


@lru_cache(maxsize=None)
def default_engine() -> InitEngine:
    """Engine with the default configuration, created on first use"""
    return InitEngine()


def init(target: T, engine: InitEngine | None = None) -> T:
    """Populate unset fields of ``target`` with their declared defaults"""
    return (engine or default_engine()).init(target)


def resolve_defaults(target: T, engine: InitEngine | None = None) -> InitResult:
    """Populate unset fields and return the outcome of every field"""
    return (engine or default_engine()).run(target)
