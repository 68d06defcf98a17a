"""Module for converting default literals into values of each kind"""

from __future__ import annotations

import datetime
import decimal
import struct
from abc import ABCMeta, abstractmethod
from typing import Any, Optional

from dateutil import tz

from prefill.exceptions import ConfigurationError, ParseError
from prefill.fields.kinds import INTEGER_RANGES, TypeKind
from prefill.fields.patterns import (
    DEFAULT_DATE_FORMAT,
    DEFAULT_DATE_TIME_FORMAT,
    DEFAULT_TIME_FORMAT,
    to_strptime,
)

MISSING_ERROR_MESSAGE = (
    "ParseError raised by `{class_name}`, but error key `{key}` does "
    "not exist in the `error_messages` dictionary."
)


class Parser(metaclass=ABCMeta):
    """Base class for the parser of a single kind.

    Parsers are stateless apart from their configuration, so a single instance
    per kind is shared by every field of that kind.
    """

    default_error_messages = {
        "invalid": '"{literal}" is not a valid {kind} literal.',
    }

    def __init__(self, kind: TypeKind, error_messages: dict = None):
        self.kind = kind

        # Collect default error message from self and parent classes
        messages = {}
        for cls in reversed(self.__class__.__mro__):
            messages.update(getattr(cls, "default_error_messages", {}))
        messages.update(error_messages or {})
        self.error_messages = messages

    def fail(self, key: str, literal: str, format: Optional[str] = None, **kwargs):
        """A helper method that simply raises a `ParseError`."""
        try:
            msg = self.error_messages[key]
        except KeyError:
            class_name = self.__class__.__name__
            msg = MISSING_ERROR_MESSAGE.format(class_name=class_name, key=key)
            raise ParseError(msg, kind=self.kind, literal=literal, format=format)

        msg = msg.format(literal=literal, kind=self.kind.value, format=format, **kwargs)
        raise ParseError(msg, kind=self.kind, literal=literal, format=format)

    def parse(self, literal: str, format: Optional[str] = None) -> Any:
        return self._cast_to_type(literal, format or None)

    @abstractmethod
    def _cast_to_type(self, literal: str, format: Optional[str]) -> Any:
        """
        Abstract method to convert the literal to the native type.
        Raise a :exc:`ParseError` if the literal is malformed.
        """

    def __repr__(self):
        return f"{self.__class__.__name__}({self.kind.name})"


class Boolean(Parser):
    """Boolean literals, matched case-insensitively."""

    default_error_messages = {
        "invalid": '"{literal}" value must be either True or False.',
    }

    TRUE_LITERALS = ("true", "t", "1", "yes")
    FALSE_LITERALS = ("false", "f", "0", "no")

    def _cast_to_type(self, literal, format):
        value = literal.strip().lower()
        if value in self.TRUE_LITERALS:
            return True
        if value in self.FALSE_LITERALS:
            return False
        self.fail("invalid", literal)


class Integer(Parser):
    """Integer literals, range-checked for the fixed-width kinds."""

    default_error_messages = {
        "invalid": '"{literal}" value must be an integer.',
        "range": '"{literal}" is out of range for {kind} [{min_value}, {max_value}].',
    }

    def __init__(self, kind, **kwargs):
        super().__init__(kind, **kwargs)
        self.min_value, self.max_value = INTEGER_RANGES.get(kind, (None, None))

    def _cast_to_type(self, literal, format):
        try:
            value = int(literal)
        except ValueError:
            self.fail("invalid", literal)

        if (self.min_value is not None and value < self.min_value) or (
            self.max_value is not None and value > self.max_value
        ):
            self.fail(
                "range", literal, min_value=self.min_value, max_value=self.max_value
            )
        return value


class Floating(Parser):
    """Floating point literals.

    ``FLOAT`` values are rounded to single precision, and literals that do not
    fit in single precision are rejected.
    """

    default_error_messages = {
        "invalid": '"{literal}" value must be floating point number.',
        "range": '"{literal}" is out of range for {kind}.',
    }

    def _cast_to_type(self, literal, format):
        try:
            value = float(literal)
        except ValueError:
            self.fail("invalid", literal)

        if self.kind is TypeKind.FLOAT:
            try:
                (value,) = struct.unpack("f", struct.pack("f", value))
            except OverflowError:
                self.fail("range", literal)
        return value


class Character(Parser):
    default_error_messages = {
        "invalid": "A character default cannot be empty.",
    }

    def _cast_to_type(self, literal, format):
        if not literal:
            self.fail("invalid", literal)
        return literal[0]


class String(Parser):
    def _cast_to_type(self, literal, format):
        return literal


class BigDecimal(Parser):
    default_error_messages = {
        "invalid": '"{literal}" value must be a decimal number.',
    }

    def _cast_to_type(self, literal, format):
        try:
            value = decimal.Decimal(literal)
        except decimal.InvalidOperation:
            self.fail("invalid", literal)

        if not value.is_finite():
            self.fail("invalid", literal)
        return value


class Unsupported(Parser):
    """Kinds outside the catalog receive no computed default"""

    def _cast_to_type(self, literal, format):
        return None


# ---------------------------------------------------------------------------
# Temporal kinds
# ---------------------------------------------------------------------------
class Temporal(Parser):
    """Base for date and time literals.

    The literal is parsed against the supplied pattern, or the kind's default
    pattern when none is given.

    :param default_format: Pattern used when a field declares no format
    :param zone: ``tzinfo`` attached to zone-aware kinds. Local time when unset
    """

    default_error_messages = {
        "invalid": '"{literal}" does not match the pattern "{format}": {reason}',
    }

    def __init__(self, kind, default_format, zone=None, **kwargs):
        super().__init__(kind, **kwargs)
        self.default_format = default_format
        self.zone = zone if zone is not None else tz.tzlocal()

    def _parse_datetime(self, literal, format) -> datetime.datetime:
        pattern = format or self.default_format
        strptime_format = to_strptime(pattern)
        try:
            return datetime.datetime.strptime(literal, strptime_format)
        except ValueError as exc:
            self.fail("invalid", literal, format=pattern, reason=exc)

    def _attach_zone(self, value: datetime.datetime) -> datetime.datetime:
        """Attach the configured zone unless the literal carried an offset"""
        if value.tzinfo is not None:
            return value

        # Wall-clock times skipped by a DST transition move forward, as they do
        #   when a local date-time is placed in a zone
        return tz.resolve_imaginary(value.replace(tzinfo=self.zone))


class LocalDate(Temporal):
    def _cast_to_type(self, literal, format):
        return self._parse_datetime(literal, format).date()


class LocalTime(Temporal):
    def _cast_to_type(self, literal, format):
        return self._parse_datetime(literal, format).time()


class LocalDateTime(Temporal):
    def _cast_to_type(self, literal, format):
        return self._parse_datetime(literal, format).replace(tzinfo=None)


class ZonedDateTime(Temporal):
    def _cast_to_type(self, literal, format):
        return self._attach_zone(self._parse_datetime(literal, format))


class OffsetDateTime(Temporal):
    def _cast_to_type(self, literal, format):
        value = self._attach_zone(self._parse_datetime(literal, format))
        return value.replace(tzinfo=datetime.timezone(value.utcoffset()))


class Instant(Temporal):
    def _cast_to_type(self, literal, format):
        value = self._attach_zone(self._parse_datetime(literal, format))
        return value.astimezone(datetime.timezone.utc)


# ---------------------------------------------------------------------------
# LiteralParser
# ---------------------------------------------------------------------------
DEFAULT_FORMATS = {
    "date": DEFAULT_DATE_FORMAT,
    "time": DEFAULT_TIME_FORMAT,
    "datetime": DEFAULT_DATE_TIME_FORMAT,
}


def resolve_zone(zone: str | datetime.tzinfo | None) -> datetime.tzinfo:
    """Return the ``tzinfo`` for a zone name, or the local zone for `None`"""
    if zone is None:
        return tz.tzlocal()
    if isinstance(zone, datetime.tzinfo):
        return zone

    resolved = tz.gettz(zone)
    if resolved is None:
        raise ConfigurationError(f"Unknown time zone `{zone}`")
    return resolved


class LiteralParser:
    """Dispatch a literal to the parser of its kind.

    :param formats: Overrides for the default ``date``, ``time`` and
        ``datetime`` patterns
    :param timezone: Zone name or ``tzinfo`` for zone-aware kinds, local time
        when `None`
    """

    def __init__(self, formats: dict[str, str] = None, timezone=None):
        formats = {**DEFAULT_FORMATS, **(formats or {})}
        zone = resolve_zone(timezone)

        self.formats = formats
        self.zone = zone
        self._parsers: dict[TypeKind, Parser] = {
            TypeKind.BOOL: Boolean(TypeKind.BOOL),
            TypeKind.BYTE: Integer(TypeKind.BYTE),
            TypeKind.SHORT: Integer(TypeKind.SHORT),
            TypeKind.INT: Integer(TypeKind.INT),
            TypeKind.LONG: Integer(TypeKind.LONG),
            TypeKind.FLOAT: Floating(TypeKind.FLOAT),
            TypeKind.DOUBLE: Floating(TypeKind.DOUBLE),
            TypeKind.CHAR: Character(TypeKind.CHAR),
            TypeKind.STR: String(TypeKind.STR),
            TypeKind.BIG_DECIMAL: BigDecimal(TypeKind.BIG_DECIMAL),
            TypeKind.BIG_INTEGER: Integer(TypeKind.BIG_INTEGER),
            TypeKind.DATE: Instant(TypeKind.DATE, formats["datetime"], zone),
            TypeKind.LOCAL_DATE: LocalDate(TypeKind.LOCAL_DATE, formats["date"], zone),
            TypeKind.LOCAL_TIME: LocalTime(TypeKind.LOCAL_TIME, formats["time"], zone),
            TypeKind.LOCAL_DATE_TIME: LocalDateTime(
                TypeKind.LOCAL_DATE_TIME, formats["datetime"], zone
            ),
            TypeKind.ZONED_DATE_TIME: ZonedDateTime(
                TypeKind.ZONED_DATE_TIME, formats["datetime"], zone
            ),
            TypeKind.OFFSET_DATE_TIME: OffsetDateTime(
                TypeKind.OFFSET_DATE_TIME, formats["datetime"], zone
            ),
            TypeKind.UNSUPPORTED: Unsupported(TypeKind.UNSUPPORTED),
        }

    def parser_for(self, kind: TypeKind) -> Parser:
        return self._parsers[kind]

    def parse(self, kind: TypeKind, literal: str, format: Optional[str] = None) -> Any:
        """Convert ``literal`` into a value of ``kind``.

        Returns `None` for `TypeKind.UNSUPPORTED`. Raises :exc:`ParseError`
        when the literal is malformed.
        """
        return self._parsers[kind].parse(literal, format)


def parse(kind: TypeKind, literal: str, format: Optional[str] = None) -> Any:
    """Parse with the default patterns and the local time zone"""
    return LiteralParser().parse(kind, literal, format)
