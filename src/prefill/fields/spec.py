"""Declarative default values for fields.

An ``Init`` records the textual default of a field, an optional date-time
pattern and an optional custom converter. It is attached to a field either
through ``Annotated`` or by assignment::

    class Order:
        quantity: Annotated[Int, Init("1")] = None
        placed_on: datetime.date = Init("2021-03-23")

``FieldDescriptor`` is the reflected, immutable view of a single field that
the engine works with.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from prefill.exceptions import IncorrectUsageError
from prefill.fields.kinds import TypeKind


# ---------------------------------------------------------------------------
# Sentinel for "use built-in parsing"
# ---------------------------------------------------------------------------
class _BUILT_IN_TYPE:
    """Sentinel indicating no custom converter was provided."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "BUILT_IN"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "BUILT_IN"


BUILT_IN = _BUILT_IN_TYPE()


# ---------------------------------------------------------------------------
# Init
# ---------------------------------------------------------------------------
class Init:
    """Default value declaration for a single field.

    :param literal: The textual default, converted to the field's type
    :param format: Date-time pattern for temporal fields. Empty means the
        standard pattern of the field's kind
    :param converter: ``BUILT_IN`` to dispatch on the field's declared type, or
        a custom converter: a callable, a class, a registered name or a dotted
        import path. A custom converter receives only the literal.
    """

    __slots__ = ("literal", "format", "converter")

    def __init__(self, literal: str, format: str = "", converter: Any = BUILT_IN) -> None:
        if not isinstance(literal, str):
            raise IncorrectUsageError(
                f"Default literal must be a string, got {type(literal).__name__}"
            )
        if format is None:
            format = ""
        if not isinstance(format, str):
            raise IncorrectUsageError(
                f"Default format must be a string, got {type(format).__name__}"
            )
        if converter is None:
            converter = BUILT_IN

        self.literal = literal
        self.format = format
        self.converter = converter

    @property
    def has_custom_converter(self) -> bool:
        return self.converter is not BUILT_IN

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return False

        return (self.literal, self.format, self.converter) == (
            other.literal,
            other.format,
            other.converter,
        )

    def __hash__(self) -> int:
        return hash((self.literal, self.format))

    def __repr__(self) -> str:
        parts = [repr(self.literal)]
        if self.format:
            parts.append(f"format={self.format!r}")
        if self.has_custom_converter:
            converter = self.converter
            name = converter if isinstance(converter, str) else getattr(
                converter, "__name__", repr(converter)
            )
            parts.append(f"converter={name}")
        return f"Init({', '.join(parts)})"


DefaultSpec = Init


# ---------------------------------------------------------------------------
# FieldDescriptor
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """A reflected field of a target class.

    Attributes:
        name: Attribute name on the target
        declared_type: The annotation with ``Annotated`` and ``Optional``
            stripped, ``None`` if the field is not annotated
        kind: The `TypeKind` the declared type maps to
        default: The default declaration, if any
    """

    name: str
    declared_type: Any
    kind: TypeKind
    default: Init | None = None

    @property
    def has_default(self) -> bool:
        return self.default is not None

    def __repr__(self) -> str:
        type_name = getattr(self.declared_type, "__name__", repr(self.declared_type))
        return f"<FieldDescriptor {self.name}: {type_name} ({self.kind.name}) {self.default!r}>"
