"""Catalog of the kinds a declared field type can map to"""

from __future__ import annotations

import datetime
import types
import typing
from decimal import Decimal
from enum import Enum
from typing import Any, Annotated, Union

from prefill import types as markers


class TypeKind(Enum):
    BOOL = "bool"
    BYTE = "byte"
    SHORT = "short"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    CHAR = "char"
    STR = "str"
    BIG_DECIMAL = "big_decimal"
    BIG_INTEGER = "big_integer"
    DATE = "date"
    LOCAL_DATE = "local_date"
    LOCAL_TIME = "local_time"
    LOCAL_DATE_TIME = "local_date_time"
    ZONED_DATE_TIME = "zoned_date_time"
    OFFSET_DATE_TIME = "offset_date_time"
    UNSUPPORTED = "unsupported"

    @property
    def is_temporal(self) -> bool:
        return self in _TEMPORAL_KINDS

    @property
    def is_integral(self) -> bool:
        return self in INTEGER_RANGES


_TEMPORAL_KINDS = frozenset(
    {
        TypeKind.DATE,
        TypeKind.LOCAL_DATE,
        TypeKind.LOCAL_TIME,
        TypeKind.LOCAL_DATE_TIME,
        TypeKind.ZONED_DATE_TIME,
        TypeKind.OFFSET_DATE_TIME,
    }
)

# Inclusive bounds of the fixed-width integer kinds
INTEGER_RANGES: dict[TypeKind, tuple[int, int]] = {
    TypeKind.BYTE: (-(2**7), 2**7 - 1),
    TypeKind.SHORT: (-(2**15), 2**15 - 1),
    TypeKind.INT: (-(2**31), 2**31 - 1),
    TypeKind.LONG: (-(2**63), 2**63 - 1),
}

# Keys are compared by identity. `bool` must stay distinct from `int`, and the
#   NewType markers from the types they wrap.
_CATALOG: dict[Any, TypeKind] = {
    bool: TypeKind.BOOL,
    markers.Byte: TypeKind.BYTE,
    markers.Short: TypeKind.SHORT,
    markers.Int: TypeKind.INT,
    markers.Long: TypeKind.LONG,
    markers.Float: TypeKind.FLOAT,
    float: TypeKind.DOUBLE,
    markers.Char: TypeKind.CHAR,
    str: TypeKind.STR,
    Decimal: TypeKind.BIG_DECIMAL,
    int: TypeKind.BIG_INTEGER,
    markers.BigInteger: TypeKind.BIG_INTEGER,
    markers.Instant: TypeKind.DATE,
    datetime.date: TypeKind.LOCAL_DATE,
    datetime.time: TypeKind.LOCAL_TIME,
    datetime.datetime: TypeKind.LOCAL_DATE_TIME,
    markers.ZonedDateTime: TypeKind.ZONED_DATE_TIME,
    markers.OffsetDateTime: TypeKind.OFFSET_DATE_TIME,
}


def unwrap(annotation: Any) -> tuple[Any, tuple[Any, ...]]:
    """Strip ``Annotated[...]`` and optional wrappers from an annotation.

    Returns the bare declared type along with any ``Annotated`` metadata found
    on the way. ``Optional[T]`` and ``T | None`` unwrap to ``T``; unions with
    more than one non-``None`` member are returned as they are.
    """
    metadata: tuple[Any, ...] = ()

    while True:
        origin = typing.get_origin(annotation)
        if origin is Annotated:
            metadata += annotation.__metadata__
            annotation = annotation.__origin__
        elif origin in (Union, types.UnionType):
            members = [
                arg for arg in typing.get_args(annotation) if arg is not type(None)
            ]
            if len(members) != 1:
                return annotation, metadata
            annotation = members[0]
        else:
            return annotation, metadata


def classify(declared_type: Any) -> TypeKind:
    """Return the kind a declared type maps to, or `TypeKind.UNSUPPORTED`"""
    declared_type, _ = unwrap(declared_type)

    for candidate, kind in _CATALOG.items():
        if candidate is declared_type:
            return kind

    return TypeKind.UNSUPPORTED
