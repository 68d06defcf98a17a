"""Marker types for kinds that have no distinct Python type.

Python has a single unbounded ``int``, a single double-precision ``float`` and
no separate character type. These markers let a field declare the width or
temporal flavor it expects while the resolved values stay plain Python objects::

    class Packet:
        ttl: Annotated[Byte, Init("64")] = None
        sent_at: Annotated[ZonedDateTime, Init("2021-03-23 08:30:00")] = None
"""

import datetime
from typing import NewType

Byte = NewType("Byte", int)
Short = NewType("Short", int)
Int = NewType("Int", int)
Long = NewType("Long", int)
BigInteger = NewType("BigInteger", int)

# Single precision floating point
Float = NewType("Float", float)

Char = NewType("Char", str)

# A point on the timeline, resolved as a UTC-aware datetime
Instant = NewType("Instant", datetime.datetime)
ZonedDateTime = NewType("ZonedDateTime", datetime.datetime)
OffsetDateTime = NewType("OffsetDateTime", datetime.datetime)

__all__ = [
    "BigInteger",
    "Byte",
    "Char",
    "Float",
    "Instant",
    "Int",
    "Long",
    "OffsetDateTime",
    "Short",
    "ZonedDateTime",
]
