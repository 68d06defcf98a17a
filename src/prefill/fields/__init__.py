from . import parsers, patterns
from .kinds import TypeKind, classify, unwrap
from .parsers import LiteralParser, parse
from .spec import BUILT_IN, DefaultSpec, FieldDescriptor, Init

__all__ = [
    "BUILT_IN",
    "DefaultSpec",
    "FieldDescriptor",
    "Init",
    "LiteralParser",
    "TypeKind",
    "classify",
    "parse",
    "parsers",
    "patterns",
    "unwrap",
]
