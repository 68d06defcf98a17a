__version__ = "0.1.0"

from .config import Config
from .converters import ConverterRegistry, StringConverter, registry
from .engine import (
    FieldOutcome,
    FieldState,
    InitEngine,
    InitResult,
    init,
    resolve_defaults,
)
from .fields import BUILT_IN, DefaultSpec, FieldDescriptor, Init, TypeKind
from .utils import get_version

__all__ = [
    "BUILT_IN",
    "Config",
    "ConverterRegistry",
    "DefaultSpec",
    "FieldDescriptor",
    "FieldOutcome",
    "FieldState",
    "get_version",
    "Init",
    "InitEngine",
    "InitResult",
    "init",
    "registry",
    "resolve_defaults",
    "StringConverter",
    "TypeKind",
]
