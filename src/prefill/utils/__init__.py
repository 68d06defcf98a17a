"""Utility module for Prefill

Definitions/declarations in this module should be independent of other modules,
to the maximum extent possible.
"""

from importlib.metadata import version
from typing import Any


def fully_qualified_name(obj: Any) -> str:
    """Return Fully Qualified name along with module"""
    return ".".join([obj.__module__, obj.__qualname__])


def describe(obj: Any) -> str:
    """Return a readable name for a class, function, or any other object"""
    if isinstance(obj, str):
        return obj
    if hasattr(obj, "__qualname__") and hasattr(obj, "__module__"):
        return fully_qualified_name(obj)
    return repr(obj)


def get_version() -> str:
    return version("prefill")
