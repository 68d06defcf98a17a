"""Module defines utilities for importing converters by name"""

from importlib import import_module
from typing import Any


def import_from_string(val: str, package: str = None) -> Any:
    """
    Attempt to import an attribute from a dotted string representation,
    like `decimal.Decimal` or `myapp.converters.parse_money`.
    """
    try:
        module_path, attr_name = val.rsplit(".", 1)
        module = import_module(module_path, package=package)
        return getattr(module, attr_name)
    except (ValueError, ImportError, AttributeError) as e:
        msg = f"Could not import {val}. {e.__class__.__name__}: {e}"
        raise ImportError(msg)
