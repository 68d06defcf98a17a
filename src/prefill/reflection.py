from __future__ import annotations

import logging
import typing
from typing import Any, Type

from prefill.exceptions import IncorrectUsageError, ReadError, WriteError
from prefill.fields.kinds import TypeKind, classify, unwrap
from prefill.fields.spec import FieldDescriptor, Init

logger = logging.getLogger(__name__)

_FIELDS = "__prefill_fields__"

# These values mark a field as unset
EMPTY_VALUES: tuple = (None, "", [], (), {})


def _owner(class_or_instance: Type[Any] | Any) -> Type[Any]:
    return class_or_instance if isinstance(class_or_instance, type) else type(
        class_or_instance
    )


def _declared_defaults(cls: Type[Any]) -> dict[str, Init]:
    """Gather assignment-style declarations, base classes first"""
    defaults: dict[str, Init] = {}
    for klass in reversed(cls.__mro__):
        declared = dict(vars(klass))

        # Slotted dataclasses keep defaults on their fields, not as class attributes
        for field_name, field_obj in vars(klass).get("__dataclass_fields__", {}).items():
            declared[field_name] = field_obj.default

        for attr_name, attr_obj in declared.items():
            if isinstance(attr_obj, Init):
                defaults[attr_name] = attr_obj
            elif attr_name in defaults:
                # Redeclared in a subclass without a default
                defaults.pop(attr_name)
    return defaults


def _build_fields(cls: Type[Any]) -> dict[str, FieldDescriptor]:
    try:
        hints = typing.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError) as exc:
        raise IncorrectUsageError(
            f"Annotations of `{cls.__qualname__}` cannot be resolved: {exc}"
        )

    assigned = _declared_defaults(cls)

    fields_dict: dict[str, FieldDescriptor] = {}
    for name, annotation in hints.items():
        if typing.get_origin(annotation) is typing.ClassVar:
            continue

        declared_type, metadata = unwrap(annotation)
        declarations = [item for item in metadata if isinstance(item, Init)]
        if len(declarations) > 1:
            raise IncorrectUsageError(
                f"Field `{cls.__qualname__}.{name}` declares more than one default"
            )

        # Annotation style takes precedence over assignment style
        default = declarations[0] if declarations else assigned.get(name)
        fields_dict[name] = FieldDescriptor(
            name=name,
            declared_type=declared_type,
            kind=classify(declared_type),
            default=default,
        )

    # Defaults assigned to attributes that carry no annotation
    for name, default in assigned.items():
        if name not in fields_dict:
            fields_dict[name] = FieldDescriptor(
                name=name,
                declared_type=None,
                kind=TypeKind.UNSUPPORTED,
                default=default,
            )

    return fields_dict


def fields(class_or_instance: Type[Any] | Any) -> dict[str, FieldDescriptor]:
    """Return a dictionary of field descriptors for this class or instance.

    Descriptors are computed once per class and stored on it. Subclasses get
    their own entry, so fields inherited from base classes are included.
    """
    cls = _owner(class_or_instance)

    # Looking into `__dict__` keeps a subclass from reusing its parent's entry
    fields_dict = cls.__dict__.get(_FIELDS)
    if fields_dict is None:
        fields_dict = _build_fields(cls)
        try:
            setattr(cls, _FIELDS, fields_dict)
        except (AttributeError, TypeError):
            # Built-in and extension types do not accept new attributes
            logger.debug(f"Field metadata of `{cls.__qualname__}` cannot be cached")

    return fields_dict


def list_fields(class_or_instance: Type[Any] | Any) -> list[FieldDescriptor]:
    """Return field descriptors in declaration order"""
    return list(fields(class_or_instance).values())


def default_fields(class_or_instance: Type[Any] | Any) -> dict[str, FieldDescriptor]:
    """Return the fields that declare a default"""
    return {
        name: descriptor
        for name, descriptor in fields(class_or_instance).items()
        if descriptor.has_default
    }


def has_defaults(class_or_instance: Type[Any] | Any) -> bool:
    """Check if any field of the class declares a default"""
    return bool(default_fields(class_or_instance))


def get_field(target: Any, name: str) -> Any:
    """Return the current value of a field, `None` when it is unset.

    An `Init` read back from the class means the instance never assigned
    the attribute.

    Raises:
        ReadError: If reading the attribute fails
    """
    try:
        value = getattr(target, name, None)
    except Exception as exc:
        raise ReadError(
            f"`{type(target).__name__}` failed to read `{name}`: {exc}",
            field_name=name,
        ) from exc

    if isinstance(value, Init):
        return None
    return value


def is_unset(value: Any) -> bool:
    try:
        return value in EMPTY_VALUES
    except Exception:
        # Values whose equality check cannot handle the empty values
        return False


def set_field(target: Any, name: str, value: Any) -> None:
    """Write a value back to the target.

    Raises:
        WriteError: If the target rejects the value
    """
    try:
        setattr(target, name, value)
    except Exception as exc:
        raise WriteError(
            f"`{type(target).__name__}` rejected a value for `{name}`: {exc}",
            field_name=name,
        ) from exc
