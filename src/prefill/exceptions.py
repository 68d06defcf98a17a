"""
Custom Prefill exception classes
"""

import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)


class PrefillException(Exception):
    """Base class for all Exceptions raised within Prefill"""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args)

        self.extra_info = kwargs.get("extra_info", None)

    def __reduce__(self) -> tuple[Any, tuple[Any]]:
        return (self.__class__, (self.args[0],))


class PrefillExceptionWithMessage(PrefillException):
    def __init__(
        self, messages: dict[str, list[str]], traceback: Optional[str] = None, **kwargs: Any
    ) -> None:
        logger.debug(f"Exception:: {messages}")

        self.messages = messages
        self.traceback = traceback

        super().__init__(**kwargs)

    def __str__(self) -> str:
        return f"{dict(self.messages)}"

    def __reduce__(self) -> tuple[Any, tuple[Any]]:
        return (self.__class__, (self.messages,))


class ConfigurationError(PrefillException):
    """Improper Configuration encountered like:
    * An unknown error policy
    * A time zone name that cannot be resolved
    * A configuration file that cannot be found
    """


class IncorrectUsageError(PrefillException):
    """Default metadata is declared or used in a way that is not supported"""


class ParseError(PrefillException):
    """Raised when a literal does not match the grammar or pattern of its kind.

    :param message: Human readable description of the failure
    :param kind: The `TypeKind` the literal was parsed as
    :param literal: The offending literal
    :param format: The effective pattern, for temporal kinds
    """

    def __init__(
        self,
        message: str,
        kind: Any = None,
        literal: Optional[str] = None,
        format: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)

        self.kind = kind
        self.literal = literal
        self.format = format

    def __reduce__(self) -> tuple[Any, tuple[Any, ...]]:
        return (self.__class__, (self.args[0], self.kind, self.literal, self.format))


class ConverterError(PrefillException):
    """Raised when a custom converter cannot be resolved, instantiated or invoked"""

    def __init__(self, message: str, converter: Any = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)

        self.converter = converter

    def __reduce__(self) -> tuple[Any, tuple[Any, ...]]:
        return (self.__class__, (self.args[0], self.converter))


class FieldAccessError(PrefillException):
    """Base for failures reading or writing a field of the target"""

    def __init__(self, message: str, field_name: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)

        self.field_name = field_name

    def __reduce__(self) -> tuple[Any, tuple[Any, ...]]:
        return (self.__class__, (self.args[0], self.field_name))


class ReadError(FieldAccessError):
    """Raised when reading the current value of a field fails"""


class WriteError(FieldAccessError):
    """Raised when a target rejects the write-back of a resolved default"""


class InitError(PrefillExceptionWithMessage):
    """Raised after a full scan when one or more fields failed to resolve.

    :param messages: A dictionary of error messages where key is field name
        and value is the list of errors recorded for it
    """
