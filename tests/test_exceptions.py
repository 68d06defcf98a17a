import pickle

import pytest

from prefill.exceptions import (
    ConverterError,
    InitError,
    ParseError,
    PrefillException,
    PrefillExceptionWithMessage,
    ReadError,
    WriteError,
)
from prefill.fields import TypeKind


def test_pickling_of_exceptions():
    exc = ParseError("foo", kind=TypeKind.INT, literal="x")

    pickled_exc = pickle.dumps(exc)
    unpickled_exc = pickle.loads(pickled_exc)

    assert exc.args[0] == unpickled_exc.args[0]


class TestPickledAttributes:
    def test_parse_error_keeps_its_context(self):
        exc = ParseError(
            "bad date", kind=TypeKind.LOCAL_DATE, literal="2021-13-01", format="yyyy-MM-dd"
        )

        unpickled = pickle.loads(pickle.dumps(exc))

        assert unpickled.args[0] == "bad date"
        assert unpickled.kind is TypeKind.LOCAL_DATE
        assert unpickled.literal == "2021-13-01"
        assert unpickled.format == "yyyy-MM-dd"

    def test_converter_error_keeps_the_converter(self):
        unpickled = pickle.loads(pickle.dumps(ConverterError("boom", converter="money")))

        assert unpickled.args[0] == "boom"
        assert unpickled.converter == "money"

    @pytest.mark.parametrize("error_class", [ReadError, WriteError])
    def test_field_access_errors_keep_the_field_name(self, error_class):
        unpickled = pickle.loads(pickle.dumps(error_class("denied", field_name="balance")))

        assert type(unpickled) is error_class
        assert unpickled.args[0] == "denied"
        assert unpickled.field_name == "balance"


class TestPrefillException:
    @pytest.fixture
    def exception_instance(self):
        return PrefillException("An error occurred")

    def test_exception_initialization(self, exception_instance):
        assert exception_instance.args[0] == "An error occurred"
        assert exception_instance.extra_info is None

    def test_exception_with_extra_info(self):
        exception_instance = PrefillException(
            "An error occurred", extra_info="Extra info"
        )
        assert exception_instance.extra_info == "Extra info"

    def test_exception_no_args(self):
        exception_instance = PrefillException()
        assert exception_instance.args == ()

    def test_exception_multiple_args(self):
        exception_instance = PrefillException(
            "Error 1", "Error 2", extra_info="Extra info"
        )
        assert exception_instance.args == ("Error 1", "Error 2")
        assert exception_instance.extra_info == "Extra info"


class TestPrefillExceptionWithMessage:
    def test_exception_initialization(self):
        messages = {"quantity": ["An error occurred"]}
        exception_instance = PrefillExceptionWithMessage(messages)

        assert exception_instance.messages == {"quantity": ["An error occurred"]}
        assert exception_instance.traceback is None

    def test_exception_str(self):
        messages = {"quantity": ["An error occurred"]}
        exception_instance = PrefillExceptionWithMessage(messages)

        assert str(exception_instance) == "{'quantity': ['An error occurred']}"

    def test_exception_reduce(self):
        messages = {"quantity": ["An error occurred"]}
        exception_instance = InitError(messages)

        reduced = exception_instance.__reduce__()
        assert reduced[0] is InitError
        assert reduced[1] == ({"quantity": ["An error occurred"]},)

    def test_exception_with_traceback(self):
        messages = {"quantity": ["An error occurred"]}
        traceback = "Traceback info"
        exception_instance = PrefillExceptionWithMessage(
            messages, traceback=traceback
        )

        assert exception_instance.traceback == traceback

    def test_exception_with_additional_kwargs(self):
        messages = {"quantity": ["An error occurred"]}
        extra_info = "Extra info"
        exception_instance = PrefillExceptionWithMessage(
            messages, extra_info=extra_info
        )

        assert exception_instance.messages == messages
        assert exception_instance.traceback is None
        assert exception_instance.extra_info == extra_info


class TestFieldErrors:
    def test_parse_error_attributes(self):
        exc = ParseError("bad", kind=TypeKind.LOCAL_TIME, literal="8", format="HH:mm")

        assert exc.args == ("bad",)
        assert exc.kind is TypeKind.LOCAL_TIME
        assert exc.literal == "8"
        assert exc.format == "HH:mm"

    def test_converter_error_attributes(self):
        exc = ConverterError("bad", converter="money")

        assert exc.converter == "money"

    def test_write_error_attributes(self):
        exc = WriteError("bad", field_name="quantity")

        assert exc.field_name == "quantity"

    @pytest.mark.parametrize("error_class", [ParseError, ConverterError, WriteError])
    def test_field_errors_share_the_base(self, error_class):
        assert issubclass(error_class, PrefillException)
