import logging
from typing import Annotated

import pytest

from prefill import Init
from prefill.exceptions import InitError


class Broken:
    first: Annotated[int, Init("one")] = None
    second: Annotated[int, Init("2")] = None
    third: Annotated[bool, Init("maybe")] = None


class TestRaisePolicy:
    def test_raises_after_full_scan(self, make_engine):
        broken = Broken()

        with pytest.raises(InitError) as exc:
            make_engine(error_policy="raise").init(broken)

        assert broken.second == 2
        assert exc.value.messages == {
            "first": ['"one" value must be an integer.'],
            "third": ['"maybe" value must be either True or False.'],
        }

    def test_is_the_default_policy(self, engine):
        with pytest.raises(InitError):
            engine.init(Broken())

    def test_failures_are_reported_only_by_the_exception(self, make_engine, caplog):
        with caplog.at_level(logging.DEBUG, logger="prefill.engine"):
            with pytest.raises(InitError):
                make_engine(error_policy="raise").init(Broken())

        engine_records = [
            record
            for record in caplog.records
            if record.name == "prefill.engine" and record.levelno >= logging.WARNING
        ]
        assert engine_records == []

    def test_run_never_raises(self, make_engine):
        result = make_engine(error_policy="raise").run(Broken())

        assert set(result.errors) == {"first", "third"}


class TestLogPolicy:
    def test_returns_target(self, make_engine):
        broken = Broken()

        assert make_engine(error_policy="log").init(broken) is broken
        assert broken.first is None
        assert broken.second == 2

    def test_each_failure_logged_at_warning(self, make_engine, caplog):
        with caplog.at_level(logging.WARNING, logger="prefill.engine"):
            make_engine(error_policy="log").init(Broken())

        messages = [
            record.getMessage()
            for record in caplog.records
            if record.levelno == logging.WARNING
        ]
        assert messages == [
            'No default for `Broken.first`: "one" value must be an integer.',
            'No default for `Broken.third`: "maybe" value must be either True or False.',
        ]

    def test_no_logging_without_failures(self, make_engine, caplog):
        class Fine:
            count: Annotated[int, Init("1")] = None

        with caplog.at_level(logging.WARNING, logger="prefill.engine"):
            make_engine(error_policy="log").init(Fine())

        assert caplog.records == []
