"""Module to setup fixtures and other required artifacts for tests

    isort:skip_file
"""

import pytest


def pytest_addoption(parser):
    """Additional options for running tests with pytest"""
    parser.addoption(
        "--slow", action="store_true", default=False, help="Run slow tests"
    )
    parser.addoption(
        "--pending", action="store_true", default=False, help="Show pending tests"
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: slow running tests")
    config.addinivalue_line("markers", "pending: tests for pending functionality")


def pytest_collection_modifyitems(config, items):
    """Configure special markers on tests, so as to control execution"""
    run_slow = config.getoption("--slow")
    run_pending = config.getoption("--pending")

    skip_slow = pytest.mark.skip(reason="need --slow option to run")
    skip_pending = pytest.mark.skip(reason="need --pending option to run")

    for item in items:
        if "slow" in item.keywords and not run_slow:
            item.add_marker(skip_slow)
        if "pending" in item.keywords and not run_pending:
            item.add_marker(skip_pending)


@pytest.fixture(autouse=True)
def reset_registry():
    """Clear converters registered by a test from the default registry"""
    from prefill.converters import registry

    yield
    registry._reset()


@pytest.fixture
def converter_registry():
    from prefill.converters import ConverterRegistry

    return ConverterRegistry()


@pytest.fixture
def engine(converter_registry):
    """Engine pinned to UTC so zone-aware results do not depend on the host"""
    from prefill.engine import InitEngine

    return InitEngine({"timezone": "UTC"}, registry=converter_registry)


@pytest.fixture
def make_engine(converter_registry):
    from prefill.engine import InitEngine

    def _make_engine(**config):
        config.setdefault("timezone", "UTC")
        return InitEngine(config, registry=converter_registry)

    return _make_engine
