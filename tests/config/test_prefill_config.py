import pytest

from prefill.config import Config, _default_config
from prefill.exceptions import ConfigurationError


class TestDefaults:
    def test_default_values(self):
        assert _default_config() == {
            "error_policy": "raise",
            "timezone": None,
            "formats": {
                "date": "yyyy-MM-dd",
                "time": "HH:mm:ss",
                "datetime": "yyyy-MM-dd HH:mm:ss",
            },
        }

    def test_defaults_are_a_fresh_copy(self):
        _default_config()["formats"]["date"] = "dd/MM/yyyy"

        assert _default_config()["formats"]["date"] == "yyyy-MM-dd"

    def test_load_from_empty_dict(self):
        assert Config.load_from_dict() == _default_config()


class TestLoadFromDict:
    def test_values_override_defaults(self):
        config = Config.load_from_dict(
            {"error_policy": "log", "formats": {"time": "HH:mm"}}
        )

        assert config["error_policy"] == "log"
        assert config["formats"]["time"] == "HH:mm"
        assert config["formats"]["date"] == "yyyy-MM-dd"

    def test_attribute_access(self):
        config = Config.load_from_dict({"timezone": "UTC"})

        assert config.timezone == "UTC"
        assert config.error_policy == "raise"

    def test_unknown_attribute(self):
        with pytest.raises(AttributeError):
            Config.load_from_dict().unknown

    def test_environment_section(self, monkeypatch):
        monkeypatch.setenv("PREFILL_ENV", "test")

        config = Config.load_from_dict(
            {"timezone": "UTC", "test": {"timezone": "Asia/Kolkata", "foo": "bar"}}
        )

        assert config["timezone"] == "Asia/Kolkata"
        assert "foo" not in config


class TestValidation:
    def test_unknown_error_policy(self):
        with pytest.raises(ConfigurationError) as exc:
            Config.load_from_dict({"error_policy": "ignore"})

        assert exc.value.args[0] == (
            "Unknown error policy `ignore`. Must be one of ['raise', 'log']"
        )

    def test_unknown_time_zone(self):
        with pytest.raises(ConfigurationError) as exc:
            Config.load_from_dict({"timezone": "Mars/Olympus_Mons"})

        assert exc.value.args[0] == "Unknown time zone `Mars/Olympus_Mons`"

    def test_unknown_format_key(self):
        with pytest.raises(ConfigurationError) as exc:
            Config.load_from_dict({"formats": {"year": "yyyy"}})

        assert exc.value.args[0] == (
            "Unknown format keys ['year']. Must be among ['date', 'datetime', 'time']"
        )

    def test_format_value_must_be_a_string(self):
        with pytest.raises(ConfigurationError) as exc:
            Config.load_from_dict({"formats": {"date": None}})

        assert exc.value.args[0] == "Format `date` must be a non-empty string, got None"

    def test_format_value_must_not_be_empty(self):
        with pytest.raises(ConfigurationError):
            Config.load_from_dict({"formats": {"datetime": ""}})

    def test_direct_construction_is_validated(self):
        with pytest.raises(ConfigurationError):
            Config(error_policy="explode")
