import logging
import os
import re

import tomllib

from prefill.exceptions import ConfigurationError
from prefill.fields.parsers import DEFAULT_FORMATS, resolve_zone

logger = logging.getLogger(__name__)

ERROR_POLICIES = ("raise", "log")


def _default_config():
    """Return the default configuration for Prefill.

    This is placed in a separate function because we want to be absolutely
    sure that we are using a copy of the defaults when we manipulate config
    directly in tests.
    """
    return {
        "error_policy": "raise",
        "timezone": None,
        "formats": dict(DEFAULT_FORMATS),
    }


class Config(dict):
    ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")
    CONFIG_FILES = (".prefill.toml", "prefill.toml", "pyproject.toml")

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._validate()

    def __getattr__(self, name):
        try:
            return self[name]
        except KeyError:
            raise AttributeError(f"'Config' object has no attribute '{name}'")

    @classmethod
    def load_from_dict(cls, config: dict = None):
        """Load configuration from a dictionary."""
        return cls(**cls._normalize_config(config or {}))

    @classmethod
    def load_from_path(cls, path: str):
        def find_config_file(directory: str):
            for config_file in cls.CONFIG_FILES:
                config_file_path = os.path.join(directory, config_file)
                if os.path.exists(config_file_path):
                    return config_file_path
            return None

        # Start checking from the provided path up to 2 parent directories
        if os.path.isdir(path):
            current_dir = os.path.abspath(path)
        else:
            current_dir = os.path.abspath(os.path.dirname(path))
        config_file_name = None

        for _ in range(3):  # Check the current directory and up to 2 parent directories
            config_file_name = find_config_file(current_dir)
            if config_file_name:
                break

            current_dir = os.path.dirname(current_dir)  # Move to the parent directory

        if not config_file_name:
            raise ConfigurationError(f"No configuration file found in {path}")

        logger.debug(f"Loading configuration from {config_file_name}")
        with open(config_file_name, "rb") as f:
            config = tomllib.load(f)

        # If pyproject.toml, extract prefill configuration
        #   from the 'tool.prefill' section
        if config_file_name.endswith("pyproject.toml"):
            config = config.get("tool", {}).get("prefill", {})

        # Load environment variables
        config = cls._load_env_vars(config)

        return cls(**cls._normalize_config(config))

    @classmethod
    def _normalize_config(cls, config):
        """Normalize configuration values.

        This method accepts a dictionary and combines the values from the
        configured environment to create a finalized configuration dictionary.
        """
        # Extract the value of PREFILL_ENV environment variable
        environment = os.environ.get("PREFILL_ENV") or None

        # Gather values of known variables
        keys = _default_config().keys()
        finalized_config = {key: value for key, value in config.items() if key in keys}

        # Merge with defaults
        finalized_config = cls._deep_merge(_default_config(), finalized_config)

        # Look for section linked to the specified environment
        if environment and environment in config:
            environment_config = {
                key: value
                for key, value in config[environment].items()
                if key in keys
            }
            # Merge the environment section with the base configuration
            finalized_config = cls._deep_merge(finalized_config, environment_config)

        return finalized_config

    @classmethod
    def _deep_merge(cls, dict1: dict, dict2: dict):
        result = dict1.copy()
        for key, value in dict2.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = cls._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    @classmethod
    def _load_env_vars(cls, config):
        if isinstance(config, dict):
            for key, value in config.items():
                if isinstance(value, str):
                    config[key] = cls._replace_env_var(value)
                elif isinstance(value, dict):
                    config[key] = cls._load_env_vars(value)
        return config

    @classmethod
    def _replace_env_var(cls, value):
        """Replace environment variables in a string.

        Cases:
        1. String does not have an environment variable. E.g. "raise" - Use as is
        2. String has an environment variable. E.g. "${PREFILL_TZ}" - Replace with value
        3. String has an environment variable with a default value. E.g. "${PREFILL_TZ|UTC}"
            - Replace with value or default value
        4. String has a mix of environment variables and static values.
            E.g. "yyyy-MM-dd'T'${TIME_PATTERN|HH:mm}" - Replace all environment variables
        """
        match = cls.ENV_VAR_PATTERN.search(value)
        while match:
            matched_string = match.group(1)

            if "|" in matched_string:
                # Default value provided
                env_var, default_value = matched_string.split("|", 1)
                env_value = os.getenv(env_var, default_value)
            else:
                # No default value provided
                env_value = os.getenv(matched_string)

            if env_value is None:
                raise ConfigurationError(
                    f"Environment variable {matched_string} is not set"
                )

            value = value.replace(f"${{{matched_string}}}", env_value)
            match = cls.ENV_VAR_PATTERN.search(value)

        return value

    def _validate(self):
        policy = self.get("error_policy")
        if policy not in ERROR_POLICIES:
            raise ConfigurationError(
                f"Unknown error policy `{policy}`. Must be one of {list(ERROR_POLICIES)}"
            )

        formats = self.get("formats") or {}
        unknown = set(formats) - set(DEFAULT_FORMATS)
        if unknown:
            raise ConfigurationError(
                f"Unknown format keys {sorted(unknown)}. "
                f"Must be among {sorted(DEFAULT_FORMATS)}"
            )

        for key, value in formats.items():
            if not isinstance(value, str) or not value:
                raise ConfigurationError(
                    f"Format `{key}` must be a non-empty string, got {value!r}"
                )

        # Fail early on zone names that cannot be resolved
        resolve_zone(self.get("timezone") or None)
