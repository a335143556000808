"""Loader settings with environment variable overrides

Used by the CLI to pick its defaults. Every field can be overridden through
``{prefix}_<FIELD>`` variables, e.g. ``GOFR_DOTENV_ENV_KEY=DEPLOY_ENV``.
"""

import os
import re
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from gofr_dotenv.exceptions import ConfigurationError
from gofr_dotenv.loader import DEFAULT_ENV, DEFAULT_ENV_KEY, DEFAULT_PATH, is_plain_suffix
from gofr_dotenv.parser import NAME_PATTERN

DEFAULT_PREFIX = "GOFR_DOTENV"

_VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
_TRUE_VALUES = {"1", "true", "yes", "on"}


class LoaderSettings(BaseModel):
    """Defaults for loading dotenv files

    Parameterized by an env_prefix so several tools can coexist.
    """

    path: Path = Field(
        default=Path(DEFAULT_PATH),
        description="Base dotenv file"
    )
    env_key: str = Field(
        default=DEFAULT_ENV_KEY,
        description="Selector variable naming the active environment"
    )
    default_env: str = Field(
        default=DEFAULT_ENV,
        description="Environment used when the selector variable is unset"
    )
    overwrite: bool = Field(
        default=False,
        description="Overwrite variables that are already defined"
    )
    cascade: bool = Field(
        default=False,
        description="Load the .local and environment-specific overlay files"
    )
    log_level: str = Field(
        default="INFO",
        description="Log level: DEBUG, INFO, WARNING, ERROR or CRITICAL"
    )

    @field_validator("env_key")
    @classmethod
    def validate_env_key(cls, v: str) -> str:
        """Selector must be a valid variable name"""
        if not re.fullmatch(NAME_PATTERN, v):
            raise ValueError(f"env_key must be a valid variable name, got {v!r}")
        return v

    @field_validator("default_env")
    @classmethod
    def validate_default_env(cls, v: str) -> str:
        """Environment names become file suffixes"""
        if not is_plain_suffix(v):
            raise ValueError(f"default_env must be a plain file suffix, got {v!r}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        if v.upper() not in _VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of: {', '.join(_VALID_LOG_LEVELS)}")
        return v.upper()

    @classmethod
    def from_env(
        cls,
        prefix: str = DEFAULT_PREFIX,
        env: Optional[Mapping[str, str]] = None,
    ) -> "LoaderSettings":
        """Load settings from environment variables

        Args:
            prefix: Environment variable prefix
            env: Mapping to read instead of os.environ

        Environment variables:
            {prefix}_PATH: Base dotenv file (default: .env)
            {prefix}_ENV_KEY: Selector variable (default: APP_ENV)
            {prefix}_DEFAULT_ENV: Fallback environment (default: dev)
            {prefix}_OVERWRITE: "true" to overwrite existing variables
            {prefix}_CASCADE: "true" to load the overlay cascade
            {prefix}_LOG_LEVEL: Log level (default: INFO)

        Raises:
            ConfigurationError: A variable holds an invalid value
        """
        source = os.environ if env is None else env

        def flag(name: str) -> bool:
            return source.get(f"{prefix}_{name}", "false").strip().lower() in _TRUE_VALUES

        try:
            return cls(
                path=Path(source.get(f"{prefix}_PATH", DEFAULT_PATH)),
                env_key=source.get(f"{prefix}_ENV_KEY", DEFAULT_ENV_KEY),
                default_env=source.get(f"{prefix}_DEFAULT_ENV", DEFAULT_ENV),
                overwrite=flag("OVERWRITE"),
                cascade=flag("CASCADE"),
                log_level=source.get(f"{prefix}_LOG_LEVEL", "INFO"),
            )
        except ValidationError as exc:
            raise ConfigurationError(
                "INVALID_SETTINGS",
                f"Invalid {prefix}_* settings",
                {"errors": [error["msg"] for error in exc.errors()]},
            ) from exc


__all__ = ["DEFAULT_PREFIX", "LoaderSettings"]
