"""This module defines the configuration management for the date converter.

It uses Pydantic's BaseSettings to create a strongly-typed configuration
class that reads from environment variables and .env files. Settings only
drive the command-line interface and logging; the converter API itself
never reads configuration.
"""

from date_converter.models.enums import ResolverStyle
from date_converter.providers.pattern import compile_pattern
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """A Pydantic model for managing application settings.

    It automatically loads configuration from environment variables and .env files.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    LOG_LEVEL: str = "INFO"

    DATE_RESOLVER_STYLE: ResolverStyle = ResolverStyle.STRICT
    DATE_OUTPUT_PATTERN: str | None = None

    @field_validator("DATE_RESOLVER_STYLE", mode="before")
    @classmethod
    def normalize_resolver_style(cls, value: object) -> object:
        """Accepts resolver style names in any letter case.

        Args:
            value: The raw value read from the environment.

        Returns:
            The upper-cased name when a string was given, else the value unchanged.
        """
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("DATE_OUTPUT_PATTERN")
    @classmethod
    def validate_output_pattern(cls, value: str | None) -> str | None:
        """Compiles the configured output pattern so a malformed one fails at load time.

        Args:
            value: The configured pattern, or None for the ISO default.

        Returns:
            The pattern unchanged.

        Raises:
            ValueError: If the pattern is not a valid formatting pattern.
        """
        if value is None or value == "":
            return None

        compile_pattern(value)
        return value


class ConfigProvider:
    """A provider class that acts as a factory for the application's configuration.

    It does not hold state but provides a method to create fresh config instances.
    """

    @staticmethod
    def get_config() -> Config:
        """Factory method that instantiates and returns a new Config object.

        Calling this function will always create a new instance of the Config model,
        which forces Pydantic to reload and re-validate all settings from the
        current environment variables.

        Returns:
            A new, validated Config object.
        """
        return Config()
