"""
Configuration management using Pydantic Settings.

Loads configuration from environment variables, optionally seeded from a
dotenv file in the working directory.
"""
import os
from enum import Enum
from pathlib import Path
from typing import NamedTuple

from dotenv import load_dotenv
from pydantic import ValidationError as PydanticValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..exceptions import ConfigurationError
from ..utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_ENV_FILE = Path(".env")
DEFAULT_PORT = 8080

# Listen address used by the fixed variant, independent of the environment
FIXED_HOST = "0.0.0.0"
FIXED_PORT = 8080

# Empty host binds every IPv4 interface (AF_INET, no IPv6)
ALL_INTERFACES = ""


class Variant(str, Enum):
    """Which flavour of the server to run."""

    ENV = "env"
    FIXED = "fixed"


class ResponseStyle(str, Enum):
    """How multi-line response bodies are written."""

    LINES = "lines"
    INLINE = "inline"


class ListenAddress(NamedTuple):
    host: str
    port: int

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"


class VariantSettings(BaseSettings):
    """Selects the variant from BOOTCAMP_VARIANT, before anything else is read."""

    model_config = SettingsConfigDict(
        env_prefix="BOOTCAMP_",
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore"
    )

    variant: Variant = Variant.ENV

    @field_validator("variant", mode="before")
    @classmethod
    def normalize_variant(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


class Settings(VariantSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_prefix="")

    # Server Configuration
    port: int = DEFAULT_PORT

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of {valid_levels}")
        return v_upper

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port is a TCP port number (0 picks an ephemeral port)."""
        if not 0 <= v <= 65535:
            raise ValueError("Port must be between 0 and 65535")
        return v

    @property
    def listen_address(self) -> ListenAddress:
        if self.variant is Variant.FIXED:
            return ListenAddress(FIXED_HOST, FIXED_PORT)
        return ListenAddress(ALL_INTERFACES, self.port)

    @property
    def response_style(self) -> ResponseStyle:
        if self.variant is Variant.FIXED:
            return ResponseStyle.INLINE
        return ResponseStyle.LINES

    @property
    def fatal_bind_errors(self) -> bool:
        """Whether a listener failure should terminate the process."""
        return self.variant is Variant.ENV


def load_env_file(path: str | Path = DEFAULT_ENV_FILE) -> bool:
    """
    Load KEY=VALUE lines from a dotenv file into the process environment.

    Variables already present in the environment are never overridden.

    Args:
        path: Dotenv file to read

    Returns:
        True if the file was found and loaded, False if it does not exist
    """
    path = Path(path)
    if not path.is_file():
        logger.debug("env_file_not_found", path=str(path))
        return False

    load_dotenv(path, override=False)
    logger.debug("env_file_loaded", path=str(path))
    return True


def load_settings(env_file: str | Path = DEFAULT_ENV_FILE) -> Settings:
    """
    Resolve settings from the environment.

    The variant is read from the process environment alone and is never
    changed by the dotenv file. Only the env variant loads the dotenv file,
    and only the env variant reads PORT.

    Raises:
        ConfigurationError: If a setting has an invalid value
    """
    try:
        variant = VariantSettings().variant
        if variant is Variant.ENV:
            # A missing file is not an error, the result is informational only
            load_env_file(env_file)
            settings = Settings(variant=variant)
        else:
            settings = Settings(variant=variant, port=FIXED_PORT)
    except PydanticValidationError as e:
        raise ConfigurationError(
            "Invalid configuration",
            context={
                "errors": [
                    {"field": ".".join(str(loc) for loc in err["loc"]), "message": err["msg"]}
                    for err in e.errors()
                ],
                "port": os.environ.get("PORT"),
            }
        ) from e
    return settings


# Singleton instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create settings singleton instance."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings
