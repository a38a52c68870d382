import argparse
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ip_reflector.address import join_host_port

BASE_DIR = Path(__file__).resolve().parent.parent  # ip-reflector/
PACKAGE_DIR = Path(__file__).resolve().parent

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application settings with validation.

    Nothing is required: every field has a default, can be overridden from
    IP_REFLECTOR_* environment variables or the .env file, and finally from
    command-line flags (see build_settings).
    """

    # Listener
    addr: str = Field(default="", description="Bind address, empty for all interfaces (IPv4 and IPv6)")
    port: int = Field(ge=0, le=65535, default=8080, description="Bind port")

    # Logging
    log_level: str = Field(default="INFO", description="Console log level")
    log_file: Path | None = Field(default=None, description="Optional JSON log file")

    # Page template
    template_dir: Path = Field(default=PACKAGE_DIR / "templates", description="Directory holding the page template")
    template_name: str = Field(default="index.html", min_length=1, description="Page template file name")

    model_config = SettingsConfigDict(
        env_prefix="IP_REFLECTOR_",
        env_file=Path(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    @field_validator("addr", mode="after")
    @classmethod
    def validate_addr(cls, v: str) -> str:
        """Strip whitespace and the brackets of an IPv6 literal such as [::1]."""
        v = v.strip()
        if v.startswith("[") and v.endswith("]"):
            v = v[1:-1]
        return v

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log_level is a standard logging level name."""
        v = v.strip().upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return v

    @property
    def listen_address(self) -> str:
        """Listen address in host:port form, e.g. ':8080' or '[::1]:8080'."""
        return join_host_port(self.addr, self.port)


# Singleton settings instance
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get singleton Settings instance.

    Returns:
        Cached Settings instance, created from the environment on first use
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def build_settings(args: argparse.Namespace) -> Settings:
    """Build settings from parsed command-line flags.

    Flags that were not given fall back to the environment and defaults.
    The result becomes the process-wide singleton.

    Args:
        args: Namespace produced by the CLI parser

    Returns:
        Settings instance
    """
    global _settings_instance
    overrides = {
        name: value
        for name, value in vars(args).items()
        if name in Settings.model_fields and value is not None
    }
    _settings_instance = Settings(**overrides)
    return _settings_instance
