import logging
import os
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from git_identity.infrastructure.selector import SelectorKind

CONFIG_FILE_ENV = "GIT_IDENTITY_CONFIG_FILE"


def default_config_file() -> Path:
    """~/.config/git-identity/config.yaml (honours $XDG_CONFIG_HOME)."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "git-identity" / "config.yaml"


# =============================================================================
# Sections
# =============================================================================


class PathsConfig(BaseModel):
    """Overrides for the config files backing each scope."""

    global_config: Path | None = None  # default: git's global config resolution
    local_config: Path | None = None  # default: .git/config of the enclosing repo


class LoggingConfig(BaseModel):
    level: str = "WARNING"
    format: str = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @property
    def file(self) -> str | None:
        """Get log file path from GIT_IDENTITY_LOG_FILE env var."""
        return os.environ.get("GIT_IDENTITY_LOG_FILE")

    @field_validator("level")
    @classmethod
    def _upper(cls, v: str) -> str:
        v = v.upper()
        if v not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level {v!r}")
        return v


# =============================================================================
# Application Configuration
# =============================================================================


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Load settings from the YAML config file.

    The file is taken from GIT_IDENTITY_CONFIG_FILE, else the default
    location when it exists.
    """

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        yaml_data = self._load_yaml_config()
        field_value = yaml_data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        return self._load_yaml_config()

    def _load_yaml_config(self) -> dict[str, Any]:
        config_file = os.environ.get(CONFIG_FILE_ENV)
        path = Path(config_file).expanduser() if config_file else default_config_file()
        if path.exists():
            return yaml.safe_load(path.read_text()) or {}
        return {}


class Config(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="GIT_IDENTITY_",
        env_nested_delimiter="__",  # Allows GIT_IDENTITY_PATHS__GLOBAL_CONFIG override
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    namespace: str = "user"  # Key prefix; existing stores use "user"
    protected_keys: list[str] = Field(default_factory=lambda: ["useconfigonly"])
    selector: SelectorKind = "auto"
    paths: PathsConfig = PathsConfig()
    logging: LoggingConfig = LoggingConfig()

    @field_validator("namespace")
    @classmethod
    def _validate_namespace(cls, v: str) -> str:
        if not v or "." in v:
            raise ValueError("namespace must be a single non-empty key segment")
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include YAML config.

        Priority (highest to lowest):
        1. init_settings - values passed to Config()
        2. env_settings - environment variables
        3. dotenv_settings - .env file
        4. yaml_settings - GIT_IDENTITY_CONFIG_FILE yaml
        5. file_secret_settings - secrets from files
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def configure_logging(config: LoggingConfig) -> None:
    """Configure Python logging based on config.

    Called once at CLI startup.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(config.level)

    # Remove existing handlers to avoid duplicates
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)

    formatter = logging.Formatter(config.format, datefmt=config.date_format)

    if config.file:
        log_path = Path(config.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_path)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(config.level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    logging.debug("Logging configured: level=%s, file=%s", config.level, config.file)
