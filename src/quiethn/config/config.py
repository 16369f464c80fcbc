"""
Configuration management for quiethn using Pydantic.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, PositiveFloat, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Setup Logging ---
log = logging.getLogger(__name__)

# --- Nested Configuration Models ---


class HNConfig(BaseModel):
    """Hacker News API client configuration."""

    base_url: str = Field(
        default="https://hacker-news.firebaseio.com/v0",
        description="Base URL of the Hacker News API.",
    )
    timeout: float = Field(default=10.0, gt=0, description="Per-request timeout in seconds.")
    user_agent: str = Field(default="quiethn/0.1.0", description="User-Agent string for API requests.")

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class FetcherConfig(BaseModel):
    """Story fetch cycle configuration."""

    num_stories: int = Field(default=30, ge=0, description="Number of top ranked items to fetch per cycle.")
    deadline_seconds: Optional[PositiveFloat] = Field(
        default=15.0,
        description="Overall time limit for one fetch cycle. None to disable.",
    )


class WebConfig(BaseModel):
    """Configuration for the HTML front-end."""

    host: str = Field(default="127.0.0.1", description="Host for the web server.")
    port: int = Field(default=3000, description="Port for the web server.")


class MonitoringConfig(BaseModel):
    """Configuration for logging."""

    log_level: str = Field(default="INFO", description="Logging level (e.g., DEBUG, INFO, WARNING).")
    log_file: str | None = Field(default=None, description="Path to log file. If None, logs to console.")
    json_logs: bool = Field(default=False, description="Render console logs as JSON.")

    @field_validator("log_file", mode="before")
    @classmethod
    def create_parent_dir(cls, v: str | Path | None) -> str | None:
        if v is None:
            return None
        path = Path(v)
        path.parent.mkdir(parents=True, exist_ok=True)
        return str(path)


# --- Main Configuration Class ---


class Config(BaseSettings):
    project_name: str = "quiethn"
    version: str = "0.1.0"
    hn: HNConfig = Field(default_factory=HNConfig)
    fetcher: FetcherConfig = Field(default_factory=FetcherConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)

    model_config = SettingsConfigDict(env_prefix="QUIETHN_", env_nested_delimiter="__", case_sensitive=False)

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        log.debug("Loading configuration from YAML file: %s", path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found or is not a file: {path}")
        with open(path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
        if not yaml_data:
            log.warning("Configuration file is empty: %s. Using default settings.", path)
            return cls.model_validate({})
        return cls.model_validate(yaml_data)


def find_config_file() -> Path | None:
    current_dir = Path.cwd()
    for path in (current_dir / "config.yaml", current_dir / "config.yml"):
        if path.exists():
            return path
    return None


def load_config(path: Path | None = None) -> Config:
    """Load configuration from ``path``, a config file in the CWD, or defaults."""
    config_path = path or find_config_file()
    if config_path is None:
        log.debug("No config file found. Using default settings.")
        return Config()
    return Config.from_yaml(config_path)
