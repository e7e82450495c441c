"""Configuration management for relnotes."""

import json
import os
from pathlib import Path
from typing import Optional, List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


REQUIRED_SETTINGS = ("access_token", "api_version", "project_id")


class ConfigError(Exception):
    """Raised when required configuration values are missing."""

    def __init__(self, missing: List[str]):
        self.missing = missing
        names = ", ".join(f"RELNOTES_{name.upper()}" for name in missing)
        super().__init__(f"missing required configuration: {names}")


class Config(BaseSettings):
    """Configuration settings for relnotes."""

    model_config = SettingsConfigDict(env_prefix="RELNOTES_", case_sensitive=False)

    access_token: Optional[str] = None
    api_version: Optional[str] = None
    project_id: Optional[str] = None
    api_base_url: str = "https://app.asana.com/api"
    task_url_base: Optional[str] = None
    markdown_api_url: str = "https://api.github.com/markdown"
    github_token: Optional[str] = None
    output_dir: str = "releases"
    timeout: float = 30.0
    config_file: Optional[str] = None

    @field_validator("api_base_url")
    @classmethod
    def normalize_api_base_url(cls, v):
        """Ensure the API base URL has a protocol and no trailing slash."""
        if v and not v.startswith(("http://", "https://")):
            v = f"https://{v}"
        return v.rstrip("/")

    @property
    def task_link_base(self) -> str:
        """Base URL that a task id is appended to in the release document."""
        if self.task_url_base:
            return self.task_url_base
        return f"https://app.asana.com/0/{self.project_id}/"

    def require(self) -> "Config":
        """Check that every required value is present.

        Raises:
            ConfigError: listing all missing values
        """
        missing = [name for name in REQUIRED_SETTINGS if not getattr(self, name)]
        if missing:
            raise ConfigError(missing)
        return self


def load_json_config(config_path: str) -> dict:
    """Load configuration from JSON file.

    Args:
        config_path: Path to JSON configuration file

    Returns:
        Configuration dictionary
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        raise ValueError(f"Error loading config file {config_path}: {e}")


def find_config_file() -> Optional[str]:
    """Find configuration file in common locations.

    Returns:
        Path to config file or None if not found
    """
    # Project-local files before per-user ones; first match wins
    search_paths = [
        "relnotes.json",
        ".relnotes.json",
        "~/.relnotes.json",
        "~/.config/relnotes/config.json",
    ]

    for path_str in search_paths:
        path = Path(path_str).expanduser()
        if path.exists() and path.is_file():
            return str(path)

    return None


def get_config(config_file: Optional[str] = None, **overrides) -> Config:
    """Load configuration from a JSON file, environment variables and overrides.

    Later sources win: JSON file, then ``RELNOTES_*`` environment variables,
    then keyword overrides whose value is not None (CLI options).

    Args:
        config_file: Optional path to JSON config file

    Returns:
        Configuration object
    """
    config_data = {}

    json_config_path = config_file or find_config_file()
    if json_config_path:
        # An explicitly requested file must load; a discovered one may be stale
        try:
            config_data.update(load_json_config(json_config_path))
        except ValueError:
            if config_file:
                raise
        config_data["config_file"] = json_config_path

    env_config = {
        name: os.getenv(f"RELNOTES_{name.upper()}")
        for name in Config.model_fields
        if name != "config_file"
    }
    config_data.update({k: v for k, v in env_config.items() if v is not None})
    config_data.update({k: v for k, v in overrides.items() if v is not None})

    return Config(**config_data)


def create_sample_config(path: str = "relnotes.json") -> None:
    """Create a sample configuration file.

    Args:
        path: Path where to create the sample config file
    """
    sample_config = {
        "access_token": "your-asana-personal-access-token",
        "api_version": "1.0",
        "project_id": "430541393561890",
        "output_dir": "releases",
    }

    with open(path, "w", encoding="utf-8") as f:
        json.dump(sample_config, f, indent=2)
