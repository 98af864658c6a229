"""
Configuration Management

Loads the JSON settings file once at startup into an immutable Config,
with environment variable overrides for secrets and tool paths.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env file if present
load_dotenv(Path(__file__).parent.parent / ".env")

DEFAULT_CONFIG_PATH = "config.json"


class ConfigError(Exception):
    """Raised when the configuration file is missing or invalid."""


def get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get environment variable with optional default."""
    return os.environ.get(key, default)


# =============================================================================
# Process Settings
# =============================================================================

# Path to the AppleScript runner
OSASCRIPT_PATH = get_env("OSASCRIPT_PATH", "/usr/bin/osascript")

# Root log level
LOG_LEVEL = get_env("LOG_LEVEL", "INFO")


@dataclass(frozen=True)
class Config:
    """Settings for one sync process. Never mutated after loading."""
    gitlab_token: str
    gitlab_url: str
    gitlab_username: str
    reminder_list: str
    poll_interval_minutes: int

    @property
    def poll_interval_seconds(self) -> int:
        return self.poll_interval_minutes * 60

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """
        Build a validated Config from the decoded JSON object.

        Raises:
            ConfigError: if a field is missing, empty or of the wrong type
        """
        if not isinstance(data, dict):
            raise ConfigError("Configuration must be a JSON object")

        values = {}
        for key in ("gitlab_token", "gitlab_url", "gitlab_username", "reminder_list"):
            value = data.get(key)
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(f"'{key}' must be a non-empty string")
            values[key] = value

        interval = data.get("poll_interval_minutes")
        # bool is an int subclass; true/false is not a valid interval
        if not isinstance(interval, int) or isinstance(interval, bool):
            raise ConfigError("'poll_interval_minutes' must be an integer")
        if interval < 1:
            raise ConfigError(
                f"'poll_interval_minutes' must be at least 1 (got {interval})"
            )

        return cls(
            gitlab_token=values["gitlab_token"],
            gitlab_url=values["gitlab_url"].rstrip("/"),
            gitlab_username=values["gitlab_username"],
            reminder_list=values["reminder_list"],
            poll_interval_minutes=interval,
        )


def load_config(path) -> Config:
    """
    Load configuration from a JSON file.

    GITLAB_TOKEN in the environment (or .env) takes precedence over the
    file's gitlab_token, so the token can be kept out of the file.

    Raises:
        ConfigError: if the file cannot be read or its contents are invalid
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigError(f"Invalid JSON in config file {path}: {e}") from e

    if isinstance(data, dict) and get_env("GITLAB_TOKEN"):
        data = dict(data, gitlab_token=get_env("GITLAB_TOKEN"))

    return Config.from_dict(data)
