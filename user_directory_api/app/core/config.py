"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Every field's value is read when a
``Settings`` instance is created, so ``Settings()`` always reflects the
current environment; defaults are provided for all fields so the
service starts without any configuration at all.  Keyword arguments
override the environment, which is how tests build custom settings.
"""

import os
from dataclasses import dataclass, field


def _env_str(name: str, default: str):
    return field(default_factory=lambda: os.getenv(name, default))


def _env_int(name: str, default: int):
    return field(default_factory=lambda: int(os.getenv(name, str(default))))


def _env_flag(name: str, default: bool):
    fallback = "true" if default else "false"
    return field(
        default_factory=lambda: os.getenv(name, fallback).lower() in {"1", "true", "yes"}
    )


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = _env_str("PROJECT_NAME", "User Directory API")
    api_version: str = _env_str("API_VERSION", "1.0.0")
    debug: bool = _env_flag("DEBUG", False)
    log_level: str = _env_str("LOG_LEVEL", "INFO")

    # Optional path of a log file.  Empty means console logging only.
    log_file: str = _env_str("LOG_FILE", "")

    # Prefix under which the user routes are mounted, e.g. ``/api/users``.
    api_prefix: str = _env_str("API_PREFIX", "/api")

    # Load the three sample users into the store when the app is built.
    seed_sample_users: bool = _env_flag("SEED_SAMPLE_USERS", True)

    host: str = _env_str("HOST", "0.0.0.0")
    port: int = _env_int("PORT", 8000)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the current environment."""
        return cls()


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.
settings = Settings()
