# src/pipeforge/core/config.py
"""
Settings schema and loading for PipeForge.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from pipeforge.contracts.enums import OutputFormat


class GitHubSettings(BaseModel):
    """GitHub API access used by ``pipeforge push`` and ``pipeforge repos``."""

    model_config = {"frozen": True}

    api_url: str = Field(default="https://api.github.com", description="GitHub REST API base URL")
    token: str | None = Field(default=None, repr=False, description="Personal access token with repo scope")
    timeout_seconds: float = Field(default=30.0, gt=0, description="Per-request timeout")
    create_message: str = Field(
        default="Add CI/CD pipeline via PipeForge",
        description="Commit message when the pipeline file is new",
    )
    update_message: str = Field(
        default="Update CI/CD pipeline via PipeForge",
        description="Commit message when the pipeline file already exists",
    )

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("api_url must not be empty")
        return v.rstrip("/")

    @field_validator("token")
    @classmethod
    def blank_token_is_none(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v.strip()


class PipeforgeSettings(BaseModel):
    """Top-level PipeForge settings."""

    model_config = {"frozen": True}

    default_format: OutputFormat = Field(default=OutputFormat.GITHUB, description="Output format when --format is not given")
    github: GitHubSettings = Field(default_factory=GitHubSettings)


# Regex pattern for ${VAR} or ${VAR:-default} syntax
_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")


def _expand_env_vars(config: dict[str, Any]) -> dict[str, Any]:
    """Recursively expand ${VAR} and ${VAR:-default} patterns in config values.

    A reference to an unset variable with no default is left as written.
    """
    import os

    def replacer(match: re.Match[str]) -> str:
        env_value = os.environ.get(match.group(1))
        if env_value is not None:
            return env_value
        default = match.group(2)
        if default is not None:
            return default
        return match.group(0)

    def _expand_value(value: Any) -> Any:
        if isinstance(value, str):
            return _ENV_VAR_PATTERN.sub(replacer, value)
        elif isinstance(value, dict):
            return {k: _expand_value(v) for k, v in value.items()}
        elif isinstance(value, list):
            return [_expand_value(item) for item in value]
        else:
            return value

    return {k: _expand_value(v) for k, v in config.items()}


def _lower_keys(value: Any) -> Any:
    # Dynaconf uppercases keys at every level it loaded from env vars.
    if isinstance(value, dict):
        return {str(k).lower(): _lower_keys(v) for k, v in value.items()}
    return value


def load_settings(config_path: Path | None = None) -> PipeforgeSettings:
    """Load settings from an optional YAML file with environment overrides.

    Precedence, highest first:
    1. Environment variables (PIPEFORGE_*), e.g. PIPEFORGE_GITHUB__TOKEN
    2. Settings file, when given
    3. Defaults from the Pydantic schema

    Raises:
        ValidationError: If the merged settings fail validation
        FileNotFoundError: If ``config_path`` is given and doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if config_path is not None and not config_path.exists():
        raise FileNotFoundError(f"Settings file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="PIPEFORGE",
        settings_files=[str(config_path)] if config_path is not None else [],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k: v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}
    raw_config = _expand_env_vars(_lower_keys(raw_config))

    return PipeforgeSettings(**raw_config)
