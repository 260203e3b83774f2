# tests/unit/core/test_config.py
"""Tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from pipeforge.contracts.enums import OutputFormat
from pipeforge.core.config import GitHubSettings, PipeforgeSettings, _expand_env_vars, load_settings


class TestSettingsModels:
    def test_defaults(self) -> None:
        settings = PipeforgeSettings()

        assert settings.default_format == OutputFormat.GITHUB
        assert settings.github.api_url == "https://api.github.com"
        assert settings.github.token is None
        assert settings.github.timeout_seconds == 30
        assert settings.github.create_message == "Add CI/CD pipeline via PipeForge"
        assert settings.github.update_message == "Update CI/CD pipeline via PipeForge"

    def test_token_hidden_from_repr(self) -> None:
        settings = GitHubSettings(token="ghp_secret")

        assert "ghp_secret" not in repr(settings)

    def test_blank_token_is_none(self) -> None:
        assert GitHubSettings(token="   ").token is None

    def test_api_url_trailing_slash_stripped(self) -> None:
        assert GitHubSettings(api_url="https://ghe.example.com/api/v3/").api_url == "https://ghe.example.com/api/v3"

    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            GitHubSettings(timeout_seconds=0)

    def test_unknown_format_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PipeforgeSettings(default_format="jenkins")  # type: ignore[arg-type]

    def test_frozen(self) -> None:
        settings = PipeforgeSettings()

        with pytest.raises(ValidationError):
            settings.default_format = OutputFormat.GITLAB  # type: ignore[misc]


class TestLoadSettings:
    def test_no_file_gives_defaults(self) -> None:
        assert load_settings() == PipeforgeSettings()

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Settings file not found"):
            load_settings(tmp_path / "missing.yaml")

    def test_file_values(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("default_format: gitlab\ngithub:\n  timeout_seconds: 5\n", encoding="utf-8")

        settings = load_settings(path)

        assert settings.default_format == OutputFormat.GITLAB
        assert settings.github.timeout_seconds == 5
        assert settings.github.api_url == "https://api.github.com"

    def test_env_overrides_nested_key(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("github:\n  token: from-file\n", encoding="utf-8")
        monkeypatch.setenv("PIPEFORGE_GITHUB__TOKEN", "from-env")

        assert load_settings(path).github.token == "from-env"

    def test_env_var_references_expanded(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("github:\n  token: ${GH_TOKEN}\n  api_url: ${GH_API:-https://ghe.example.com/api/v3}\n", encoding="utf-8")
        monkeypatch.setenv("GH_TOKEN", "ghp_expanded")
        monkeypatch.delenv("GH_API", raising=False)

        settings = load_settings(path)

        assert settings.github.token == "ghp_expanded"
        assert settings.github.api_url == "https://ghe.example.com/api/v3"

    def test_invalid_values_raise(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("github:\n  timeout_seconds: -1\n", encoding="utf-8")

        with pytest.raises(ValidationError):
            load_settings(path)


class TestExpandEnvVars:
    def test_nested_structures(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PF_A", "alpha")

        expanded = _expand_env_vars({"x": {"y": ["${PF_A}", 3]}, "z": "pre-${PF_A}-post"})

        assert expanded == {"x": {"y": ["alpha", 3]}, "z": "pre-alpha-post"}

    def test_unset_without_default_is_kept(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PF_UNSET", raising=False)

        assert _expand_env_vars({"v": "${PF_UNSET}"}) == {"v": "${PF_UNSET}"}
