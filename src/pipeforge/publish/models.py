# src/pipeforge/publish/models.py
"""Typed views of GitHub API payloads and push results."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from pipeforge.contracts.types import RepositoryName


class RepositorySummary(BaseModel):
    """The fields of a GitHub repository listing PipeForge uses."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    name: str
    full_name: RepositoryName
    private: bool = False
    default_branch: str = "main"
    html_url: str = ""


class PushResult(BaseModel):
    """Outcome of creating or updating a pipeline file."""

    model_config = ConfigDict(frozen=True)

    success: bool = True
    created: bool
    message: str
    file: str
    repo: RepositoryName
    url: str
    commit_sha: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude={"created", "commit_sha"})
