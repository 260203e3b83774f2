# src/pipeforge/publish/client.py
"""GitHub contents API client for publishing generated pipelines.

Publishing is create-or-update: the client looks up the blob SHA of the
target path, then PUTs base64 content with that SHA when the file exists.
"""

from __future__ import annotations

import base64
from types import TracebackType
from typing import Any

import httpx
import structlog

from pipeforge.compiler import output_path
from pipeforge.contracts.enums import OutputFormat
from pipeforge.contracts.types import RepositoryName
from pipeforge.core.config import GitHubSettings
from pipeforge.publish.errors import (
    AuthenticationError,
    ForbiddenError,
    NetworkError,
    NotFoundError,
    PublishError,
    RateLimitError,
    RemoteRejectedError,
    ServerError,
)
from pipeforge.publish.models import PushResult, RepositorySummary

logger = structlog.get_logger(__name__)

GITHUB_WEB_URL = "https://github.com"
_ACCEPT = "application/vnd.github+json"


def _api_message(response: httpx.Response) -> str | None:
    try:
        payload = response.json()
    except ValueError:
        return None
    if isinstance(payload, dict) and isinstance(payload.get("message"), str):
        return payload["message"]
    return None


def _raise_for_status(response: httpx.Response, subject: str) -> None:
    """Map a non-2xx response to the matching PublishError."""
    status = response.status_code
    if status < 400:
        return
    detail = _api_message(response)
    if status == 401:
        raise AuthenticationError("Invalid GitHub token")
    if status == 403:
        if response.headers.get("x-ratelimit-remaining") == "0":
            raise RateLimitError(f"GitHub rate limit exceeded for {subject}", status_code=403)
        raise ForbiddenError(f"HTTP 403: no access to {subject}" + (f" ({detail})" if detail else ""))
    if status == 404:
        raise NotFoundError(f"HTTP 404: {subject} not found")
    if status == 429:
        raise RateLimitError(f"HTTP 429: rate limited on {subject}")
    if status >= 500:
        raise ServerError(f"HTTP {status}: GitHub failed on {subject}", status_code=status)
    raise RemoteRejectedError(detail or f"Failed to push to GitHub (HTTP {status})", status_code=status)


def _check_repository(repo: str) -> RepositoryName:
    owner, _, name = repo.partition("/")
    if not owner or not name or "/" in name:
        raise PublishError(f"Repository must be in owner/name form, got {repo!r}")
    return RepositoryName(repo)


class GitHubPublisher:
    """Thin wrapper over ``httpx.Client`` for the GitHub REST API.

    Usable as a context manager; ``close()`` releases pooled connections.
    Pass ``client`` to share a preconfigured ``httpx.Client`` (its base URL
    and headers are then the caller's responsibility).
    """

    def __init__(
        self,
        token: str | None,
        *,
        api_url: str = "https://api.github.com",
        timeout: float = 30.0,
        create_message: str = "Add CI/CD pipeline via PipeForge",
        update_message: str = "Update CI/CD pipeline via PipeForge",
        client: httpx.Client | None = None,
    ) -> None:
        if not token:
            raise AuthenticationError("No token provided")
        self._create_message = create_message
        self._update_message = update_message
        self._owns_client = client is None
        self._client = client or httpx.Client(
            base_url=api_url,
            timeout=timeout,
            headers={"Authorization": f"Bearer {token}", "Accept": _ACCEPT},
        )

    @classmethod
    def from_settings(cls, settings: GitHubSettings, *, client: httpx.Client | None = None) -> GitHubPublisher:
        return cls(
            settings.token,
            api_url=settings.api_url,
            timeout=settings.timeout_seconds,
            create_message=settings.create_message,
            update_message=settings.update_message,
            client=client,
        )

    def __enter__(self) -> GitHubPublisher:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _request(self, method: str, url: str, subject: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            raise NetworkError(f"Timeout talking to GitHub about {subject}: {e}") from e
        except httpx.TransportError as e:
            raise NetworkError(f"Connection error talking to GitHub about {subject}: {e}") from e
        _raise_for_status(response, subject)
        return response

    def get_user(self) -> dict[str, Any]:
        """Profile of the token's owner."""
        response = self._request("GET", "/user", "the authenticated user")
        user: dict[str, Any] = response.json()
        return user

    def list_repositories(self) -> list[RepositorySummary]:
        """The user's own repositories, most recently updated first (up to 50)."""
        response = self._request(
            "GET",
            "/user/repos",
            "repository listing",
            params={"sort": "updated", "per_page": 50, "type": "owner"},
        )
        return [RepositorySummary.model_validate(item) for item in response.json()]

    def get_file_sha(self, repo: str, path: str) -> str | None:
        """Blob SHA of ``path`` in ``repo``, or None when the file doesn't exist."""
        repository = _check_repository(repo)
        try:
            response = self._request("GET", f"/repos/{repository}/contents/{path}", f"{repository}/{path}")
        except NotFoundError:
            return None
        payload = response.json()
        if isinstance(payload, dict) and isinstance(payload.get("sha"), str):
            return payload["sha"]
        # A directory listing comes back as a list; there is no file to update.
        return None

    def push(self, repo: str, content: str, fmt: OutputFormat | str, path: str | None = None) -> PushResult:
        """Create or update the pipeline file in ``repo``.

        ``path`` defaults to the format's conventional location.

        Raises:
            PublishError: For any GitHub or network failure.
        """
        repository = _check_repository(repo)
        file_path = path or output_path(fmt)
        sha = self.get_file_sha(repository, file_path)
        created = sha is None

        body: dict[str, Any] = {
            "message": self._create_message if created else self._update_message,
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
        }
        if sha is not None:
            body["sha"] = sha

        response = self._request("PUT", f"/repos/{repository}/contents/{file_path}", f"{repository}/{file_path}", json=body)
        payload = response.json()
        commit = payload.get("commit") if isinstance(payload, dict) else None
        commit_sha = commit.get("sha") if isinstance(commit, dict) else None

        logger.info("pipeline_pushed", repo=repository, path=file_path, created=created, commit=commit_sha)
        return PushResult(
            created=created,
            message="Pipeline created!" if created else "Pipeline updated!",
            file=file_path,
            repo=repository,
            url=f"{GITHUB_WEB_URL}/{repository}/blob/HEAD/{file_path}",
            commit_sha=commit_sha,
        )
