# src/pipeforge/publish/__init__.py
"""Publishing generated pipelines to GitHub repositories."""

from pipeforge.publish.client import GitHubPublisher
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

__all__ = [
    "AuthenticationError",
    "ForbiddenError",
    "GitHubPublisher",
    "NetworkError",
    "NotFoundError",
    "PublishError",
    "PushResult",
    "RateLimitError",
    "RemoteRejectedError",
    "RepositorySummary",
    "ServerError",
]
