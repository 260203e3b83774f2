"""Error hierarchy for publishing pipelines to GitHub.

Each HTTP failure class maps to one error type. ``retryable`` tells callers
whether repeating the same request can succeed without user action.
"""


class PublishError(Exception):
    """Base error for GitHub publishing."""

    def __init__(self, message: str, *, retryable: bool = False, status_code: int | None = None) -> None:
        super().__init__(message)
        self.retryable = retryable
        self.status_code = status_code


# Retryable errors


class RateLimitError(PublishError):
    """HTTP 429, or 403 with the rate limit exhausted."""

    def __init__(self, message: str, status_code: int = 429) -> None:
        super().__init__(message, retryable=True, status_code=status_code)


class NetworkError(PublishError):
    """Network/connection errors (DNS, timeout, connection refused)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, retryable=True)


class ServerError(PublishError):
    """HTTP 5xx server errors."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        super().__init__(message, retryable=True, status_code=status_code)


# Non-retryable errors


class AuthenticationError(PublishError):
    """Missing token or HTTP 401."""

    def __init__(self, message: str) -> None:
        super().__init__(message, retryable=False, status_code=401)


class ForbiddenError(PublishError):
    """HTTP 403: the token lacks access to the repository."""

    def __init__(self, message: str) -> None:
        super().__init__(message, retryable=False, status_code=403)


class NotFoundError(PublishError):
    """HTTP 404: repository or path does not exist (or is hidden from the token)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, retryable=False, status_code=404)


class RemoteRejectedError(PublishError):
    """Any other 4xx; the message is GitHub's own explanation."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message, retryable=False, status_code=status_code)
