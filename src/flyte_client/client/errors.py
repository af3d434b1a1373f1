"""Error types raised by the Flyte API client."""

from enum import Enum


class ErrorKind(str, Enum):
    """Discriminant shared by every client error."""

    NOT_FOUND = "not_found"
    RESOLUTION = "resolution"
    FETCH = "fetch"
    INVOCATION = "invocation"


class ClientError(Exception):
    """Base exception for client errors.

    Callers should branch on ``kind`` rather than on the message text.
    """

    kind: ErrorKind = ErrorKind.INVOCATION

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class FetchError(ClientError):
    """A single attempt to fetch the API links failed.

    Only ever logged and retried by the bootstrapper.
    """

    kind = ErrorKind.FETCH


class ResolutionError(ClientError):
    """No link with the requested relation exists in the link document.

    The message lists the known relations in document order, comma separated
    inside brackets, e.g. ``in [self, up]``; an empty document gives ``in []``.
    """

    kind = ErrorKind.RESOLUTION

    def __init__(self, rel: str, relations: list[str]) -> None:
        super().__init__(
            f'could not find link with rel "{rel}" in [{", ".join(relations)}]'
        )
        self.rel = rel
        self.relations = relations


class InvocationError(ClientError):
    """A call against a resolved URL failed."""

    kind = ErrorKind.INVOCATION

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.url = url
        self.status_code = status_code


class NotFoundError(InvocationError):
    """The resource behind a resolved URL does not exist (HTTP 404)."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, url: str) -> None:
        super().__init__(f"Resource not found at {url}", url=url, status_code=404)
