"""Single-attempt retrieval of the Flyte API links document."""

import logging

import httpx
from pydantic import ValidationError

from ..models.links import LinkDocument
from .errors import FetchError


class LinkFetcher:
    """Fetches and decodes the root links document of the API.

    No retry logic lives here; see ``Bootstrapper`` for that.
    """

    def __init__(
        self, http: httpx.AsyncClient, logger: logging.Logger | None = None
    ) -> None:
        """Initialize the fetcher.

        Args:
            http: HTTP client used for the request
            logger: Logger for attempt tracing (defaults to the module logger)
        """
        self._http = http
        self.log = logger or logging.getLogger(__name__)

    async def fetch(self, base_url: str, timeout: float) -> LinkDocument:
        """Perform one GET against ``base_url`` and decode the links payload.

        Args:
            base_url: Root URL of the API
            timeout: Request timeout in seconds

        Returns:
            LinkDocument: The decoded links, in document order

        Raises:
            FetchError: On transport failure, non-2xx status or malformed body
        """
        self.log.debug(f"Fetching api links from {base_url}")

        try:
            response = await self._http.get(
                base_url,
                headers={"Accept": "application/json"},
                timeout=timeout,
            )
        except httpx.RequestError as e:
            raise FetchError(f"error requesting {base_url}: {e}", cause=e) from e

        if not response.is_success:
            raise FetchError(
                f"unexpected status {response.status_code} from {base_url}"
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise FetchError(
                f"cannot decode response body from {base_url}: {e}", cause=e
            ) from e

        try:
            return LinkDocument.model_validate(payload)
        except ValidationError as e:
            raise FetchError(
                f"invalid links payload from {base_url}: {e}", cause=e
            ) from e
