"""Bootstrapping of the Flyte API links with retries."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import Enum

from ..models.config import RetryPolicy
from ..models.links import LinkDocument
from .errors import FetchError
from .fetcher import LinkFetcher

FETCH_FAILURE_PREFIX = "cannot get api links:"


class BootstrapState(str, Enum):
    """Lifecycle of a link bootstrap."""

    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"
    CANCELLED = "cancelled"


class LinkCache:
    """Write-once holder for the API link document.

    Only the bootstrapper publishes, and only once. Readers never wait on
    the cache itself: they await the bootstrap task that fills it.
    """

    def __init__(self) -> None:
        self._document: LinkDocument | None = None

    @property
    def is_ready(self) -> bool:
        return self._document is not None

    def publish(self, document: LinkDocument) -> None:
        if self._document is not None:
            raise RuntimeError("Link document has already been published")
        self._document = document

    def peek(self) -> LinkDocument | None:
        return self._document


class Bootstrapper:
    """Drives the link fetcher until the API links are available.

    Every failed attempt is logged at error level and followed by a delay
    from the retry policy. With the default policy there is no limit on the
    number of attempts: the loop only ends on success or cancellation.
    """

    def __init__(
        self,
        fetcher: LinkFetcher,
        cache: LinkCache,
        policy: RetryPolicy | None = None,
        logger: logging.Logger | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialize the bootstrapper.

        Args:
            fetcher: Performs single fetch attempts
            cache: Cache receiving the document on success
            policy: Retry policy (defaults to unbounded exponential backoff)
            logger: Sink for fetch failure messages
            sleep: Coroutine used to wait between attempts
        """
        self._fetcher = fetcher
        self._cache = cache
        self.policy = policy or RetryPolicy()
        self.log = logger or logging.getLogger(__name__)
        self._sleep = sleep
        self.state = BootstrapState.PENDING
        self.attempts = 0

    async def run(self, base_url: str, timeout: float) -> LinkDocument:
        """Fetch the API links, retrying until one attempt succeeds.

        Args:
            base_url: Root URL of the API
            timeout: Timeout for each fetch attempt in seconds

        Returns:
            LinkDocument: The published document

        Raises:
            FetchError: If ``policy.max_attempts`` is set and exhausted
            asyncio.CancelledError: If the surrounding task is cancelled
        """
        max_attempts = self.policy.max_attempts
        self.state = BootstrapState.PENDING
        self.attempts = 0

        try:
            while True:
                self.attempts += 1
                try:
                    document = await self._fetcher.fetch(base_url, timeout)
                except FetchError as e:
                    self.log.error(f"{FETCH_FAILURE_PREFIX} {e}")
                    if max_attempts is not None and self.attempts >= max_attempts:
                        self.state = BootstrapState.FAILED
                        raise
                    await self._sleep(self.policy.delay(self.attempts))
                    continue

                self._cache.publish(document)
                self.state = BootstrapState.READY
                self.log.info(
                    f"Loaded {len(document.links)} api links from {base_url} "
                    f"after {self.attempts} attempt(s)"
                )
                return document

        except asyncio.CancelledError:
            self.state = BootstrapState.CANCELLED
            raise
