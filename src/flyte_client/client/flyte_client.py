"""Client for the Flyte API, driven by the links the API advertises."""

import asyncio
import logging
from typing import Any

import httpx

from ..models.config import ClientConfig, RetryPolicy
from ..models.links import LinkDocument
from .bootstrap import Bootstrapper, BootstrapState, LinkCache
from .errors import InvocationError, NotFoundError
from .fetcher import LinkFetcher
from .resolver import resolve_link

# Well-known relations, matched against the short name of namespaced rels
HEALTH_CHECK_REL = "info/health"
PACKS_REL = "pack/listPacks"
FLOWS_REL = "flow/listFlows"
DATASTORE_REL = "datastore/listDataItems"
AUDIT_FLOWS_REL = "audit/findFlows"


class FlyteClient:
    """Client for a HATEOAS-style Flyte API.

    On startup the client fetches the API's root links document, retrying
    until it succeeds, and caches it for the client's lifetime. Accessors
    called before the document is available block until it is.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        *,
        retry: RetryPolicy | None = None,
        action_method: str = "POST",
        logger: logging.Logger | None = None,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client. No network calls are made here.

        Args:
            base_url: Root URL of the Flyte API (e.g., "http://flyte:8080/v1")
            timeout: Timeout in seconds for every network call
            retry: Retry policy for bootstrapping the API links
            action_method: HTTP method used by ``take_action``
            logger: Logger receiving bootstrap failures
            http: Optional pre-built HTTP client (not closed by ``close``)
        """
        self.config = ClientConfig(
            base_url=base_url,
            timeout_seconds=timeout,
            action_method=action_method,
            retry=retry or RetryPolicy(),
        )
        self.log = logger or logging.getLogger(__name__)

        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(
            timeout=httpx.Timeout(self.config.timeout_seconds),
            limits=httpx.Limits(max_connections=20, max_keepalive_connections=5),
        )

        self._links = LinkCache()
        self._bootstrapper = Bootstrapper(
            LinkFetcher(self._http, logger=logger),
            self._links,
            policy=self.config.retry,
            logger=logger,
        )
        self._bootstrap_task: asyncio.Task[LinkDocument] | None = None
        self._closed = False

        self.take_action_url: str | None = None

    @classmethod
    def from_config(cls, config: ClientConfig, **kwargs: Any) -> "FlyteClient":
        """Create a client from a ``ClientConfig``."""
        return cls(
            config.base_url,
            config.timeout_seconds,
            retry=config.retry,
            action_method=config.action_method,
            **kwargs,
        )

    @property
    def base_url(self) -> str:
        return self.config.base_url

    @property
    def state(self) -> BootstrapState:
        return self._bootstrapper.state

    @property
    def is_ready(self) -> bool:
        """Whether the API links have been loaded. Never blocks."""
        return self._links.is_ready

    @property
    def links(self) -> LinkDocument | None:
        return self._links.peek()

    async def close(self) -> None:
        """Cancel a pending bootstrap and close the HTTP client."""
        self._closed = True

        if self._bootstrap_task and not self._bootstrap_task.done():
            self._bootstrap_task.cancel()
            try:
                await self._bootstrap_task
            except asyncio.CancelledError:
                pass

        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "FlyteClient":
        """Async context manager entry. Starts the bootstrap in the background."""
        self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Async context manager exit."""
        await self.close()

    # Bootstrap

    def start(self) -> "asyncio.Task[LinkDocument]":
        """Start bootstrapping the API links in the background.

        Calling this again while a bootstrap is running, or after it has
        succeeded, returns the existing task.

        Returns:
            asyncio.Task: The bootstrap task

        Raises:
            RuntimeError: If the client has been closed
        """
        if self._closed:
            raise RuntimeError("Client has been closed")

        task = self._bootstrap_task
        if task is not None and (not task.done() or self._links.is_ready):
            return task

        self._bootstrap_task = asyncio.create_task(
            self._bootstrapper.run(self.base_url, self.config.timeout_seconds)
        )
        self._bootstrap_task.add_done_callback(self._on_bootstrap_done)
        return self._bootstrap_task

    async def bootstrap(self) -> LinkDocument:
        """Wait until the API links are loaded, starting a bootstrap if needed.

        Returns:
            LinkDocument: The cached link document

        Raises:
            FetchError: If a bounded retry policy gave up
            asyncio.CancelledError: If the bootstrap was cancelled
        """
        document = self._links.peek()
        if document is not None:
            return document

        return await asyncio.shield(self.start())

    def _on_bootstrap_done(self, task: "asyncio.Task[LinkDocument]") -> None:
        if task.cancelled():
            self.log.debug(f"Bootstrap of api links from {self.base_url} cancelled")
            return

        exc = task.exception()
        if exc is not None:
            self.log.error(
                f"Giving up on api links from {self.base_url} "
                f"after {self._bootstrapper.attempts} attempt(s): {exc}"
            )

    # Link accessors

    async def get_link(self, rel: str) -> str:
        """Resolve a relation against the API links.

        Blocks until the API links have been loaded.

        Args:
            rel: Relation to resolve, full or short form

        Returns:
            str: The link's href

        Raises:
            ResolutionError: If the API does not advertise the relation
        """
        document = await self.bootstrap()
        return resolve_link(document, rel)

    async def get_health_check_url(self) -> str:
        """Get the URL of the API's health check resource."""
        return await self.get_link(HEALTH_CHECK_REL)

    async def get_packs_url(self) -> str:
        return await self.get_link(PACKS_REL)

    async def get_flows_url(self) -> str:
        return await self.get_link(FLOWS_REL)

    async def get_datastore_url(self) -> str:
        return await self.get_link(DATASTORE_REL)

    async def get_audit_flows_url(self) -> str:
        return await self.get_link(AUDIT_FLOWS_REL)

    # Remote calls

    async def check_health(self) -> httpx.Response:
        """Call the API's health check resource.

        Returns:
            httpx.Response: The successful health response

        Raises:
            ResolutionError: If the API does not advertise a health link
            NotFoundError: If the health resource does not exist
            InvocationError: If the health check fails for any other reason
        """
        url = await self.get_health_check_url()
        return await self._invoke("GET", url)

    async def use_action_link(self, rel: str) -> str:
        """Resolve ``rel`` and use its href as the action URL."""
        self.take_action_url = await self.get_link(rel)
        return self.take_action_url

    async def take_action(self, **kwargs: Any) -> httpx.Response:
        """Invoke the action URL with the configured method.

        Args:
            **kwargs: Additional arguments for httpx (e.g., ``json``, or
                ``timeout`` to override the configured timeout)

        Returns:
            httpx.Response: The successful response, body untouched

        Raises:
            NotFoundError: If the action resource does not exist (HTTP 404)
            InvocationError: On any other failure, or if no action URL is set
        """
        if not self.take_action_url:
            raise InvocationError("No action URL has been resolved")

        return await self._invoke(
            self.config.action_method, self.take_action_url, **kwargs
        )

    async def _invoke(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Make a single HTTP request and classify the response.

        Args:
            method: HTTP method
            url: Absolute URL
            **kwargs: Additional arguments for httpx; ``timeout`` overrides
                ``config.timeout_seconds``

        Returns:
            httpx.Response: Response with a 2xx status

        Raises:
            NotFoundError: On HTTP 404
            InvocationError: On other non-2xx statuses and transport failures
        """
        timeout = kwargs.pop("timeout", self.config.timeout_seconds)
        try:
            response = await self._http.request(method, url, timeout=timeout, **kwargs)
        except httpx.RequestError as e:
            raise InvocationError(
                f"{method} {url} failed: {e}", url=url, cause=e
            ) from e

        if response.status_code == 404:
            raise NotFoundError(url)

        if not response.is_success:
            raise InvocationError(
                f"{method} {url} returned status {response.status_code}",
                url=url,
                status_code=response.status_code,
            )

        return response


async def new_client(
    base_url: str, timeout: float = 10.0, **kwargs: Any
) -> FlyteClient:
    """Create a client and wait until its API links are loaded.

    With the default retry policy this waits until the API answers; wrap it
    in ``asyncio.wait_for`` to bound startup time.

    Args:
        base_url: Root URL of the Flyte API
        timeout: Timeout in seconds for every network call
        **kwargs: Keyword arguments for ``FlyteClient``

    Returns:
        FlyteClient: A ready client
    """
    client = FlyteClient(base_url, timeout, **kwargs)
    try:
        await client.bootstrap()
    except BaseException:
        await client.close()
        raise
    return client
