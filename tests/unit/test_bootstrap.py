"""Unit tests for the link cache and retrying bootstrapper."""

import asyncio
import logging
from typing import Any
from unittest.mock import AsyncMock, Mock

import pytest
from flyte_client.client.bootstrap import Bootstrapper, BootstrapState, LinkCache
from flyte_client.client.errors import FetchError
from flyte_client.models.config import RetryPolicy
from flyte_client.models.links import LinkDocument

BASE_URL = "http://flyte.test/v1"


class TestLinkCache:
    """Test cases for LinkCache."""

    def test_publish_once(self, links_payload: dict[str, Any]) -> None:
        """Test that the cache can only be written once."""
        cache = LinkCache()
        document = LinkDocument.model_validate(links_payload)

        assert not cache.is_ready
        assert cache.peek() is None

        cache.publish(document)

        assert cache.is_ready
        assert cache.peek() is document

        with pytest.raises(RuntimeError, match="already been published"):
            cache.publish(LinkDocument())

        assert cache.peek() is document


class TestBootstrapper:
    """Test cases for Bootstrapper."""

    @pytest.fixture
    def document(self, links_payload: dict[str, Any]) -> LinkDocument:
        return LinkDocument.model_validate(links_payload)

    @pytest.fixture
    def logger(self) -> Mock:
        return Mock(spec=logging.Logger)

    @pytest.mark.asyncio
    async def test_first_attempt_succeeds(
        self, document: LinkDocument, logger: Mock
    ) -> None:
        """Test bootstrap without failures."""
        fetcher = Mock()
        fetcher.fetch = AsyncMock(return_value=document)
        sleep = AsyncMock()
        cache = LinkCache()

        bootstrapper = Bootstrapper(fetcher, cache, logger=logger, sleep=sleep)
        result = await bootstrapper.run(BASE_URL, 5.0)

        assert result is document
        assert cache.peek() is document
        assert bootstrapper.state == BootstrapState.READY
        assert bootstrapper.attempts == 1
        fetcher.fetch.assert_awaited_once_with(BASE_URL, 5.0)
        sleep.assert_not_awaited()
        logger.error.assert_not_called()

    @pytest.mark.asyncio
    async def test_retries_after_failure(
        self, document: LinkDocument, logger: Mock
    ) -> None:
        """Test that one failure is logged once and then retried."""
        fetcher = Mock()
        fetcher.fetch = AsyncMock(
            side_effect=[FetchError("unexpected status 503"), document]
        )
        sleep = AsyncMock()
        cache = LinkCache()
        policy = RetryPolicy(initial_interval=0.5)

        bootstrapper = Bootstrapper(
            fetcher, cache, policy=policy, logger=logger, sleep=sleep
        )
        result = await bootstrapper.run(BASE_URL, 5.0)

        assert result is document
        assert cache.peek() is document
        assert bootstrapper.state == BootstrapState.READY
        assert fetcher.fetch.await_count == 2
        sleep.assert_awaited_once_with(0.5)

        logger.error.assert_called_once()
        message = logger.error.call_args.args[0]
        assert message == "cannot get api links: unexpected status 503"

    @pytest.mark.asyncio
    async def test_never_succeeding_api_logs_at_bounded_rate(
        self, logger: Mock
    ) -> None:
        """Test that every failure is followed by a backoff delay."""
        fetcher = Mock()
        fetcher.fetch = AsyncMock(side_effect=FetchError("connection refused"))
        policy = RetryPolicy(initial_interval=0.1, max_interval=1.0, multiplier=2.0)
        delays: list[float] = []

        async def fake_sleep(delay: float) -> None:
            delays.append(delay)
            if len(delays) == 6:
                raise asyncio.CancelledError()

        cache = LinkCache()
        bootstrapper = Bootstrapper(
            fetcher, cache, policy=policy, logger=logger, sleep=fake_sleep
        )

        with pytest.raises(asyncio.CancelledError):
            await bootstrapper.run(BASE_URL, 5.0)

        assert bootstrapper.state == BootstrapState.CANCELLED
        assert not cache.is_ready
        # one log entry per attempt, each followed by a non-zero wait
        assert logger.error.call_count == 6
        assert delays == pytest.approx([0.1, 0.2, 0.4, 0.8, 1.0, 1.0])
        assert all(delay >= policy.initial_interval for delay in delays)

    @pytest.mark.asyncio
    async def test_bounded_attempts(self, logger: Mock) -> None:
        """Test that max_attempts stops the loop with the last error."""
        errors = [FetchError(f"failure {n}") for n in range(3)]
        fetcher = Mock()
        fetcher.fetch = AsyncMock(side_effect=errors)
        sleep = AsyncMock()
        cache = LinkCache()

        bootstrapper = Bootstrapper(
            fetcher,
            cache,
            policy=RetryPolicy(max_attempts=3),
            logger=logger,
            sleep=sleep,
        )

        with pytest.raises(FetchError) as exc_info:
            await bootstrapper.run(BASE_URL, 5.0)

        assert exc_info.value is errors[-1]
        assert bootstrapper.state == BootstrapState.FAILED
        assert bootstrapper.attempts == 3
        assert logger.error.call_count == 3
        assert sleep.await_count == 2
        assert not cache.is_ready

    @pytest.mark.asyncio
    async def test_cancellation_while_waiting(self, logger: Mock) -> None:
        """Test cancelling a bootstrap stuck between retries."""
        fetcher = Mock()
        fetcher.fetch = AsyncMock(side_effect=FetchError("connection refused"))
        bootstrapper = Bootstrapper(
            fetcher,
            LinkCache(),
            policy=RetryPolicy(initial_interval=30.0, max_interval=30.0),
            logger=logger,
        )

        task = asyncio.create_task(bootstrapper.run(BASE_URL, 5.0))
        await asyncio.sleep(0.01)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

        assert bootstrapper.state == BootstrapState.CANCELLED
        assert fetcher.fetch.await_count == 1

    @pytest.mark.asyncio
    async def test_non_fetch_errors_propagate(self, logger: Mock) -> None:
        """Test that unexpected errors are not swallowed by the retry loop."""
        fetcher = Mock()
        fetcher.fetch = AsyncMock(side_effect=RuntimeError("client closed"))
        sleep = AsyncMock()
        bootstrapper = Bootstrapper(fetcher, LinkCache(), logger=logger, sleep=sleep)

        with pytest.raises(RuntimeError, match="client closed"):
            await bootstrapper.run(BASE_URL, 5.0)

        sleep.assert_not_awaited()
        logger.error.assert_not_called()

    def test_default_logger(self) -> None:
        """Test the default logging sink."""
        bootstrapper = Bootstrapper(Mock(), LinkCache())

        assert bootstrapper.log.name == "flyte_client.client.bootstrap"
        assert bootstrapper.policy == RetryPolicy()
        assert bootstrapper.state == BootstrapState.PENDING
