"""
OpenSearch client factory.

Builds the shared AsyncOpenSearch client from settings and waits for the
cluster at startup with bounded retries. Connection establishment is bounded
by the connect timeout; the whole round trip by connect + read.

Dependencies: opensearch-py, aiohttp, tenacity
System role: Search engine connection management
"""

import asyncio
import logging
from typing import Any

import aiohttp
from opensearchpy import AIOHttpConnection, AsyncOpenSearch
from opensearchpy._async.http_aiohttp import OpenSearchClientResponse
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from opensearch_sink.configs.opensearch import BatchSettings, OpenSearchSettings
from opensearch_sink.core.exceptions import ClusterUnavailableError

logger = logging.getLogger(__name__)


class ConnectTimeoutConnector(aiohttp.TCPConnector):
    """TCP connector that applies its own limit to connection establishment."""

    def __init__(self, *args: Any, connect_timeout: float, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.connect_timeout = connect_timeout

    async def connect(self, req: Any, traces: Any, timeout: aiohttp.ClientTimeout) -> Any:
        bounded = aiohttp.ClientTimeout(
            total=timeout.total,
            connect=self.connect_timeout,
            sock_read=timeout.sock_read,
            sock_connect=timeout.sock_connect,
            ceil_threshold=timeout.ceil_threshold,
        )
        return await super().connect(req, traces, bounded)


class ConnectTimeoutConnection(AIOHttpConnection):
    """
    AIOHttpConnection with a separate connect timeout.

    The per-request timeout still bounds the whole round trip; a host that
    cannot be reached fails after connect_timeout instead.
    """

    def __init__(self, *args: Any, connect_timeout: float = 10.0, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.connect_timeout = connect_timeout

    async def _create_aiohttp_session(self) -> None:
        if self.loop is None:
            self.loop = asyncio.get_running_loop()
        self.session = aiohttp.ClientSession(
            headers=self.headers,
            skip_auto_headers=("accept", "accept-encoding"),
            auto_decompress=True,
            cookie_jar=aiohttp.DummyCookieJar(),
            response_class=OpenSearchClientResponse,
            connector=ConnectTimeoutConnector(
                connect_timeout=self.connect_timeout,
                limit=self._limit,
                use_dns_cache=True,
                ssl=self._ssl_context,
            ),
            trust_env=self._trust_env,
        )


def create_client(
    settings: OpenSearchSettings,
    batch: BatchSettings,
) -> AsyncOpenSearch:
    """
    Create an async OpenSearch client.

    Args:
        settings: Connection settings
        batch: Batch options supplying the default request timeout

    Returns:
        AsyncOpenSearch: Client shared by the admin and bulk clients
    """
    http_auth = None
    if settings.username and settings.password:
        http_auth = (settings.username, settings.password)

    logger.info(
        f"{__name__}:create_client - Connecting to OpenSearch",
        extra={"hosts": settings.hosts, "use_ssl": settings.use_ssl},
    )
    return AsyncOpenSearch(
        hosts=settings.hosts,
        http_auth=http_auth,
        use_ssl=settings.use_ssl,
        verify_certs=settings.verify_certs,
        timeout=batch.total_timeout_s,
        connection_class=ConnectTimeoutConnection,
        connect_timeout=batch.connect_timeout_s,
    )


async def wait_for_cluster(client: AsyncOpenSearch, attempts: int = 10) -> None:
    """
    Block until the cluster answers a ping.

    Args:
        client: OpenSearch client
        attempts: Maximum ping attempts

    Raises:
        ClusterUnavailableError: Cluster still unreachable after all attempts
    """
    async for attempt in AsyncRetrying(
        retry=retry_if_exception_type(ClusterUnavailableError),
        stop=stop_after_attempt(attempts),
        wait=wait_exponential_jitter(initial=1, max=10, jitter=1),
        before_sleep=lambda retry_state: logger.warning(
            f"{__name__}:wait_for_cluster - Retry {retry_state.attempt_number}/{attempts}"
        ),
        reraise=True,
    ):
        with attempt:
            if not await client.ping():
                raise ClusterUnavailableError("OpenSearch did not respond to ping")

    logger.info(f"{__name__}:wait_for_cluster - OpenSearch reachable")
