"""Shared httpx client lifecycle for the backend clients."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx

from lexai.client.config import ClientConfig


class LexAIClientError(Exception):
    """Base class for errors raised by the backend clients."""


@asynccontextmanager
async def open_client(
    config: ClientConfig,
    client: httpx.AsyncClient | None = None,
) -> AsyncGenerator[httpx.AsyncClient]:
    """Yield an AsyncClient for one operation.

    An injected client is reused and left open for its owner to close.
    Otherwise a client is created with the configured timeout and closed on exit.

    Args:
        config: Client configuration.
        client: Optional long-lived client.

    Yields:
        A ready AsyncClient.
    """
    if client is not None:
        yield client
        return

    async with httpx.AsyncClient(timeout=config.stream_timeout) as fresh:
        yield fresh
