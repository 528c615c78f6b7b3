"""Service connector abstraction for outside collaborators."""

from __future__ import annotations

import abc
from typing import Optional

import httpx


class ServiceConnector(abc.ABC):
    """A remote service reached over HTTP with one lazily created client."""

    def __init__(self, url: str, timeout: float = 10.0) -> None:
        self._url = url.rstrip("/")
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    @abc.abstractmethod
    async def health_check(self) -> dict:
        """Return health status."""

    @abc.abstractmethod
    def name(self) -> str:
        """Connector identifier."""

    @property
    def url(self) -> str:
        return self._url

    async def connect(self) -> None:
        self._client = httpx.AsyncClient(base_url=self._url, timeout=self._timeout)

    async def disconnect(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        if not self._client:
            self._client = httpx.AsyncClient(base_url=self._url, timeout=self._timeout)
        return self._client
