import asyncio
import time

import httpx


class RateLimitedClient:
    """Async HTTP client that spaces every request by a fixed minimum interval.

    All calls share one lock, so requests from one process are serialized and
    never closer together than 1 / rate_per_second. This is the pipeline's
    inter-page and inter-detail delay.
    """

    def __init__(
        self,
        base_url: str = "",
        rate_per_second: float = 2.0,
        timeout: float = 30.0,
    ) -> None:
        self._min_interval = 1.0 / rate_per_second if rate_per_second > 0 else 0.0
        self._last_request_time = 0.0
        self._lock = asyncio.Lock()
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def _wait_for_slot(self) -> None:
        async with self._lock:
            now = time.monotonic()
            elapsed = now - self._last_request_time
            if elapsed < self._min_interval:
                await asyncio.sleep(self._min_interval - elapsed)
            self._last_request_time = time.monotonic()

    async def get(
        self,
        url: str,
        params: dict | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        await self._wait_for_slot()
        if timeout is None:
            return await self._client.get(url, params=params)
        return await self._client.get(url, params=params, timeout=timeout)

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "RateLimitedClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
