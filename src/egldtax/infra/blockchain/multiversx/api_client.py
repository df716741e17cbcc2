"""MultiversX public API client (api.multiversx.com)."""

import logging
from typing import Any

import httpx

from egldtax.exceptions import AccountNotFoundError, ExternalServiceError, UpstreamError
from egldtax.infra.http.rate_limited_client import RateLimitedClient
from egldtax.infra.http.retry import RetryPolicy, call_with_retry

logger = logging.getLogger(__name__)


class MultiversXClient:
    """Thin wrapper over the explorer endpoints. Returns raw JSON; callers validate shapes.

    Every call except get_token goes through the shared retry policy. Token
    metadata is a single short-timeout attempt: decimals lookups block the page
    and have their own fallback.
    """

    def __init__(
        self,
        http_client: RateLimitedClient,
        retry_policy: RetryPolicy | None = None,
        token_timeout: float = 5.0,
    ) -> None:
        self._http = http_client
        self._retry = retry_policy or RetryPolicy()
        self._token_timeout = token_timeout

    async def _request(self, path: str, params: dict[str, Any] | None = None, timeout: float | None = None) -> Any:
        try:
            resp = await self._http.get(path, params=params, timeout=timeout)
        except httpx.TimeoutException as e:
            raise ExternalServiceError(f"MultiversX API timeout on {path}") from e
        except httpx.TransportError as e:
            raise ExternalServiceError(f"MultiversX API transport error on {path}: {e}") from e
        except httpx.HTTPError as e:
            raise UpstreamError(f"MultiversX API request failed on {path}: {e}") from e

        status = resp.status_code
        # Rate limit or server error -> retriable
        if status == 429 or status >= 500:
            raise ExternalServiceError(f"MultiversX API returned {status} for {path}")
        if status >= 400:
            raise UpstreamError(f"MultiversX API returned {status} for {path}", status_code=status)

        try:
            return resp.json()
        except ValueError as e:
            raise UpstreamError(f"MultiversX API returned malformed JSON for {path}") from e

    async def _call(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await call_with_retry(lambda: self._request(path, params), self._retry)

    async def _call_list(self, path: str, params: dict[str, Any]) -> list[dict]:
        data = await self._call(path, params)
        if not isinstance(data, list):
            raise UpstreamError(f"Expected a list from {path}, got {type(data).__name__}")
        return data

    async def get_account(self, address: str) -> dict:
        """Existence probe. Raises AccountNotFoundError on 404."""
        try:
            data = await self._call(f"/accounts/{address}")
        except UpstreamError as e:
            if e.status_code == 404:
                raise AccountNotFoundError(f"Account {address} not found", status_code=404) from e
            raise
        return data if isinstance(data, dict) else {}

    async def get_transactions(
        self, address: str, after: int, before: int, offset: int, size: int
    ) -> list[dict]:
        params = {
            "after": after,
            "before": before,
            "size": size,
            "from": offset,
            "order": "asc",
        }
        return await self._call_list(f"/accounts/{address}/transactions", params)

    async def get_transfers(
        self, address: str, after: int, before: int, start: int, size: int
    ) -> list[dict]:
        params = {
            "after": after,
            "before": before,
            "size": size,
            "start": start,
            "order": "asc",
        }
        return await self._call_list(f"/accounts/{address}/transfers", params)

    async def get_transaction(self, tx_hash: str) -> dict:
        params = {"withOperations": "true", "withLogs": "true", "withResults": "true"}
        data = await self._call(f"/transactions/{tx_hash}", params)
        if not isinstance(data, dict):
            raise UpstreamError(f"Expected an object for transaction {tx_hash}")
        return data

    async def get_token(self, identifier: str) -> dict:
        """Token metadata. One attempt, short timeout, no retry."""
        data = await self._request(f"/tokens/{identifier}", timeout=self._token_timeout)
        if not isinstance(data, dict):
            raise UpstreamError(f"Expected an object for token {identifier}")
        return data
