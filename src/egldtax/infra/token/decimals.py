"""TokenDecimalsResolver — identifier -> display decimals, never raising."""

import logging

from egldtax.domain.enums import NATIVE_DECIMALS, NATIVE_IDENTIFIER
from egldtax.exceptions import EgldTaxError
from egldtax.infra.blockchain.multiversx.api_client import MultiversXClient
from egldtax.parser.utils.types import collection_of

logger = logging.getLogger(__name__)

FALLBACK_DECIMALS = 18


class TokenDecimalsResolver:
    """Lookup order: native -> static table -> cache -> one network request.

    A failed lookup caches FALLBACK_DECIMALS for the identifier and is never
    retried while this resolver lives. Concurrent misses for the same key may
    both hit the network; the second write is identical to the first.
    """

    def __init__(self, client: MultiversXClient, known_decimals: dict[str, int] | None = None) -> None:
        self._client = client
        self._known = dict(known_decimals or {})
        self._cache: dict[str, int] = {}

    @property
    def cache(self) -> dict[str, int]:
        return dict(self._cache)

    async def resolve(self, identifier: str) -> int:
        if not identifier or identifier == NATIVE_IDENTIFIER:
            return NATIVE_DECIMALS

        known = self._known.get(identifier)
        if known is None:
            known = self._known.get(collection_of(identifier))
        if known is not None:
            return known

        cached = self._cache.get(identifier)
        if cached is not None:
            return cached

        decimals = await self._fetch(identifier)
        self._cache[identifier] = decimals
        return decimals

    async def _fetch(self, identifier: str) -> int:
        try:
            data = await self._client.get_token(identifier)
        except EgldTaxError as e:
            logger.warning("Failed to fetch decimals for %s, defaulting to %d: %s", identifier, FALLBACK_DECIMALS, e)
            return FALLBACK_DECIMALS

        decimals = data.get("decimals")
        if isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0:
            logger.warning("Token %s has no usable decimals (%r), defaulting to %d", identifier, decimals, FALLBACK_DECIMALS)
            return FALLBACK_DECIMALS

        logger.debug("Token %s has %d decimals (fetched from API)", identifier, decimals)
        return decimals
