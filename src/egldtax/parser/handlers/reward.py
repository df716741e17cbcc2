"""RewardClaimHandler — claimRewards and friends."""

import logging
import re
from collections.abc import Iterable

from egldtax.domain.enums import CallKind
from egldtax.domain.models.explorer import RawTransaction
from egldtax.parser.handlers.base import CallHandler, inbound
from egldtax.parser.utils.context import ReconciliationContext
from egldtax.parser.utils.types import Leg

logger = logging.getLogger(__name__)


class RewardClaimHandler(CallHandler):
    """Reports the reward payout of a claim.

    Claim results usually also return the farm/LP position to the wallet;
    tokens matching the LP pattern are never reported. Allow-listed reward
    tokens win over whatever inbound token happens to come first. A selection
    without an allow-listed token is only partial.
    """

    HANDLER_NAME = "RewardClaimHandler"
    CALL_KIND = CallKind.REWARD_CLAIM

    def __init__(self, reward_tokens: Iterable[str], lp_token_pattern: str) -> None:
        self._reward_tokens = set(reward_tokens)
        self._lp_pattern = re.compile(lp_token_pattern)

    def is_reward_token(self, leg: Leg) -> bool:
        return leg.identifier in self._reward_tokens or leg.collection in self._reward_tokens

    def is_lp_token(self, leg: Leg) -> bool:
        return self._lp_pattern.search(leg.identifier) is not None

    def select(self, tx: RawTransaction, legs: list[Leg], context: ReconciliationContext) -> list[Leg]:
        candidates = [leg for leg in inbound(legs) if not self.is_lp_token(leg)]
        if not candidates:
            return []

        rewards = [leg for leg in candidates if self.is_reward_token(leg)]
        if rewards:
            return rewards

        logger.debug("No allow-listed reward token in %s, using %s", tx.tx_hash, candidates[0].identifier)
        return [candidates[0]]

    def is_complete(self, legs: list[Leg]) -> bool:
        return any(self.is_reward_token(leg) for leg in legs)
