"""ExtractorRegistry — the ordered extractor chain and the function -> handler map."""

from collections.abc import Iterable

from egldtax.config import Settings
from egldtax.parser.extractors.base import BaseExtractor
from egldtax.parser.extractors.log_events import LogEventExtractor
from egldtax.parser.extractors.native_value import NativeValueExtractor
from egldtax.parser.extractors.operations import OperationExtractor
from egldtax.parser.extractors.sc_results import ScResultExtractor
from egldtax.parser.extractors.transfer_list import TransferListExtractor
from egldtax.parser.handlers.base import CallHandler, GenericHandler


class ExtractorRegistry:
    """Extractors in precedence order plus call handlers keyed by lowercase function name.

    Functions without a registered handler fall back to GenericHandler.
    """

    def __init__(self, extractors: list[BaseExtractor] | None = None) -> None:
        self._extractors: list[BaseExtractor] = list(extractors or [])
        self._handlers: dict[str, CallHandler] = {}
        self._fallback_handler: CallHandler = GenericHandler()

    @property
    def extractors(self) -> list[BaseExtractor]:
        return list(self._extractors)

    def register_handler(self, functions: Iterable[str], handler: CallHandler) -> None:
        for function in functions:
            self._handlers[function.lower()] = handler

    def handler_for(self, function: str | None) -> CallHandler:
        return self._handlers.get((function or "").lower(), self._fallback_handler)


def default_extractors() -> list[BaseExtractor]:
    return [
        TransferListExtractor(),
        ScResultExtractor(),
        LogEventExtractor(),
        OperationExtractor(),
        NativeValueExtractor(),  # Always last
    ]


def build_default_registry(settings: Settings) -> ExtractorRegistry:
    """Create an ExtractorRegistry with the configured call-name groups wired to their handlers."""
    from egldtax.parser.handlers.reward import RewardClaimHandler
    from egldtax.parser.handlers.swap import SwapHandler
    from egldtax.parser.handlers.wrap import UnwrapHandler, WrapHandler

    registry = ExtractorRegistry(default_extractors())

    registry.register_handler(
        settings.reward_functions,
        RewardClaimHandler(settings.reward_tokens, settings.lp_token_pattern),
    )
    registry.register_handler(settings.swap_functions, SwapHandler())
    registry.register_handler(settings.wrap_functions, WrapHandler(settings.wrapped_egld_identifier))
    registry.register_handler(settings.unwrap_functions, UnwrapHandler(settings.wrapped_egld_identifier))

    return registry
