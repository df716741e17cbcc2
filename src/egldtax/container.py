from dependency_injector import containers, providers

from egldtax.config import Settings
from egldtax.infra.blockchain.multiversx.api_client import MultiversXClient
from egldtax.infra.http.rate_limited_client import RateLimitedClient
from egldtax.infra.http.retry import RetryPolicy
from egldtax.infra.progress.registry import ProgressRegistry
from egldtax.infra.token.decimals import TokenDecimalsResolver
from egldtax.parser.registry import build_default_registry
from egldtax.report.service import TaxReportService


class Container(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(modules=["egldtax.api.deps"])

    settings = providers.Singleton(Settings)

    http_client = providers.Singleton(
        RateLimitedClient,
        base_url=settings.provided.api_base_url,
        rate_per_second=settings.provided.rate_per_second,
        timeout=settings.provided.request_timeout,
    )

    retry_policy = providers.Singleton(
        RetryPolicy,
        max_attempts=settings.provided.retry_max_attempts,
        base_delay=settings.provided.retry_base_delay,
        max_delay=settings.provided.retry_max_delay,
    )

    api_client = providers.Singleton(
        MultiversXClient,
        http_client=http_client,
        retry_policy=retry_policy,
        token_timeout=settings.provided.token_timeout,
    )

    # Process-wide: the decimals cache outlives requests
    token_decimals = providers.Singleton(
        TokenDecimalsResolver,
        client=api_client,
        known_decimals=settings.provided.known_token_decimals,
    )

    extractor_registry = providers.Singleton(build_default_registry, settings=settings)

    progress_registry = providers.Singleton(ProgressRegistry)

    report_service = providers.Factory(
        TaxReportService,
        settings=settings,
        client=api_client,
        decimals=token_decimals,
        registry=extractor_registry,
        progress=progress_registry,
    )
