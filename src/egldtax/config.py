from pydantic_settings import BaseSettings

# Call names worth reporting. Lowercase, as normalized on RawTransaction.function.
DEFAULT_WATCHED_FUNCTIONS: list[str] = [
    "claimrewards", "claim", "claimrewardsproxy", "redelegaterewards",
    "swaptokensfixedinput", "swaptokensfixedoutput", "multipairswap",
    "transfer", "wrapegld", "unwrapegld",
    "aggregateegld", "aggregateesdt",
    "esdttransfer", "esdtnfttransfer", "multiesdtnfttransfer",
    "buy", "sell", "withdraw", "claimlockedassets",
]

# Liquidity/reward tokens whose decimals the /tokens endpoint reports inconsistently
DEFAULT_KNOWN_TOKEN_DECIMALS: dict[str, int] = {
    "WEGLD-bd4d79": 18,
    "MEX-455c57": 18,
    "XMEX-fda355": 18,
    "LKMEX-aab910": 18,
    "USDC-c76f1f": 6,
    "USDT-f8c08c": 6,
    "UTK-2f80e9": 18,
    "RIDE-7d18e9": 18,
    "EGLDMEX-0be9e5": 18,
    "EGLDUSDC-594e5e": 18,
}

DEFAULT_REWARD_TOKENS: list[str] = [
    "MEX-455c57",
    "XMEX-fda355",
    "LKMEX-aab910",
    "UTK-2f80e9",
    "RIDE-7d18e9",
    "ASH-a642d1",
    "CRT-52decf",
    "ZPAY-247875",
    "WEGLD-bd4d79",
    "EGLD",
]


class Settings(BaseSettings):
    api_base_url: str = "https://api.multiversx.com"
    request_timeout: float = 30.0
    token_timeout: float = 5.0
    rate_per_second: float = 2.0  # 500 ms between upstream calls

    transactions_page_size: int = 1000
    transfers_page_size: int = 500
    max_pagination_offset: int = 10_000  # API rejects from + size beyond this
    transfer_window_seconds: int = 86_400

    retry_max_attempts: int = 3
    retry_base_delay: float = 1.0
    retry_max_delay: float = 10.0

    cors_origins: list[str] = ["*"]

    watched_functions: list[str] = DEFAULT_WATCHED_FUNCTIONS
    reward_functions: list[str] = [
        "claimrewards", "claim", "claimrewardsproxy", "redelegaterewards", "claimlockedassets",
    ]
    swap_functions: list[str] = [
        "swaptokensfixedinput", "swaptokensfixedoutput", "multipairswap",
        "aggregateegld", "aggregateesdt", "buy", "sell",
    ]
    wrap_functions: list[str] = ["wrapegld"]
    unwrap_functions: list[str] = ["unwrapegld"]

    known_token_decimals: dict[str, int] = DEFAULT_KNOWN_TOKEN_DECIMALS
    reward_tokens: list[str] = DEFAULT_REWARD_TOKENS
    # Pair and farm positions only; tickers like ALPHA or HELP must not match
    lp_token_pattern: str = r"^W?EGLD[A-Z0-9]+-|^[A-Z0-9]*FARM[A-Z0-9]?-|^[A-Z0-9]{3,}(LP|FL)-"
    wrapped_egld_identifier: str = "WEGLD-bd4d79"

    progress_idle_timeout: float = 300.0
    log_level: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()
