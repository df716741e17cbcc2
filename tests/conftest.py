import pytest
from bip_utils.bech32 import Bech32Encoder

from egldtax.config import Settings


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture()
def wallet_pubkey() -> bytes:
    return bytes([1]) * 32


@pytest.fixture()
def wallet(wallet_pubkey) -> str:
    return Bech32Encoder.Encode("erd", wallet_pubkey)


@pytest.fixture()
def counterparty() -> str:
    return Bech32Encoder.Encode("erd", bytes([2]) * 32)


@pytest.fixture()
def paged_settings() -> Settings:
    return Settings(
        transactions_page_size=2,
        transfers_page_size=2,
        max_pagination_offset=10,
        retry_base_delay=0.0,
        retry_max_delay=0.0,
    )
