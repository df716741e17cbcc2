"""Schemas for /fetch-transactions endpoints."""

from typing import Any, Optional

from pydantic import BaseModel, Field

from egldtax.domain.models.tax import TaxRow


class FetchTransactionsRequest(BaseModel):
    """Fields are optional here so that missing ones get the API's own 400 message."""

    model_config = {"populate_by_name": True}

    wallet_address: Optional[str] = Field(default=None, alias="walletAddress")
    from_date: Optional[str] = Field(default=None, alias="fromDate")
    to_date: Optional[str] = Field(default=None, alias="toDate")
    client_id: Optional[str] = Field(default=None, alias="clientId")


class FetchTransactionsResponse(BaseModel):
    model_config = {"populate_by_name": True}

    all_transactions: list[dict[str, Any]] = Field(default=[], alias="allTransactions")
    tax_relevant_transactions: list[TaxRow] = Field(default=[], alias="taxRelevantTransactions")
    warnings: list[str] = []
