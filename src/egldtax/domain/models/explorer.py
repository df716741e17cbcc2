"""Explorer API payloads, typed loosely enough to survive upstream drift.

Field names follow the API's camelCase via aliases. Unknown fields are kept
(``extra="allow"``) so a transaction can be echoed back to clients unchanged.
"""

from pydantic import BaseModel, Field, field_validator


def _as_int(raw: str | int | None) -> int:
    try:
        return int(raw or 0)
    except (TypeError, ValueError):
        return 0


class RawTransaction(BaseModel):
    """One ledger-level transaction from /accounts/{addr}/transactions."""

    model_config = {"populate_by_name": True, "extra": "allow"}

    tx_hash: str = Field(alias="txHash")
    timestamp: int = 0
    sender: str = ""
    receiver: str = ""
    function: str = ""  # lowercase; "" for a plain value transfer
    value: str = "0"  # smallest unit
    fee: str = "0"  # smallest unit
    data: str | None = None  # base64 call descriptor
    status: str | None = None

    @field_validator("function", mode="before")
    @classmethod
    def _normalize_function(cls, v: str | None) -> str:
        return (v or "").lower()

    @field_validator("value", "fee", mode="before")
    @classmethod
    def _amount_string(cls, v: str | int | None) -> str:
        return "0" if v in (None, "") else str(v)

    @property
    def value_int(self) -> int:
        return _as_int(self.value)

    @property
    def fee_int(self) -> int:
        return _as_int(self.fee)


class RawTransfer(BaseModel):
    """One native or token movement from /accounts/{addr}/transfers."""

    model_config = {"populate_by_name": True, "extra": "allow"}

    tx_hash: str = Field(alias="txHash")
    original_tx_hash: str | None = Field(default=None, alias="originalTxHash")
    sender: str = ""
    receiver: str = ""
    identifier: str | None = None  # None = native EGLD
    value: str = "0"
    data: str | None = None
    is_refund: bool = Field(default=False, alias="isRefund")  # unused-gas refund, not a movement

    @field_validator("value", mode="before")
    @classmethod
    def _amount_string(cls, v: str | int | None) -> str:
        return "0" if v in (None, "") else str(v)

    @property
    def value_int(self) -> int:
        return _as_int(self.value)

    @property
    def correlation_hash(self) -> str:
        """Hash of the top-level transaction this movement belongs to.

        Smart-contract results appear in the transfer list under their own
        hash and carry the parent in originalTxHash.
        """
        return self.original_tx_hash or self.tx_hash


class LogEvent(BaseModel):
    model_config = {"populate_by_name": True, "extra": "allow"}

    identifier: str = ""
    address: str = ""
    topics: list[str | None] = []
    data: str | None = None


class TransactionLogs(BaseModel):
    model_config = {"populate_by_name": True, "extra": "allow"}

    address: str | None = None
    events: list[LogEvent] = []


class SmartContractResult(BaseModel):
    model_config = {"populate_by_name": True, "extra": "allow"}

    hash: str | None = None
    sender: str = ""
    receiver: str = ""
    value: str = "0"
    data: str | None = None
    original_tx_hash: str | None = Field(default=None, alias="originalTxHash")
    is_refund: bool = Field(default=False, alias="isRefund")  # unused-gas refund, not a movement
    logs: TransactionLogs | None = None

    @field_validator("value", mode="before")
    @classmethod
    def _amount_string(cls, v: str | int | None) -> str:
        return "0" if v in (None, "") else str(v)

    @property
    def value_int(self) -> int:
        return _as_int(self.value)


class Operation(BaseModel):
    """Typed movement record from the detail endpoint (withOperations=true)."""

    model_config = {"populate_by_name": True, "extra": "allow"}

    action: str = ""
    type: str = ""  # egld | esdt | nft | log | error
    esdt_type: str | None = Field(default=None, alias="esdtType")
    identifier: str | None = None
    sender: str = ""
    receiver: str = ""
    value: str = "0"

    @field_validator("value", mode="before")
    @classmethod
    def _amount_string(cls, v: str | int | None) -> str:
        return "0" if v in (None, "") else str(v)

    @property
    def value_int(self) -> int:
        return _as_int(self.value)


class TransactionDetail(BaseModel):
    """Lazily fetched /transactions/{hash} payload."""

    model_config = {"populate_by_name": True, "extra": "allow"}

    tx_hash: str | None = Field(default=None, alias="txHash")
    results: list[SmartContractResult] = []
    operations: list[Operation] = []
    logs: TransactionLogs | None = None

    def all_events(self) -> list[LogEvent]:
        """Events from the transaction logs followed by events nested in results."""
        events = list(self.logs.events) if self.logs else []
        for result in self.results:
            if result.logs is not None:
                events.extend(result.logs.events)
        return events
