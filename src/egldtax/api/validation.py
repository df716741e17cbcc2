"""Request validation for /fetch-transactions. Checks run in a fixed order; the first failure wins."""

from datetime import date, datetime, time, timezone

from egldtax.api.schemas.transactions import FetchTransactionsRequest
from egldtax.exceptions import InvalidRequestError
from egldtax.parser.utils.address import is_wallet_address

MISSING_PARAMETERS = "Missing required parameters"
INVALID_WALLET = "Invalid wallet address"
INVALID_TIMESTAMPS = "Invalid timestamps"
INVALID_RANGE = "Invalid date range"


def parse_instant(text: str, end_of_day: bool = False) -> int:
    """ISO-8601 string -> unix seconds. Naive values are UTC.

    A date-only value means midnight, or 23:59:59 when end_of_day is set so a
    toDate of "2024-01-31" covers all of January 31st.
    """
    text = text.strip()
    try:
        day = date.fromisoformat(text)
    except ValueError:
        moment = datetime.fromisoformat(text)
    else:
        moment = datetime.combine(day, time(23, 59, 59) if end_of_day else time.min)

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(moment.timestamp())


def validate_fetch_request(body: FetchTransactionsRequest) -> tuple[str, int, int]:
    """Return (wallet, start, end) or raise InvalidRequestError."""
    if not body.wallet_address or not body.from_date or not body.to_date:
        raise InvalidRequestError(MISSING_PARAMETERS)

    if not is_wallet_address(body.wallet_address):
        raise InvalidRequestError(INVALID_WALLET)

    try:
        start = parse_instant(body.from_date)
        end = parse_instant(body.to_date, end_of_day=True)
    except ValueError as e:
        raise InvalidRequestError(INVALID_TIMESTAMPS) from e

    if start > end:
        raise InvalidRequestError(INVALID_RANGE)

    return body.wallet_address, start, end
