"""Exception hierarchy shared by the API, the explorer client and the pipeline."""


class EgldTaxError(Exception):
    """Base class for all egldtax errors."""


class InvalidRequestError(EgldTaxError):
    """Inbound request failed validation. Maps to HTTP 400."""


class ExternalServiceError(EgldTaxError):
    """Transient upstream failure (timeout, 429, 5xx). Safe to retry."""


class UpstreamError(EgldTaxError):
    """Permanent upstream failure: non-retryable status or malformed body."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AccountNotFoundError(UpstreamError):
    """The account probe returned 404."""


class RequestCancelledError(EgldTaxError):
    """The inbound client went away; stop issuing upstream calls."""
