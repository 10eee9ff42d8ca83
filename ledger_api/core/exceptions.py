"""Error taxonomy for the ledger service."""


class LedgerError(Exception):
    """Base exception for all ledger errors."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(LedgerError):
    """Raised when request input is missing or invalid."""

    status_code = 400


class NotFoundError(LedgerError):
    """Raised when an account id does not exist."""

    status_code = 404


class InsufficientFundsError(LedgerError):
    """Raised when a withdrawal exceeds the current balance."""

    status_code = 400


class StoreError(LedgerError):
    """Raised when a backing file cannot be written or a collection name is invalid."""
