"""
XRPL error taxonomy for reliable submission.

Every failure the wrapper or the JSON-RPC client can surface is one of a
closed set of exception types, each carrying a coarse ``ErrorCode`` plus
the structured context needed to act on it (hashes, sequence numbers).

Callers distinguish three families:
    - "will never settle": ExpiryError.
    - "cannot determine": UnboundedFinalityError, AddressResolutionError.
    - "transport / node problem": UpstreamError (and AccountNotFoundError).

SubmissionError sits apart: the transaction never entered the ledger.

XRPL engine result prefixes:
    - tes: success (tesSUCCESS)
    - tec: claimed cost (tecPATH_DRY, tecNO_DST, etc.) — tx included but "failed"
    - tef: local failure (tefPAST_SEQ, etc.) — not forwarded
    - tem: malformed (temBAD_FEE, etc.) — not forwarded
    - ter: retry (terQUEUED, etc.) — maybe later

Reference:
    https://xrpl.org/docs/references/protocol/transactions/transaction-results
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    """Coarse, machine-readable error categories."""

    REJECTED = "REJECTED"
    BACKEND_UNAVAILABLE = "BACKEND_UNAVAILABLE"
    SERVER_ERROR = "SERVER_ERROR"
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    UNBOUNDED_FINALITY = "UNBOUNDED_FINALITY"
    EXPIRED = "EXPIRED"
    UNKNOWN = "UNKNOWN"


# =========================================================================
# Exceptions
# =========================================================================


class LedgerError(Exception):
    """Base class for all errors raised by this package.

    Attributes:
        code: Coarse error category.
        message: Human-readable detail.
    """

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class SubmissionError(LedgerError):
    """The underlying submit call failed. Never retried by this package."""

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode = ErrorCode.REJECTED,
        engine_result: str | None = None,
        transaction_hash: str | None = None,
    ) -> None:
        super().__init__(code, message)
        self.engine_result = engine_result
        self.transaction_hash = transaction_hash


class UnboundedFinalityError(LedgerError):
    """The transaction carries no LastLedgerSequence.

    Without an expiry bound there is no ledger past which the outcome is
    final, so the result cannot be reliably determined.
    """

    def __init__(self, transaction_hash: str) -> None:
        super().__init__(
            ErrorCode.UNBOUNDED_FINALITY,
            "The transaction did not have a lastLedgerSequence field so "
            "transaction status cannot be reliably determined.",
        )
        self.transaction_hash = transaction_hash


class AddressResolutionError(LedgerError):
    """An address could not be decoded to its classic form."""

    def __init__(self, address: str, message: str | None = None) -> None:
        super().__init__(
            ErrorCode.UNKNOWN,
            message
            or f"address {address!r} could not be decoded to a classic address",
        )
        self.address = address


class ExpiryError(LedgerError):
    """The inclusion window closed without the transaction validating.

    A definitive negative result: the transaction will never settle.
    """

    def __init__(
        self,
        transaction_hash: str,
        *,
        last_ledger_sequence: int,
        latest_validated_ledger_sequence: int,
    ) -> None:
        super().__init__(
            ErrorCode.EXPIRED,
            f"transaction {transaction_hash} expired: latest validated ledger "
            f"{latest_validated_ledger_sequence} passed lastLedgerSequence "
            f"{last_ledger_sequence} without validation",
        )
        self.transaction_hash = transaction_hash
        self.last_ledger_sequence = last_ledger_sequence
        self.latest_validated_ledger_sequence = latest_validated_ledger_sequence


class UpstreamError(LedgerError):
    """The ledger client failed to answer a query.

    Attributes:
        method: JSON-RPC method that failed, when known.
        rpc_error: rippled error token (e.g. "txnNotFound"), when the node
            answered with an error rather than failing at transport level.
    """

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode = ErrorCode.SERVER_ERROR,
        method: str | None = None,
        rpc_error: str | None = None,
    ) -> None:
        super().__init__(code, message)
        self.method = method
        self.rpc_error = rpc_error


class AccountNotFoundError(UpstreamError):
    """The queried account does not exist in the ledger."""

    def __init__(self, address: str, *, method: str | None = None) -> None:
        super().__init__(
            f"account {address} not found",
            code=ErrorCode.ACCOUNT_NOT_FOUND,
            method=method,
            rpc_error="actNotFound",
        )
        self.address = address


# =========================================================================
# Engine result → ErrorCode
# =========================================================================

# Coarse prefix-based mapping. Start small, add precision when needed.
_PREFIX_MAP: dict[str, ErrorCode] = {
    "tem": ErrorCode.REJECTED,   # malformed — won't ever succeed
    "tef": ErrorCode.REJECTED,   # local failure — won't be forwarded
    "tec": ErrorCode.REJECTED,   # claimed cost — included but "failed"
    "ter": ErrorCode.REJECTED,   # retry — but we don't auto-retry here
}


def classify_engine_result(engine_result: str | None) -> ErrorCode:
    """Map an XRPL engine result code to an ErrorCode.

    Args:
        engine_result: XRPL engine result string (e.g. "tesSUCCESS",
            "temBAD_FEE"). None means the engine never responded.

    Returns:
        ErrorCode. UNKNOWN for unrecognized codes, for tesSUCCESS,
        and when engine_result is None.
    """
    if engine_result is None or engine_result == "tesSUCCESS":
        return ErrorCode.UNKNOWN

    for prefix, code in _PREFIX_MAP.items():
        if engine_result.startswith(prefix):
            return code

    return ErrorCode.UNKNOWN
