"""
XRPL ledger client protocol — the network boundary.

Defines the capability set that the reliable-submission wrapper both
consumes and exposes. Any conforming implementation may be substituted:

Concrete implementations:
    - JsonRpcClient (rippled JSON-RPC)
    - ReliableSubmissionClient (decorates another LedgerClient)
    - FakeLedgerClient (tests)

Result types are boring frozen dataclasses. Failures are raised as
LedgerError subclasses (see errors.py) rather than captured in results,
so a caller never receives an ambiguous status.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from reliable_ledger.xrpl.signer import XRPLSigner

# Amounts are XRP drops. Strings and Decimals must be integral.
Amount = int | str | Decimal


# =========================================================================
# Result types
# =========================================================================


class TransactionStatus(StrEnum):
    """Final (or current) outcome of a payment."""

    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    PENDING = "PENDING"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class RawTransactionStatus:
    """Point-in-time snapshot of a transaction's ledger state.

    Attributes:
        is_validated: True once the transaction is in a validated ledger.
        last_ledger_sequence: Ledger past which the transaction can no
            longer be included. 0 means the field was absent.
        transaction_status_code: Engine result (e.g. "tesSUCCESS").
            None if the node did not report one yet.
        is_full_payment: False for payments flagged tfPartialPayment.
    """

    is_validated: bool
    last_ledger_sequence: int
    transaction_status_code: str | None = None
    is_full_payment: bool = True


@dataclass(frozen=True)
class PaymentRecord:
    """One Payment transaction from an account's history.

    Attributes:
        hash: Transaction hash.
        account: Sending classic address.
        destination: Receiving classic address.
        amount_drops: Delivered amount in drops. None for issued-currency
            payments.
        fee_drops: Fee paid in drops.
        sequence: Sender's account sequence for this transaction.
        last_ledger_sequence: 0 if the transaction had none.
        ledger_index: Ledger that included the transaction, if known.
        validated: Whether that ledger is validated.
        destination_tag: Destination tag, if any.
        memos: Memo payloads decoded as UTF-8.
    """

    hash: str
    account: str
    destination: str
    amount_drops: int | None
    fee_drops: int
    sequence: int
    last_ledger_sequence: int = 0
    ledger_index: int | None = None
    validated: bool = False
    destination_tag: int | None = None
    memos: tuple[str, ...] = field(default_factory=tuple)


# =========================================================================
# Protocol
# =========================================================================


@runtime_checkable
class LedgerClient(Protocol):
    """Interface for XRPL payment operations.

    Implementations must handle connection management and transport
    retries internally. Methods are async because network I/O is
    inherently asynchronous.
    """

    async def send(
        self,
        amount: Amount,
        destination: str,
        sender: XRPLSigner,
        memo: str | None = None,
    ) -> str:
        """Submit a payment and return its transaction hash.

        Raises:
            SubmissionError: If the ledger rejected the transaction or
                the node could not be reached.
        """
        ...

    async def get_raw_transaction_status(
        self, transaction_hash: str
    ) -> RawTransactionStatus:
        """Fetch the current ledger state of a transaction."""
        ...

    async def get_latest_validated_ledger_sequence(self, address: str) -> int:
        """Return the latest validated ledger index, queried via ``address``.

        ``address`` must be a classic address of an existing account.
        """
        ...

    async def get_payment_status(self, transaction_hash: str) -> TransactionStatus:
        """Return the payment outcome of a transaction."""
        ...

    async def get_balance(self, address: str) -> int:
        """Return the account's XRP balance in drops."""
        ...

    async def account_exists(self, address: str) -> bool:
        """Return whether the account exists in the validated ledger."""
        ...

    async def payment_history(self, address: str) -> list[PaymentRecord]:
        """Return the account's Payment transactions, most recent first."""
        ...
