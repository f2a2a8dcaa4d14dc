"""
Reliable submission — blocks ``send`` until the outcome is determinable.

Consensus settlement is asynchronous: a submitted transaction is not
immediately known to have succeeded, failed, or expired. This wrapper
decorates any LedgerClient and strengthens ``send`` so that it returns
only once the transaction is validated, and raises once the
transaction provably cannot validate (or once that cannot be known).

Protocol for one ``send``:
    1. Submit through the decorated client (never retried here).
    2. Sleep one ledger-close interval.
    3. Fetch the raw status. LastLedgerSequence == 0 → UnboundedFinalityError.
    4. Resolve the sender to a classic address (AddressResolutionError).
    5. Fetch the latest validated ledger sequence.
    6. Loop: validated → return hash; latest > LastLedgerSequence →
       ExpiryError; otherwise sleep, re-fetch sequence then status.

Validation is checked before expiry, and the status is always fresher
than the sequence it is compared against, so a transaction that
validated in the boundary ledger is never reported as expired.

All other methods forward to the decorated client unchanged.

The sending account is assumed to exist for the whole call. If it is
deleted mid-flight the decorated client raises AccountNotFoundError,
which propagates like any other upstream error.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from reliable_ledger.xrpl.address import AddressResolver, XAddressResolver
from reliable_ledger.xrpl.client import (
    Amount,
    LedgerClient,
    PaymentRecord,
    RawTransactionStatus,
    TransactionStatus,
)
from reliable_ledger.xrpl.config import DEFAULT_CONFIG, SubmissionConfig
from reliable_ledger.xrpl.errors import ExpiryError, UnboundedFinalityError
from reliable_ledger.xrpl.signer import XRPLSigner

log = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[None]]


class ReliableSubmissionClient:
    """A LedgerClient whose ``send`` blocks until a deterministic outcome.

    Holds no state across calls; concurrent ``send`` calls interleave
    independently. The decorated client is shared and must tolerate
    concurrent use.

    Args:
        decorated_client: The LedgerClient to forward to.
        resolver: Converts the sender's address to classic form.
            Defaults to XAddressResolver.
        config: Polling cadence. Defaults to a 4 second interval.
        sleep: Awaitable sleep function. Defaults to asyncio.sleep.
            Inject for tests.
    """

    def __init__(
        self,
        decorated_client: LedgerClient,
        *,
        resolver: AddressResolver | None = None,
        config: SubmissionConfig | None = None,
        sleep: SleepFn | None = None,
    ) -> None:
        self._client = decorated_client
        self._resolver = resolver or XAddressResolver()
        self._config = config or DEFAULT_CONFIG
        self._sleep = sleep or asyncio.sleep

    @property
    def decorated_client(self) -> LedgerClient:
        return self._client

    @property
    def ledger_close_interval(self) -> float:
        return self._config.ledger_close_interval

    async def send(
        self,
        amount: Amount,
        destination: str,
        sender: XRPLSigner,
        memo: str | None = None,
    ) -> str:
        """Submit a payment and wait until it validates.

        Returns:
            The transaction hash, once the transaction is validated.

        Raises:
            SubmissionError: The decorated client failed to submit.
            UnboundedFinalityError: The transaction has no
                LastLedgerSequence, so its fate cannot be bounded.
            AddressResolutionError: The sender's address could not be
                decoded to a classic address.
            ExpiryError: The latest validated ledger passed the
                transaction's LastLedgerSequence without validation.
            UpstreamError: A status or sequence query failed.
        """
        interval = self._config.ledger_close_interval

        # Submit and wait for a ledger to close.
        transaction_hash = await self._client.send(amount, destination, sender, memo)
        log.info("submitted %s, awaiting first status", transaction_hash)
        await self._sleep(interval)

        status = await self._client.get_raw_transaction_status(transaction_hash)
        last_ledger_sequence = status.last_ledger_sequence
        if last_ledger_sequence == 0:
            log.warning("%s has no lastLedgerSequence, finality is unbounded", transaction_hash)
            raise UnboundedFinalityError(transaction_hash)

        classic_address = self._resolver.decode_to_canonical(sender.account)

        latest = await self._client.get_latest_validated_ledger_sequence(classic_address)

        polls = 0
        while True:
            log.debug(
                "%s poll %d: validated=%s latest=%d last=%d",
                transaction_hash, polls, status.is_validated, latest, last_ledger_sequence,
            )
            if status.is_validated:
                log.info("%s validated after %d polls", transaction_hash, polls)
                return transaction_hash

            if latest > last_ledger_sequence:
                log.warning(
                    "%s expired: latest validated ledger %d > lastLedgerSequence %d",
                    transaction_hash, latest, last_ledger_sequence,
                )
                raise ExpiryError(
                    transaction_hash,
                    last_ledger_sequence=last_ledger_sequence,
                    latest_validated_ledger_sequence=latest,
                )

            await self._sleep(interval)
            polls += 1
            latest = await self._client.get_latest_validated_ledger_sequence(classic_address)
            status = await self._client.get_raw_transaction_status(transaction_hash)

    # -----------------------------------------------------------------
    # Passthroughs
    # -----------------------------------------------------------------

    async def get_raw_transaction_status(
        self, transaction_hash: str
    ) -> RawTransactionStatus:
        return await self._client.get_raw_transaction_status(transaction_hash)

    async def get_latest_validated_ledger_sequence(self, address: str) -> int:
        return await self._client.get_latest_validated_ledger_sequence(address)

    async def get_payment_status(self, transaction_hash: str) -> TransactionStatus:
        return await self._client.get_payment_status(transaction_hash)

    async def get_balance(self, address: str) -> int:
        return await self._client.get_balance(address)

    async def account_exists(self, address: str) -> bool:
        return await self._client.account_exists(address)

    async def payment_history(self, address: str) -> list[PaymentRecord]:
        return await self._client.payment_history(address)
