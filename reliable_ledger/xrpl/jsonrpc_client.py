"""
XRPL JSON-RPC client — real network implementation of LedgerClient.

Translates rippled JSON-RPC responses into the LedgerClient result
types. Uses an injectable transport (JsonRpcTransport) so the HTTP layer
can be swapped for test fakes without changing parsing logic.

No retry loops, no finality polling. ``send`` is fire-and-forget: it
returns as soon as the node accepts the blob. Wrap the client in
ReliableSubmissionClient to block until the outcome is known.

Response parsing targets rippled JSON-RPC conventions:
    - Successful responses: {"result": {"status": "success", ...}}
    - Error responses: {"result": {"status": "error", "error": "...", ...}}
    - API v2 moves transaction fields under "tx_json"; both shapes are read.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from reliable_ledger.xrpl.address import XAddressResolver
from reliable_ledger.xrpl.client import (
    Amount,
    PaymentRecord,
    RawTransactionStatus,
    TransactionStatus,
)
from reliable_ledger.xrpl.config import DEFAULT_CONFIG, SubmissionConfig
from reliable_ledger.xrpl.errors import (
    AccountNotFoundError,
    ErrorCode,
    SubmissionError,
    UpstreamError,
    classify_engine_result,
)
from reliable_ledger.xrpl.signer import XRPLSigner
from reliable_ledger.xrpl.transport import HttpxTransport, JsonRpcTransport
from reliable_ledger.xrpl.tx import TF_PARTIAL_PAYMENT, decode_memo_hex, plan_payment

log = logging.getLogger(__name__)

# JSON-RPC request ID counter (simple, no thread-safety needed for async)
_REQUEST_ID = 0


def _next_request_id() -> int:
    global _REQUEST_ID
    _REQUEST_ID += 1
    return _REQUEST_ID


class JsonRpcClient:
    """XRPL JSON-RPC client implementing the LedgerClient protocol.

    Args:
        url: The rippled JSON-RPC endpoint URL (e.g. "http://localhost:5005").
        transport: Injectable transport for HTTP POST. Defaults to
            HttpxTransport. Pass a FakeTransport for testing.
        config: Submission settings (LastLedgerSequence offset, timeout).
        resolver: Address resolver for X-address inputs.
    """

    def __init__(
        self,
        url: str,
        transport: JsonRpcTransport | None = None,
        *,
        config: SubmissionConfig | None = None,
        resolver: XAddressResolver | None = None,
    ) -> None:
        self._url = url
        self._config = config or DEFAULT_CONFIG
        self._transport = transport or HttpxTransport(timeout=self._config.request_timeout)
        self._resolver = resolver or XAddressResolver()

    @property
    def url(self) -> str:
        """The JSON-RPC endpoint URL."""
        return self._url

    # -----------------------------------------------------------------
    # LedgerClient protocol methods
    # -----------------------------------------------------------------

    async def send(
        self,
        amount: Amount,
        destination: str,
        sender: XRPLSigner,
        memo: str | None = None,
    ) -> str:
        """Build, sign and submit a Payment. Returns the transaction hash.

        Reads Sequence, Fee and the latest validated ledger from the node,
        then sets LastLedgerSequence ``max_ledger_offset`` ledgers ahead.

        Raises:
            AddressResolutionError: If sender or destination is invalid.
            ValueError: If the amount is not a positive number of drops.
            SubmissionError: If the node could not be reached or did not
                accept the transaction.
        """
        source = self._resolver.decode_to_canonical(sender.account)
        dest, tag = self._resolver.decode_destination(destination)

        try:
            account_data = await self._account_data(source, ledger_index="current")
            fee_drops = await self._open_ledger_fee()
            latest = await self.get_latest_validated_ledger_sequence(source)
        except UpstreamError as exc:
            raise SubmissionError(
                f"could not prepare payment: {exc.message}", code=exc.code
            ) from exc

        tx = plan_payment(
            source,
            dest,
            amount,
            sequence=int(account_data["Sequence"]),
            fee_drops=fee_drops,
            last_ledger_sequence=latest + self._config.max_ledger_offset,
            destination_tag=tag,
            memo=memo,
        )
        sign_result = sender.sign(tx)

        try:
            result = await self._call("submit", {"tx_blob": sign_result.signed_tx_blob_hex})
        except UpstreamError as exc:
            raise SubmissionError(
                f"submit failed: {exc.message}",
                code=exc.code,
                transaction_hash=sign_result.tx_hash,
            ) from exc

        engine_result = result.get("engine_result")
        if engine_result is None:
            raise SubmissionError(
                "no engine_result in submit response",
                code=ErrorCode.SERVER_ERROR,
                transaction_hash=sign_result.tx_hash,
            )

        # Some server versions don't include "accepted" —
        # fall back to engine_result prefix
        accepted = result.get("accepted", False)
        if not accepted:
            accepted = engine_result == "tesSUCCESS" or engine_result.startswith("ter")

        tx_json = result.get("tx_json")
        tx_hash = sign_result.tx_hash
        if isinstance(tx_json, dict) and tx_json.get("hash"):
            tx_hash = tx_json["hash"]

        if not accepted:
            detail = result.get("engine_result_message") or "transaction not accepted"
            raise SubmissionError(
                f"engine_result={engine_result}; {detail}",
                code=classify_engine_result(engine_result),
                engine_result=engine_result,
                transaction_hash=tx_hash,
            )

        log.info(
            "submitted payment %s from %s (engine_result=%s, last_ledger_sequence=%s)",
            tx_hash, source, engine_result, tx["LastLedgerSequence"],
        )
        return tx_hash

    async def get_raw_transaction_status(
        self, transaction_hash: str
    ) -> RawTransactionStatus:
        """Query transaction state via the ``tx`` method.

        Raises:
            UpstreamError: With ``rpc_error="txnNotFound"`` if the node
                does not know the transaction, or on any other failure.
        """
        result = await self._call(
            "tx", {"transaction": transaction_hash, "binary": False}
        )
        return _parse_raw_status(result)

    async def get_payment_status(self, transaction_hash: str) -> TransactionStatus:
        """Derive the payment outcome from the raw transaction status.

        Unknown transactions report UNKNOWN instead of raising.
        """
        try:
            raw = await self.get_raw_transaction_status(transaction_hash)
        except UpstreamError as exc:
            if exc.rpc_error == "txnNotFound":
                return TransactionStatus.UNKNOWN
            raise
        return payment_status_from_raw(raw)

    async def get_latest_validated_ledger_sequence(self, address: str) -> int:
        """Return the index of the latest validated ledger.

        Read from ``account_info`` on the validated ledger, so ``address``
        must exist there.

        Raises:
            AccountNotFoundError: If the account does not exist.
        """
        result = await self._account_info(address, ledger_index="validated")
        ledger_index = result.get("ledger_index")
        if ledger_index is None:
            raise UpstreamError(
                "no ledger_index in account_info response", method="account_info"
            )
        return int(ledger_index)

    async def get_balance(self, address: str) -> int:
        classic = self._resolver.decode_to_canonical(address)
        account_data = await self._account_data(classic, ledger_index="validated")
        balance = account_data.get("Balance")
        if balance is None:
            raise UpstreamError(
                "no Balance in account_info response", method="account_info"
            )
        return int(balance)

    async def account_exists(self, address: str) -> bool:
        classic = self._resolver.decode_to_canonical(address)
        try:
            await self._account_info(classic, ledger_index="validated")
        except AccountNotFoundError:
            return False
        return True

    async def payment_history(self, address: str) -> list[PaymentRecord]:
        """Return Payment transactions for an account, most recent first.

        Reads a single ``account_tx`` page across all validated ledgers.
        """
        classic = self._resolver.decode_to_canonical(address)
        try:
            result = await self._call(
                "account_tx",
                {
                    "account": classic,
                    "ledger_index_min": -1,
                    "ledger_index_max": -1,
                    "forward": False,
                },
            )
        except UpstreamError as exc:
            if exc.rpc_error == "actNotFound":
                raise AccountNotFoundError(classic, method="account_tx") from exc
            raise

        records: list[PaymentRecord] = []
        for entry in result.get("transactions", []):
            record = _parse_payment_entry(entry)
            if record is not None:
                records.append(record)
        return records

    # -----------------------------------------------------------------
    # Internals
    # -----------------------------------------------------------------

    async def _call(self, method: str, params: dict[str, Any]) -> dict[str, Any]:
        """Send one JSON-RPC request and return its ``result`` dict.

        Raises:
            UpstreamError: BACKEND_UNAVAILABLE on transport failure or an
                undecodable body, SERVER_ERROR when the node answers with
                an error.
        """
        payload = {
            "method": method,
            "params": [params],
            "id": _next_request_id(),
        }
        log.debug("rpc %s -> %s", method, self._url)

        # ValueError covers JSON decoding in transports that decode themselves.
        try:
            response = await self._transport.post_json(self._url, payload)
        except (httpx.HTTPError, OSError, ValueError) as exc:
            raise UpstreamError(
                f"{method} failed: {exc}",
                code=ErrorCode.BACKEND_UNAVAILABLE,
                method=method,
            ) from exc

        if not isinstance(response, dict):
            raise UpstreamError(
                f"{method}: response is a {type(response).__name__}, not an object",
                code=ErrorCode.BACKEND_UNAVAILABLE,
                method=method,
            )

        result = response.get("result")
        if not isinstance(result, dict):
            raise UpstreamError(f"{method}: response has no result", method=method)

        if result.get("status") == "error":
            error = result.get("error") or "unknown"
            raise UpstreamError(
                f"{method}: {result.get('error_message') or error}",
                method=method,
                rpc_error=error,
            )
        return result

    async def _account_info(self, address: str, *, ledger_index: str) -> dict[str, Any]:
        try:
            return await self._call(
                "account_info", {"account": address, "ledger_index": ledger_index}
            )
        except UpstreamError as exc:
            if exc.rpc_error == "actNotFound":
                raise AccountNotFoundError(address, method="account_info") from exc
            raise

    async def _account_data(self, address: str, *, ledger_index: str) -> dict[str, Any]:
        result = await self._account_info(address, ledger_index=ledger_index)
        account_data = result.get("account_data")
        if not isinstance(account_data, dict):
            raise UpstreamError(
                "no account_data in account_info response", method="account_info"
            )
        return account_data

    async def _open_ledger_fee(self) -> str:
        result = await self._call("fee", {})
        drops = result.get("drops") or {}
        fee = drops.get("open_ledger_fee") or drops.get("base_fee")
        if fee is None:
            raise UpstreamError("no fee in fee response", method="fee")
        return str(fee)


# =====================================================================
# Response parsing (pure functions, no I/O)
# =====================================================================


def _tx_fields(result: dict[str, Any]) -> dict[str, Any]:
    """Return the transaction fields for either API version.

    API v1 puts them at the top level; API v2 nests them under tx_json.
    """
    tx_json = result.get("tx_json")
    if isinstance(tx_json, dict):
        return tx_json
    return result


def _is_full_payment(fields: dict[str, Any]) -> bool:
    if fields.get("TransactionType") != "Payment":
        return True
    return not int(fields.get("Flags", 0)) & TF_PARTIAL_PAYMENT


def _parse_raw_status(result: dict[str, Any]) -> RawTransactionStatus:
    fields = _tx_fields(result)

    engine_result = None
    meta = result.get("meta")
    if isinstance(meta, dict):
        engine_result = meta.get("TransactionResult")

    return RawTransactionStatus(
        is_validated=bool(result.get("validated", False)),
        last_ledger_sequence=int(fields.get("LastLedgerSequence", 0)),
        transaction_status_code=engine_result,
        is_full_payment=_is_full_payment(fields),
    )


def payment_status_from_raw(raw: RawTransactionStatus) -> TransactionStatus:
    """Derive a TransactionStatus from a raw status snapshot.

    A partial payment counts as failed even when it validated: the
    recipient may have received less than the stated amount.
    """
    if not raw.is_validated:
        return TransactionStatus.PENDING
    if not raw.is_full_payment:
        return TransactionStatus.FAILED
    if raw.transaction_status_code and raw.transaction_status_code.startswith("tes"):
        return TransactionStatus.SUCCEEDED
    return TransactionStatus.FAILED


def _drops_or_none(value: Any) -> int | None:
    # Issued-currency amounts are objects; only XRP amounts are digit strings.
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return None


def _parse_payment_entry(entry: dict[str, Any]) -> PaymentRecord | None:
    """Parse one account_tx entry. Returns None for non-Payment transactions."""
    fields = entry.get("tx_json") or entry.get("tx") or {}
    if fields.get("TransactionType") != "Payment":
        return None

    meta = entry.get("meta")
    amount = fields.get("Amount", fields.get("DeliverMax"))
    # rippled reports "unavailable" for payments from before 2014.
    if isinstance(meta, dict) and meta.get("delivered_amount", "unavailable") != "unavailable":
        amount = meta["delivered_amount"]

    memos: list[str] = []
    for wrapper in fields.get("Memos", []):
        memo_data = wrapper.get("Memo", {}).get("MemoData")
        if memo_data:
            memos.append(decode_memo_hex(memo_data))

    ledger_index = entry.get("ledger_index", fields.get("ledger_index"))

    return PaymentRecord(
        hash=entry.get("hash") or fields.get("hash", ""),
        account=fields["Account"],
        destination=fields["Destination"],
        amount_drops=_drops_or_none(amount),
        fee_drops=int(fields.get("Fee", 0)),
        sequence=int(fields.get("Sequence", 0)),
        last_ledger_sequence=int(fields.get("LastLedgerSequence", 0)),
        ledger_index=int(ledger_index) if ledger_index is not None else None,
        validated=bool(entry.get("validated", False)),
        destination_tag=fields.get("DestinationTag"),
        memos=tuple(memos),
    )
