"""
XRPL Payment builder.

Builds an unsigned Payment transaction dict. Pure and deterministic: no
secrets, no network calls. Network-derived fields (Sequence, Fee,
LastLedgerSequence) are passed in by the caller, which reads them from
the ledger at submit time.

The builder enforces:
    - TransactionType == "Payment"
    - Amount is a positive integral number of drops, serialized as a string
    - LastLedgerSequence >= 1 (a transaction without one has unbounded
      finality and cannot be reliably tracked)
    - At most one memo entry
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from reliable_ledger.xrpl.client import Amount

# Memo type attached to plain-text memos.
MEMO_TYPE = "text/plain"

# Hex-encoded memo type for the XRPL MemoType field.
MEMO_TYPE_HEX = MEMO_TYPE.encode("utf-8").hex().upper()

# Payment flag: deliver less than Amount if paths run dry.
TF_PARTIAL_PAYMENT = 0x00020000


def normalize_drops(amount: Amount) -> str:
    """Normalize an amount of drops to its XRPL string form.

    Raises:
        ValueError: If the amount is not a positive integer.
    """
    if isinstance(amount, bool):
        raise ValueError(f"amount must be a number of drops, got: {amount!r}")
    try:
        value = Decimal(str(amount).strip())
    except InvalidOperation as exc:
        raise ValueError(f"amount must be a number of drops, got: {amount!r}") from exc
    if not value.is_finite() or value != value.to_integral_value():
        raise ValueError(f"amount must be an integral number of drops, got: {amount!r}")
    if value <= 0:
        raise ValueError(f"amount must be positive, got: {amount!r}")
    return str(int(value))


def encode_memo_hex(memo: str) -> str:
    """Hex-encode a text memo for the XRPL MemoData field."""
    return memo.encode("utf-8").hex().upper()


def decode_memo_hex(memo_hex: str) -> str:
    """Decode a MemoData hex string back to text.

    Undecodable bytes are replaced rather than raising — memos written
    by other software need not be UTF-8.
    """
    return bytes.fromhex(memo_hex).decode("utf-8", errors="replace")


def plan_payment(
    account: str,
    destination: str,
    amount_drops: Amount,
    *,
    sequence: int,
    fee_drops: str,
    last_ledger_sequence: int,
    destination_tag: int | None = None,
    memo: str | None = None,
) -> dict[str, object]:
    """Build an unsigned Payment transaction dict.

    Args:
        account: Classic address of the sender.
        destination: Classic address of the recipient.
        amount_drops: Amount in drops.
        sequence: Sender's next account sequence.
        fee_drops: Transaction fee in drops.
        last_ledger_sequence: Ledger past which the payment expires.
        destination_tag: Optional destination tag.
        memo: Optional text memo. Empty strings are treated as no memo.

    Returns:
        Unsigned transaction dict in XRPL JSON format.

    Raises:
        ValueError: If any field is empty or out of range.
    """
    if not account:
        raise ValueError("account must be non-empty")
    if not destination:
        raise ValueError("destination must be non-empty")
    if sequence < 0:
        raise ValueError(f"sequence must be >= 0, got: {sequence}")
    if last_ledger_sequence < 1:
        raise ValueError(
            f"last_ledger_sequence must be >= 1, got: {last_ledger_sequence}"
        )

    tx: dict[str, object] = {
        "TransactionType": "Payment",
        "Account": account,
        "Destination": destination,
        "Amount": normalize_drops(amount_drops),
        "Fee": normalize_drops(fee_drops),
        "Sequence": sequence,
        "LastLedgerSequence": last_ledger_sequence,
        "Flags": 0,
    }
    if destination_tag is not None:
        tx["DestinationTag"] = destination_tag
    if memo:
        tx["Memos"] = [
            {
                "Memo": {
                    "MemoType": MEMO_TYPE_HEX,
                    "MemoData": encode_memo_hex(memo),
                }
            }
        ]
    return tx
