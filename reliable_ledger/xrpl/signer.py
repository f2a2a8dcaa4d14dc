"""
XRPL signer protocol — the secrets boundary.

Defines the interface the ledger client uses to sign transactions.
The client never sees private keys directly — it passes an unsigned
transaction dict, and the signer returns a signed blob.

The signer also stands in for the sending wallet: ``account`` is the
address (classic or X-address) the wallet reports, and ``key_id`` is a
public identifier that can be logged without leaking secrets.

Concrete implementations:
    - LocalWalletSigner (xrpl-py Wallet, keys held in process)
    - FakeSigner (tests)
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from xrpl.core.binarycodec import encode, encode_for_signing
from xrpl.core.keypairs import sign as keypairs_sign
from xrpl.wallet import Wallet

# Hash prefix for signed transactions ("TXN\0").
_TXN_HASH_PREFIX = "54584E00"


@dataclass(frozen=True)
class SignResult:
    """Result of signing a transaction.

    Attributes:
        signed_tx_blob_hex: Hex-encoded signed transaction blob,
            ready for submission.
        tx_hash: Transaction hash (64 uppercase hex chars).
        key_id: Public identifier of the signing key used.
            Safe for logging. Never a secret.
    """

    signed_tx_blob_hex: str
    tx_hash: str
    key_id: str


@runtime_checkable
class XRPLSigner(Protocol):
    """Interface for XRPL transaction signing.

    Properties:
        account: The address the wallet reports (classic or X-address).
        key_id: Public identifier of the signing key (safe for logging).
    """

    @property
    def account(self) -> str:
        """Address associated with this signer."""
        ...

    @property
    def key_id(self) -> str:
        """Public identifier of the signing key (safe for logging)."""
        ...

    def sign(self, tx_dict: dict[str, object]) -> SignResult:
        """Sign an unsigned XRPL transaction dict.

        Args:
            tx_dict: Unsigned transaction dict with Sequence, Fee and
                LastLedgerSequence already filled in.

        Returns:
            SignResult with signed blob hex, tx_hash, and key_id.

        Raises:
            ValueError: If the transaction dict is malformed.
        """
        ...


def transaction_hash(signed_tx_blob_hex: str) -> str:
    """Compute the XRPL hash of a signed transaction blob.

    SHA-512Half over the "TXN\\0" prefix followed by the blob bytes.
    """
    digest = hashlib.sha512(bytes.fromhex(_TXN_HASH_PREFIX + signed_tx_blob_hex))
    return digest.hexdigest()[:64].upper()


class LocalWalletSigner:
    """Signs with an in-process xrpl-py Wallet.

    For development and tests against standalone or test networks.

    Args:
        wallet: xrpl-py Wallet holding the key pair.
        account: Address to report instead of the wallet's classic
            address (e.g. the wallet's X-address).
    """

    def __init__(self, wallet: Wallet, account: str | None = None) -> None:
        self._wallet = wallet
        self._account = account or wallet.address

    @classmethod
    def from_seed(cls, seed: str, account: str | None = None) -> LocalWalletSigner:
        """Build a signer from a family seed (``s...``)."""
        return cls(Wallet.from_seed(seed), account=account)

    @property
    def account(self) -> str:
        return self._account

    @property
    def key_id(self) -> str:
        return self._wallet.public_key

    def sign(self, tx_dict: dict[str, object]) -> SignResult:
        if tx_dict.get("Account") != self._wallet.address:
            raise ValueError(
                f"transaction Account {tx_dict.get('Account')!r} does not match "
                f"signer {self._wallet.address!r}"
            )

        tx = dict(tx_dict)
        tx["SigningPubKey"] = self._wallet.public_key
        signing_bytes = bytes.fromhex(encode_for_signing(tx))
        tx["TxnSignature"] = keypairs_sign(signing_bytes, self._wallet.private_key)

        blob = encode(tx)
        return SignResult(
            signed_tx_blob_hex=blob,
            tx_hash=transaction_hash(blob),
            key_id=self.key_id,
        )
