"""
Tests for LocalWalletSigner.

Uses the well-known genesis seed (standalone-mode master account), so
no secret material is involved.

Test plan:
- account/key_id come from the wallet; account override honored
- sign(): blob decodes back to the tx with SigningPubKey and TxnSignature,
  input dict not mutated, hash is 64 uppercase hex and matches
  transaction_hash(blob), deterministic
- sign() rejects a tx for another account
"""

import re

import pytest
from xrpl.core.binarycodec import decode
from xrpl.wallet import Wallet

from reliable_ledger.xrpl.signer import LocalWalletSigner, XRPLSigner, transaction_hash
from reliable_ledger.xrpl.tx import plan_payment

GENESIS_SEED = "snoPBrXtMeMyMHUVTgbuqAfg1SUTb"
GENESIS_ACCOUNT = "rHb9CJAWyB4rj91VRWn96DkukG4bwdtyTh"
SAMPLE_DESTINATION = "rPT1Sjq2YGrBMTttX4GZHjKu9dyfzbpAYe"

_HASH_RE = re.compile(r"^[0-9A-F]{64}$")


def _tx(account: str = GENESIS_ACCOUNT) -> dict[str, object]:
    return plan_payment(
        account,
        SAMPLE_DESTINATION,
        1000,
        sequence=1,
        fee_drops="12",
        last_ledger_sequence=20,
        memo="hello",
    )


class TestIdentity:
    def test_account_is_classic_address(self) -> None:
        assert LocalWalletSigner.from_seed(GENESIS_SEED).account == GENESIS_ACCOUNT

    def test_account_override(self) -> None:
        signer = LocalWalletSigner.from_seed(GENESIS_SEED, account="XVoverride")
        assert signer.account == "XVoverride"

    def test_key_id_is_public_key(self) -> None:
        signer = LocalWalletSigner.from_seed(GENESIS_SEED)
        assert signer.key_id == Wallet.from_seed(GENESIS_SEED).public_key
        assert GENESIS_SEED not in signer.key_id

    def test_protocol(self) -> None:
        assert isinstance(LocalWalletSigner.from_seed(GENESIS_SEED), XRPLSigner)


class TestSign:
    def test_blob_round_trips_with_signature(self) -> None:
        signer = LocalWalletSigner.from_seed(GENESIS_SEED)
        result = signer.sign(_tx())
        decoded = decode(result.signed_tx_blob_hex)
        assert decoded["Account"] == GENESIS_ACCOUNT
        assert decoded["Destination"] == SAMPLE_DESTINATION
        assert decoded["LastLedgerSequence"] == 20
        assert decoded["SigningPubKey"] == signer.key_id
        assert decoded["TxnSignature"]

    def test_input_not_mutated(self) -> None:
        tx = _tx()
        LocalWalletSigner.from_seed(GENESIS_SEED).sign(tx)
        assert "TxnSignature" not in tx
        assert "SigningPubKey" not in tx

    def test_hash(self) -> None:
        result = LocalWalletSigner.from_seed(GENESIS_SEED).sign(_tx())
        assert _HASH_RE.match(result.tx_hash)
        assert result.tx_hash == transaction_hash(result.signed_tx_blob_hex)

    def test_deterministic(self) -> None:
        signer = LocalWalletSigner.from_seed(GENESIS_SEED)
        assert signer.sign(_tx()) == signer.sign(_tx())

    def test_rejects_foreign_account(self) -> None:
        with pytest.raises(ValueError):
            LocalWalletSigner.from_seed(GENESIS_SEED).sign(_tx(SAMPLE_DESTINATION))
