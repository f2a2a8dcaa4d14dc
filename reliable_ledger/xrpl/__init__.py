"""
XRPL backend for reliable-ledger.

Public API:

    Reliable submission:
        - ``ReliableSubmissionClient`` — decorates a LedgerClient so that
          ``send()`` blocks until the transaction validates or expires.

    Protocols (for dependency injection):
        - ``LedgerClient`` — network boundary (send, status, balance, history).
        - ``AddressResolver`` — X-address → classic address.
        - ``XRPLSigner`` — secrets boundary (sign unsigned tx dict).
        - ``JsonRpcTransport`` — injectable transport for JSON-RPC.

    Result types:
        - ``RawTransactionStatus``, ``TransactionStatus``, ``PaymentRecord``.
        - ``SignResult`` — signer result type.

    Errors:
        - ``LedgerError`` and its closed set of subclasses, each with an
          ``ErrorCode``.
        - ``classify_engine_result()`` — XRPL engine result → ErrorCode.

    Concrete implementations:
        - ``JsonRpcClient`` — rippled JSON-RPC LedgerClient.
        - ``HttpxTransport`` — default httpx-based transport.
        - ``XAddressResolver`` — xrpl-py address codec resolver.
        - ``LocalWalletSigner`` — xrpl-py Wallet signer.

    Configuration:
        - ``SubmissionConfig`` — polling interval, LastLedgerSequence offset,
          request timeout.
"""

from reliable_ledger.xrpl.address import AddressResolver, XAddressResolver
from reliable_ledger.xrpl.client import (
    Amount,
    LedgerClient,
    PaymentRecord,
    RawTransactionStatus,
    TransactionStatus,
)
from reliable_ledger.xrpl.config import DEFAULT_CONFIG, SubmissionConfig
from reliable_ledger.xrpl.errors import (
    AccountNotFoundError,
    AddressResolutionError,
    ErrorCode,
    ExpiryError,
    LedgerError,
    SubmissionError,
    UnboundedFinalityError,
    UpstreamError,
    classify_engine_result,
)
from reliable_ledger.xrpl.jsonrpc_client import JsonRpcClient, payment_status_from_raw
from reliable_ledger.xrpl.reliable import ReliableSubmissionClient
from reliable_ledger.xrpl.signer import LocalWalletSigner, SignResult, XRPLSigner
from reliable_ledger.xrpl.transport import HttpxTransport, JsonRpcTransport
from reliable_ledger.xrpl.tx import plan_payment

__all__ = [
    "AccountNotFoundError",
    "AddressResolutionError",
    "AddressResolver",
    "Amount",
    "DEFAULT_CONFIG",
    "ErrorCode",
    "ExpiryError",
    "HttpxTransport",
    "JsonRpcClient",
    "JsonRpcTransport",
    "LedgerClient",
    "LedgerError",
    "LocalWalletSigner",
    "PaymentRecord",
    "RawTransactionStatus",
    "ReliableSubmissionClient",
    "SignResult",
    "SubmissionConfig",
    "SubmissionError",
    "TransactionStatus",
    "UnboundedFinalityError",
    "UpstreamError",
    "XAddressResolver",
    "XRPLSigner",
    "classify_engine_result",
    "payment_status_from_raw",
    "plan_payment",
]
