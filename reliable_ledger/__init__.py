"""
reliable-ledger — deterministic transaction submission for the XRP Ledger.

See ``reliable_ledger.xrpl`` for the public API.
"""

__version__ = "0.1.0"
