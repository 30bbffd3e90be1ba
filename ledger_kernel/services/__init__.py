"""Services for the ledger kernel (bootstrap side)."""

from ledger_kernel.services.ledger_bootstrap import build, open_ledger

__all__ = [
    "build",
    "open_ledger",
]
