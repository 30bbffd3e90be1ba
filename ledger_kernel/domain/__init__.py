"""
Ledger Kernel Domain Layer - Pure functional core.

This layer contains:
- Value objects (Account, u64 amount helpers)
- Transactions (Transfer, Generate)
- Genesis snapshot
- LedgerState (balance map and transaction application)

No database, no file I/O, no clock.
"""

from ledger_kernel.domain.genesis import Genesis
from ledger_kernel.domain.ledger_state import LedgerState
from ledger_kernel.domain.transactions import (
    TRANSACTION_TYPES,
    Generate,
    Transaction,
    TransactionKind,
    Transfer,
)
from ledger_kernel.domain.values import U64_MAX, Account

__all__ = [
    "Account",
    "Generate",
    "Genesis",
    "LedgerState",
    "TRANSACTION_TYPES",
    "Transaction",
    "TransactionKind",
    "Transfer",
    "U64_MAX",
]
