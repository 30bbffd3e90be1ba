"""
Typed Exception Hierarchy for the Ledger Kernel.

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

All exceptions inherit from LedgerKernelError:

    LedgerKernelError (base)
    |
    +-- LoadError
    |   +-- LedgerSourceNotFoundError
    |   +-- MalformedGenesisError
    |   +-- MalformedTransactionError
    |
    +-- ReplayError
        +-- AccountNotFoundError
        +-- InsufficientBalanceError
        +-- ArithmeticOverflowError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Load            | LEDGER_SOURCE_NOT_FOUND     | genesis.json / tx.db missing
                | MALFORMED_GENESIS           | Genesis record has the wrong shape
                | MALFORMED_TRANSACTION       | A tx.db record has the wrong shape
----------------|-----------------------------|-----------------------------------------
Replay          | ACCOUNT_NOT_FOUND           | Transaction names an unknown account
                | INSUFFICIENT_BALANCE        | Transfer exceeds the source balance
                | ARITHMETIC_OVERFLOW         | Credit would exceed the u64 range
----------------|-----------------------------|-----------------------------------------

===============================================================================
HANDLING PATTERNS
===============================================================================

Every error is fatal to startup. Callers catch LedgerKernelError, report
``code`` plus the structured attributes, and refuse to serve queries:

    try:
        state = open_ledger(path)
    except MalformedTransactionError as e:
        log.error("bad record", extra={"line": e.line_number})
    except ReplayError as e:
        log.error("replay failed", extra={"code": e.code, "tx_index": e.tx_index})

Replay errors are raised by LedgerState.apply() without a position; the
bootstrap attaches ``tx_index`` before re-raising.
"""


class LedgerKernelError(Exception):
    """
    Base exception for all ledger kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "LEDGER_KERNEL_ERROR"


# Load-time exceptions


class LoadError(LedgerKernelError):
    """Base exception for errors raised while reading ledger inputs."""

    code: str = "LOAD_ERROR"


class LedgerSourceNotFoundError(LoadError):
    """A ledger input file does not exist."""

    code: str = "LEDGER_SOURCE_NOT_FOUND"

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Ledger source not found: {path}")


class MalformedGenesisError(LoadError):
    """Genesis text does not match the genesis record shape."""

    code: str = "MALFORMED_GENESIS"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Failed to parse genesis: {reason}")


class MalformedTransactionError(LoadError):
    """
    A transaction record does not match the Transfer/Generate shapes.

    line_number is 1-based and None when the record was decoded outside
    of a transaction log.
    """

    code: str = "MALFORMED_TRANSACTION"

    def __init__(self, reason: str, line_number: int | None = None):
        self.reason = reason
        self.line_number = line_number
        where = f" at line {line_number}" if line_number is not None else ""
        super().__init__(f"Failed to parse transaction{where}: {reason}")


# Replay exceptions


class ReplayError(LedgerKernelError):
    """
    Base exception for transactions that cannot be applied.

    tx_index is the 0-based position in the replayed log, filled in by
    the bootstrap. It stays None for a direct LedgerState.apply() call.
    """

    code: str = "REPLAY_ERROR"
    tx_index: int | None = None

    def at_index(self, tx_index: int) -> "ReplayError":
        """Record the log position of the failing transaction."""
        self.tx_index = tx_index
        return self


class AccountNotFoundError(ReplayError):
    """Transaction references an account absent from the balance map."""

    code: str = "ACCOUNT_NOT_FOUND"

    def __init__(self, account_id: str, side: str):
        self.account_id = account_id
        self.side = side
        super().__init__(f"[{side.capitalize()}] Account not found: {account_id}")


class InsufficientBalanceError(ReplayError):
    """Transfer value exceeds the balance of the source account."""

    code: str = "INSUFFICIENT_BALANCE"

    def __init__(self, account_id: str, balance: int, value: int):
        self.account_id = account_id
        self.balance = balance
        self.value = value
        super().__init__(
            f"Insufficient balance on {account_id}: "
            f"balance={balance}, requested={value}"
        )


class ArithmeticOverflowError(ReplayError):
    """Crediting an account would exceed the representable balance range."""

    code: str = "ARITHMETIC_OVERFLOW"

    def __init__(self, account_id: str, balance: int, value: int):
        self.account_id = account_id
        self.balance = balance
        self.value = value
        super().__init__(
            f"Balance overflow on {account_id}: {balance} + {value}"
        )
