"""
LedgerBootstrap -- Build a LedgerState by replaying a transaction log.

Responsibility:
    Turns a (Genesis, transactions) pair into a fully replayed LedgerState,
    and reads that pair from a ledger directory (genesis.json + tx.db).

Architecture position:
    Kernel > Services -- the only layer that touches the filesystem.
    Parsing is delegated to ledger_kernel.domain.record_parser; transaction
    semantics to LedgerState.apply().

Invariants enforced:
    - Transactions are applied strictly in log order.
    - Replay stops at the first failing transaction; nothing after it is
      attempted and no partial state is returned.
    - Input files are read completely before any parsing or replay.

Failure modes:
    - LedgerSourceNotFoundError  when genesis or the transaction log is missing
    - MalformedGenesisError / MalformedTransactionError  from parsing, or when
      a file is not valid UTF-8
    - AccountNotFoundError / InsufficientBalanceError / ArithmeticOverflowError
      from replay, with ``tx_index`` set to the failing position
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from ledger_kernel.domain.genesis import Genesis
from ledger_kernel.domain.ledger_state import LedgerState
from ledger_kernel.domain.record_parser import parse_genesis, parse_transactions
from ledger_kernel.domain.transactions import Transaction
from ledger_kernel.exceptions import (
    LedgerSourceNotFoundError,
    MalformedGenesisError,
    MalformedTransactionError,
    ReplayError,
)
from ledger_kernel.logging_config import LogContext, get_logger

logger = get_logger("services.ledger_bootstrap")

DEFAULT_GENESIS_FILENAME = "genesis.json"
DEFAULT_TRANSACTIONS_FILENAME = "tx.db"


def build(genesis: Genesis, transactions: Iterable[Transaction]) -> LedgerState:
    """
    Replay transactions over genesis and return the resulting state.

    Raises:
        ReplayError: the first transaction that cannot be applied, with
            ``tx_index`` set.
    """
    state = LedgerState(genesis, tuple(transactions))

    with LogContext.bind(chain_id=genesis.chain_id):
        logger.info(
            "ledger_bootstrap_started",
            extra={
                "account_count": len(genesis.balances),
                "transaction_count": len(state.transactions),
            },
        )

        for index, tx in enumerate(state.transactions):
            with LogContext.bind(tx_index=index):
                try:
                    state.apply(tx)
                except ReplayError as exc:
                    exc.at_index(index)
                    logger.error(
                        "replay_failed",
                        extra={"transaction": tx.describe()},
                        exc_info=True,
                    )
                    raise
                logger.debug("transaction_applied", extra={"kind": tx.kind.value})

        logger.info(
            "ledger_bootstrap_completed",
            extra={
                "transaction_count": len(state.transactions),
                "total_supply": state.total_supply(),
            },
        )
    return state


def _read_source(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except FileNotFoundError:
        raise LedgerSourceNotFoundError(str(path)) from None


def _decode_genesis(data: bytes, path: Path) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedGenesisError(
            f"{path} is not valid UTF-8 (byte {exc.start})"
        ) from exc


def _decode_transactions(data: bytes, path: Path) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        line_number = data.count(b"\n", 0, exc.start) + 1
        raise MalformedTransactionError(
            f"{path} is not valid UTF-8 (byte {exc.start})", line_number
        ) from exc


def open_ledger(
    database_dir: Path | str,
    *,
    genesis_filename: str = DEFAULT_GENESIS_FILENAME,
    transactions_filename: str = DEFAULT_TRANSACTIONS_FILENAME,
) -> LedgerState:
    """
    Load genesis and the transaction log from database_dir and replay them.

    Both files are read before anything is parsed.
    """
    database_dir = Path(database_dir)
    with LogContext.bind(source=str(database_dir)):
        genesis_path = database_dir / genesis_filename
        transactions_path = database_dir / transactions_filename
        genesis_data = _read_source(genesis_path)
        transactions_data = _read_source(transactions_path)

        genesis = parse_genesis(_decode_genesis(genesis_data, genesis_path))
        transactions = parse_transactions(
            _decode_transactions(transactions_data, transactions_path)
        )
        return build(genesis, transactions)
