"""
Pytest fixtures for the ledger kernel test suite.

Provides:
- Genesis / LedgerState builders
- An on-disk ledger directory writer
- Structured log capture for the ledger_kernel logger hierarchy
"""

import json
import logging
from collections.abc import Callable, Iterable
from io import StringIO
from pathlib import Path

import pytest

from ledger_kernel.domain.genesis import Genesis
from ledger_kernel.domain.ledger_state import LedgerState
from ledger_kernel.domain.transactions import Transaction
from ledger_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)

GENESIS_TIME = "2021-01-01T00:00:00Z"
CHAIN_ID = "testnet"


def make_genesis(balances: dict[str, int] | None = None) -> Genesis:
    if balances is None:
        balances = {"alice": 1000, "bob": 1000}
    return Genesis(genesis_time=GENESIS_TIME, chain_id=CHAIN_ID, balances=balances)


@pytest.fixture
def genesis() -> Genesis:
    """alice: 1000, bob: 1000."""
    return make_genesis()


@pytest.fixture
def state(genesis) -> LedgerState:
    """Unreplayed state over the default genesis."""
    return LedgerState(genesis)


@pytest.fixture
def write_ledger(tmp_path) -> Callable[..., Path]:
    """
    Write genesis.json and tx.db into a fresh directory.

    ``transactions`` may be Transaction objects, raw dicts, or raw strings
    (written verbatim as one line each).
    """

    def _write(
        balances: dict[str, int] | None = None,
        transactions: Iterable[Transaction | dict | str] = (),
        genesis_text: str | None = None,
    ) -> Path:
        db = tmp_path / "database"
        db.mkdir(exist_ok=True)
        if genesis_text is None:
            genesis_text = json.dumps(
                {
                    "genesis_time": GENESIS_TIME,
                    "chain_id": CHAIN_ID,
                    "balances": balances if balances is not None else {"alice": 1000, "bob": 1000},
                }
            )
        (db / "genesis.json").write_text(genesis_text, encoding="utf-8")

        lines = []
        for tx in transactions:
            if isinstance(tx, str):
                lines.append(tx)
            elif isinstance(tx, dict):
                lines.append(json.dumps(tx))
            else:
                lines.append(json.dumps(tx.to_record()))
        (db / "tx.db").write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return db

    return _write


@pytest.fixture
def log_stream():
    """Route ledger_kernel logs through the JSON formatter into a StringIO."""
    reset_logging()
    LogContext.clear()
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    configure_logging(handler=handler, level=logging.DEBUG)
    yield stream
    LogContext.clear()
    reset_logging()


def parse_logs(stream: StringIO) -> list[dict]:
    return [json.loads(line) for line in stream.getvalue().splitlines() if line]
