"""RecordParser -- Pure decoding of genesis and transaction log text."""

from __future__ import annotations

import json
from typing import Any

from ledger_kernel.domain.genesis import Genesis
from ledger_kernel.domain.transactions import (
    Generate,
    Transaction,
    TransactionKind,
    Transfer,
)
from ledger_kernel.exceptions import MalformedGenesisError, MalformedTransactionError
from ledger_kernel.logging_config import get_logger

logger = get_logger("domain.record_parser")

GENESIS_FIELDS: tuple[str, ...] = ("genesis_time", "chain_id", "balances")

# Required fields per discriminator, excluding "type" itself.
TRANSACTION_FIELDS: dict[TransactionKind, tuple[str, ...]] = {
    TransactionKind.TRANSFER: ("from", "to", "value"),
    TransactionKind.GENERATE: ("to", "value"),
}


class _DuplicateKey(ValueError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"duplicate key {key!r}")


def _reject_duplicates(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    obj: dict[str, Any] = {}
    for key, value in pairs:
        if key in obj:
            raise _DuplicateKey(key)
        obj[key] = value
    return obj


def _require_str(record: dict[str, Any], name: str) -> str:
    value = record[name]
    if not isinstance(value, str):
        raise TypeError(f"field {name!r} must be a string, got {type(value).__name__}")
    return value


# ---------------------------------------------------------------------------
# Genesis
# ---------------------------------------------------------------------------


def parse_genesis(text: str) -> Genesis:
    """
    Decode a genesis JSON document.

    Unknown top-level fields are ignored. Account keys inside ``balances``
    must be unique.

    Raises:
        MalformedGenesisError: text is not a genesis record.
    """
    try:
        data = json.loads(text, object_pairs_hook=_reject_duplicates)
    except _DuplicateKey as exc:
        raise MalformedGenesisError(str(exc)) from exc
    except json.JSONDecodeError as exc:
        raise MalformedGenesisError(f"invalid JSON: {exc.msg}") from exc
    except ValueError as exc:
        # e.g. an integer literal past the interpreter's digit limit
        raise MalformedGenesisError(f"invalid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise MalformedGenesisError(
            f"expected a JSON object, got {type(data).__name__}"
        )

    missing = [name for name in GENESIS_FIELDS if name not in data]
    if missing:
        raise MalformedGenesisError(f"missing field(s): {', '.join(missing)}")

    balances = data["balances"]
    if not isinstance(balances, dict):
        raise MalformedGenesisError(
            f"field 'balances' must be an object, got {type(balances).__name__}"
        )

    try:
        genesis = Genesis(
            genesis_time=_require_str(data, "genesis_time"),
            chain_id=_require_str(data, "chain_id"),
            balances=balances,
        )
    except (TypeError, ValueError) as exc:
        raise MalformedGenesisError(str(exc)) from exc

    logger.debug(
        "genesis_parsed",
        extra={"chain_id": genesis.chain_id, "account_count": len(genesis.balances)},
    )
    return genesis


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------


def parse_transaction_record(
    record: Any,
    line_number: int | None = None,
) -> Transaction:
    """
    Decode one already-deserialized transaction record.

    Raises:
        MalformedTransactionError: record is not a Transfer or Generate.
    """
    if not isinstance(record, dict):
        raise MalformedTransactionError(
            f"expected a JSON object, got {type(record).__name__}", line_number
        )

    tag = record.get("type")
    if tag is None:
        raise MalformedTransactionError("missing field 'type'", line_number)
    try:
        kind = TransactionKind(tag)
    except ValueError:
        raise MalformedTransactionError(
            f"unknown transaction type {tag!r}", line_number
        ) from None

    missing = [name for name in TRANSACTION_FIELDS[kind] if name not in record]
    if missing:
        raise MalformedTransactionError(
            f"{kind.value}: missing field(s): {', '.join(missing)}", line_number
        )

    try:
        match kind:
            case TransactionKind.TRANSFER:
                return Transfer(
                    from_account=_require_str(record, "from"),
                    to_account=_require_str(record, "to"),
                    value=record["value"],
                )
            case TransactionKind.GENERATE:
                return Generate(
                    to_account=_require_str(record, "to"),
                    value=record["value"],
                )
    except (TypeError, ValueError) as exc:
        raise MalformedTransactionError(f"{kind.value}: {exc}", line_number) from exc

    raise AssertionError(f"unhandled transaction kind {kind!r}")


def parse_transactions(text: str) -> tuple[Transaction, ...]:
    """
    Decode a JSON Lines transaction log, one record per line, in order.

    Whitespace-only lines are skipped; line numbers in errors are 1-based
    and count every line of the input.

    Raises:
        MalformedTransactionError: a line is not a transaction record.
    """
    transactions: list[Transaction] = []
    # Records end at "\n" only; JSON strings may hold other line separators.
    for line_number, line in enumerate(text.split("\n"), start=1):
        line = line.rstrip("\r")
        if not line.strip():
            continue
        try:
            record = json.loads(line)
        except json.JSONDecodeError as exc:
            raise MalformedTransactionError(
                f"invalid JSON: {exc.msg}", line_number
            ) from exc
        except ValueError as exc:
            raise MalformedTransactionError(f"invalid JSON: {exc}", line_number) from exc
        transactions.append(parse_transaction_record(record, line_number))

    logger.debug("transactions_parsed", extra={"transaction_count": len(transactions)})
    return tuple(transactions)
