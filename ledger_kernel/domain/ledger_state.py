"""
LedgerState -- Current balances and the transaction history behind them.

Responsibility:
    Owns the working balance map, applies transactions to it one at a time,
    and answers balance queries.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Built by ledger_kernel.services.ledger_bootstrap, which is the only
    caller of apply() outside of tests.

Invariants enforced:
    - The balance map equals genesis with every transaction in
      ``transactions`` applied in order.
    - No balance is ever negative or above U64_MAX.
    - apply() is atomic: every touched entry is read and validated, the new
      values are computed, and only then are they written. A failing apply()
      leaves the map exactly as it was.
    - Queries hand out copies; the internal dict never escapes.

Failure modes:
    - AccountNotFoundError when a transaction names an unknown account
    - InsufficientBalanceError when a transfer exceeds the source balance
    - ArithmeticOverflowError when a credit would leave the u64 range
    - TypeError when apply() is given something that is not a Transaction
"""

from __future__ import annotations

from collections.abc import Iterator

from ledger_kernel.domain.genesis import Genesis
from ledger_kernel.domain.transactions import Generate, Transaction, Transfer
from ledger_kernel.domain.values import (
    Account,
    AmountOverflow,
    checked_add,
    checked_sub,
)
from ledger_kernel.exceptions import (
    AccountNotFoundError,
    ArithmeticOverflowError,
    InsufficientBalanceError,
)


class LedgerState:
    """
    Replayed ledger.

    Contract:
        Constructed from a genesis snapshot and the transaction tuple that
        will be (or was) replayed against it. The constructor only copies
        genesis balances; replay is driven by
        ledger_kernel.services.ledger_bootstrap.build().

    Non-goals:
        - No persistence of mutated balances
        - No concurrent writers; apply() is not synchronized
    """

    def __init__(
        self,
        genesis: Genesis,
        transactions: tuple[Transaction, ...] = (),
    ) -> None:
        self._genesis = genesis
        self._transactions = tuple(transactions)
        self._balances: dict[Account, int] = dict(genesis.balances)

    @property
    def genesis(self) -> Genesis:
        return self._genesis

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        """Transactions in original log order."""
        return self._transactions

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_balance(self, account: Account | str) -> int | None:
        """Current balance, or None if the account is not in the ledger."""
        return self._balances.get(Account.of(account))

    def balances(self) -> dict[Account, int]:
        """Copy of the current balance map."""
        return dict(self._balances)

    def iter_balances(self) -> Iterator[tuple[Account, int]]:
        """(account, balance) pairs in genesis order."""
        yield from list(self._balances.items())

    def total_supply(self) -> int:
        return sum(self._balances.values())

    def describe_transactions(self) -> list[str]:
        return [tx.describe() for tx in self._transactions]

    # ------------------------------------------------------------------
    # Application
    # ------------------------------------------------------------------

    def apply(self, tx: Transaction) -> None:
        """
        Apply one transaction to the balance map.

        Preconditions:
            - tx is a Transfer or a Generate.

        Postconditions:
            - On success the map reflects tx; on failure it is unchanged.

        Raises:
            AccountNotFoundError: an account named by tx is missing.
            InsufficientBalanceError: transfer value exceeds the source balance.
            ArithmeticOverflowError: the credited balance would exceed U64_MAX.
            TypeError: tx is not a known transaction kind.
        """
        match tx:
            case Transfer(from_account=src, to_account=dst, value=value):
                updates = self._plan_transfer(src, dst, value)
            case Generate(to_account=dst, value=value):
                updates = self._plan_generate(dst, value)
            case _:
                raise TypeError(f"Unknown transaction kind: {type(tx).__name__}")

        self._balances.update(updates)

    def _require(self, account: Account, side: str) -> int:
        balance = self._balances.get(account)
        if balance is None:
            raise AccountNotFoundError(account.id, side)
        return balance

    def _credit(self, account: Account, balance: int, value: int) -> int:
        try:
            return checked_add(balance, value)
        except AmountOverflow:
            raise ArithmeticOverflowError(account.id, balance, value) from None

    def _plan_transfer(
        self, src: Account, dst: Account, value: int
    ) -> dict[Account, int]:
        src_balance = self._require(src, "from")
        dst_balance = self._require(dst, "to")

        if value > src_balance:
            raise InsufficientBalanceError(src.id, src_balance, value)

        # Self-transfer: checks above still apply, nothing moves.
        if src == dst:
            return {}

        return {
            src: checked_sub(src_balance, value),
            dst: self._credit(dst, dst_balance, value),
        }

    def _plan_generate(self, dst: Account, value: int) -> dict[Account, int]:
        dst_balance = self._require(dst, "to")
        return {dst: self._credit(dst, dst_balance, value)}

    def __repr__(self) -> str:
        return (
            f"LedgerState(chain_id={self._genesis.chain_id!r}, "
            f"accounts={len(self._balances)}, "
            f"transactions={len(self._transactions)})"
        )
