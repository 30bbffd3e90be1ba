"""
Transactions -- The closed set of ledger transaction kinds.

Responsibility:
    Defines Transfer and Generate, the only two things a transaction log can
    contain, plus their console rendering and wire-record form.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - Transaction is a closed union: Transfer | Generate. Consumers dispatch
      with ``match`` and treat anything else as a programming error.
    - value is a u64 amount, validated at construction.
    - Instances are immutable; equality and hashing are structural.

Failure modes:
    - TypeError / ValueError on construction with bad accounts or values
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, TypeAlias

from ledger_kernel.domain.values import Account, validate_amount


class TransactionKind(str, Enum):
    """Wire discriminator of a transaction record (the ``type`` field)."""

    TRANSFER = "transfer"
    GENERATE = "generate"


@dataclass(frozen=True, slots=True)
class Transfer:
    """
    Move value from one existing account to another.

    Guarantees:
        - from_account / to_account are Account instances (str ids coerced)
        - value is within [0, U64_MAX]
    """

    kind: ClassVar[TransactionKind] = TransactionKind.TRANSFER

    from_account: Account
    to_account: Account
    value: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "from_account", Account.of(self.from_account))
        object.__setattr__(self, "to_account", Account.of(self.to_account))
        validate_amount(self.value)

    def describe(self) -> str:
        return (
            f'[TXN] "{self.from_account}" transferred "{self.value}" '
            f'coins to "{self.to_account}" account'
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "type": self.kind.value,
            "from": self.from_account.id,
            "to": self.to_account.id,
            "value": self.value,
        }

    def __str__(self) -> str:
        return self.describe()


@dataclass(frozen=True, slots=True)
class Generate:
    """
    Credit value to an existing account with no matching debit (minting).

    Guarantees:
        - to_account is an Account instance (str ids coerced)
        - value is within [0, U64_MAX]
    """

    kind: ClassVar[TransactionKind] = TransactionKind.GENERATE

    to_account: Account
    value: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "to_account", Account.of(self.to_account))
        validate_amount(self.value)

    def describe(self) -> str:
        return f'[GEN] generated "{self.value}" coins on "{self.to_account}" account'

    def to_record(self) -> dict[str, Any]:
        return {
            "type": self.kind.value,
            "to": self.to_account.id,
            "value": self.value,
        }

    def __str__(self) -> str:
        return self.describe()


Transaction: TypeAlias = Transfer | Generate

TRANSACTION_TYPES: dict[TransactionKind, type] = {
    TransactionKind.TRANSFER: Transfer,
    TransactionKind.GENERATE: Generate,
}
