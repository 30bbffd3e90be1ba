"""
Values -- Immutable, self-validating ledger value objects.

Responsibility:
    Provides the Account identifier and the u64 amount domain every balance
    and transaction value lives in, with checked arithmetic for credits and
    debits.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Imported by every other domain module. No outward dependencies.

Invariants enforced:
    - Amounts are ints in [0, U64_MAX]; bool is not an amount.
    - Checked arithmetic never wraps: a credit past U64_MAX and a debit
      below zero are reported, never silently truncated.

Failure modes:
    - TypeError on construction with a non-str account id or non-int amount
    - ValueError on amounts outside [0, U64_MAX]
    - AmountOverflow / AmountUnderflow from checked_add / checked_sub
"""

from __future__ import annotations

from dataclasses import dataclass

U64_MAX = 2**64 - 1


class AmountOverflow(ArithmeticError):
    """Addition left the u64 range."""


class AmountUnderflow(ArithmeticError):
    """Subtraction went below zero."""


@dataclass(frozen=True, slots=True)
class Account:
    """
    Opaque account identifier.

    Contract:
        Wraps a string id. Two accounts are equal exactly when their ids are
        equal; no normalization is applied.

    Guarantees:
        - Immutable and hashable (frozen dataclass with slots)
        - str(account) is the raw id
    """

    id: str

    def __post_init__(self) -> None:
        if not isinstance(self.id, str):
            raise TypeError(f"account id must be str, got {type(self.id).__name__}")

    @classmethod
    def of(cls, value: Account | str) -> Account:
        """Coerce a raw id or an existing Account."""
        if isinstance(value, Account):
            return value
        return cls(value)

    def __str__(self) -> str:
        return self.id

    def __repr__(self) -> str:
        return f"Account({self.id!r})"


def validate_amount(value: object, field_name: str = "value") -> int:
    """
    Check that value is a u64 amount and return it.

    Raises:
        TypeError: value is not an int (bool included).
        ValueError: value is negative or above U64_MAX.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{field_name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{field_name} must be non-negative, got {value}")
    if value > U64_MAX:
        raise ValueError(f"{field_name} exceeds u64 range: {value}")
    return value


def checked_add(balance: int, value: int) -> int:
    result = balance + value
    if result > U64_MAX:
        raise AmountOverflow(f"{balance} + {value} exceeds {U64_MAX}")
    return result


def checked_sub(balance: int, value: int) -> int:
    if value > balance:
        raise AmountUnderflow(f"{balance} - {value} is negative")
    return balance - value
