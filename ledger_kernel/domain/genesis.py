"""
Genesis -- The trusted balance snapshot every replay starts from.

Responsibility:
    Holds the chain metadata (carried opaquely) and the initial balance of
    every account known to the ledger.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - balances is read-only after construction (MappingProxyType over a copy)
    - every key is an Account, every balance a u64 amount

Failure modes:
    - TypeError / ValueError on construction with bad metadata or balances
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from ledger_kernel.domain.values import Account, validate_amount


@dataclass(frozen=True)
class Genesis:
    """
    Initial ledger snapshot.

    Contract:
        genesis_time and chain_id are not interpreted by the kernel. Account
        order in balances follows the order given at construction.

    Guarantees:
        - Immutable: frozen dataclass with a read-only balances mapping
        - Caller-side mutation of the source mapping has no effect
    """

    genesis_time: str
    chain_id: str
    balances: Mapping[Account, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in ("genesis_time", "chain_id"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise TypeError(f"{name} must be str, got {type(value).__name__}")

        frozen: dict[Account, int] = {}
        for account, balance in self.balances.items():
            key = Account.of(account)
            frozen[key] = validate_amount(balance, f"balance of {key}")
        object.__setattr__(self, "balances", MappingProxyType(frozen))

    @property
    def total_supply(self) -> int:
        """Sum of all genesis balances."""
        return sum(self.balances.values())
