"""
Ledger Kernel

A genesis-replay balance ledger:
- Immutable genesis snapshot and transaction log
- Deterministic, in-order replay
- Atomic transfer / generate application
- Checked u64 balance arithmetic
"""

__version__ = "0.1.0"
