"""
LedgerConfig schema.

The runtime configuration of a ledger reader: where the ledger directory
lives, what the two input files are called, and how loud logging is.
YAML files are parsed into this type by the loader.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

LOG_LEVELS: frozenset[str] = frozenset(
    {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
)


class ConfigError(ValueError):
    """Configuration file has the wrong shape."""

    code: str = "CONFIG_ERROR"

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid ledger configuration in {source}: {reason}")


@dataclass(frozen=True)
class LedgerConfig:
    """Resolved ledger configuration."""

    database_dir: Path
    genesis_filename: str = "genesis.json"
    transactions_filename: str = "tx.db"
    log_level: str = "INFO"
    checksum: str = ""
