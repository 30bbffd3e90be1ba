"""
Configuration Loader (``ledger_config.loader``).

Responsibility
--------------
Loads a YAML configuration file and parses it into a frozen
``LedgerConfig``. Runtime callers go through
``ledger_config.get_active_config()`` instead of calling this directly.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Wrong shape (non-mapping, unknown keys, bad types, unknown log level)
  -> ``ConfigError``.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from ledger_config.schema import LOG_LEVELS, ConfigError, LedgerConfig

_STRING_KEYS: tuple[str, ...] = (
    "database_dir",
    "genesis_filename",
    "transactions_filename",
    "log_level",
)


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ConfigError: if the document is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(str(path), f"expected a mapping, got {type(data).__name__}")
    return data


def compute_checksum(data: dict[str, Any]) -> str:
    """Deterministic SHA-256 over the parsed configuration."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def parse_config(data: dict[str, Any], source: str) -> LedgerConfig:
    """
    Parse a LedgerConfig from a dict.

    A relative ``database_dir`` stays relative, i.e. it is taken from the
    working directory of the process that opens the ledger.
    """
    ledger = data.get("ledger", data)
    if not isinstance(ledger, dict):
        raise ConfigError(source, "'ledger' must be a mapping")

    unknown = sorted(set(ledger) - set(_STRING_KEYS))
    if unknown:
        raise ConfigError(source, f"unknown key(s): {', '.join(unknown)}")

    for key in _STRING_KEYS:
        if key in ledger and not isinstance(ledger[key], str):
            raise ConfigError(source, f"'{key}' must be a string")

    if "database_dir" not in ledger:
        raise ConfigError(source, "missing key: database_dir")

    log_level = ledger.get("log_level", "INFO").upper()
    if log_level not in LOG_LEVELS:
        raise ConfigError(source, f"unknown log_level {ledger['log_level']!r}")

    return LedgerConfig(
        database_dir=Path(ledger["database_dir"]),
        genesis_filename=ledger.get("genesis_filename", "genesis.json"),
        transactions_filename=ledger.get("transactions_filename", "tx.db"),
        log_level=log_level,
        checksum=compute_checksum(data),
    )


def load_config(path: Path) -> LedgerConfig:
    """Load and parse one configuration file."""
    path = Path(path)
    return parse_config(load_yaml_file(path), str(path))
