#!/usr/bin/env python3
"""
Replay a ledger directory and print its transactions and balances.

Usage:
    python3 scripts/view_ledger.py
    python3 scripts/view_ledger.py path/to/database
    python3 scripts/view_ledger.py --config ledger.yaml --log-level DEBUG

The ledger directory holds genesis.json and tx.db (JSON Lines). When no
directory is given, the configured database_dir is used.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import TextIO

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))


def render(state, out: TextIO) -> None:
    """Print every transaction in log order, then every balance."""
    for line in state.describe_transactions():
        print(line, file=out)
    for account, balance in state.iter_balances():
        print(f"{account}: {balance}", file=out)


def main(argv: list[str] | None = None, out: TextIO | None = None) -> int:
    import yaml

    from ledger_config import ConfigError, get_active_config
    from ledger_kernel.exceptions import LedgerKernelError
    from ledger_kernel.logging_config import configure_logging
    from ledger_kernel.services.ledger_bootstrap import open_ledger

    parser = argparse.ArgumentParser(
        description="Replay a genesis + transaction log and print the result.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "database_dir",
        nargs="?",
        help="Ledger directory (default: database_dir from configuration)",
    )
    parser.add_argument(
        "--config",
        help="YAML configuration file (default: $LEDGER_CONFIG or the bundled default)",
    )
    parser.add_argument(
        "--log-level",
        help="Override the configured log level",
    )
    args = parser.parse_args(argv)
    out = out or sys.stdout

    try:
        config = get_active_config(args.config)
    except (FileNotFoundError, ConfigError, yaml.YAMLError) as exc:
        print(f"  ERROR: {exc}", file=sys.stderr)
        return 1

    level = (args.log_level or config.log_level).upper()
    configure_logging(level=getattr(logging, level, logging.WARNING))

    database_dir = Path(args.database_dir) if args.database_dir else config.database_dir

    try:
        state = open_ledger(
            database_dir,
            genesis_filename=config.genesis_filename,
            transactions_filename=config.transactions_filename,
        )
    except LedgerKernelError as exc:
        print(f"  ERROR [{exc.code}]: {exc}", file=sys.stderr)
        return 1

    render(state, out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
