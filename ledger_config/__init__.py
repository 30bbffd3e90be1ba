"""
ledger_config -- single public entrypoint for ledger configuration.

Responsibility:
    Provides the ONLY way to obtain configuration at runtime through
    ``get_active_config()``. Scripts never read YAML files or environment
    variables themselves.

Architecture position:
    Configuration sits above ``ledger_kernel``. The kernel never imports
    from ``ledger_config``; scripts pass resolved values (directory, file
    names, log level) into kernel calls.

Failure modes:
    - ``FileNotFoundError`` -- the selected configuration file is missing.
    - ``ConfigError`` -- the file does not describe a ledger configuration.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from ledger_config.loader import load_config
from ledger_config.schema import ConfigError, LedgerConfig

_logger = logging.getLogger("ledger_kernel.config")

_DEFAULT_CONFIG_PATH = Path(__file__).parent / "sets" / "default.yaml"

CONFIG_ENV_VAR = "LEDGER_CONFIG"


def get_active_config(config_path: Path | str | None = None) -> LedgerConfig:
    """The ONLY public configuration entrypoint.

    Resolution order: explicit ``config_path``, then the ``LEDGER_CONFIG``
    environment variable, then ``ledger_config/sets/default.yaml``.

    Raises:
        FileNotFoundError: If the selected file does not exist.
        ConfigError: If the file has the wrong shape.
    """
    if config_path is None:
        config_path = os.environ.get(CONFIG_ENV_VAR) or _DEFAULT_CONFIG_PATH

    config = load_config(Path(config_path))

    _logger.info(
        "ledger_config_loaded",
        extra={
            "config_path": str(config_path),
            "database_dir": str(config.database_dir),
            "checksum": config.checksum,
        },
    )
    return config


__all__ = [
    "CONFIG_ENV_VAR",
    "ConfigError",
    "LedgerConfig",
    "get_active_config",
]
