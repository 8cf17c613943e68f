"""Serialize a StartupConfig to a temporary file the validator can read."""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import IO, Protocol, Tuple

import orjson

from .models import StartupConfig

logger = logging.getLogger(__name__)

CONFIG_FILE_PREFIX = "validator-config-"
CONFIG_FILE_SUFFIX = ".json"


class ConfigWriter(Protocol):
    """Writes a config and returns its path plus the handle keeping it alive."""

    def __call__(self, config: StartupConfig) -> Tuple[Path, IO[bytes]]: ...


def write_startup_config(config: StartupConfig) -> Tuple[Path, IO[bytes]]:
    """
    Write *config* as JSON to a named temporary file.

    The file is deleted when the returned handle is closed, so the caller must
    hold on to the handle until the launched process has read the file.

    Returns:
        Tuple of (path to the config file, open handle backing it)
    """
    payload = orjson.dumps(config.to_payload(), option=orjson.OPT_INDENT_2)
    handle = tempfile.NamedTemporaryFile(prefix=CONFIG_FILE_PREFIX, suffix=CONFIG_FILE_SUFFIX, delete=True)
    try:
        handle.write(payload)
        handle.flush()
    except OSError:
        handle.close()
        raise
    path = Path(handle.name)
    logger.debug("Wrote startup config to %s", path)
    return path, handle


__all__ = ["ConfigWriter", "write_startup_config"]
