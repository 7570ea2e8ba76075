"""
Configuration loader — where to scan and which library roots to check.

The prefix normally comes from the environment (MSYS2 shells export
``MSYSTEM_PREFIX``; everything else falls back to ``CMAKE_PREFIX_PATH``).
An optional ``cmake-index.yml`` can pin the prefix or change the list of
library directories.  Precedence, highest first:

    --prefix CLI flag  >  cmake-index.yml  >  MSYSTEM_PREFIX  >  CMAKE_PREFIX_PATH
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "cmake-index.yml"

# Checked in order; the first one set wins
PREFIX_ENV_VARS = ("MSYSTEM_PREFIX", "CMAKE_PREFIX_PATH")

# <prefix>/<dir>/cmake is a library root when it exists
LIBRARY_DIRS = ("lib", "lib32", "lib64", "share")


class ConfigError(Exception):
    """Raised when the index configuration file is invalid."""


class ScanConfig(BaseModel):
    """Everything the index builder needs to know before scanning."""

    prefix: Path | None = None
    library_dirs: list[str] = Field(default_factory=lambda: list(LIBRARY_DIRS))


def resolve_prefix(env: Mapping[str, str] | None = None) -> Path | None:
    """Return the installation prefix to scan, or None if unconfigured.

    The variable's whole value is taken as one directory; an empty value
    counts as unset.
    """
    if env is None:
        env = os.environ

    for var in PREFIX_ENV_VARS:
        value = env.get(var)
        if value:
            logger.debug("Prefix from %s: %s", var, value)
            return Path(value)

    logger.debug("No prefix configured (%s unset)", ", ".join(PREFIX_ENV_VARS))
    return None


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for cmake-index.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to cmake-index.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(
    path: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> ScanConfig:
    """Build the scan configuration.

    Args:
        path: Explicit path to cmake-index.yml.  If None, searches upward;
            a missing file is fine and means "defaults only".
        env: Environment to resolve the prefix from (default: os.environ).

    Returns:
        Validated ScanConfig.  ``prefix`` is None when nothing set it.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    data: dict = {}

    if path is not None and not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    if path is None:
        path = find_config_file()

    if path is not None:
        data = _read_config_file(path)

    try:
        config = ScanConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    if config.prefix is None:
        config.prefix = resolve_prefix(env)
    elif path is not None and not config.prefix.is_absolute():
        # Relative prefixes in the file are relative to the file itself
        config.prefix = path.parent.resolve() / config.prefix

    logger.info(
        "Scan config: prefix=%s, library_dirs=%s",
        config.prefix,
        config.library_dirs,
    )
    return config


def _read_config_file(path: Path) -> dict:
    logger.debug("Loading index config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")
    return data
