"""
Index use case — load configuration and build the package index.

Ties together config loading, prefix resolution and the index builder,
and reports problems as a result object instead of raising.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from cmake_index.core.config.loader import ConfigError, ScanConfig, load_config
from cmake_index.core.context import IndexContext
from cmake_index.core.models.index import PackageIndex
from cmake_index.core.services.package_scan import available_library_roots

logger = logging.getLogger(__name__)


@dataclass
class IndexResult:
    """Result of the index use case."""

    index: PackageIndex | None = None
    config: ScanConfig | None = None
    library_roots: list[Path] = field(default_factory=list)
    error: str | None = None

    @property
    def configured(self) -> bool:
        return self.config is not None and self.config.prefix is not None

    def to_dict(self) -> dict:
        result: dict = {}
        if self.error:
            result["error"] = self.error
            return result

        prefix = self.config.prefix if self.config else None
        result["prefix"] = str(prefix) if prefix else None
        result["library_roots"] = [str(r) for r in self.library_roots]

        if self.index is not None:
            result["index"] = self.index.to_dict()

        return result


def load_context(
    config_path: Path | None = None,
    prefix: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> IndexContext:
    """Build an IndexContext from config file, CLI override and environment.

    Raises:
        ConfigError: If the configuration file is invalid.
    """
    config = load_config(config_path, env=env)
    if prefix is not None:
        config.prefix = prefix
    return IndexContext(config)


def run_index(
    config_path: Path | None = None,
    prefix: Path | None = None,
    env: Mapping[str, str] | None = None,
    build: bool = True,
) -> IndexResult:
    """Resolve the scan configuration and (optionally) build the index.

    Args:
        config_path: Optional explicit path to cmake-index.yml.
        prefix: Optional prefix override (the CLI ``--prefix`` flag).
        env: Environment for prefix resolution (default: os.environ).
        build: If False, only resolve the prefix and library roots.

    Returns:
        IndexResult; ``error`` is set when the configuration is invalid.
    """
    result = IndexResult()

    try:
        context = load_context(config_path, prefix=prefix, env=env)
    except ConfigError as e:
        result.error = str(e)
        return result

    result.config = context.config

    if context.config.prefix is not None:
        result.library_roots = available_library_roots(
            context.config.prefix, context.config.library_dirs
        )

    if build:
        result.index = context.index

    return result
