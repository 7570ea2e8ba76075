"""
Index context — the scan configuration plus the index built from it.

Callers that need package lookups take an ``IndexContext`` instead of
reaching for process-wide state.  Each context scans at most once, on
first access of ``index``, even when several threads ask at the same
time; build a new context to see a fresh scan.

    - CLI:    main.py  → IndexContext(load_config(...))
    - Tests:  IndexContext(ScanConfig(prefix=tmp_path))
"""

from __future__ import annotations

import threading
from collections.abc import Mapping

from cmake_index.core.config.loader import ScanConfig, resolve_prefix
from cmake_index.core.models.index import PackageIndex
from cmake_index.core.services.package_index import build_package_index


class IndexContext:
    """Holds a ScanConfig and lazily builds its PackageIndex."""

    def __init__(self, config: ScanConfig) -> None:
        self.config = config
        self._index: PackageIndex | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> IndexContext:
        return cls(ScanConfig(prefix=resolve_prefix(env)))

    @property
    def index(self) -> PackageIndex:
        if self._index is None:
            with self._lock:
                # another thread may have finished the scan while we waited
                if self._index is None:
                    self._index = build_package_index(
                        self.config.prefix, self.config.library_dirs
                    )
        return self._index

    @property
    def is_built(self) -> bool:
        return self._index is not None
