"""
Domain models — package records and the index built from them.

    from cmake_index.core.models import CMakePackage, FileType, PackageIndex
"""

from cmake_index.core.models.index import PackageIndex
from cmake_index.core.models.package import CMakePackage, FileType, PackageSource

__all__ = [
    # package.py
    "CMakePackage",
    "FileType",
    "PackageSource",
    # index.py
    "PackageIndex",
]
