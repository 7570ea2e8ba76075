"""
CMake package index — discover find_package() candidates under a prefix.
"""

__version__ = "0.1.0"
