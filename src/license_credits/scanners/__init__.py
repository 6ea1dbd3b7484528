"""Dependency scanners.

This module provides scanners reading the caller's dependency set as
artifact coordinates.
"""

from pathlib import Path

from license_credits.scanners.base import BaseScanner
from license_credits.scanners.coordinates import CoordinateListScanner

__all__ = [
    "BaseScanner",
    "CoordinateListScanner",
    "get_scanner",
]

# Registry of available scanners in priority order
_SCANNERS: list[type[BaseScanner]] = [
    CoordinateListScanner,
]


def get_scanner(path: Path) -> BaseScanner:
    """Get the appropriate scanner for a given file path.

    Args:
        path: Path to the dependency list.

    Returns:
        Scanner instance configured for the given file.

    Raises:
        ValueError: If no scanner can handle the given file.
    """
    for scanner_cls in _SCANNERS:
        if scanner_cls.can_handle(path):
            return scanner_cls(path)

    raise ValueError(
        f"No scanner available for '{path.name}'. "
        f"Supported files: *.txt, *.deps coordinate lists"
    )
