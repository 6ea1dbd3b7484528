"""Base interface for dependency scanners.

Scanners read the caller's dependency set from a file and return it as
artifact coordinates to match against the credit database.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from license_credits.models import ArtifactCoordinate


class BaseScanner(ABC):
    """Abstract base class for dependency scanners.

    Attributes:
        source_path: Optional path to the file being scanned.
    """

    def __init__(self, source_path: Optional[Path] = None) -> None:
        """Initialize the scanner.

        Args:
            source_path: Optional path to the dependency list.
        """
        self.source_path = source_path

    @abstractmethod
    def scan(self) -> list[ArtifactCoordinate]:
        """Scan the source and extract artifact coordinates.

        Returns:
            Coordinates of the discovered dependencies.

        Raises:
            FileNotFoundError: If the source file does not exist.
            ValueError: If the source format is invalid.
        """
        ...

    @classmethod
    @abstractmethod
    def can_handle(cls, path: Path) -> bool:
        """Check if this scanner can handle the given file.

        Args:
            path: Path to check.

        Returns:
            True if this scanner can process the file, False otherwise.
        """
        ...

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Return a human-readable name for this scanner's source type."""
        ...
