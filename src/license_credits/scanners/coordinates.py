"""Scanner for plain dependency coordinate lists.

A coordinate list holds one dependency per line in Gradle/Maven notation::

    # runtime dependencies
    androidx.activity:activity:1.4.0
    org.apache.commons:commons-lang3:3.12.0   # inline comment
    com.github.bumptech.glide:glide

Versions are accepted and ignored.
"""

import logging
from pathlib import Path

from license_credits.models import ArtifactCoordinate
from license_credits.scanners.base import BaseScanner

logger = logging.getLogger(__name__)


class CoordinateListScanner(BaseScanner):
    """Scanner for ``group:artifact[:version]`` list files.

    Blank lines and ``#`` comments are skipped. Duplicate coordinates are
    returned once, in first-seen order.
    """

    EXTENSIONS = (".txt", ".deps")

    @classmethod
    def can_handle(cls, path: Path) -> bool:
        """Check if this scanner can handle the given file.

        Args:
            path: Path to check.

        Returns:
            True for ``.txt`` and ``.deps`` files.
        """
        return path.suffix.lower() in cls.EXTENSIONS

    @property
    def source_name(self) -> str:
        return "coordinate list"

    def scan(self) -> list[ArtifactCoordinate]:
        """Scan the list file and extract artifact coordinates.

        Returns:
            Coordinates in file order, without duplicates.

        Raises:
            FileNotFoundError: If the source file does not exist.
            ValueError: If source_path is not set or a line is malformed.
        """
        if self.source_path is None:
            raise ValueError("source_path must be set before calling scan()")

        if not self.source_path.exists():
            raise FileNotFoundError(
                f"Dependency list not found: {self.source_path}"
            )

        coordinates: list[ArtifactCoordinate] = []
        seen: set[ArtifactCoordinate] = set()

        content = self.source_path.read_text(encoding="utf-8")
        for line_num, raw_line in enumerate(content.splitlines(), start=1):
            line = raw_line.split("#", 1)[0].strip()
            if not line:
                continue

            try:
                coordinate = ArtifactCoordinate.parse(line)
            except ValueError as e:
                raise ValueError(
                    f"{self.source_path}:{line_num}: {e}"
                ) from e

            if coordinate in seen:
                logger.debug("Skipping duplicate dependency %s", coordinate)
                continue

            seen.add(coordinate)
            coordinates.append(coordinate)

        return coordinates
