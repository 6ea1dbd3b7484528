"""Base interface for output reporters.

Reporters turn the selected credits into a formatted attribution document
(HTML, plain text, etc.).
"""

from abc import ABC, abstractmethod
from pathlib import Path

from license_credits.models import CreditRecord


class BaseReporter(ABC):
    """Abstract base class for output reporters."""

    @abstractmethod
    def render(self, credits: list[CreditRecord]) -> str:
        """Render credits to formatted output.

        Args:
            credits: Selected credits, in report order.

        Returns:
            Rendered output as a string.
        """
        ...

    def write(self, credits: list[CreditRecord], output_path: Path) -> None:
        """Render and write output to a file.

        Missing parent directories are created.

        Args:
            credits: Selected credits, in report order.
            output_path: Path to write the output file.
        """
        content = self.render(credits)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Return the output format name, like "html" or "txt"."""
        ...

    @property
    @abstractmethod
    def default_extension(self) -> str:
        """Return the default file extension, like ".html"."""
        ...
