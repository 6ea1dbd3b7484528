"""Configuration for credits generation.

Settings are read from environment variables; command-line options take
precedence over them.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from license_credits.reporters.template import FORMATS

DEFAULT_FORMAT = "html"
CREDITS_NAME = "credits"


@dataclass
class CreditsConfig:
    """Credits generation settings.

    Attributes:
        database_url: Path or URL of the credit catalog.
        template_path: Custom Jinja2 template, None for the bundled one.
        output_format: Output format ("html" or "txt").
        output_name: File name of the generated document, None for
            "credits" plus the extension of the format.
    """

    database_url: Optional[str] = None
    template_path: Optional[Path] = None
    output_format: str = DEFAULT_FORMAT
    output_name: Optional[str] = None

    @classmethod
    def from_env(cls) -> "CreditsConfig":
        """Create configuration from environment variables.

        Environment variables:
            CREDITS_DATABASE_URL: Path or URL of the credit catalog.
            CREDITS_TEMPLATE: Path to a custom Jinja2 template.
            CREDITS_FORMAT: "html" or "txt" (default: "html").
            CREDITS_OUTPUT_NAME: Output file name (default: "credits.<format>").
        """
        template = os.getenv("CREDITS_TEMPLATE")

        return cls(
            database_url=os.getenv("CREDITS_DATABASE_URL") or None,
            template_path=Path(template) if template else None,
            output_format=os.getenv("CREDITS_FORMAT", DEFAULT_FORMAT).lower(),
            output_name=os.getenv("CREDITS_OUTPUT_NAME") or None,
        )

    def validate(self) -> None:
        """Validate the configuration.

        Raises:
            ValueError: If required configuration is missing or invalid.
        """
        if not self.database_url:
            raise ValueError(
                "Credit database is required (--database or CREDITS_DATABASE_URL)"
            )
        if self.output_format not in FORMATS:
            raise ValueError(f"Unsupported output format: {self.output_format}")

    @property
    def output_path(self) -> Path:
        """Return the output file, defaulting to credits.<format>."""
        if self.output_name:
            return Path(self.output_name)
        return Path(CREDITS_NAME + FORMATS[self.output_format][1])
