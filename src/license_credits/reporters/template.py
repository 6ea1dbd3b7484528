"""Template reporter for generating credits documents.

This module provides a reporter that renders the selected credits with
Jinja2 templates, either one of the bundled templates or a custom file.
"""

from datetime import datetime
from importlib.resources import files
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, Template, TemplateError

from license_credits.models import CreditRecord
from license_credits.reporters.base import BaseReporter

# Output format -> (bundled template, file extension)
FORMATS: dict[str, tuple[str, str]] = {
    "html": ("credits.html.j2", ".html"),
    "txt": ("credits.txt.j2", ".txt"),
}

_ESCAPED_SUFFIXES = (".html", ".htm", ".xml")


def _needs_escaping(template_name: str) -> bool:
    name = template_name.lower()
    if name.endswith(".j2"):
        name = name[: -len(".j2")]
    return name.endswith(_ESCAPED_SUFFIXES)


class TemplateReporter(BaseReporter):
    """Reporter that renders credits through a Jinja2 template.

    Templates receive ``credits`` (list of CreditRecord), ``triples``
    (list of (component, owner, license) tuples) and ``generated_at``.
    HTML and XML templates are autoescaped.

    Attributes:
        template: The Jinja2 template to use for rendering.
    """

    def __init__(
        self, template_path: Optional[Path] = None, fmt: str = "html"
    ) -> None:
        """Initialize the reporter.

        Args:
            template_path: Optional path to a custom Jinja2 template.
                If not provided, uses the bundled template of the format.
            fmt: Output format, one of FORMATS.

        Raises:
            ValueError: If the format is unknown or the custom template
                cannot be loaded.
        """
        if fmt not in FORMATS:
            raise ValueError(
                f"Unknown output format '{fmt}'. "
                f"Supported formats: {', '.join(sorted(FORMATS))}"
            )
        self.fmt = fmt

        if template_path:
            env = Environment(
                loader=FileSystemLoader(template_path.parent),
                autoescape=_needs_escaping(template_path.name),
            )
            try:
                self.template = env.get_template(template_path.name)
            except TemplateError as e:
                raise ValueError(f"Invalid template {template_path}: {e}") from e
        else:
            self.template = self._load_default_template()

    def _load_default_template(self) -> Template:
        """Load the bundled template of the output format.

        Returns:
            The default template loaded from package resources.
        """
        template_name, _ = FORMATS[self.fmt]
        template_content = (
            files("license_credits.templates")
            .joinpath(template_name)
            .read_text(encoding="utf-8")
        )
        env = Environment(autoescape=_needs_escaping(template_name))
        return env.from_string(template_content)

    def render(self, credits: list[CreditRecord]) -> str:
        """Render credits with the template.

        Args:
            credits: Selected credits, in report order.

        Returns:
            Rendered document as a string.
        """
        return self.template.render(
            credits=credits,
            triples=[credit.attribution for credit in credits],
            generated_at=datetime.now(),
        )

    @property
    def format_name(self) -> str:
        return self.fmt

    @property
    def default_extension(self) -> str:
        return FORMATS[self.fmt][1]


def get_reporter(fmt: str = "html", template_path: Optional[Path] = None) -> TemplateReporter:
    """Create the reporter for an output format.

    Args:
        fmt: Output format, one of FORMATS.
        template_path: Optional custom template.

    Returns:
        The configured reporter.

    Raises:
        ValueError: If the format is unknown.
    """
    return TemplateReporter(template_path=template_path, fmt=fmt)
