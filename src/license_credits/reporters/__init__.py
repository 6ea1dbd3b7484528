"""Output reporters for generating credits documents.

This module provides reporters for rendering the selected credits to
various output formats (HTML, plain text).
"""

from license_credits.reporters.base import BaseReporter
from license_credits.reporters.template import FORMATS, TemplateReporter, get_reporter

__all__ = ["BaseReporter", "FORMATS", "TemplateReporter", "get_reporter"]
