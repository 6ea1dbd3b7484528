"""Custom exceptions for license_credits."""

from typing import Optional


class CreditsError(Exception):
    """Base exception for license_credits."""


class CatalogLoadError(CreditsError):
    """Raised when a credit catalog cannot be loaded."""


class CatalogParseError(CatalogLoadError):
    """Base for errors detected while streaming the catalog document.

    Attributes:
        source: Identifier of the document, if known.
        line: Line of the offending element, if known.
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        line: Optional[int] = None,
    ) -> None:
        self.source = source
        self.line = line
        self.reason = message
        super().__init__(self._format(message, source, line))

    @staticmethod
    def _format(message: str, source: Optional[str], line: Optional[int]) -> str:
        if source and line:
            return f"{source}:{line}: {message}"
        if source:
            return f"{source}: {message}"
        if line:
            return f"line {line}: {message}"
        return message


class MalformedDocumentError(CatalogParseError):
    """Raised on ill-formed input, missing attributes or duplicate keys."""


class StructuralPlacementError(CatalogParseError):
    """Raised when an element appears where it is not allowed."""


class IncompleteCreditError(CatalogLoadError):
    """Raised when a credit lacks its component, owner or license."""


class UnresolvedReferenceError(CatalogLoadError):
    """Raised when an owner or license reference has no target."""


class CatalogIOError(CatalogLoadError, OSError):
    """Raised when the catalog source cannot be read."""


class CatalogIntegrityError(CreditsError):
    """Raised when an artifact maps to a credit missing from the database."""
