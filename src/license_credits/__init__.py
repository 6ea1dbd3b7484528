"""License Credits - Open source attribution from a curated credit catalog.

This package loads a catalog of known open source components, resolves
their owners and licenses, and maps dependency coordinates to the credits
that must be disclosed for them.
"""

__version__ = "0.1.0"

from license_credits.database import CreditDatabase
from license_credits.loader import load
from license_credits.exceptions import (
    CatalogIntegrityError,
    CatalogIOError,
    CatalogLoadError,
    CreditsError,
    IncompleteCreditError,
    MalformedDocumentError,
    StructuralPlacementError,
    UnresolvedReferenceError,
)
from license_credits.models import (
    ArtifactCoordinate,
    CreditRecord,
    LicenseRecord,
    OwnerRecord,
)
from license_credits.selection import attribution_triples, select_credits

__all__ = [
    "__version__",
    "ArtifactCoordinate",
    "CatalogIntegrityError",
    "CatalogIOError",
    "CatalogLoadError",
    "CreditDatabase",
    "CreditRecord",
    "CreditsError",
    "IncompleteCreditError",
    "LicenseRecord",
    "MalformedDocumentError",
    "OwnerRecord",
    "StructuralPlacementError",
    "UnresolvedReferenceError",
    "attribution_triples",
    "load",
    "select_credits",
]
