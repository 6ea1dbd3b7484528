"""Validation and reference resolution for parsed credit catalogs.

The resolver runs once the whole document has been read. It checks that
every credit is complete and replaces each owner or license reference with
the shared entry of the matching named catalog. Any failure aborts the
load: a database is produced only when every credit resolves.
"""

import logging
from typing import Optional

from license_credits.database import CreditDatabase
from license_credits.exceptions import IncompleteCreditError, UnresolvedReferenceError
from license_credits.models import (
    CreditRecord,
    LicenseRecord,
    LicenseSpec,
    OwnerRecord,
    OwnerSpec,
    RawCatalog,
    RawCredit,
)

logger = logging.getLogger(__name__)


def resolve_owner(
    credit: RawCredit, owner: Optional[OwnerSpec], owners: dict[str, OwnerRecord]
) -> OwnerRecord:
    """Resolve the owner of a credit.

    Args:
        credit: Credit being resolved.
        owner: Inline owner, reference placeholder or None.
        owners: Named owner catalog.

    Returns:
        The inline owner, or the shared catalog entry for a reference.

    Raises:
        IncompleteCreditError: If the credit has no owner.
        UnresolvedReferenceError: If the reference key is not an owner key.
    """
    if owner is None:
        raise IncompleteCreditError(
            f"Owner undefined for credit with key {credit.key}."
        )
    if isinstance(owner, OwnerRecord):
        return owner

    resolved = owners.get(owner.key)
    if resolved is None:
        raise UnresolvedReferenceError(
            f"Credit with key {credit.key} refers to undefined owner key "
            f"{owner.key}."
        )
    return resolved


def resolve_license(
    credit: RawCredit,
    license: Optional[LicenseSpec],
    licenses: dict[str, LicenseRecord],
) -> LicenseRecord:
    """Resolve the license of a credit.

    Same procedure as resolve_owner, against the license catalog.
    """
    if license is None:
        raise IncompleteCreditError(
            f"License undefined for credit with key {credit.key}."
        )
    if isinstance(license, LicenseRecord):
        return license

    resolved = licenses.get(license.key)
    if resolved is None:
        raise UnresolvedReferenceError(
            f"Credit with key {credit.key} refers to undefined license key "
            f"{license.key}."
        )
    return resolved


def resolve_credit(credit: RawCredit, catalog: RawCatalog) -> CreditRecord:
    """Validate a raw credit and build its resolved record.

    Args:
        credit: Credit collected by the parser.
        catalog: Catalog holding the named owners and licenses.

    Returns:
        The resolved credit.

    Raises:
        IncompleteCreditError: If component, owner or license is missing.
        UnresolvedReferenceError: If a reference has no target.
    """
    if not credit.component or not credit.component.strip():
        raise IncompleteCreditError(
            f"Component undefined for credit with key {credit.key}."
        )

    return CreditRecord(
        key=credit.key,
        component=credit.component,
        owner=resolve_owner(credit, credit.owner, catalog.owners),
        license=resolve_license(credit, credit.license, catalog.licenses),
        force=credit.force,
    )


def resolve(catalog: RawCatalog) -> CreditDatabase:
    """Validate a raw catalog and build the credit database.

    Args:
        catalog: Output of the document parser.

    Returns:
        An immutable database of resolved credits.

    Raises:
        IncompleteCreditError: If any credit is incomplete.
        UnresolvedReferenceError: If any reference has no target.
    """
    credits: dict[str, CreditRecord] = {}
    for key, raw in catalog.credits.items():
        credits[key] = resolve_credit(raw, catalog)

    logger.debug(
        "Resolved %d credits from %s", len(credits), catalog.source or "<catalog>"
    )
    return CreditDatabase(credits, catalog.artifacts)
