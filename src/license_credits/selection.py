"""Selection of the credits to disclose for a set of dependencies."""

import logging
from typing import Iterable

from license_credits.database import CreditDatabase
from license_credits.models import ArtifactCoordinate, CreditRecord

logger = logging.getLogger(__name__)


def select_credits(
    database: CreditDatabase, dependencies: Iterable[ArtifactCoordinate]
) -> list[CreditRecord]:
    """Select the credits to report for a dependency set.

    The selection holds every forced credit plus every credit matched by
    at least one dependency. Credits are collapsed by key and sorted by key.

    Args:
        database: Loaded credit database.
        dependencies: Coordinates of the caller's dependencies.

    Returns:
        Selected credits in ascending key order.
    """
    selected: set[CreditRecord] = {
        credit for credit in database.all_credits() if credit.force
    }

    for artifact in dependencies:
        logger.debug("Detect artifact %s", artifact)
        credit = database.find(artifact)
        if credit is None:
            logger.warning("No credit found for artifact %s.", artifact)
            continue
        selected.add(credit)

    return sorted(selected, key=lambda credit: credit.key)


def attribution_triples(
    credits: Iterable[CreditRecord],
) -> list[tuple[str, str, str]]:
    """Return the (component, owner, license) triple of each credit."""
    return [credit.attribution for credit in credits]
