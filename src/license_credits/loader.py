"""Loading of credit catalogs into a credit database."""

import logging

from license_credits.database import CreditDatabase
from license_credits.parser import parse
from license_credits.resolver import resolve
from license_credits.sources import Source

logger = logging.getLogger(__name__)


def load(source: Source) -> CreditDatabase:
    """Load a database from a catalog document.

    Parsing and resolution either both succeed or no database is
    returned.

    Args:
        source: Filesystem path, ``file://`` URI, ``http(s)://`` URL or
            binary file object.

    Returns:
        The loaded database.

    Raises:
        CatalogLoadError: If the document is unreadable, malformed or
            inconsistent.
    """
    database = resolve(parse(source))
    logger.debug("Loaded credit database with %d credits", len(database))
    return database
