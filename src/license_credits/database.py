"""Immutable, queryable credit database.

A CreditDatabase is built once from a validated catalog and never changes
afterwards, so it can be shared by concurrent readers without locking.
"""

from types import MappingProxyType
from typing import Mapping, Optional, Union

from license_credits.exceptions import CatalogIntegrityError
from license_credits.models import ArtifactCoordinate, CreditRecord


class CreditDatabase:
    """Resolved credits indexed by key and by artifact coordinate.

    Attributes:
        credits: Every credit, in catalog order.
        coordinates: Every declared artifact coordinate.
    """

    def __init__(
        self,
        credits: Mapping[str, CreditRecord],
        artifacts: Mapping[ArtifactCoordinate, str],
    ) -> None:
        """Initialize the database.

        Both mappings are copied, so later changes to the arguments do not
        leak into the database.

        Args:
            credits: Resolved credits by key.
            artifacts: Credit key for each artifact coordinate.
        """
        self._credits: Mapping[str, CreditRecord] = MappingProxyType(dict(credits))
        self._artifacts: Mapping[ArtifactCoordinate, str] = MappingProxyType(
            dict(artifacts)
        )

    @property
    def credits(self) -> tuple[CreditRecord, ...]:
        return tuple(self._credits.values())

    @property
    def coordinates(self) -> tuple[ArtifactCoordinate, ...]:
        return tuple(self._artifacts)

    def all_credits(self) -> tuple[CreditRecord, ...]:
        """Return every credit.

        The order follows the catalog and carries no meaning; callers sort
        explicitly.
        """
        return self.credits

    def get_credit(self, key: str) -> Optional[CreditRecord]:
        """Return the credit with the given key, or None."""
        return self._credits.get(key)

    def find(self, artifact: ArtifactCoordinate) -> Optional[CreditRecord]:
        """Get the credit corresponding to an artifact.

        Args:
            artifact: Artifact coordinate.

        Returns:
            The credit, or None if no credit declares the artifact.

        Raises:
            CatalogIntegrityError: If the artifact maps to a credit key that
                the database does not hold.
        """
        key = self._artifacts.get(artifact)
        if key is None:
            return None

        credit = self._credits.get(key)
        if credit is None:
            raise CatalogIntegrityError(f"No credit for key {key}.")
        return credit

    def lookup(self, group_id: str, artifact_id: str) -> Optional[CreditRecord]:
        """Get the credit corresponding to a group and artifact name.

        Args:
            group_id: Group of the dependency.
            artifact_id: Artifact name of the dependency.

        Returns:
            The credit, or None if no credit declares the artifact.
        """
        return self.find(ArtifactCoordinate(group_id=group_id, artifact_id=artifact_id))

    def artifacts_for(self, key: str) -> list[ArtifactCoordinate]:
        """Return the artifact coordinates declared by a credit."""
        return [
            artifact
            for artifact, credit_key in self._artifacts.items()
            if credit_key == key
        ]

    def __len__(self) -> int:
        return len(self._credits)

    def __contains__(self, item: Union[str, ArtifactCoordinate]) -> bool:
        if isinstance(item, ArtifactCoordinate):
            return item in self._artifacts
        return item in self._credits

    def __repr__(self) -> str:
        return (
            f"CreditDatabase(credits={len(self._credits)}, "
            f"artifacts={len(self._artifacts)})"
        )
