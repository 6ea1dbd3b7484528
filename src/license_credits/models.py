"""Core data models for license_credits.

This module defines the entities of a credit catalog: artifact coordinates,
owner and license records, the reference placeholders produced while
parsing, and the resolved credit records exposed by the database.
"""

from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass(frozen=True)
class ArtifactCoordinate:
    """Immutable (group, artifact) pair identifying one dependency.

    Frozen for hashability; it is the natural key of dependency lookups.

    Attributes:
        group_id: Group identifier (e.g., "org.apache.commons").
        artifact_id: Artifact name (e.g., "commons-lang3").
    """

    group_id: str
    artifact_id: str

    def __str__(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"

    @classmethod
    def parse(cls, notation: str) -> "ArtifactCoordinate":
        """Build a coordinate from ``group:artifact[:version]`` notation.

        Anything after the artifact name (version, classifier) is ignored.

        Args:
            notation: Dependency notation as written in build files.

        Returns:
            The coordinate for the group and artifact parts.

        Raises:
            ValueError: If the group or the artifact part is blank.
        """
        parts = [part.strip() for part in notation.strip().split(":")]
        if len(parts) < 2 or not parts[0] or not parts[1]:
            raise ValueError(
                f"Invalid artifact coordinate '{notation}', "
                "expected group:artifact[:version]"
            )
        return cls(group_id=parts[0], artifact_id=parts[1])


@dataclass(frozen=True)
class OwnerRecord:
    """Owner (copyright holder) of a component.

    A record with a key is an entry of the named owner catalog, shared by
    every credit that refers to it. A record without a key is an inline
    owner private to a single credit.

    Attributes:
        key: Catalog key, or None for an inline owner.
        text: Owner text as shown in the report.
    """

    key: Optional[str]
    text: str

    @property
    def is_inline(self) -> bool:
        """Return True if the owner was declared inside its credit."""
        return self.key is None


@dataclass(frozen=True)
class LicenseRecord:
    """License of a component.

    Same shape as OwnerRecord, with keys living in the separate license
    namespace.

    Attributes:
        key: Catalog key, or None for an inline license.
        text: License text as shown in the report.
    """

    key: Optional[str]
    text: str

    @property
    def is_inline(self) -> bool:
        """Return True if the license was declared inside its credit."""
        return self.key is None


@dataclass(frozen=True)
class OwnerReference:
    """Unresolved reference to a named owner (``ownerRef`` element)."""

    key: str


@dataclass(frozen=True)
class LicenseReference:
    """Unresolved reference to a named license (``licenseRef`` element)."""

    key: str


OwnerSpec = Union[OwnerRecord, OwnerReference]
LicenseSpec = Union[LicenseRecord, LicenseReference]


@dataclass(frozen=True, eq=False)
class CreditRecord:
    """Resolved attribution record for one open source component.

    Two credits are the same credit if and only if their keys match,
    whatever their other fields hold. Sets of credits therefore collapse
    duplicates by key.

    Attributes:
        key: Key of the credit, unique in the catalog.
        component: Display name of the component.
        owner: Resolved owner (inline or shared catalog entry).
        license: Resolved license (inline or shared catalog entry).
        force: True if the credit must be reported even when none of its
            artifacts is a dependency.
    """

    key: str
    component: str
    owner: OwnerRecord
    license: LicenseRecord
    force: bool = False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CreditRecord):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    @property
    def attribution(self) -> tuple[str, str, str]:
        """Return the (component, owner text, license text) triple."""
        return (self.component, self.owner.text, self.license.text)


@dataclass
class RawCredit:
    """Credit as collected by the parser, before validation.

    Attributes:
        key: Key of the credit.
        force: Value of the force attribute.
        component: Component name, if the component element was found.
        owner: Inline owner or reference placeholder.
        license: Inline license or reference placeholder.
        line: Source line of the credit element, if known.
    """

    key: str
    force: bool = False
    component: Optional[str] = None
    owner: Optional[OwnerSpec] = None
    license: Optional[LicenseSpec] = None
    line: Optional[int] = None


@dataclass
class RawCatalog:
    """Unvalidated output of the document parser.

    Attributes:
        credits: Credits by key, in document order.
        artifacts: Credit key for each declared artifact coordinate.
        owners: Named owner catalog.
        licenses: Named license catalog.
        source: Identifier of the parsed document, if known.
    """

    credits: dict[str, RawCredit] = field(default_factory=dict)
    artifacts: dict[ArtifactCoordinate, str] = field(default_factory=dict)
    owners: dict[str, OwnerRecord] = field(default_factory=dict)
    licenses: dict[str, LicenseRecord] = field(default_factory=dict)
    source: Optional[str] = None
