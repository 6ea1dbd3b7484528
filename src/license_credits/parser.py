"""Streaming parser for credit catalog documents.

The catalog is an XML document shaped like this::

    <credits>
        <owners>
            <owner key="android">The Android Open Source Project</owner>
        </owners>
        <licenses>
            <license key="apache">Apache License, Version 2.0</license>
        </licenses>
        <credit key="androidJetpack">
            <component>Android Jetpack</component>
            <ownerRef keyref="android" />
            <licenseRef keyref="apache" />
            <artifact groupId="androidx.activity" artifactId="activity" />
        </credit>
    </credits>

The document is consumed as a stream of start/end events with
``lxml.etree.iterparse``. A ``ParserState`` stack tracks the nesting
context; every element is checked against a single transition table, so
an element in the wrong place is rejected the same way wherever it shows
up. References are collected as placeholders and resolved later, since a
credit may refer to an owner or license declared further down.
"""

import logging
from enum import Enum, auto
from typing import BinaryIO, Callable, Mapping, Optional

from lxml import etree

from license_credits.exceptions import (
    CatalogIOError,
    MalformedDocumentError,
    StructuralPlacementError,
)
from license_credits.models import (
    ArtifactCoordinate,
    LicenseRecord,
    LicenseReference,
    OwnerRecord,
    OwnerReference,
    RawCatalog,
    RawCredit,
)
from license_credits.sources import Source, describe_source, open_source

logger = logging.getLogger(__name__)

CATALOG_ELEMENT = "credits"
OWNER_DATABASE = "owners"
LICENSE_DATABASE = "licenses"
OWNER_ELEMENT = "owner"
LICENSE_ELEMENT = "license"
CREDIT_ELEMENT = "credit"
COMPONENT_ELEMENT = "component"
OWNER_REF = "ownerRef"
LICENSE_REF = "licenseRef"
ARTIFACT_ELEMENT = "artifact"

KEY_ATTR = "key"
KEYREF_ATTR = "keyref"
FORCE_ATTR = "force"
GROUPID_ATTR = "groupId"
ARTIFACTID_ATTR = "artifactId"

_TRUE_VALUES = frozenset({"true", "yes", "on", "1"})


class ParserState(Enum):
    """Nesting contexts of a catalog document."""

    DOCUMENT = auto()
    CATALOG = auto()
    OWNERS = auto()
    LICENSES = auto()
    OWNER_ENTRY = auto()
    LICENSE_ENTRY = auto()
    CREDIT = auto()
    COMPONENT = auto()
    INLINE_OWNER = auto()
    INLINE_LICENSE = auto()
    OWNER_REF = auto()
    LICENSE_REF = auto()
    ARTIFACT = auto()


# Legal nestings: (context, element local name) -> context entered.
_TRANSITIONS: dict[tuple[ParserState, str], ParserState] = {
    (ParserState.DOCUMENT, CATALOG_ELEMENT): ParserState.CATALOG,
    (ParserState.CATALOG, OWNER_DATABASE): ParserState.OWNERS,
    (ParserState.CATALOG, LICENSE_DATABASE): ParserState.LICENSES,
    (ParserState.CATALOG, CREDIT_ELEMENT): ParserState.CREDIT,
    (ParserState.OWNERS, OWNER_ELEMENT): ParserState.OWNER_ENTRY,
    (ParserState.LICENSES, LICENSE_ELEMENT): ParserState.LICENSE_ENTRY,
    (ParserState.CREDIT, COMPONENT_ELEMENT): ParserState.COMPONENT,
    (ParserState.CREDIT, OWNER_ELEMENT): ParserState.INLINE_OWNER,
    (ParserState.CREDIT, LICENSE_ELEMENT): ParserState.INLINE_LICENSE,
    (ParserState.CREDIT, OWNER_REF): ParserState.OWNER_REF,
    (ParserState.CREDIT, LICENSE_REF): ParserState.LICENSE_REF,
    (ParserState.CREDIT, ARTIFACT_ELEMENT): ParserState.ARTIFACT,
}

# Elements that only make sense inside a credit.
_CREDIT_CHILDREN = frozenset(
    {COMPONENT_ELEMENT, OWNER_REF, LICENSE_REF, ARTIFACT_ELEMENT}
)


def parse_boolean(value: Optional[str]) -> bool:
    """Convert boolean-ish attribute text to bool.

    Case and surrounding whitespace are ignored. "true", "yes", "on" and
    "1" are true; any other value, including a missing one, is false.

    Args:
        value: Attribute value or None.

    Returns:
        The parsed flag.
    """
    if value is None:
        return False
    return value.strip().lower() in _TRUE_VALUES


class CatalogHandler:
    """Event handler building a RawCatalog from catalog elements.

    The handler only checks what can be checked locally: element
    placement, required attributes and key uniqueness. Completeness and
    references are left to the resolver.

    Attributes:
        catalog: The catalog being built.
    """

    def __init__(self, source: Optional[str] = None) -> None:
        self.catalog = RawCatalog(source=source)
        self._stack: list[tuple[ParserState, str]] = [
            (ParserState.DOCUMENT, "")
        ]
        self._credit: Optional[RawCredit] = None
        self._line: Optional[int] = None

        self._on_start: dict[ParserState, Callable[[Mapping[str, str]], None]] = {
            ParserState.CREDIT: self._start_credit,
            ParserState.OWNER_REF: self._start_owner_ref,
            ParserState.LICENSE_REF: self._start_license_ref,
            ParserState.ARTIFACT: self._start_artifact,
        }
        self._on_end: dict[ParserState, Callable[[Mapping[str, str], str], None]] = {
            ParserState.CREDIT: self._end_credit,
            ParserState.COMPONENT: self._end_component,
            ParserState.INLINE_OWNER: self._end_inline_owner,
            ParserState.INLINE_LICENSE: self._end_inline_license,
            ParserState.OWNER_ENTRY: self._end_owner_entry,
            ParserState.LICENSE_ENTRY: self._end_license_entry,
        }

    @property
    def state(self) -> ParserState:
        """Return the current nesting context."""
        return self._stack[-1][0]

    def start_element(
        self, name: str, attributes: Mapping[str, str], line: Optional[int] = None
    ) -> None:
        """Enter an element.

        Args:
            name: Local name of the element.
            attributes: Element attributes.
            line: Source line, used in error messages.

        Raises:
            StructuralPlacementError: If the element is not legal here.
            MalformedDocumentError: On missing attributes or duplicate keys.
        """
        self._line = line
        current, parent_name = self._stack[-1]
        target = _TRANSITIONS.get((current, name))
        if target is None:
            raise self._placement_error(name, current, parent_name)

        self._stack.append((target, name))
        handler = self._on_start.get(target)
        if handler is not None:
            handler(attributes)

    def end_element(
        self,
        name: str,
        attributes: Mapping[str, str],
        text: Optional[str],
        line: Optional[int] = None,
    ) -> None:
        """Leave an element.

        Args:
            name: Local name of the element.
            attributes: Element attributes.
            text: Text content of the element.
            line: Source line, used in error messages.

        Raises:
            MalformedDocumentError: On duplicate keys or definitions.
        """
        self._line = line
        state, opened = self._stack[-1]
        if opened != name or state is ParserState.DOCUMENT:
            raise self._malformed(f"End element {name} not match start element.")

        handler = self._on_end.get(state)
        if handler is not None:
            handler(attributes, (text or "").strip())
        self._stack.pop()

    def end_document(self) -> RawCatalog:
        """Finish the document.

        Returns:
            The collected catalog.

        Raises:
            MalformedDocumentError: If the document is truncated or holds
                no credit.
        """
        if len(self._stack) != 1:
            raise self._malformed("Unexpected end of document.")
        if not self.catalog.credits:
            raise self._malformed(
                f"Element {CATALOG_ELEMENT} declares no {CREDIT_ELEMENT}."
            )
        return self.catalog

    def _start_credit(self, attributes: Mapping[str, str]) -> None:
        key = self._required(attributes, KEY_ATTR)
        if key in self.catalog.credits:
            raise self._malformed(f"Duplicate credit key {key}.")

        self._credit = RawCredit(
            key=key,
            force=parse_boolean(attributes.get(FORCE_ATTR)),
            line=self._line,
        )

    def _end_credit(self, attributes: Mapping[str, str], text: str) -> None:
        credit = self._require_credit(CREDIT_ELEMENT)
        self.catalog.credits[credit.key] = credit
        self._credit = None

    def _end_component(self, attributes: Mapping[str, str], text: str) -> None:
        credit = self._require_credit(COMPONENT_ELEMENT)
        if credit.component is not None:
            raise self._malformed(
                f"Component already defined for credit with key {credit.key}."
            )
        credit.component = text

    def _end_inline_owner(self, attributes: Mapping[str, str], text: str) -> None:
        credit = self._require_credit(OWNER_ELEMENT)
        self._check_no_owner(credit)
        credit.owner = OwnerRecord(key=None, text=text)

    def _end_inline_license(self, attributes: Mapping[str, str], text: str) -> None:
        credit = self._require_credit(LICENSE_ELEMENT)
        self._check_no_license(credit)
        credit.license = LicenseRecord(key=None, text=text)

    def _start_owner_ref(self, attributes: Mapping[str, str]) -> None:
        credit = self._require_credit(OWNER_REF)
        key = self._required(attributes, KEYREF_ATTR)
        self._check_no_owner(credit)
        credit.owner = OwnerReference(key=key)

    def _start_license_ref(self, attributes: Mapping[str, str]) -> None:
        credit = self._require_credit(LICENSE_REF)
        key = self._required(attributes, KEYREF_ATTR)
        self._check_no_license(credit)
        credit.license = LicenseReference(key=key)

    def _start_artifact(self, attributes: Mapping[str, str]) -> None:
        credit = self._require_credit(ARTIFACT_ELEMENT)
        group_id = self._required(attributes, GROUPID_ATTR)
        artifact_id = self._required(attributes, ARTIFACTID_ATTR)

        artifact = ArtifactCoordinate(group_id=group_id, artifact_id=artifact_id)
        if artifact in self.catalog.artifacts:
            raise self._malformed(
                f"Duplicate artifact {artifact} "
                f"(already declared by credit {self.catalog.artifacts[artifact]})."
            )
        self.catalog.artifacts[artifact] = credit.key

    def _end_owner_entry(self, attributes: Mapping[str, str], text: str) -> None:
        key = self._required(attributes, KEY_ATTR)
        if key in self.catalog.owners:
            raise self._malformed(f"Duplicate owner key {key}.")
        self.catalog.owners[key] = OwnerRecord(key=key, text=text)

    def _end_license_entry(self, attributes: Mapping[str, str], text: str) -> None:
        key = self._required(attributes, KEY_ATTR)
        if key in self.catalog.licenses:
            raise self._malformed(f"Duplicate license key {key}.")
        self.catalog.licenses[key] = LicenseRecord(key=key, text=text)

    def _require_credit(self, name: str) -> RawCredit:
        if self._credit is None:
            raise StructuralPlacementError(
                f"Element {name} not inner element {CREDIT_ELEMENT}.",
                self.catalog.source,
                self._line,
            )
        return self._credit

    def _check_no_owner(self, credit: RawCredit) -> None:
        if credit.owner is not None:
            raise self._malformed(
                f"Owner already defined for credit with key {credit.key}."
            )

    def _check_no_license(self, credit: RawCredit) -> None:
        if credit.license is not None:
            raise self._malformed(
                f"License already defined for credit with key {credit.key}."
            )

    def _required(self, attributes: Mapping[str, str], name: str) -> str:
        value = (attributes.get(name) or "").strip()
        if not value:
            raise self._malformed(f"Missing attribute {name}.")
        return value

    def _placement_error(
        self, name: str, current: ParserState, parent_name: str
    ) -> StructuralPlacementError:
        if current is ParserState.DOCUMENT:
            message = (
                f"Root element must be {CATALOG_ELEMENT}, found {name}."
            )
        elif name in _CREDIT_CHILDREN:
            message = f"Element {name} not inner element {CREDIT_ELEMENT}."
        else:
            message = f"Unexpected element {name} inside {parent_name}."
        return StructuralPlacementError(message, self.catalog.source, self._line)

    def _malformed(self, message: str) -> MalformedDocumentError:
        return MalformedDocumentError(message, self.catalog.source, self._line)


def _local_name(element: etree._Element) -> str:
    return etree.QName(element).localname


def feed(handler: CatalogHandler, stream: BinaryIO) -> RawCatalog:
    """Stream a document through a handler.

    Args:
        handler: Handler receiving the element events.
        stream: Binary stream holding the XML document.

    Returns:
        The raw catalog collected by the handler.

    Raises:
        MalformedDocumentError: If the XML is not well formed.
        CatalogIOError: If reading the stream fails.
    """
    events = etree.iterparse(
        stream,
        events=("start", "end"),
        remove_comments=True,
        remove_pis=True,
        # Internal DTD entities only, never external ones
        resolve_entities="internal",
        no_network=True,
    )
    try:
        for event, element in events:
            name = _local_name(element)
            if event == "start":
                handler.start_element(name, element.attrib, element.sourceline)
                continue

            handler.end_element(
                name, element.attrib, element.text, element.sourceline
            )
            if handler.state in (ParserState.CATALOG, ParserState.DOCUMENT):
                # Top level section done, release its subtree
                element.clear(keep_tail=True)
                while element.getprevious() is not None:
                    del element.getparent()[0]
    except etree.XMLSyntaxError as e:
        raise MalformedDocumentError(
            e.msg or str(e), handler.catalog.source, e.lineno
        ) from e
    except OSError as e:
        raise CatalogIOError(
            f"Failed to read credit catalog {handler.catalog.source}: {e}"
        ) from e

    return handler.end_document()


def parse(source: Source, *, source_name: Optional[str] = None) -> RawCatalog:
    """Parse a credit catalog into raw, unresolved maps.

    Args:
        source: Filesystem path, ``file://`` URI, ``http(s)://`` URL or
            binary file object.
        source_name: Identifier used in error messages. Defaults to the
            path or URL of the source.

    Returns:
        The raw catalog, with owner and license references unresolved.

    Raises:
        MalformedDocumentError: On ill-formed XML or duplicate keys.
        StructuralPlacementError: On elements out of place.
        CatalogIOError: If the source cannot be read.
    """
    name = source_name or describe_source(source)
    logger.debug("Parsing credit catalog %s", name)

    handler = CatalogHandler(source=name)
    stream = open_source(source)
    try:
        catalog = feed(handler, stream)
    finally:
        if stream is not source:
            stream.close()

    logger.debug(
        "Parsed %d credits, %d artifacts, %d owners, %d licenses from %s",
        len(catalog.credits),
        len(catalog.artifacts),
        len(catalog.owners),
        len(catalog.licenses),
        name,
    )
    return catalog
