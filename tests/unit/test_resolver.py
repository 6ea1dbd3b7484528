"""Tests for catalog validation and reference resolution."""

import pytest

from license_credits.database import CreditDatabase
from license_credits.exceptions import IncompleteCreditError, UnresolvedReferenceError
from license_credits.models import (
    ArtifactCoordinate,
    LicenseRecord,
    LicenseReference,
    OwnerRecord,
    OwnerReference,
    RawCatalog,
    RawCredit,
)
from license_credits.parser import parse
from license_credits.resolver import resolve, resolve_credit


@pytest.fixture
def catalog() -> RawCatalog:
    """Create a raw catalog with one owner and one license."""
    return RawCatalog(
        owners={"owner1": OwnerRecord(key="owner1", text="Owner One")},
        licenses={"license1": LicenseRecord(key="license1", text="License One")},
    )


def _credit(key: str = "credit1", **kwargs) -> RawCredit:
    fields = {
        "component": "Component",
        "owner": OwnerReference(key="owner1"),
        "license": LicenseReference(key="license1"),
    }
    fields.update(kwargs)
    return RawCredit(key=key, **fields)


class TestResolveCredit:
    """Test suite for resolve_credit."""

    def test_resolves_references(self, catalog: RawCatalog) -> None:
        credit = resolve_credit(_credit(force=True), catalog)

        assert credit.key == "credit1"
        assert credit.force is True
        assert credit.owner == OwnerRecord(key="owner1", text="Owner One")
        assert credit.license == LicenseRecord(key="license1", text="License One")

    def test_reference_uses_shared_instance(self, catalog: RawCatalog) -> None:
        """Test that every credit gets the catalog entry itself."""
        first = resolve_credit(_credit("a"), catalog)
        second = resolve_credit(_credit("b"), catalog)

        assert first.owner is catalog.owners["owner1"]
        assert first.owner is second.owner
        assert first.license is second.license

    def test_inline_entries_kept(self, catalog: RawCatalog) -> None:
        owner = OwnerRecord(key=None, text="Inline Owner")
        license = LicenseRecord(key=None, text="Inline License")

        credit = resolve_credit(_credit(owner=owner, license=license), catalog)

        assert credit.owner is owner
        assert credit.license is license

    @pytest.mark.parametrize("component", [None, "", "   "])
    def test_missing_component(self, catalog: RawCatalog, component) -> None:
        with pytest.raises(
            IncompleteCreditError, match="Component undefined for credit with key credit1"
        ):
            resolve_credit(_credit(component=component), catalog)

    def test_missing_owner(self, catalog: RawCatalog) -> None:
        with pytest.raises(IncompleteCreditError, match="Owner undefined for credit with key credit1"):
            resolve_credit(_credit(owner=None), catalog)

    def test_missing_license(self, catalog: RawCatalog) -> None:
        with pytest.raises(IncompleteCreditError, match="License undefined for credit with key credit1"):
            resolve_credit(_credit(license=None), catalog)

    def test_unknown_owner_key(self, catalog: RawCatalog) -> None:
        with pytest.raises(
            UnresolvedReferenceError,
            match="Credit with key credit1 refers to undefined owner key owner2",
        ):
            resolve_credit(_credit(owner=OwnerReference(key="owner2")), catalog)

    def test_unknown_license_key(self, catalog: RawCatalog) -> None:
        with pytest.raises(
            UnresolvedReferenceError,
            match="refers to undefined license key license2",
        ):
            resolve_credit(_credit(license=LicenseReference(key="license2")), catalog)

    def test_license_key_in_owner_ref(self, catalog: RawCatalog) -> None:
        """Test that owner references do not see license keys."""
        with pytest.raises(UnresolvedReferenceError, match="undefined owner key license1"):
            resolve_credit(_credit(owner=OwnerReference(key="license1")), catalog)

    def test_owner_key_in_license_ref(self, catalog: RawCatalog) -> None:
        """Test that license references do not see owner keys."""
        with pytest.raises(UnresolvedReferenceError, match="undefined license key owner1"):
            resolve_credit(_credit(license=LicenseReference(key="owner1")), catalog)


class TestResolve:
    """Test suite for resolve."""

    def test_builds_database(self, catalog: RawCatalog) -> None:
        catalog.credits["credit1"] = _credit()
        catalog.artifacts[ArtifactCoordinate("g", "a")] = "credit1"

        database = resolve(catalog)

        assert isinstance(database, CreditDatabase)
        assert len(database) == 1
        assert database.lookup("g", "a").key == "credit1"

    def test_one_bad_credit_fails_everything(self, catalog: RawCatalog) -> None:
        """Test that no partial database is produced."""
        catalog.credits["good"] = _credit("good")
        catalog.credits["bad"] = _credit("bad", license=None)

        with pytest.raises(IncompleteCreditError, match="key bad"):
            resolve(catalog)

    def test_forward_references_in_document(self, write_catalog) -> None:
        """Test references declared before their targets."""
        path = write_catalog(
            """
    <credit key="early">
        <component>Early</component>
        <ownerRef keyref="o" />
        <licenseRef keyref="l" />
        <artifact groupId="g" artifactId="early" />
    </credit>
    <owners><owner key="o">Owner</owner></owners>
    <licenses><license key="l">License</license></licenses>
    <credit key="late">
        <component>Late</component>
        <ownerRef keyref="o" />
        <licenseRef keyref="l" />
        <artifact groupId="g" artifactId="late" />
    </credit>
"""
        )

        database = resolve(parse(path))

        early = database.lookup("g", "early")
        late = database.lookup("g", "late")
        assert early.owner.text == "Owner"
        assert early.license.text == "License"
        assert early.owner == late.owner

    def test_license_key_in_owner_ref_document(self, write_catalog) -> None:
        path = write_catalog(
            """
    <licenses><license key="license1">License</license></licenses>
    <credit key="c">
        <component>C</component>
        <ownerRef keyref="license1" />
        <licenseRef keyref="license1" />
    </credit>
"""
        )

        with pytest.raises(UnresolvedReferenceError, match="undefined owner key license1"):
            resolve(parse(path))

    def test_owner_key_in_license_ref_document(self, write_catalog) -> None:
        path = write_catalog(
            """
    <owners><owner key="owner2">Owner</owner></owners>
    <credit key="c">
        <component>C</component>
        <ownerRef keyref="owner2" />
        <licenseRef keyref="owner2" />
    </credit>
"""
        )

        with pytest.raises(UnresolvedReferenceError, match="undefined license key owner2"):
            resolve(parse(path))
