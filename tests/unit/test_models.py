import pytest

from license_credits.models import (
    ArtifactCoordinate,
    CreditRecord,
    LicenseRecord,
    OwnerRecord,
)

OWNER = OwnerRecord(key="owner1", text="Owner One")
LICENSE = LicenseRecord(key=None, text="Inline License")


def test_credit_equality_by_key_only():
    """Test that credits with the same key are equal whatever their fields."""
    first = CreditRecord(key="k", component="A", owner=OWNER, license=LICENSE)
    second = CreditRecord(
        key="k",
        component="B",
        owner=OwnerRecord(key=None, text="Other"),
        license=LicenseRecord(key="x", text="Other"),
        force=True,
    )

    assert first == second
    assert hash(first) == hash(second)
    assert len({first, second}) == 1


def test_credit_inequality_on_key():
    first = CreditRecord(key="a", component="Same", owner=OWNER, license=LICENSE)
    second = CreditRecord(key="b", component="Same", owner=OWNER, license=LICENSE)

    assert first != second
    assert first != "a"


def test_credit_attribution_triple():
    credit = CreditRecord(key="k", component="Comp", owner=OWNER, license=LICENSE)

    assert credit.attribution == ("Comp", "Owner One", "Inline License")


def test_owner_and_license_inline_flag():
    assert OWNER.is_inline is False
    assert LICENSE.is_inline is True


def test_coordinate_equality_and_str():
    coordinate = ArtifactCoordinate("org.example", "lib")

    assert coordinate == ArtifactCoordinate(group_id="org.example", artifact_id="lib")
    assert coordinate != ArtifactCoordinate("org.example", "other")
    assert str(coordinate) == "org.example:lib"


@pytest.mark.parametrize(
    "notation",
    ["org.example:lib", "org.example:lib:1.0.0", " org.example : lib : 1.0 ", "org.example:lib:1.0:sources"],
)
def test_coordinate_parse(notation):
    assert ArtifactCoordinate.parse(notation) == ArtifactCoordinate("org.example", "lib")


@pytest.mark.parametrize("notation", ["", "lib", ":lib", "org.example:", "org.example: :1.0"])
def test_coordinate_parse_invalid(notation):
    with pytest.raises(ValueError, match="Invalid artifact coordinate"):
        ArtifactCoordinate.parse(notation)
