import pytest

from common.tests import factories
from ports.models import Port

pytestmark = pytest.mark.django_db

COUNTRY_NAMES = {"nigeria": "NG", "ghana": "GH"}


@pytest.mark.parametrize(
    "unlocode, country, expected",
    [
        ("NGLOS", "Ghana", "NG"),
        ("ngapp", "", "NG"),
        (None, "Nigeria", "NG"),
        ("", " GHANA ", "GH"),
        ("12ABC", "Ghana", "GH"),
        (None, "Atlantis", None),
        (None, "", None),
    ],
    ids=[
        "unlocode_wins",
        "lower_case_unlocode",
        "country_name",
        "country_name_case_and_spacing",
        "numeric_unlocode_prefix",
        "unknown_country",
        "nothing_known",
    ],
)
def test_derive_country_code(unlocode, country, expected):
    port = factories.PortFactory.build(unlocode=unlocode, country=country)

    assert port.derive_country_code(COUNTRY_NAMES) == expected


def test_missing_country_code():
    blank = factories.PortFactory.create(country_code="")
    null = factories.PortFactory.create(country_code=None)
    factories.PortFactory.create(country_code="NG")

    assert set(Port.objects.missing_country_code()) == {blank, null}


def test_str():
    port = factories.PortFactory.build(code="TEM", name="Tema")

    assert str(port) == "Tema (TEM)"
