from decimal import Decimal

import pytest

from carriers.constants import AcceptanceStatus
from carriers.constants import CalcMode
from carriers.constants import RelationshipType
from common.exceptions import MissingScheduleContext
from common.tests import factories
from quotations.integration import CarrierRuleIntegrationService
from quotations.integration import cargo_input_for

pytestmark = pytest.mark.django_db


@pytest.fixture
def service():
    return CarrierRuleIntegrationService()


@pytest.fixture
def towing_article(carrier):
    rule = factories.CarrierSurchargeRuleFactory.create(
        carrier=carrier,
        name="Towing",
        event_code="TOWING",
        vehicle_categories=["trailer"],
        calc_mode=CalcMode.FLAT,
        params={"amount": 150},
    )
    article_map = factories.CarrierSurchargeArticleMapFactory.create(
        carrier=carrier,
        event_code="TOWING",
        article__article_code="GANRTOWING",
    )
    return rule, article_map.article


@pytest.fixture
def heavy_article(carrier):
    factories.CarrierSurchargeRuleFactory.create(
        carrier=carrier,
        name="Heavy",
        event_code="HEAVY",
        calc_mode=CalcMode.PER_TON_ABOVE,
        params={"threshold_kg": 10000, "amount_per_ton": 0},
    )
    return factories.CarrierSurchargeArticleMapFactory.create(
        carrier=carrier,
        event_code="HEAVY",
        article__unit_price=Decimal("12.50"),
    ).article


def test_cargo_input_for(add_item, quotation):
    quotation.vessel_name = "Grande Lagos"
    quotation.save()
    item = add_item(
        "truck",
        length_cm=Decimal("1050.50"),
        quantity=2,
        flags=["empty"],
    )

    cargo = cargo_input_for(item)

    assert cargo.carrier_id == quotation.carrier_id
    assert cargo.pod_port_id == quotation.pod_port_id
    assert cargo.category == "truck"
    assert cargo.length_cm == 1050.5
    assert cargo.cbm == 0.0
    assert cargo.unit_count == 2
    assert cargo.flags == ["empty"]
    assert cargo.vessel_name == "Grande Lagos"
    assert cargo.vessel_class is None
    assert cargo.commodity_item_id == item.pk


def test_cargo_input_needs_a_carrier_and_port():
    item = factories.QuotationCommodityItemFactory.create(quotation__carrier=None)

    with pytest.raises(MissingScheduleContext):
        cargo_input_for(item)


def test_missing_schedule_is_skipped(service):
    item = factories.QuotationCommodityItemFactory.create(quotation__pod_port=None)

    assert service.process_commodity_item(item) is None
    item.refresh_from_db()
    assert item.carrier_rule_meta is None


def test_result_is_stored_on_the_item(service, add_item):
    item = add_item("Truck", length_cm=Decimal("1200"), width_cm=Decimal("250"))

    service.process_commodity_item(item)

    item.refresh_from_db()
    assert item.chargeable_lm == Decimal("12.000")
    assert item.carrier_rule_meta == {
        "classified_category": "truck",
        "matched_category_group": None,
        "acceptance_status": AcceptanceStatus.ALLOWED,
        "violations": [],
        "approvals_required": [],
        "warnings": [],
        "base_lm": 12.0,
        "chargeable_lm": 12.0,
        "transform_reason": None,
        "applied_transform_rule_id": None,
        "surcharge_events": [],
        "towing": {
            "applies": False,
            "reason": "Category 'Truck' is not towable",
        },
    }


def test_surcharge_line_is_added(service, add_item, quotation, towing_article):
    rule, article = towing_article
    trailer = add_item("trailer")

    result = service.process_commodity_item(trailer)

    assert result.acceptance_status == AcceptanceStatus.ALLOWED_WITH_SURCHARGES
    (line,) = quotation.articles.all()
    assert line.article == article
    assert line.quantity == Decimal("1")
    assert line.unit_price == Decimal("25.00")
    assert line.selling_price == Decimal("150.00")
    assert line.subtotal == Decimal("150.00")
    assert line.notes == {
        "carrier_rule_applied": True,
        "event_code": "TOWING",
        "reason": "Towing",
        "matched_rule_id": rule.pk,
        "commodity_item_id": trailer.pk,
    }
    quotation.refresh_from_db()
    assert quotation.total_amount == Decimal("150.00")
    trailer.refresh_from_db()
    assert trailer.carrier_rule_meta["towing"] == {
        "applies": True,
        "reason": "Standalone trailer",
    }
    (event,) = trailer.carrier_rule_meta["surcharge_events"]
    assert event["event_code"] == "TOWING"
    assert event["amount"] > 0


def test_surcharge_line_is_removed_when_no_longer_raised(
    service,
    add_item,
    quotation,
    towing_article,
):
    trailer = add_item("trailer")
    service.process_commodity_item(trailer)
    truck = add_item("truck")
    trailer.relationship_type = RelationshipType.CONNECTED
    trailer.related_item_id = truck.pk
    trailer.save()

    service.process_commodity_item(trailer)

    assert not quotation.articles.exists()
    trailer.refresh_from_db()
    assert not [
        event
        for event in trailer.carrier_rule_meta["surcharge_events"]
        if event["event_code"] == "TOWING"
    ]
    assert trailer.carrier_rule_meta["towing"]["applies"] is False
    quotation.refresh_from_db()
    assert quotation.total_amount == Decimal("0")


def test_no_towing_event_for_a_trailer_connected_to_a_truckhead(
    service,
    add_item,
    towing_article,
):
    head = add_item("truckhead")
    trailer = add_item(
        "trailer",
        relationship_type=RelationshipType.CONNECTED,
        related_item_id=head.pk,
    )

    service.process_commodity_item(trailer)

    trailer.refresh_from_db()
    assert trailer.carrier_rule_meta["surcharge_events"] == []
    assert trailer.carrier_rule_meta["towing"] == {
        "applies": False,
        "reason": f"Connected to truckhead on line {head.line_number}",
    }


def test_surcharge_line_is_updated_in_place(service, add_item, quotation, heavy_article):
    truck = add_item("truck", weight_kg=Decimal("14000"))
    service.process_commodity_item(truck)
    (line,) = quotation.articles.all()

    truck.weight_kg = Decimal("16500")
    truck.save()
    service.process_commodity_item(truck)

    (updated,) = quotation.articles.all()
    assert updated.pk == line.pk
    assert updated.quantity == Decimal("6.500")
    assert updated.selling_price == Decimal("12.50")
    assert updated.subtotal == Decimal("81.25")
    quotation.refresh_from_db()
    assert quotation.total_amount == Decimal("81.25")


def test_lines_of_other_items_and_manual_lines_are_kept(
    service,
    add_item,
    quotation,
    heavy_article,
):
    manual = factories.QuotationArticleFactory.create(
        quotation=quotation,
        subtotal=Decimal("850.00"),
    )
    first = add_item("truck", weight_kg=Decimal("12000"))
    second = add_item("truck", weight_kg=Decimal("11000"))
    service.process_quotation(quotation)

    second.weight_kg = Decimal("9000")
    second.save()
    service.process_commodity_item(second)

    lines = list(quotation.articles.order_by("pk"))
    assert [line.pk for line in lines[:1]] == [manual.pk]
    assert [line.notes["commodity_item_id"] for line in lines[1:]] == [first.pk]
    quotation.refresh_from_db()
    assert quotation.total_amount == Decimal("875.00")


def test_process_quotation(service, add_item, quotation):
    add_item("car")
    add_item("truck")

    results = service.process_quotation(quotation)

    assert [r.classified_category for r in results] == ["car", "truck"]
    assert all(item.carrier_rule_meta for item in quotation.commodity_items.all())
