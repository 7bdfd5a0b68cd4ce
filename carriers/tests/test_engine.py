import pytest

from carriers.constants import FLAG_EMPTY
from carriers.constants import FLAG_NON_SELF_PROPELLED
from carriers.constants import AcceptanceStatus
from carriers.constants import CalcMode
from carriers.constants import QuantityMode
from carriers.engine import CargoInput
from carriers.engine import CarrierRuleEngine
from common.tests import factories

pytestmark = pytest.mark.django_db


@pytest.fixture
def engine():
    return CarrierRuleEngine()


@pytest.fixture
def make_cargo(carrier, port):
    def make(**kwargs):
        kwargs.setdefault("category", "truck")
        kwargs.setdefault("length_cm", 1000.0)
        kwargs.setdefault("width_cm", 250.0)
        kwargs.setdefault("height_cm", 380.0)
        kwargs.setdefault("weight_kg", 12000.0)
        return CargoInput(carrier_id=carrier.pk, pod_port_id=port.pk, **kwargs)

    return make


@pytest.fixture
def limits(carrier):
    return factories.CarrierAcceptanceRuleFactory.create(
        carrier=carrier,
        max_length_cm=1650,
        max_width_cm=300,
        max_height_cm=400,
        max_weight_kg=40000,
        soft_max_height_cm=450,
        soft_height_requires_approval=True,
        min_length_cm=300,
    )


def surcharge(carrier, event_code, **kwargs):
    return factories.CarrierSurchargeRuleFactory.create(
        carrier=carrier,
        event_code=event_code,
        **kwargs,
    )


def test_cargo_without_rules_is_allowed(engine, make_cargo):
    result = engine.process_cargo(make_cargo())

    assert result.acceptance_status == AcceptanceStatus.ALLOWED
    assert result.acceptance.rule_id is None
    assert result.classified_category == "truck"
    assert result.measure.chargeable_lm == pytest.approx(10.0)
    assert result.surcharge_events == []
    assert result.quote_line_drafts == []


def test_cargo_within_limits_is_allowed(engine, make_cargo, limits):
    result = engine.process_cargo(make_cargo())

    assert result.acceptance_status == AcceptanceStatus.ALLOWED
    assert result.acceptance.rule_id == limits.pk
    assert result.acceptance.violations == []


@pytest.mark.parametrize(
    "dimensions, violation",
    [
        ({"length_cm": 1700.0}, "max_length_exceeded"),
        ({"width_cm": 320.0}, "max_width_exceeded"),
        ({"weight_kg": 41000.0}, "max_weight_exceeded"),
        ({"height_cm": 460.0}, "max_height_exceeded"),
        ({"length_cm": 250.0}, "min_length_below"),
    ],
)
def test_cargo_outside_limits_is_refused(
    engine,
    make_cargo,
    limits,
    dimensions,
    violation,
):
    result = engine.process_cargo(make_cargo(**dimensions))

    assert result.acceptance_status == AcceptanceStatus.NOT_ALLOWED
    assert result.acceptance.violations == [violation]


def test_height_within_soft_maximum_needs_approval(engine, make_cargo, limits):
    result = engine.process_cargo(make_cargo(height_cm=430.0))

    assert result.acceptance_status == AcceptanceStatus.ALLOWED_UPON_REQUEST
    assert result.acceptance.approvals_required == ["soft_height_approval"]


def test_refusal_outranks_approval(engine, make_cargo, limits):
    result = engine.process_cargo(make_cargo(height_cm=430.0, length_cm=1700.0))

    assert result.acceptance_status == AcceptanceStatus.NOT_ALLOWED
    assert result.acceptance.approvals_required == ["soft_height_approval"]
    assert result.acceptance.violations == ["max_length_exceeded"]


def test_zero_maximum_is_a_limit(engine, make_cargo, carrier):
    factories.CarrierAcceptanceRuleFactory.create(carrier=carrier, max_cbm=0)

    result = engine.process_cargo(make_cargo(cbm=1.5))

    assert result.acceptance.violations == ["max_cbm_exceeded"]


def test_soft_minimum_only_warns(engine, make_cargo, carrier):
    factories.CarrierAcceptanceRuleFactory.create(
        carrier=carrier,
        min_weight_kg=1000,
        min_is_hard=False,
    )

    result = engine.process_cargo(make_cargo(weight_kg=800.0))

    assert result.acceptance_status == AcceptanceStatus.ALLOWED
    assert result.acceptance.warnings == ["min_weight_below"]


def test_must_be_empty(engine, make_cargo, carrier):
    factories.CarrierAcceptanceRuleFactory.create(carrier=carrier, must_be_empty=True)

    loaded = engine.process_cargo(make_cargo())
    empty = engine.process_cargo(make_cargo(flags=[FLAG_EMPTY]))

    assert loaded.acceptance.violations == ["must_be_empty_required"]
    assert empty.acceptance_status == AcceptanceStatus.ALLOWED


def test_must_be_self_propelled(engine, make_cargo, carrier):
    factories.CarrierAcceptanceRuleFactory.create(
        carrier=carrier,
        must_be_self_propelled=True,
    )

    towed = engine.process_cargo(make_cargo(flags=[FLAG_NON_SELF_PROPELLED]))
    driven = engine.process_cargo(make_cargo())

    assert towed.acceptance.violations == ["must_be_self_propelled_required"]
    assert driven.acceptance_status == AcceptanceStatus.ALLOWED


def test_matched_category_group(engine, make_cargo, carrier):
    low = factories.CarrierCategoryGroupFactory.create(carrier=carrier, code="HEAVY")
    high = factories.CarrierCategoryGroupFactory.create(
        carrier=carrier,
        code="LM_CARGO",
        priority=5,
    )
    for group in (low, high):
        factories.CarrierCategoryGroupMemberFactory.create(
            category_group=group,
            vehicle_category="truck",
        )

    assert engine.process_cargo(make_cargo()).matched_category_group == "LM_CARGO"
    assert (
        engine.process_cargo(make_cargo(category_group_id=low.pk)).matched_category_group
        == "HEAVY"
    )
    assert engine.process_cargo(make_cargo(category="car")).matched_category_group is None


class TestSurcharges:
    def test_events_make_cargo_allowed_with_surcharges(self, engine, make_cargo, carrier):
        rule = surcharge(
            carrier,
            "HEAVY",
            name="Heavy cargo",
            calc_mode=CalcMode.PER_TON_ABOVE,
            params={"threshold_kg": 10000, "amount_per_ton": 15},
        )

        result = engine.process_cargo(make_cargo())

        assert result.acceptance_status == AcceptanceStatus.ALLOWED_WITH_SURCHARGES
        assert result.surcharge_events == [
            {
                "event_code": "HEAVY",
                "qty": 2.0,
                "amount_basis": "PER_TON_ABOVE",
                "amount": 15.0,
                "params": {"threshold_kg": 10000, "amount_per_ton": 15},
                "matched_rule_id": rule.pk,
                "reason": "Heavy cargo",
            },
        ]

    def test_refused_cargo_keeps_its_status(self, engine, make_cargo, carrier, limits):
        surcharge(carrier, "DOCS")

        result = engine.process_cargo(make_cargo(length_cm=1700.0))

        assert result.acceptance_status == AcceptanceStatus.NOT_ALLOWED
        assert [e["event_code"] for e in result.surcharge_events] == ["DOCS"]

    def test_only_first_rule_of_an_exclusive_group_applies(
        self,
        engine,
        make_cargo,
        carrier,
    ):
        surcharge(
            carrier,
            "OVERWIDTH",
            priority=10,
            calc_mode=CalcMode.WIDTH_LM_BASIS,
            params={"exclusive_group": "width", "amount_per_lm": 20},
        )
        surcharge(
            carrier,
            "OVERWIDTH_BLOCKS",
            calc_mode=CalcMode.WIDTH_STEP_BLOCKS,
            params={"exclusive_group": "width", "amount_per_block": 30},
        )
        surcharge(carrier, "DOCS")

        result = engine.process_cargo(make_cargo(width_cm=290.0))

        assert [e["event_code"] for e in result.surcharge_events] == [
            "OVERWIDTH",
            "DOCS",
        ]

    def test_exclusive_group_falls_through_when_first_rule_does_not_apply(
        self,
        engine,
        make_cargo,
        carrier,
    ):
        surcharge(
            carrier,
            "OVERWIDTH",
            priority=10,
            calc_mode=CalcMode.WIDTH_LM_BASIS,
            params={
                "exclusive_group": "width",
                "trigger_width_gt_cm": 300,
                "amount_per_lm": 20,
            },
        )
        surcharge(
            carrier,
            "OVERWIDTH_BLOCKS",
            calc_mode=CalcMode.WIDTH_STEP_BLOCKS,
            params={"exclusive_group": "width", "amount_per_block": 30},
        )

        result = engine.process_cargo(make_cargo(width_cm=290.0))

        assert [e["event_code"] for e in result.surcharge_events] == [
            "OVERWIDTH_BLOCKS",
        ]

    def test_unknown_calc_mode_is_skipped(self, engine, make_cargo, carrier):
        surcharge(carrier, "MYSTERY", priority=10, calc_mode="EXPRESSION")
        surcharge(carrier, "DOCS")

        result = engine.process_cargo(make_cargo())

        assert [e["event_code"] for e in result.surcharge_events] == ["DOCS"]

    def test_percentage_needs_basic_freight(self, engine, make_cargo, carrier):
        surcharge(
            carrier,
            "BAF",
            calc_mode=CalcMode.PERCENT_OF_BASIC_FREIGHT,
            params={"percentage": 10},
        )

        without = engine.process_cargo(make_cargo())
        with_freight = engine.process_cargo(make_cargo(basic_freight=1200.0))

        assert without.surcharge_events == []
        assert without.acceptance_status == AcceptanceStatus.ALLOWED
        assert with_freight.surcharge_events[0]["amount"] == pytest.approx(120.0)


class TestQuoteLineDrafts:
    def test_event_quantity(self, engine, make_cargo, carrier):
        rule = surcharge(
            carrier,
            "PER_LM",
            name="Lashing",
            calc_mode=CalcMode.PER_LM,
            params={"amount": 0},
        )
        article_map = factories.CarrierSurchargeArticleMapFactory.create(
            carrier=carrier,
            event_code="PER_LM",
            qty_mode=QuantityMode.EVENT,
        )

        result = engine.process_cargo(make_cargo())

        assert result.quote_line_drafts == [
            {
                "article_id": article_map.article_id,
                "qty": pytest.approx(10.0),
                "amount_override": None,
                "meta": {
                    "event_code": "PER_LM",
                    "qty_mode": QuantityMode.EVENT,
                    "reason": "Lashing",
                    "matched_rule_id": rule.pk,
                },
            },
        ]

    def test_single_quantity_and_amount_override(self, engine, make_cargo, carrier):
        surcharge(
            carrier,
            "HEAVY",
            calc_mode=CalcMode.PER_TON_ABOVE,
            params={"threshold_kg": 10000, "amount_per_ton": 15},
        )
        factories.CarrierSurchargeArticleMapFactory.create(
            carrier=carrier,
            event_code="HEAVY",
            qty_mode=QuantityMode.SINGLE,
        )

        (draft,) = engine.process_cargo(make_cargo()).quote_line_drafts

        assert draft["qty"] == 1
        assert draft["amount_override"] == 15.0

    def test_event_without_article_is_not_billed(self, engine, make_cargo, carrier):
        surcharge(carrier, "DOCS")

        result = engine.process_cargo(make_cargo())

        assert len(result.surcharge_events) == 1
        assert result.quote_line_drafts == []
