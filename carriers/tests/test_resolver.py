from datetime import date

import freezegun
import pytest

from carriers.constants import RelationshipType
from carriers.models import RuleContext
from carriers.resolver import CarrierRuleResolver
from common.tests import factories

pytestmark = pytest.mark.django_db


@pytest.fixture
def resolver():
    return CarrierRuleResolver()


def acceptance_rule(carrier, **kwargs):
    return factories.CarrierAcceptanceRuleFactory.create(carrier=carrier, **kwargs)


def test_context_collects_port_and_category_groups(resolver, carrier, port):
    port_group = factories.CarrierPortGroupFactory.create(carrier=carrier)
    factories.CarrierPortGroupMemberFactory.create(port_group=port_group, port=port)
    category_group = factories.CarrierCategoryGroupFactory.create(carrier=carrier)
    factories.CarrierCategoryGroupMemberFactory.create(
        category_group=category_group,
        vehicle_category="truck",
    )
    other_carrier_group = factories.CarrierPortGroupFactory.create()
    factories.CarrierPortGroupMemberFactory.create(
        port_group=other_carrier_group,
        port=port,
    )

    context = resolver.context(carrier, port, "Truck", vessel_name="Grande Lagos")

    assert context == RuleContext(
        carrier_id=carrier.pk,
        port_id=port.pk,
        port_group_ids=frozenset({port_group.pk}),
        vehicle_category="truck",
        category_group_ids=frozenset({category_group.pk}),
        vessel_name="Grande Lagos",
    )


def test_context_ignores_inactive_and_expired_groups(resolver, carrier, port, date_ranges):
    inactive = factories.CarrierPortGroupFactory.create(carrier=carrier, is_active=False)
    expired = factories.CarrierPortGroupFactory.create(
        carrier=carrier,
        effective_from=date_ranges.expired.lower,
        effective_to=date_ranges.expired.upper,
    )
    factories.CarrierPortGroupMemberFactory.create(port_group=inactive, port=port)
    factories.CarrierPortGroupMemberFactory.create(port_group=expired, port=port)
    group = factories.CarrierPortGroupFactory.create(carrier=carrier)
    factories.CarrierPortGroupMemberFactory.create(
        port_group=group,
        port=port,
        is_active=False,
    )

    assert resolver.context(carrier, port, "car").port_group_ids == frozenset()


def test_context_treats_unknown_category_as_none(resolver, carrier, port):
    assert resolver.context(carrier, port, "hovercraft").vehicle_category is None


def test_no_rules_resolves_to_none(resolver, carrier, port):
    assert resolver.resolve_acceptance_rule(carrier, port, "car") is None


def test_priority_beats_specificity(resolver, carrier, port):
    broad = acceptance_rule(carrier, priority=10)
    acceptance_rule(
        carrier,
        priority=0,
        port_ids=[port.pk],
        vehicle_categories=["car"],
        vessel_names=["Grande Lagos"],
    )

    assert (
        resolver.resolve_acceptance_rule(
            carrier,
            port,
            "car",
            vessel_name="Grande Lagos",
        )
        == broad
    )


def test_more_specific_rule_wins_at_equal_priority(resolver, carrier, port):
    acceptance_rule(carrier)
    port_rule = acceptance_rule(carrier, port_ids=[port.pk])
    vessel_rule = acceptance_rule(carrier, vessel_names=["Grande Lagos"])

    assert resolver.resolve_acceptance_rule(carrier, port, "car") == port_rule
    assert (
        resolver.resolve_acceptance_rule(
            carrier,
            port,
            "car",
            vessel_name="Grande Lagos",
        )
        == vessel_rule
    )


def test_narrower_scope_beats_lower_sort_order(resolver, carrier, port):
    acceptance_rule(carrier, sort_order=0)
    port_rule = acceptance_rule(carrier, sort_order=5, port_ids=[port.pk])

    assert resolver.resolve_acceptance_rule(carrier, port, "car") == port_rule


def test_direct_port_beats_port_group(resolver, carrier, port):
    group = factories.CarrierPortGroupFactory.create(carrier=carrier)
    factories.CarrierPortGroupMemberFactory.create(port_group=group, port=port)
    group_rule = acceptance_rule(carrier, port_group_ids=[group.pk])
    port_rule = acceptance_rule(carrier, port_ids=[port.pk])

    resolution = resolver.explain_acceptance_rule(carrier, port, "car")

    assert resolution.selected == port_rule
    assert resolution.candidates == [port_rule, group_rule]


def test_port_group_rules_apply_to_member_ports(resolver, carrier, port):
    group = factories.CarrierPortGroupFactory.create(carrier=carrier)
    factories.CarrierPortGroupMemberFactory.create(port_group=group, port=port)
    outside = factories.PortFactory.create(code="DKR")
    rule = acceptance_rule(carrier, port_group_ids=[group.pk])

    assert resolver.resolve_acceptance_rule(carrier, port, "car") == rule
    assert resolver.resolve_acceptance_rule(carrier, outside, "car") is None


def test_category_group_beats_vehicle_category(resolver, carrier, port):
    group = factories.CarrierCategoryGroupFactory.create(carrier=carrier, code="LM_CARGO")
    factories.CarrierCategoryGroupMemberFactory.create(
        category_group=group,
        vehicle_category="truck",
    )
    acceptance_rule(carrier, vehicle_categories=["truck"])
    group_rule = acceptance_rule(carrier, category_group_ids=[group.pk])

    assert resolver.resolve_acceptance_rule(carrier, port, "truck") == group_rule
    assert resolver.resolve_acceptance_rule(carrier, port, "car") is None


def test_explicit_category_group_is_added_to_context(resolver, carrier, port):
    group = factories.CarrierCategoryGroupFactory.create(carrier=carrier)
    rule = acceptance_rule(carrier, category_group_ids=[group.pk])

    assert resolver.resolve_acceptance_rule(carrier, port, "car") is None
    assert (
        resolver.resolve_acceptance_rule(
            carrier,
            port,
            "car",
            category_group_id=group.pk,
        )
        == rule
    )


def test_vehicle_categories_are_normalised(resolver, carrier, port):
    rule = acceptance_rule(carrier, vehicle_categories=["Small Van", "TRACTOR"])

    assert resolver.resolve_acceptance_rule(carrier, port, "small-van") == rule
    assert resolver.resolve_acceptance_rule(carrier, port, "truckhead") == rule
    assert resolver.resolve_acceptance_rule(carrier, port, "car") is None


def test_unknown_category_only_matches_unscoped_rules(resolver, carrier, port):
    acceptance_rule(carrier, vehicle_categories=["other"])
    unscoped = acceptance_rule(carrier)

    assert resolver.resolve_acceptance_rule(carrier, port, "hovercraft") == unscoped


def test_vessel_matching_ignores_case_and_spacing(resolver, carrier, port):
    rule = acceptance_rule(
        carrier,
        vessel_names=["Grande Lagos"],
        vessel_classes=["G5"],
    )

    assert (
        resolver.resolve_acceptance_rule(
            carrier,
            port,
            "car",
            vessel_name="  grande LAGOS ",
            vessel_class="g5",
        )
        == rule
    )
    assert (
        resolver.resolve_acceptance_rule(
            carrier,
            port,
            "car",
            vessel_name="Grande Lagos",
        )
        is None
    )


def test_sort_order_then_latest_effective_from_break_ties(resolver, carrier, port):
    older = acceptance_rule(carrier, effective_from=date(2024, 1, 1))
    newer = acceptance_rule(carrier, effective_from=date(2025, 1, 1))
    undated = acceptance_rule(carrier)

    assert resolver.explain_acceptance_rule(carrier, port, "car").candidates == [
        newer,
        older,
        undated,
    ]

    first = acceptance_rule(carrier, sort_order=-1)
    assert resolver.resolve_acceptance_rule(carrier, port, "car") == first


def test_rules_tied_on_everything_but_age_are_ambiguous(resolver, carrier, port):
    first = acceptance_rule(carrier)
    second = acceptance_rule(carrier)

    resolution = resolver.explain_acceptance_rule(carrier, port, "car")

    assert resolution.ambiguous
    assert resolution.selected == second
    assert resolution.candidates == [second, first]


def test_clear_winner_is_not_ambiguous(resolver, carrier, port):
    acceptance_rule(carrier)
    acceptance_rule(carrier, priority=1)

    assert not resolver.explain_acceptance_rule(carrier, port, "car").ambiguous


def test_rules_of_other_carriers_are_ignored(resolver, carrier, port):
    acceptance_rule(factories.ShippingCarrierFactory.create(), priority=100)
    own = acceptance_rule(carrier)

    assert resolver.resolve_acceptance_rule(carrier, port, "car") == own


def test_rules_out_of_effect_are_ignored(carrier, port):
    rule = acceptance_rule(
        carrier,
        effective_from=date(2026, 1, 1),
        effective_to=date(2026, 6, 30),
    )
    acceptance_rule(carrier, is_active=False, priority=100)

    with freezegun.freeze_time("2026-07-01"):
        assert CarrierRuleResolver().resolve_acceptance_rule(carrier, port, "car") is None

    assert (
        CarrierRuleResolver(at=date(2026, 6, 30)).resolve_acceptance_rule(
            carrier,
            port,
            "car",
        )
        == rule
    )


def test_acceptance_rules_with_inverted_limits_are_skipped(resolver, carrier, port):
    acceptance_rule(carrier, priority=10, min_length_cm=500, max_length_cm=400)
    valid = acceptance_rule(carrier, max_length_cm=1200)

    assert resolver.resolve_acceptance_rule(carrier, port, "car") == valid


def test_resolving_with_a_prepared_context(resolver, carrier, port):
    rule = acceptance_rule(carrier, port_ids=[port.pk])
    context = resolver.context(carrier, port, "car")

    assert resolver.resolve_acceptance_rule(context) == rule


def test_transform_rules_are_all_returned_in_ranking_order(resolver, carrier, port):
    general = factories.CarrierTransformRuleFactory.create(carrier=carrier)
    specific = factories.CarrierTransformRuleFactory.create(
        carrier=carrier,
        port_ids=[port.pk],
    )

    assert resolver.resolve_transform_rules(carrier, port, "truck") == [
        specific,
        general,
    ]


def test_article_map_is_selected_by_event_code(resolver, carrier, port):
    factories.CarrierSurchargeArticleMapFactory.create(
        carrier=carrier,
        event_code="OVERWIDTH",
    )
    towing_map = factories.CarrierSurchargeArticleMapFactory.create(
        carrier=carrier,
        event_code="TOWING",
    )
    port_towing_map = factories.CarrierSurchargeArticleMapFactory.create(
        carrier=carrier,
        event_code="TOWING",
        port_ids=[port.pk],
    )
    other_port = factories.PortFactory.create(code="COO")

    assert (
        resolver.resolve_article_map(carrier, port, "trailer", event_code="TOWING")
        == port_towing_map
    )
    assert (
        resolver.resolve_article_map(carrier, other_port, "trailer", event_code="TOWING")
        == towing_map
    )
    assert (
        resolver.resolve_article_map(carrier, port, "trailer", event_code="HEAVY")
        is None
    )


def test_article_mappings_are_not_exclusive(resolver, carrier, port):
    freight = factories.CarrierArticleMappingFactory.create(
        carrier=carrier,
        port_ids=[port.pk],
        vehicle_categories=["car"],
    )
    documentation = factories.CarrierArticleMappingFactory.create(carrier=carrier)
    factories.CarrierArticleMappingFactory.create(carrier=carrier, is_active=False)
    factories.CarrierArticleMappingFactory.create(
        carrier=carrier,
        vehicle_categories=["truck"],
    )

    assert resolver.resolve_article_mappings(carrier, port, "car") == [
        freight,
        documentation,
    ]


class TestSurchargeRules:
    @pytest.fixture
    def towing_rule(self, carrier):
        return factories.CarrierSurchargeRuleFactory.create(
            carrier=carrier,
            event_code="TOWING",
            vehicle_categories=["trailer"],
        )

    @pytest.fixture
    def handling_rule(self, carrier):
        return factories.CarrierSurchargeRuleFactory.create(
            carrier=carrier,
            event_code="HANDLING",
        )

    def test_towing_is_dropped_without_a_commodity_item(
        self,
        resolver,
        carrier,
        port,
        towing_rule,
        handling_rule,
    ):
        assert resolver.resolve_surcharge_rules(carrier, port, "trailer") == [
            handling_rule,
        ]

    def test_towing_is_kept_for_a_standalone_trailer(
        self,
        resolver,
        carrier,
        port,
        add_item,
        towing_rule,
        handling_rule,
    ):
        trailer = add_item("trailer")

        rules = resolver.resolve_surcharge_rules(
            carrier,
            port,
            "trailer",
            commodity_item_id=trailer.pk,
        )

        assert set(rules) == {towing_rule, handling_rule}

    def test_towing_is_dropped_for_a_trailer_connected_to_a_truck(
        self,
        resolver,
        carrier,
        port,
        add_item,
        towing_rule,
        handling_rule,
    ):
        truck = add_item("truck")
        trailer = add_item(
            "trailer",
            relationship_type=RelationshipType.CONNECTED,
            related_item_id=truck.pk,
        )

        rules = resolver.resolve_surcharge_rules(
            carrier,
            port,
            "trailer",
            commodity_item_id=trailer.pk,
        )

        assert rules == [handling_rule]

    def test_towing_is_dropped_for_a_missing_commodity_item(
        self,
        resolver,
        carrier,
        port,
        towing_rule,
    ):
        assert (
            resolver.resolve_surcharge_rules(
                carrier,
                port,
                "trailer",
                commodity_item_id=999999,
            )
            == []
        )
