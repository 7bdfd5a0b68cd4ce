"""
Runs one cargo line through a carrier's rules.

The steps are, in order: find the category groups of the vehicle category,
check the acceptance rule, measure the chargeable LM, work out surcharge
events and finally pick the sales articles that bill those events.
"""
import logging
from dataclasses import dataclass
from dataclasses import field
from datetime import date
from typing import Dict
from typing import List
from typing import Optional

from carriers.chargeable import ChargeableMeasure
from carriers.chargeable import ChargeableMeasureService
from carriers.constants import FLAG_EMPTY
from carriers.constants import FLAG_NON_SELF_PROPELLED
from carriers.constants import AcceptanceStatus
from carriers.constants import QuantityMode
from carriers.models import CarrierCategoryGroup
from carriers.models import RuleContext
from carriers.resolver import CarrierRuleResolver
from carriers.surcharges import SurchargeCalculator
from common.exceptions import UnknownCalculationMode

logger = logging.getLogger(__name__)

# Names used in violation codes, and the cargo attribute each refers to.
LIMITED_MEASURES = {
    "length": "length_cm",
    "width": "width_cm",
    "height": "height_cm",
    "cbm": "cbm",
    "weight": "weight_kg",
}


@dataclass
class CargoInput:
    """One cargo line as seen by the carrier rules."""

    carrier_id: int
    pod_port_id: Optional[int]
    category: Optional[str]
    length_cm: float = 0.0
    width_cm: float = 0.0
    height_cm: float = 0.0
    cbm: float = 0.0
    weight_kg: float = 0.0
    unit_count: int = 1
    flags: List[str] = field(default_factory=list)
    category_group_id: Optional[int] = None
    vessel_name: Optional[str] = None
    vessel_class: Optional[str] = None
    commodity_item_id: Optional[int] = None
    basic_freight: Optional[float] = None


@dataclass
class AcceptanceCheck:
    status: str = AcceptanceStatus.ALLOWED
    violations: List[str] = field(default_factory=list)
    approvals_required: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    rule_id: Optional[int] = None

    def refuse(self, violation: str):
        self.violations.append(violation)
        self.status = AcceptanceStatus.NOT_ALLOWED

    def require_approval(self, approval: str):
        self.approvals_required.append(approval)
        if self.status != AcceptanceStatus.NOT_ALLOWED:
            self.status = AcceptanceStatus.ALLOWED_UPON_REQUEST


@dataclass
class CarrierRuleResult:
    classified_category: Optional[str]
    matched_category_group: Optional[str]
    acceptance: AcceptanceCheck
    measure: ChargeableMeasure
    surcharge_events: List[Dict] = field(default_factory=list)
    quote_line_drafts: List[Dict] = field(default_factory=list)

    @property
    def acceptance_status(self) -> str:
        return self.acceptance.status


class CarrierRuleEngine:
    def __init__(
        self,
        resolver: Optional[CarrierRuleResolver] = None,
        measure_service: Optional[ChargeableMeasureService] = None,
        calculator: Optional[SurchargeCalculator] = None,
        at: Optional[date] = None,
    ):
        self.resolver = resolver or CarrierRuleResolver(at=at)
        self.measure_service = measure_service or ChargeableMeasureService(
            self.resolver,
        )
        self.calculator = calculator or SurchargeCalculator()

    def process_cargo(self, cargo: CargoInput) -> CarrierRuleResult:
        context = self.resolver.context(
            cargo.carrier_id,
            cargo.pod_port_id,
            cargo.category,
            category_group_id=cargo.category_group_id,
            vessel_name=cargo.vessel_name,
            vessel_class=cargo.vessel_class,
        )

        acceptance = self.check_acceptance(cargo, context)
        measure = self.measure_service.compute_chargeable_lm(
            cargo.length_cm,
            cargo.width_cm,
            context,
        )
        events = self.surcharge_events(cargo, context, measure)
        if events and acceptance.status == AcceptanceStatus.ALLOWED:
            acceptance.status = AcceptanceStatus.ALLOWED_WITH_SURCHARGES

        return CarrierRuleResult(
            classified_category=context.vehicle_category,
            matched_category_group=self.category_group_code(cargo, context),
            acceptance=acceptance,
            measure=measure,
            surcharge_events=events,
            quote_line_drafts=self.quote_line_drafts(events, context),
        )

    def category_group_code(
        self,
        cargo: CargoInput,
        context: RuleContext,
    ) -> Optional[str]:
        """The code of the explicitly given category group, or else of the
        highest priority group the vehicle category belongs to."""
        groups = CarrierCategoryGroup.objects.filter(carrier_id=context.carrier_id)
        if cargo.category_group_id is not None:
            group = groups.filter(pk=cargo.category_group_id).first()
        else:
            group = (
                groups.filter(pk__in=context.category_group_ids)
                .order_by("-priority", "sort_order", "pk")
                .first()
            )
        return group.code if group else None

    def check_acceptance(self, cargo: CargoInput, context: RuleContext) -> AcceptanceCheck:
        """
        Compare the cargo against the winning acceptance rule.

        Cargo with no applicable rule is allowed. Exceeding a maximum refuses
        the cargo, unless a soft maximum with approval is configured and the
        cargo stays within it, in which case it is allowed upon request.
        Falling short of a minimum refuses the cargo when ``min_is_hard`` is
        set and only warns otherwise.
        """
        check = AcceptanceCheck()
        rule = self.resolver.resolve_acceptance_rule(context)
        if rule is None:
            return check
        check.rule_id = rule.pk

        values = {
            name: getattr(cargo, measure) for name, measure in LIMITED_MEASURES.items()
        }

        for name, value in values.items():
            limit = getattr(rule, f"min_{LIMITED_MEASURES[name]}")
            if limit is not None and value < float(limit):
                if rule.min_is_hard:
                    check.refuse(f"min_{name}_below")
                else:
                    check.warnings.append(f"min_{name}_below")

        for name, value in values.items():
            limit = getattr(rule, f"max_{LIMITED_MEASURES[name]}")
            if limit is None or value <= float(limit):
                continue
            soft_max = None
            needs_approval = False
            if name == "height":
                soft_max = rule.soft_max_height_cm
                needs_approval = rule.soft_height_requires_approval
            elif name == "weight":
                soft_max = rule.soft_max_weight_kg
                needs_approval = rule.soft_weight_requires_approval
            if soft_max is not None and needs_approval and value <= float(soft_max):
                check.require_approval(f"soft_{name}_approval")
            else:
                check.refuse(f"max_{name}_exceeded")

        if rule.must_be_empty and FLAG_EMPTY not in cargo.flags:
            check.refuse("must_be_empty_required")
        if rule.must_be_self_propelled and FLAG_NON_SELF_PROPELLED in cargo.flags:
            check.refuse("must_be_self_propelled_required")

        if check.violations:
            check.status = AcceptanceStatus.NOT_ALLOWED
        return check

    def surcharge_events(
        self,
        cargo: CargoInput,
        context: RuleContext,
        measure: ChargeableMeasure,
    ) -> List[Dict]:
        """
        One event per applicable surcharge rule, in ranking order.

        Only the first rule to produce an event within an exclusive group
        counts. Rules that come to a zero quantity, or that need a basic
        freight amount which is not known, produce nothing.
        """
        events = []
        used_groups = set()
        rules = self.resolver.resolve_surcharge_rules(
            context,
            commodity_item_id=cargo.commodity_item_id,
        )
        for rule in rules:
            group = rule.exclusive_group
            if group and group in used_groups:
                continue
            try:
                calculation = self.calculator.calculate(
                    rule,
                    cargo,
                    measure,
                    cargo.basic_freight,
                )
            except UnknownCalculationMode as e:
                logger.warning("Skipping surcharge rule %s: %s", rule.pk, e)
                continue
            if calculation.qty <= 0 or calculation.needs_basic_freight:
                continue

            events.append(
                {
                    "event_code": rule.event_code,
                    "qty": calculation.qty,
                    "amount_basis": str(calculation.amount_basis),
                    "amount": calculation.amount,
                    "params": rule.params or {},
                    "matched_rule_id": rule.pk,
                    "reason": self.calculator.reason(rule, cargo),
                },
            )
            if group:
                used_groups.add(group)
        return events

    def quote_line_drafts(self, events: List[Dict], context: RuleContext) -> List[Dict]:
        """Pair each event with the article that bills it; events with no
        article are left unbilled."""
        drafts = []
        for event in events:
            article_map = self.resolver.resolve_article_map(
                context,
                event_code=event["event_code"],
            )
            if article_map is None:
                logger.info(
                    "No surcharge article for event %s of carrier %s",
                    event["event_code"],
                    context.carrier_id,
                )
                continue
            drafts.append(
                {
                    "article_id": article_map.article_id,
                    "qty": (
                        event["qty"]
                        if article_map.qty_mode == QuantityMode.EVENT
                        else 1
                    ),
                    "amount_override": event["amount"] if event["amount"] > 0 else None,
                    "meta": {
                        "event_code": event["event_code"],
                        "qty_mode": article_map.qty_mode,
                        "reason": event["reason"],
                        "matched_rule_id": event["matched_rule_id"],
                    },
                },
            )
        return drafts
