"""
Selects the carrier rules that apply to a piece of cargo.

Rules are loaded for the carrier and filtered on their active flag and
effective window in the database. Scope matching, which works on JSON lists,
is then done in Python by :meth:`ScopeMixin.matches
<carriers.models.scope.ScopeMixin.matches>`.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from dataclasses import field
from datetime import date
from typing import Any
from typing import FrozenSet
from typing import Iterable
from typing import List
from typing import Optional
from typing import Tuple

from django.conf import settings

from carriers.constants import normalise_vehicle_category
from carriers.models import CarrierAcceptanceRule
from carriers.models import CarrierArticleMapping
from carriers.models import CarrierCategoryGroupMember
from carriers.models import CarrierPortGroupMember
from carriers.models import CarrierSurchargeArticleMap
from carriers.models import CarrierSurchargeRule
from carriers.models import CarrierTransformRule
from carriers.models import RuleContext
from carriers.towing import TowingDecision
from carriers.towing import TowingResolver
from common.querysets import effective_at
from common.util import as_date

logger = logging.getLogger(__name__)


def pk_of(value) -> Optional[int]:
    """Accept a model instance or a primary key."""
    if value is None:
        return None
    return getattr(value, "pk", value)


@dataclass
class Resolution:
    """
    The outcome of choosing between matching rules.

    ``candidates`` lists every match in ranking order and ``selected`` is the
    first of them. ``ambiguous`` is set when the first two candidates could
    only be told apart by their primary keys, which is worth reporting as a
    data quality problem.
    """

    selected: Optional[Any] = None
    candidates: List[Any] = field(default_factory=list)
    ambiguous: bool = False


class CarrierRuleResolver:
    """
    Resolves acceptance, transform and surcharge rules, surcharge article
    maps and article mappings for a carrier at a given date.

    Matching rules are ranked by priority (highest first), then specificity
    (see :meth:`ScopeMixin.specificity
    <carriers.models.scope.ScopeMixin.specificity>`), then ``sort_order``
    (lowest first), then latest ``effective_from`` and finally newest row.
    """

    def __init__(
        self,
        at: Optional[date] = None,
        towing: Optional[TowingResolver] = None,
    ):
        self.at = as_date(at)
        self.towing = towing or TowingResolver()

    def port_group_ids(self, carrier, port) -> FrozenSet[int]:
        """Carrier port groups the port is an active member of."""
        if port is None:
            return frozenset()
        members = CarrierPortGroupMember.objects.filter(
            effective_at(self.at, prefix="port_group__"),
            port_group__carrier_id=pk_of(carrier),
            port_group__is_active=True,
            port_id=pk_of(port),
            is_active=True,
        )
        return frozenset(members.values_list("port_group_id", flat=True))

    def category_group_ids(self, carrier, vehicle_category) -> FrozenSet[int]:
        """Carrier category groups the vehicle category is an active member
        of."""
        if vehicle_category is None:
            return frozenset()
        members = CarrierCategoryGroupMember.objects.filter(
            effective_at(self.at, prefix="category_group__"),
            category_group__carrier_id=pk_of(carrier),
            category_group__is_active=True,
            vehicle_category=vehicle_category,
            is_active=True,
        )
        return frozenset(members.values_list("category_group_id", flat=True))

    def context(
        self,
        carrier,
        port,
        vehicle_category: Optional[str],
        category_group_id: Optional[int] = None,
        vessel_name: Optional[str] = None,
        vessel_class: Optional[str] = None,
    ) -> RuleContext:
        """
        Gather what rules are matched against.

        An unrecognised vehicle category is treated as no category, so only
        rules that are not limited to categories can match it.
        """
        category = normalise_vehicle_category(vehicle_category)
        category_group_ids = set(self.category_group_ids(carrier, category))
        if category_group_id is not None:
            category_group_ids.add(int(category_group_id))
        return RuleContext(
            carrier_id=pk_of(carrier),
            port_id=pk_of(port),
            port_group_ids=self.port_group_ids(carrier, port),
            vehicle_category=category,
            category_group_ids=frozenset(category_group_ids),
            vessel_name=vessel_name or None,
            vessel_class=vessel_class or None,
        )

    @staticmethod
    def ranking_key(rule, context: RuleContext) -> Tuple:
        # Specificity sits between priority and sort_order: an explicit
        # priority always wins, a narrower scope beats a lower sort_order.
        effective_from = getattr(rule, "effective_from", None)
        return (
            -getattr(rule, "priority", 0),
            -rule.specificity(context),
            rule.sort_order,
            effective_from is None,
            -effective_from.toordinal() if effective_from else 0,
            -rule.pk,
        )

    def rank(
        self,
        rules: Iterable,
        context: RuleContext,
        exclusive: bool = False,
    ) -> Resolution:
        matching = [rule for rule in rules if rule.matches(context)]
        matching.sort(key=lambda rule: self.ranking_key(rule, context))
        ambiguous = len(matching) > 1 and (
            self.ranking_key(matching[0], context)[:-1]
            == self.ranking_key(matching[1], context)[:-1]
        )
        if ambiguous and exclusive:
            logger.warning(
                "Equally ranked %s candidates %s and %s for carrier %s",
                matching[0].__class__.__name__,
                matching[0].pk,
                matching[1].pk,
                context.carrier_id,
            )
        return Resolution(
            selected=matching[0] if matching else None,
            candidates=matching,
            ambiguous=ambiguous,
        )

    def as_context(self, carrier, *args, **kwargs) -> RuleContext:
        """
        Accept either a prepared :class:`RuleContext` or the arguments of
        :meth:`context`, so that callers resolving several rule kinds for the
        same cargo only look up its groups once.
        """
        if isinstance(carrier, RuleContext):
            return carrier
        return self.context(carrier, *args, **kwargs)

    def _in_effect(self, model, context: RuleContext, **filters):
        return model.objects.filter(carrier_id=context.carrier_id, **filters).in_effect(
            self.at,
        )

    def explain_acceptance_rule(self, *args, **kwargs) -> Resolution:
        context = self.as_context(*args, **kwargs)
        rules = []
        for rule in self._in_effect(CarrierAcceptanceRule, context):
            if rule.has_inverted_limits():
                logger.warning(
                    "Ignoring acceptance rule %s with a minimum above its maximum",
                    rule.pk,
                )
                continue
            rules.append(rule)
        return self.rank(rules, context, exclusive=True)

    def resolve_acceptance_rule(self, *args, **kwargs) -> Optional[CarrierAcceptanceRule]:
        return self.explain_acceptance_rule(*args, **kwargs).selected

    def resolve_transform_rules(self, *args, **kwargs) -> List[CarrierTransformRule]:
        context = self.as_context(*args, **kwargs)
        return self.rank(
            self._in_effect(CarrierTransformRule, context),
            context,
        ).candidates

    def resolve_surcharge_rules(
        self,
        *args,
        commodity_item_id: Optional[int] = None,
        **kwargs,
    ) -> List[CarrierSurchargeRule]:
        """
        Every surcharge rule that applies, in ranking order.

        Towing surcharges are kept only when :meth:`should_apply_towing` says
        so for the given commodity item, and never without one.
        """
        context = self.as_context(*args, **kwargs)
        rules = self.rank(
            self._in_effect(CarrierSurchargeRule, context),
            context,
        ).candidates
        towing_codes = set(settings.TOWING_EVENT_CODES)
        if any(rule.event_code in towing_codes for rule in rules):
            if commodity_item_id is None or not self.should_apply_towing(
                context.vehicle_category,
                commodity_item_id,
            ):
                rules = [rule for rule in rules if rule.event_code not in towing_codes]
        return rules

    def explain_article_map(self, *args, event_code: str, **kwargs) -> Resolution:
        context = self.as_context(*args, **kwargs)
        return self.rank(
            self._in_effect(
                CarrierSurchargeArticleMap,
                context,
                event_code=event_code,
            ).select_related("article"),
            context,
            exclusive=True,
        )

    def resolve_article_map(
        self,
        *args,
        event_code: str,
        **kwargs,
    ) -> Optional[CarrierSurchargeArticleMap]:
        return self.explain_article_map(*args, event_code=event_code, **kwargs).selected

    def explain_article_mappings(self, *args, **kwargs) -> Resolution:
        context = self.as_context(*args, **kwargs)
        mappings = CarrierArticleMapping.objects.filter(
            carrier_id=context.carrier_id,
            is_active=True,
        ).select_related("article").prefetch_related("purchase_tariffs")
        return self.rank(mappings, context)

    def resolve_article_mappings(self, *args, **kwargs) -> List[CarrierArticleMapping]:
        """Every active article mapping in scope; mappings are not exclusive."""
        return self.explain_article_mappings(*args, **kwargs).candidates

    def should_apply_towing(
        self,
        category: Optional[str],
        commodity_item_id: Optional[int],
    ) -> bool:
        return self.towing.decide(category, commodity_item_id)

    def explain_towing(
        self,
        category: Optional[str],
        commodity_item_id: Optional[int],
    ) -> TowingDecision:
        return self.towing.explain(category, commodity_item_id)
