"""
Whether a trailer on a quotation needs the carrier to tow it.

Towing is charged for moving a trailer that has no tractor unit travelling
with it in the same shipment. A truck or truckhead coupled to the trailer, or
sharing its stack, is evidence that no towing is needed.
"""
import logging
from dataclasses import asdict
from dataclasses import dataclass
from dataclasses import field
from typing import Iterable
from typing import List
from typing import Optional

from django.apps import apps
from django.conf import settings

from carriers.constants import normalise_vehicle_category
from quotations.graph import CommodityGraph

logger = logging.getLogger(__name__)


@dataclass
class InspectedItem:
    """A cargo line looked at while deciding, and the role it played."""

    id: int
    line_number: int
    category: Optional[str]
    role: str


@dataclass
class TowingDecision:
    applies: bool
    reason: str
    category: Optional[str]
    commodity_item_id: Optional[int]
    inspected: List[InspectedItem] = field(default_factory=list)

    def as_dict(self) -> dict:
        return asdict(self)


class TowingResolver:
    """
    Decides towing for one cargo line.

    :meth:`decide` gives the yes/no answer used when pricing. :meth:`explain`
    gives the same answer together with the lines inspected to reach it, for
    audit tooling.
    """

    def __init__(
        self,
        towable_categories: Optional[Iterable[str]] = None,
        tractor_categories: Optional[Iterable[str]] = None,
    ):
        if towable_categories is None:
            towable_categories = settings.TOWABLE_VEHICLE_CATEGORIES
        if tractor_categories is None:
            tractor_categories = settings.TRACTOR_VEHICLE_CATEGORIES
        self.towable_categories = frozenset(towable_categories)
        self.tractor_categories = frozenset(tractor_categories)

    def is_tractor(self, item) -> bool:
        return (
            normalise_vehicle_category(item.category, warn=False)
            in self.tractor_categories
        )

    def decide(
        self,
        category: Optional[str],
        commodity_item_id: Optional[int],
    ) -> bool:
        return self.explain(category, commodity_item_id).applies

    def explain(
        self,
        category: Optional[str],
        commodity_item_id: Optional[int],
    ) -> TowingDecision:
        normalised = normalise_vehicle_category(category)

        def decision(applies, reason, inspected=()):
            return TowingDecision(
                applies=applies,
                reason=reason,
                category=normalised,
                commodity_item_id=commodity_item_id,
                inspected=list(inspected),
            )

        if normalised not in self.towable_categories:
            return decision(False, f"Category {category!r} is not towable")

        item = None
        if commodity_item_id is not None:
            model = apps.get_model("quotations", "QuotationCommodityItem")
            item = model.objects.filter(pk=commodity_item_id).first()
        if item is None:
            logger.info("No commodity item %s to decide towing for", commodity_item_id)
            return decision(False, f"Commodity item {commodity_item_id} not found")

        graph = CommodityGraph.for_quotation(item.quotation_id)
        item = graph.get(item)
        inspected = [self._inspected(item, "self")]

        if graph.is_connected(item):
            related = graph.related(item)
            if related is None:
                return decision(
                    True,
                    f"Connected to item {item.related_item_id}, which cannot be found",
                    inspected,
                )
            inspected.append(self._inspected(related, "connected_to"))
            if self.is_tractor(related):
                return decision(
                    False,
                    f"Connected to {related.category} on line {related.line_number}",
                    inspected,
                )
            return decision(
                True,
                f"Connected to {related.category} on line {related.line_number}, "
                f"which is not a tractor unit",
                inspected,
            )

        if graph.is_in_stack(item):
            members = [m for m in graph.get_stack_members(item) if m.pk != item.pk]
            inspected.extend(self._inspected(m, "stack_member") for m in members)
            tractors = [m for m in members if self.is_tractor(m)]
            if tractors:
                lines = ", ".join(str(m.line_number) for m in tractors)
                return decision(
                    False,
                    f"Stacked with a tractor unit on line(s) {lines}",
                    inspected,
                )
            return decision(True, "Stacked without a tractor unit", inspected)

        return decision(True, "Standalone trailer", inspected)

    @staticmethod
    def _inspected(item, role: str) -> InspectedItem:
        return InspectedItem(
            id=item.pk,
            line_number=item.line_number,
            category=item.category,
            role=role,
        )
