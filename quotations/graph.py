"""Structural queries over the cargo lines of one quotation."""
from __future__ import annotations

import logging
from typing import Dict
from typing import Iterable
from typing import List
from typing import Optional

from carriers.constants import RelationshipType
from carriers.constants import normalise_relationship_type

logger = logging.getLogger(__name__)


def line_order(item):
    return (item.line_number, item.pk)


class CommodityGraph:
    """
    The cargo lines of a quotation as a directed graph.

    Each line may point at one other line through ``related_item_id``. A
    ``connected`` edge means the line is coupled to (towed by) its target; a
    ``loaded_with`` edge means the line is loaded onto its target. Following
    ``loaded_with`` edges leads to the base of a stack.

    Relations that point outside the quotation, or at nothing, are treated as
    absent and listed in :attr:`dangling`. Stacking cycles are never followed
    more than once round: lines on or leading into a cycle are not in any
    stack, and the cycle is listed in :attr:`cycles`.
    """

    def __init__(self, items: Iterable):
        self.items: Dict[int, object] = {item.pk: item for item in items}
        self.dangling: List[int] = []
        self.cycles: List[List[int]] = []
        self._roots: Dict[int, Optional[int]] = {}
        self._groups: Dict[int, List] = {}

        for item in self.items.values():
            target = item.related_item_id
            if target is not None and target not in self.items:
                self.dangling.append(item.pk)
                logger.warning(
                    "Commodity item %s relates to item %s, which is not in quotation %s",
                    item.pk,
                    target,
                    item.quotation_id,
                )

        for pk in self.items:
            root = self._find_root(pk)
            if root is not None:
                self._groups.setdefault(root, []).append(self.items[pk])

    @classmethod
    def for_quotation(cls, quotation) -> CommodityGraph:
        from quotations.models import QuotationCommodityItem

        quotation_id = getattr(quotation, "pk", quotation)
        return cls(QuotationCommodityItem.objects.filter(quotation_id=quotation_id))

    def get(self, item_or_pk):
        return self.items.get(getattr(item_or_pk, "pk", item_or_pk))

    def relationship_type(self, item) -> str:
        return normalise_relationship_type(item.relationship_type)

    def related(self, item):
        """The line this line points at, or None when there is none or it
        cannot be found."""
        if item.related_item_id is None:
            return None
        return self.items.get(item.related_item_id)

    def _stack_target(self, pk: int) -> Optional[int]:
        item = self.items[pk]
        if self.relationship_type(item) != RelationshipType.LOADED_WITH:
            return None
        target = item.related_item_id
        if target is None or target not in self.items:
            return None
        return target

    def _find_root(self, pk: int) -> Optional[int]:
        if pk in self._roots:
            return self._roots[pk]

        path = []
        seen = set()
        current = pk
        # Each step visits a new line, so the walk ends within len(items) steps.
        while current is not None and len(path) <= len(self.items):
            if current in self._roots:
                root = self._roots[current]
                break
            if current in seen:
                cycle = path[path.index(current) :]
                self._record_cycle(cycle)
                root = None
                break
            seen.add(current)
            path.append(current)
            target = self._stack_target(current)
            if target is None:
                root = current
                break
            current = target
        else:
            root = None

        for visited in path:
            self._roots[visited] = root
        return root

    def _record_cycle(self, cycle: List[int]):
        if any(set(cycle) == set(known) for known in self.cycles):
            return
        self.cycles.append(cycle)
        logger.warning("Stacking cycle between commodity items %s", cycle)

    def is_separate(self, item) -> bool:
        return (
            self.relationship_type(item) == RelationshipType.SEPARATE
            and item.related_item_id is None
        )

    def is_connected(self, item) -> bool:
        return (
            self.relationship_type(item) == RelationshipType.CONNECTED
            and item.related_item_id is not None
        )

    def get_stack_group(self, item) -> Optional[int]:
        """The primary key of the base of the stack the line is part of, or
        None when it is not stacked with anything."""
        root = self._find_root(item.pk)
        if root is None or len(self._groups.get(root, [])) < 2:
            return None
        return root

    def is_in_stack(self, item) -> bool:
        return self.get_stack_group(item) is not None

    def is_stack_base(self, item) -> bool:
        return self.get_stack_group(item) == item.pk

    def is_loaded_with(self, item) -> bool:
        """Whether other lines are loaded onto this line."""
        return self.is_stack_base(item)

    def get_stack_members(self, item) -> List:
        root = self.get_stack_group(item)
        if root is None:
            return []
        return sorted(self._groups[root], key=line_order)

    def stacks(self) -> Dict[int, List]:
        """Every stack of the quotation keyed by the primary key of its base."""
        return {
            root: sorted(members, key=line_order)
            for root, members in self._groups.items()
            if len(members) > 1
        }

    def chain(self, item) -> List:
        """
        The relations followed from ``item``, one ``(line, target)`` pair per
        step, where ``target`` is None when the related line cannot be found.

        Stops on reaching a line already on the chain.
        """
        steps = []
        seen = {item.pk}
        current = item
        while current is not None and current.related_item_id is not None:
            target = self.related(current)
            steps.append((current, target))
            if target is None or target.pk in seen:
                break
            seen.add(target.pk)
            current = target
        return steps
