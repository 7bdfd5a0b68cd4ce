"""Applicability scope shared by carrier rules and article mappings."""
from dataclasses import dataclass
from dataclasses import field
from typing import FrozenSet
from typing import Optional

from django.db import models

from carriers.constants import normalise_vehicle_category
from common.util import as_int_set
from common.util import clean_list


@dataclass(frozen=True)
class RuleContext:
    """
    The facts a rule is matched against: the carrier, the port of discharge
    with the carrier port groups it belongs to, the vehicle category with its
    carrier category groups, and the vessel.
    """

    carrier_id: int
    port_id: Optional[int] = None
    port_group_ids: FrozenSet[int] = field(default_factory=frozenset)
    vehicle_category: Optional[str] = None
    category_group_ids: FrozenSet[int] = field(default_factory=frozenset)
    vessel_name: Optional[str] = None
    vessel_class: Optional[str] = None


def _folded(values) -> set:
    return {str(v).strip().casefold() for v in values or []}


class ScopeMixin(models.Model):
    """
    Limits a rule to some ports, vehicle categories and vessels.

    Each dimension is unscoped, and therefore matches everything, when its
    lists are empty. Ports may be listed directly or through carrier port
    groups, and categories directly or through carrier category groups; a
    match through either list is enough.
    """

    SCOPE_FIELDS = (
        "port_ids",
        "port_group_ids",
        "vehicle_categories",
        "category_group_ids",
        "vessel_names",
        "vessel_classes",
    )

    port_ids = models.JSONField(blank=True, null=True)
    port_group_ids = models.JSONField(blank=True, null=True)
    vehicle_categories = models.JSONField(blank=True, null=True)
    category_group_ids = models.JSONField(blank=True, null=True)
    vessel_names = models.JSONField(blank=True, null=True)
    vessel_classes = models.JSONField(blank=True, null=True)

    class Meta:
        abstract = True

    def normalise_scope(self):
        """Store empty scope lists as NULL."""
        for name in self.SCOPE_FIELDS:
            setattr(self, name, clean_list(getattr(self, name)))

    def save(self, *args, **kwargs):
        self.normalise_scope()
        super().save(*args, **kwargs)

    def is_port_scoped(self) -> bool:
        return bool(self.port_ids or self.port_group_ids)

    def is_category_scoped(self) -> bool:
        return bool(self.vehicle_categories or self.category_group_ids)

    def scoped_categories(self) -> set:
        categories = set()
        for value in self.vehicle_categories or []:
            category = normalise_vehicle_category(value, warn=False)
            categories.add(category or str(value).strip().lower())
        return categories

    def matches_port_directly(self, context: RuleContext) -> bool:
        return (
            context.port_id is not None
            and int(context.port_id) in as_int_set(self.port_ids)
        )

    def matches_port_group(self, context: RuleContext) -> bool:
        return bool(as_int_set(self.port_group_ids) & set(context.port_group_ids))

    def matches_port(self, context: RuleContext) -> bool:
        if not self.is_port_scoped():
            return True
        return self.matches_port_directly(context) or self.matches_port_group(context)

    def matches_vehicle_category(self, context: RuleContext) -> bool:
        return (
            context.vehicle_category is not None
            and context.vehicle_category in self.scoped_categories()
        )

    def matches_category_group(self, context: RuleContext) -> bool:
        return bool(
            as_int_set(self.category_group_ids) & set(context.category_group_ids),
        )

    def matches_category(self, context: RuleContext) -> bool:
        if not self.is_category_scoped():
            return True
        return self.matches_vehicle_category(context) or self.matches_category_group(
            context,
        )

    def matches_vessel_name(self, context: RuleContext) -> bool:
        if not context.vessel_name:
            return False
        return context.vessel_name.strip().casefold() in _folded(self.vessel_names)

    def matches_vessel_class(self, context: RuleContext) -> bool:
        if not context.vessel_class:
            return False
        return context.vessel_class.strip().casefold() in _folded(self.vessel_classes)

    def matches_vessel(self, context: RuleContext) -> bool:
        if self.vessel_names and not self.matches_vessel_name(context):
            return False
        if self.vessel_classes and not self.matches_vessel_class(context):
            return False
        return True

    def matches(self, context: RuleContext) -> bool:
        return (
            self.matches_port(context)
            and self.matches_category(context)
            and self.matches_vessel(context)
        )

    def specificity(self, context: RuleContext) -> int:
        """
        Score how narrowly this rule targets the context.

        Only dimensions the rule is scoped on and that match contribute: vessel
        name 10, direct port 8 (or port group 6), vessel class 6, category
        group 3 and vehicle category 2.
        """
        score = 0
        if self.vessel_names and self.matches_vessel_name(context):
            score += 10
        if self.matches_port_directly(context):
            score += 8
        elif self.matches_port_group(context):
            score += 6
        if self.vessel_classes and self.matches_vessel_class(context):
            score += 6
        if self.vehicle_categories and self.matches_vehicle_category(context):
            score += 2
        if self.category_group_ids and self.matches_category_group(context):
            score += 3
        return score
