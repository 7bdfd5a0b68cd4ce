from django.db import models

from carriers.constants import VehicleCategory
from common.models import EffectivePeriodMixin
from common.models import TimestampedMixin
from common.querysets import EffectivePeriodQuerySet


class ShippingCarrier(TimestampedMixin):
    """A shipping line whose sailings can be quoted, for example Grimaldi."""

    code = models.CharField(max_length=50, unique=True)
    name = models.CharField(max_length=255)
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name


class CarrierPortGroup(TimestampedMixin, EffectivePeriodMixin):
    """
    A carrier-defined set of ports, for example ``Grimaldi_WAF`` for the West
    Africa service.

    Rules scoped to a port group apply to every port that is an active member
    while the group is in effect.
    """

    carrier = models.ForeignKey(
        ShippingCarrier,
        on_delete=models.CASCADE,
        related_name="port_groups",
    )
    code = models.CharField(max_length=50)
    display_name = models.CharField(max_length=255, blank=True, default="")
    sort_order = models.IntegerField(default=0)

    objects = EffectivePeriodQuerySet.as_manager()

    class Meta:
        ordering = ["sort_order", "code"]
        unique_together = [("carrier", "code")]

    def __str__(self):
        return self.display_name or self.code


class CarrierPortGroupMember(TimestampedMixin):
    port_group = models.ForeignKey(
        CarrierPortGroup,
        on_delete=models.CASCADE,
        related_name="members",
    )
    port = models.ForeignKey(
        "ports.Port",
        on_delete=models.CASCADE,
        related_name="carrier_port_group_memberships",
    )
    is_active = models.BooleanField(default=True)

    class Meta:
        unique_together = [("port_group", "port")]

    def __str__(self):
        return f"{self.port_group} / {self.port}"


class CarrierCategoryGroup(TimestampedMixin, EffectivePeriodMixin):
    """
    A carrier-defined set of vehicle categories priced alike, for example
    ``LM_CARGO`` for trucks, truck chassis and buses.
    """

    carrier = models.ForeignKey(
        ShippingCarrier,
        on_delete=models.CASCADE,
        related_name="category_groups",
    )
    code = models.CharField(max_length=50)
    display_name = models.CharField(max_length=255, blank=True, default="")
    priority = models.IntegerField(default=0)
    sort_order = models.IntegerField(default=0)

    objects = EffectivePeriodQuerySet.as_manager()

    class Meta:
        ordering = ["sort_order", "code"]
        unique_together = [("carrier", "code")]

    def __str__(self):
        return self.display_name or self.code


class CarrierCategoryGroupMember(TimestampedMixin):
    category_group = models.ForeignKey(
        CarrierCategoryGroup,
        on_delete=models.CASCADE,
        related_name="members",
    )
    vehicle_category = models.CharField(
        max_length=50,
        choices=VehicleCategory.choices,
    )
    is_active = models.BooleanField(default=True)

    class Meta:
        unique_together = [("category_group", "vehicle_category")]

    def __str__(self):
        return f"{self.category_group} / {self.vehicle_category}"
