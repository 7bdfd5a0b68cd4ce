from typing import Optional

from django.db import models

from carriers.constants import CalcMode
from carriers.constants import QuantityMode
from carriers.constants import TransformCode
from carriers.models.scope import ScopeMixin
from common.models import EffectivePeriodMixin
from common.models import TimestampedMixin
from common.querysets import EffectivePeriodQuerySet

DEFAULT_OVERWIDTH_TRIGGER_CM = 250
DEFAULT_LM_DIVISOR_CM = 250


class CarrierRule(ScopeMixin, EffectivePeriodMixin, TimestampedMixin):
    """
    A conditional carrier policy, scoped to ports, vehicle categories and
    vessels.

    Among rules of one kind that match the same cargo, higher ``priority``
    wins, then the more specific scope, then lower ``sort_order``.
    """

    carrier = models.ForeignKey(
        "carriers.ShippingCarrier",
        on_delete=models.CASCADE,
    )
    name = models.CharField(max_length=255, blank=True, default="")
    priority = models.IntegerField(default=0)
    sort_order = models.IntegerField(default=0)

    objects = EffectivePeriodQuerySet.as_manager()

    class Meta:
        abstract = True
        ordering = ["-priority", "sort_order", "id"]

    def __str__(self):
        return self.name or f"{self.__class__.__name__} #{self.pk}"


class CarrierAcceptanceRule(CarrierRule):
    """Dimension, weight and operational limits a carrier accepts cargo
    within."""

    LIMITS = ("length_cm", "width_cm", "height_cm", "cbm", "weight_kg")

    min_length_cm = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        blank=True,
        null=True,
    )
    max_length_cm = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        blank=True,
        null=True,
    )
    min_width_cm = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        blank=True,
        null=True,
    )
    max_width_cm = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        blank=True,
        null=True,
    )
    min_height_cm = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        blank=True,
        null=True,
    )
    max_height_cm = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        blank=True,
        null=True,
    )
    min_cbm = models.DecimalField(
        max_digits=10,
        decimal_places=3,
        blank=True,
        null=True,
    )
    max_cbm = models.DecimalField(
        max_digits=10,
        decimal_places=3,
        blank=True,
        null=True,
    )
    min_weight_kg = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        blank=True,
        null=True,
    )
    max_weight_kg = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        blank=True,
        null=True,
    )
    min_is_hard = models.BooleanField(
        default=True,
        help_text="Cargo below a minimum is refused rather than only flagged",
    )
    soft_max_height_cm = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        blank=True,
        null=True,
    )
    soft_height_requires_approval = models.BooleanField(default=False)
    soft_max_weight_kg = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        blank=True,
        null=True,
    )
    soft_weight_requires_approval = models.BooleanField(default=False)
    must_be_empty = models.BooleanField(default=False)
    must_be_self_propelled = models.BooleanField(default=False)
    allows_stacked = models.BooleanField(default=True)
    allows_piggy_back = models.BooleanField(default=True)
    notes = models.TextField(blank=True, default="")

    class Meta(CarrierRule.Meta):
        pass

    def has_inverted_limits(self) -> bool:
        """Whether any minimum is set above its maximum, which makes the rule
        unusable."""
        for limit in self.LIMITS:
            low = getattr(self, f"min_{limit}")
            high = getattr(self, f"max_{limit}")
            if low is not None and high is not None and low > high:
                return True
        return False


class CarrierTransformRule(CarrierRule):
    """Recalculates how cargo is measured for charging, for example
    overwidth cargo charged on its real footprint."""

    transform_code = models.CharField(
        max_length=50,
        choices=TransformCode.choices,
    )
    params = models.JSONField(default=dict, blank=True)

    class Meta(CarrierRule.Meta):
        pass

    @property
    def trigger_width_cm(self) -> float:
        return float(
            (self.params or {}).get("trigger_width_gt_cm")
            or DEFAULT_OVERWIDTH_TRIGGER_CM,
        )

    @property
    def divisor_cm(self) -> float:
        return float((self.params or {}).get("divisor_cm") or DEFAULT_LM_DIVISOR_CM)

    def triggers(self, width_cm: float) -> bool:
        return width_cm > self.trigger_width_cm


class CarrierSurchargeRule(CarrierRule):
    """
    Produces a surcharge event, such as ``TOWING``, for cargo in scope.

    How much is charged is decided by ``calc_mode`` using ``params``. Rules
    that share an ``exclusive_group`` in their params are alternatives: only
    the first matching one applies.
    """

    event_code = models.CharField(max_length=50, db_index=True)
    calc_mode = models.CharField(max_length=30, choices=CalcMode.choices)
    params = models.JSONField(default=dict, blank=True)

    class Meta(CarrierRule.Meta):
        pass

    @property
    def exclusive_group(self) -> Optional[str]:
        return (self.params or {}).get("exclusive_group") or None


class CarrierSurchargeArticleMap(CarrierRule):
    """Names the sales article that bills a surcharge event."""

    event_code = models.CharField(max_length=50, db_index=True)
    article = models.ForeignKey(
        "carriers.Article",
        on_delete=models.CASCADE,
        related_name="surcharge_maps",
    )
    qty_mode = models.CharField(
        max_length=20,
        choices=QuantityMode.choices,
        default=QuantityMode.EVENT,
    )

    class Meta(CarrierRule.Meta):
        pass
