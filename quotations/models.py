import logging
from decimal import Decimal
from typing import List
from typing import Optional

from django.core.exceptions import ValidationError
from django.core.serializers.json import DjangoJSONEncoder
from django.db import models
from django.db.models import Sum

from carriers.constants import RelationshipType
from carriers.constants import normalise_relationship_type
from common.models import TimestampedMixin
from quotations.graph import CommodityGraph

logger = logging.getLogger(__name__)


class QuotationRequest(TimestampedMixin):
    """
    A request for a RoRo shipment price.

    The selected sailing supplies the carrier rule context: the carrier, the
    port of discharge and the vessel.
    """

    request_number = models.CharField(max_length=50, unique=True)
    pol = models.CharField(max_length=255, blank=True, default="")
    pod = models.CharField(max_length=255, blank=True, default="")
    service_type = models.CharField(max_length=50, blank=True, default="")
    carrier = models.ForeignKey(
        "carriers.ShippingCarrier",
        on_delete=models.SET_NULL,
        related_name="quotations",
        blank=True,
        null=True,
    )
    pod_port = models.ForeignKey(
        "ports.Port",
        on_delete=models.SET_NULL,
        related_name="+",
        blank=True,
        null=True,
    )
    vessel_name = models.CharField(max_length=255, blank=True, default="")
    vessel_class = models.CharField(max_length=100, blank=True, default="")
    currency = models.CharField(max_length=3, default="EUR")
    total_amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0"),
    )

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return self.request_number

    def has_schedule_context(self) -> bool:
        return self.carrier_id is not None and self.pod_port_id is not None

    def calculate_totals(self) -> Decimal:
        total = self.articles.aggregate(total=Sum("subtotal"))["total"]
        self.total_amount = total or Decimal("0")
        return self.total_amount


class QuotationCommodityItem(TimestampedMixin):
    """
    A cargo line of a quotation.

    A line may be ``connected`` to another line (towed by or coupled to it) or
    ``loaded_with`` another line (carried on top of it). Lines linked by
    ``loaded_with`` form a stack whose base is the line carrying the others.
    """

    quotation = models.ForeignKey(
        QuotationRequest,
        on_delete=models.CASCADE,
        related_name="commodity_items",
    )
    line_number = models.PositiveIntegerField(default=1)
    category = models.CharField(max_length=50, blank=True, default="")
    commodity_type = models.CharField(max_length=50, blank=True, default="")
    quantity = models.PositiveIntegerField(default=1)
    stack_unit_count = models.PositiveIntegerField(blank=True, null=True)
    length_cm = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        blank=True,
        null=True,
    )
    width_cm = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        blank=True,
        null=True,
    )
    height_cm = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        blank=True,
        null=True,
    )
    cbm = models.DecimalField(
        max_digits=10,
        decimal_places=3,
        blank=True,
        null=True,
    )
    weight_kg = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        blank=True,
        null=True,
    )
    flags = models.JSONField(default=list, blank=True)
    relationship_type = models.CharField(
        max_length=20,
        choices=RelationshipType.choices,
        default=RelationshipType.SEPARATE,
    )
    # Not a foreign key: lines are edited in bulk and may briefly point at a
    # line that is being replaced.
    related_item_id = models.PositiveIntegerField(blank=True, null=True)
    chargeable_lm = models.DecimalField(
        max_digits=10,
        decimal_places=3,
        blank=True,
        null=True,
    )
    carrier_rule_meta = models.JSONField(
        blank=True,
        null=True,
        encoder=DjangoJSONEncoder,
    )

    class Meta:
        ordering = ["quotation", "line_number", "id"]

    def __str__(self):
        return f"{self.quotation} line {self.line_number} ({self.category or '-'})"

    def save(self, *args, **kwargs):
        self.relationship_type = normalise_relationship_type(self.relationship_type)
        if self.relationship_type == RelationshipType.SEPARATE:
            self.related_item_id = None
        super().save(*args, **kwargs)

    def clean(self):
        super().clean()
        if self.related_item_id is None:
            return
        if self.pk is not None and self.related_item_id == self.pk:
            raise ValidationError(
                {"related_item_id": "A commodity item cannot relate to itself."},
            )
        related = QuotationCommodityItem.objects.filter(pk=self.related_item_id).first()
        if related is None or related.quotation_id != self.quotation_id:
            raise ValidationError(
                {
                    "related_item_id": (
                        "The related item must be a commodity item of the same "
                        "quotation."
                    ),
                },
            )

    @property
    def related_item(self) -> Optional["QuotationCommodityItem"]:
        if self.related_item_id is None:
            return None
        return QuotationCommodityItem.objects.filter(
            pk=self.related_item_id,
            quotation_id=self.quotation_id,
        ).first()

    @property
    def unit_count(self) -> int:
        """Number of physical units the line stands for."""
        return self.stack_unit_count or self.quantity or 1

    def graph(self) -> CommodityGraph:
        return CommodityGraph.for_quotation(self.quotation_id)

    def is_separate(self) -> bool:
        return self.graph().is_separate(self)

    def is_connected(self) -> bool:
        return self.graph().is_connected(self)

    def is_in_stack(self) -> bool:
        return self.graph().is_in_stack(self)

    def is_stack_base(self) -> bool:
        return self.graph().is_stack_base(self)

    def is_loaded_with(self) -> bool:
        return self.graph().is_loaded_with(self)

    def get_stack_group(self) -> Optional[int]:
        return self.graph().get_stack_group(self)

    def get_stack_members(self) -> List["QuotationCommodityItem"]:
        return self.graph().get_stack_members(self)


class QuotationArticle(TimestampedMixin):
    """A priced article line of a quotation."""

    quotation = models.ForeignKey(
        QuotationRequest,
        on_delete=models.CASCADE,
        related_name="articles",
    )
    article = models.ForeignKey(
        "carriers.Article",
        on_delete=models.PROTECT,
        related_name="quotation_lines",
    )
    quantity = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        default=Decimal("1"),
    )
    unit_type = models.CharField(max_length=20, default="unit")
    unit_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0"),
    )
    selling_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0"),
    )
    subtotal = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0"),
    )
    currency = models.CharField(max_length=3, default="EUR")
    notes = models.JSONField(
        blank=True,
        null=True,
        encoder=DjangoJSONEncoder,
    )

    class Meta:
        ordering = ["quotation", "id"]

    def __str__(self):
        return f"{self.quotation} {self.article.article_code} x {self.quantity}"

    @property
    def is_carrier_rule_line(self) -> bool:
        return bool((self.notes or {}).get("carrier_rule_applied"))

    def recalculate_subtotal(self) -> Decimal:
        self.subtotal = (self.selling_price * self.quantity).quantize(Decimal("0.01"))
        return self.subtotal
