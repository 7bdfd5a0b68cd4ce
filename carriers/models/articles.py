from datetime import date
from decimal import Decimal
from typing import Dict
from typing import Optional
from typing import Tuple

from django.core.exceptions import ValidationError
from django.db import models

from carriers.constants import TariffUnit
from carriers.models.scope import ScopeMixin
from common.models import EffectivePeriodMixin
from common.models import TimestampedMixin
from common.querysets import EffectivePeriodQuerySet
from common.util import as_date


class ArticleQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True)

    def for_carrier(self, carrier):
        """Articles belonging to the carrier, plus universal articles."""
        return self.filter(models.Q(carrier=carrier) | models.Q(carrier__isnull=True))


class Article(TimestampedMixin):
    """
    A sales article from the CRM article catalogue, for example
    ``GANRLOSCAR`` for Grimaldi ocean freight of a car to Lagos.

    Articles without a carrier are universal and may be mapped for any
    carrier.
    """

    article_code = models.CharField(max_length=50, db_index=True)
    article_name = models.CharField(max_length=255)
    carrier = models.ForeignKey(
        "carriers.ShippingCarrier",
        on_delete=models.SET_NULL,
        related_name="articles",
        blank=True,
        null=True,
    )
    pod_code = models.CharField(max_length=10, blank=True, null=True)
    pod = models.CharField(max_length=255, blank=True, default="")
    commodity_type = models.CharField(max_length=100, blank=True, default="")
    unit_type = models.CharField(max_length=20, default="unit")
    unit_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        blank=True,
        null=True,
    )
    currency = models.CharField(max_length=3, default="EUR")
    is_surcharge = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)

    objects = ArticleQuerySet.as_manager()

    class Meta:
        ordering = ["article_code"]

    def __str__(self):
        return f"{self.article_code} {self.article_name}"


class CarrierArticleMappingQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True)


class CarrierArticleMapping(ScopeMixin, TimestampedMixin):
    """
    Binds a sales article to the ports, vehicle categories and vessels of a
    carrier it applies to.

    Purchase tariffs hang off the mapping, so the mapping is also how a
    (carrier, port, category) combination finds its purchase cost.
    """

    carrier = models.ForeignKey(
        "carriers.ShippingCarrier",
        on_delete=models.CASCADE,
        related_name="article_mappings",
    )
    article = models.ForeignKey(
        Article,
        on_delete=models.CASCADE,
        related_name="carrier_mappings",
    )
    name = models.CharField(max_length=255, blank=True, default="")
    is_active = models.BooleanField(default=True)
    sort_order = models.IntegerField(default=0)

    objects = CarrierArticleMappingQuerySet.as_manager()

    class Meta:
        ordering = ["sort_order", "id"]

    def __str__(self):
        return self.name or f"{self.carrier} / {self.article.article_code}"

    def clean(self):
        super().clean()
        self.validate_article_carrier()

    def validate_article_carrier(self):
        """An article that belongs to a carrier can only be mapped for that
        carrier."""
        if not (self.article_id and self.carrier_id):
            return
        article_carrier_id = self.article.carrier_id
        if article_carrier_id is not None and article_carrier_id != self.carrier_id:
            raise ValidationError(
                {
                    "article": (
                        f"Cannot map article '{self.article.article_code}' to "
                        f"carrier '{self.carrier}'. The article belongs to "
                        f"carrier '{self.article.carrier}'. Universal articles "
                        f"(no carrier) can be mapped to any carrier."
                    ),
                },
            )

    def save(self, *args, **kwargs):
        self.validate_article_carrier()
        super().save(*args, **kwargs)

    def active_purchase_tariff(
        self,
        at: Optional[date] = None,
    ) -> Optional["CarrierPurchaseTariff"]:
        """
        The purchase tariff in force for this mapping.

        Works from ``purchase_tariffs`` so that a prefetched relation is used
        without further queries.
        """
        at = as_date(at)
        tariffs = [t for t in self.purchase_tariffs.all() if t.is_in_effect(at)]
        tariffs.sort(key=CarrierPurchaseTariff.selection_key)
        return tariffs[0] if tariffs else None


class CarrierPurchaseTariff(TimestampedMixin, EffectivePeriodMixin):
    """
    A dated purchase cost sheet for one article mapping.

    Tariffs are never edited to follow a price change; a new tariff with a
    later ``effective_from`` is added instead. Each cost component has an
    amount and the unit it is charged per.
    """

    COST_COMPONENTS = (
        "base_freight",
        "baf",
        "ets",
        "port_additional",
        "admin_fee",
        "thc",
        "measurement_costs",
        "congestion_surcharge",
        "iccm",
        "freight_tax",
    )

    carrier_article_mapping = models.ForeignKey(
        CarrierArticleMapping,
        on_delete=models.CASCADE,
        related_name="purchase_tariffs",
    )
    sort_order = models.IntegerField(default=0)
    currency = models.CharField(max_length=3, default="EUR")

    base_freight_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        blank=True,
        null=True,
    )
    base_freight_unit = models.CharField(
        max_length=10,
        choices=TariffUnit.choices,
        default=TariffUnit.LUMPSUM,
    )
    baf_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        blank=True,
        null=True,
    )
    baf_unit = models.CharField(
        max_length=10,
        choices=TariffUnit.choices,
        default=TariffUnit.LUMPSUM,
    )
    ets_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        blank=True,
        null=True,
    )
    ets_unit = models.CharField(
        max_length=10,
        choices=TariffUnit.choices,
        default=TariffUnit.LUMPSUM,
    )
    port_additional_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        blank=True,
        null=True,
    )
    port_additional_unit = models.CharField(
        max_length=10,
        choices=TariffUnit.choices,
        default=TariffUnit.LUMPSUM,
    )
    admin_fee_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        blank=True,
        null=True,
    )
    admin_fee_unit = models.CharField(
        max_length=10,
        choices=TariffUnit.choices,
        default=TariffUnit.LUMPSUM,
    )
    thc_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        blank=True,
        null=True,
    )
    thc_unit = models.CharField(
        max_length=10,
        choices=TariffUnit.choices,
        default=TariffUnit.LUMPSUM,
    )
    measurement_costs_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        blank=True,
        null=True,
    )
    measurement_costs_unit = models.CharField(
        max_length=10,
        choices=TariffUnit.choices,
        default=TariffUnit.LUMPSUM,
    )
    congestion_surcharge_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        blank=True,
        null=True,
    )
    congestion_surcharge_unit = models.CharField(
        max_length=10,
        choices=TariffUnit.choices,
        default=TariffUnit.LUMPSUM,
    )
    iccm_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        blank=True,
        null=True,
    )
    iccm_unit = models.CharField(
        max_length=10,
        choices=TariffUnit.choices,
        default=TariffUnit.LUMPSUM,
    )
    freight_tax_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        blank=True,
        null=True,
    )
    freight_tax_unit = models.CharField(
        max_length=10,
        choices=TariffUnit.choices,
        default=TariffUnit.LUMPSUM,
    )

    source = models.CharField(max_length=100, blank=True, default="")
    notes = models.TextField(blank=True, default="")

    objects = EffectivePeriodQuerySet.as_manager()

    class Meta:
        ordering = ["-effective_from", "sort_order"]

    def __str__(self):
        return f"Tariff #{self.pk} from {self.effective_from or 'always'}"

    @staticmethod
    def selection_key(tariff: "CarrierPurchaseTariff") -> Tuple:
        """Sort key putting the tariff that should be used first: latest
        ``effective_from`` (undated last), then lowest ``sort_order``."""
        effective_from = tariff.effective_from
        return (
            effective_from is None,
            -effective_from.toordinal() if effective_from else 0,
            tariff.sort_order,
            -(tariff.pk or 0),
        )

    def cost_components(self) -> Dict[str, Tuple[Optional[Decimal], str]]:
        return {
            name: (getattr(self, f"{name}_amount"), getattr(self, f"{name}_unit"))
            for name in self.COST_COMPONENTS
        }

    def lumpsum_total(self) -> Decimal:
        """The sum of every component charged as a lump sum."""
        return sum(
            (
                amount
                for amount, unit in self.cost_components().values()
                if amount is not None and unit == TariffUnit.LUMPSUM
            ),
            Decimal("0"),
        )
