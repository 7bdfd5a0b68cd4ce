from typing import Mapping
from typing import Optional

from django.db import models
from django.db.models import Q

from common.models import TimestampedMixin


class PortQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True)

    def missing_country_code(self):
        return self.filter(Q(country_code__isnull=True) | Q(country_code=""))


class Port(TimestampedMixin):
    """
    A sea port, identified by the short code used on sailing schedules and
    purchase rate sheets (for example ``ABJ`` for Abidjan).

    Carrier rules refer to ports by primary key, either directly or through a
    carrier port group.
    """

    code = models.CharField(max_length=10, unique=True)
    name = models.CharField(max_length=255)
    country = models.CharField(max_length=255, blank=True, default="")
    country_code = models.CharField(max_length=2, blank=True, null=True)
    region = models.CharField(max_length=100, blank=True, default="")
    unlocode = models.CharField(
        max_length=10,
        blank=True,
        null=True,
        help_text="UN/LOCODE, two letter country code followed by a location code",
    )
    is_active = models.BooleanField(default=True)

    objects = PortQuerySet.as_manager()

    class Meta:
        ordering = ["code"]

    def __str__(self):
        return f"{self.name} ({self.code})"

    def country_code_from_unlocode(self) -> Optional[str]:
        """The ISO country code that prefixes the UN/LOCODE, if it has one."""
        unlocode = (self.unlocode or "").strip()
        prefix = unlocode[:2].upper()
        if len(prefix) == 2 and prefix.isalpha() and prefix.isascii():
            return prefix
        return None

    def derive_country_code(self, country_names: Mapping[str, str]) -> Optional[str]:
        """
        Work out the ISO country code for this port.

        The UN/LOCODE prefix wins. Otherwise the country name is looked up,
        case-insensitively, in ``country_names``.
        """
        code = self.country_code_from_unlocode()
        if code:
            return code
        name = (self.country or "").strip().lower()
        if not name:
            return None
        return country_names.get(name)
