from datetime import date
from typing import Optional

from django.db.models import Q
from django.db.models import QuerySet

from common.util import as_date


def effective_at(at: date, prefix: str = "") -> Q:
    """
    Build a filter matching rows whose effective window contains ``at``.

    :param at date: The date the window must contain.
    :param prefix str: A relation path, including the trailing ``__``, when the
        window lives on a related model.
    :rtype Q:
    """
    return (
        Q(**{f"{prefix}effective_from__isnull": True})
        | Q(**{f"{prefix}effective_from__lte": at})
    ) & (
        Q(**{f"{prefix}effective_to__isnull": True})
        | Q(**{f"{prefix}effective_to__gte": at})
    )


class EffectivePeriodQuerySet(QuerySet):
    """A mixin for querysets dealing with models that have an active flag and
    an effective date window."""

    def active(self) -> QuerySet:
        return self.filter(is_active=True)

    def in_effect(self, at: Optional[date] = None) -> QuerySet:
        """
        Filter queryset to only those that are active and whose effective
        window includes the given date.

        :param at date: Defaults to today.
        :rtype QuerySet:
        """
        return self.active().filter(effective_at(as_date(at)))
