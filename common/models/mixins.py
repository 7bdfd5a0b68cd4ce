"""Mixins for models."""
from datetime import date
from typing import Optional

from django.db import models

from common.util import as_date
from common.util import is_in_effect


class TimestampedMixin(models.Model):
    """Mixin adding timestamps for creation and last update."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class EffectivePeriodMixin(models.Model):
    """
    The model is considered after the effective start date
    (:attr:`effective_from`) and up to and including the effective end date
    (:attr:`effective_to`), but only while :attr:`is_active` is set.

    Both dates are optional. A blank start date means the model has always been
    in effect and a blank end date means it stays in effect indefinitely.
    """

    is_active = models.BooleanField(default=True)
    effective_from = models.DateField(blank=True, null=True, db_index=True)
    effective_to = models.DateField(blank=True, null=True)

    def is_in_effect(self, at: Optional[date] = None) -> bool:
        return self.is_active and is_in_effect(
            self.effective_from,
            self.effective_to,
            as_date(at),
        )

    class Meta:
        abstract = True
