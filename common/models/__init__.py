from common.models.mixins import EffectivePeriodMixin
from common.models.mixins import TimestampedMixin

__all__ = [
    "EffectivePeriodMixin",
    "TimestampedMixin",
]
