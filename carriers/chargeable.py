"""Linear metre (LM) measurement of cargo for charging."""
import logging
from dataclasses import dataclass
from dataclasses import field
from typing import Optional

from carriers.constants import TransformCode
from carriers.models import RuleContext
from carriers.resolver import CarrierRuleResolver

logger = logging.getLogger(__name__)

# Deck lane width in metres; narrower cargo still occupies a full lane.
LANE_WIDTH_M = 2.5


def base_lm(length_cm: float, width_cm: float) -> float:
    """LM of cargo as ``length × max(width, lane width) / lane width``, in
    metres."""
    return (length_cm / 100 * max(width_cm / 100, LANE_WIDTH_M)) / LANE_WIDTH_M


@dataclass
class ChargeableMeasure:
    base_lm: float
    chargeable_lm: float
    applied_transform_rule_id: Optional[int] = None
    meta: dict = field(default_factory=dict)

    @property
    def transform_reason(self) -> Optional[str]:
        return self.meta.get("transform_reason")


class ChargeableMeasureService:
    """
    Works out the LM a carrier charges for.

    The base LM can be replaced by the first ``OVERWIDTH_LM_RECALC`` transform
    rule in scope whose trigger width the cargo exceeds, which charges the
    real footprint ``length × width / divisor`` instead.
    """

    def __init__(self, resolver: Optional[CarrierRuleResolver] = None):
        self.resolver = resolver or CarrierRuleResolver()

    def compute_chargeable_lm(
        self,
        length_cm: float,
        width_cm: float,
        context: Optional[RuleContext] = None,
    ) -> ChargeableMeasure:
        lm = base_lm(length_cm, width_cm)
        measure = ChargeableMeasure(base_lm=lm, chargeable_lm=lm)
        if context is None:
            return measure

        for rule in self.resolver.resolve_transform_rules(context):
            if rule.transform_code != TransformCode.OVERWIDTH_LM_RECALC:
                continue
            if not rule.triggers(width_cm):
                continue
            measure.chargeable_lm = (length_cm * width_cm) / (rule.divisor_cm * 100)
            measure.applied_transform_rule_id = rule.pk
            measure.meta = {
                "transform_reason": (
                    f"Overwidth: width {width_cm:g}cm exceeds trigger "
                    f"{rule.trigger_width_cm:g}cm"
                ),
                "divisor_cm": rule.divisor_cm,
            }
            logger.debug(
                "Transform rule %s recalculated LM from %.3f to %.3f",
                rule.pk,
                lm,
                measure.chargeable_lm,
            )
            break
        return measure
