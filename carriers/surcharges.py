"""
Surcharge quantities and amounts for each calculation mode.

Each mode reads its figures from the rule's ``params``. Only the modes of
:class:`carriers.constants.CalcMode` are understood; rules never carry
arbitrary formulas.
"""
import math
from dataclasses import dataclass
from typing import Optional

from carriers.constants import CalcMode
from common.exceptions import UnknownCalculationMode

DEFAULT_WIDTH_THRESHOLD_CM = 250
DEFAULT_WIDTH_BLOCK_CM = 25


@dataclass
class SurchargeCalculation:
    """
    ``qty`` units at ``amount`` each. A quantity of zero means the surcharge
    does not apply to this cargo.
    """

    qty: float
    amount_basis: str
    amount: float = 0.0
    needs_basic_freight: bool = False


def _number(params: dict, key: str, default: float = 0.0) -> float:
    value = params.get(key)
    return default if value is None else float(value)


def width_blocks(width_cm: float, threshold_cm: float, block_cm: float) -> int:
    """Number of started ``block_cm`` blocks by which a width exceeds
    ``threshold_cm``."""
    return math.ceil(max(0.0, width_cm - threshold_cm) / block_cm)


class SurchargeCalculator:
    """Calculates one surcharge rule against one cargo line."""

    def calculate(
        self,
        rule,
        cargo,
        measure,
        basic_freight: Optional[float] = None,
    ) -> SurchargeCalculation:
        """
        :param rule: A :class:`~carriers.models.CarrierSurchargeRule`.
        :param cargo: A :class:`~carriers.engine.CargoInput`.
        :param measure: The cargo's
            :class:`~carriers.chargeable.ChargeableMeasure`.
        :param basic_freight: The ocean freight amount, needed by percentage
            surcharges.
        :raises UnknownCalculationMode: when the rule's mode is not supported.
        """
        try:
            method = getattr(self, f"calculate_{CalcMode(rule.calc_mode).value.lower()}")
        except ValueError:
            raise UnknownCalculationMode(
                f"Unknown calc_mode {rule.calc_mode!r} on surcharge rule {rule.pk}",
            )
        return method(rule.params or {}, cargo, measure, basic_freight)

    def calculate_flat(self, params, cargo, measure, basic_freight):
        return SurchargeCalculation(
            qty=1,
            amount_basis=CalcMode.FLAT,
            amount=_number(params, "amount"),
        )

    def calculate_per_unit(self, params, cargo, measure, basic_freight):
        return SurchargeCalculation(
            qty=cargo.unit_count,
            amount_basis=CalcMode.PER_UNIT,
            amount=_number(params, "amount"),
        )

    def calculate_percent_of_basic_freight(self, params, cargo, measure, basic_freight):
        if basic_freight is None or basic_freight <= 0:
            return SurchargeCalculation(
                qty=0,
                amount_basis=CalcMode.PERCENT_OF_BASIC_FREIGHT,
                needs_basic_freight=True,
            )
        return SurchargeCalculation(
            qty=1,
            amount_basis=CalcMode.PERCENT_OF_BASIC_FREIGHT,
            amount=float(basic_freight) * _number(params, "percentage") / 100,
        )

    def calculate_weight_tier(self, params, cargo, measure, basic_freight):
        """
        Tiers are tried in order. The first tier whose ``max_kg`` the weight
        does not exceed wins outright; a tier with only a ``min_kg`` the
        weight reaches is remembered but later tiers may still win. A tier
        without ``max_kg`` is the catch-all when nothing else matched.

        A matched tier with ``per_ton_over`` adds that much per tonne above
        its ``min_kg``.
        """
        weight = cargo.weight_kg
        matched = None
        catch_all = None
        for tier in params.get("tiers") or []:
            max_kg = tier.get("max_kg")
            min_kg = tier.get("min_kg")
            if max_kg is not None and weight <= float(max_kg):
                matched = tier
                break
            elif min_kg is not None and weight >= float(min_kg):
                matched = tier
            if max_kg is None:
                catch_all = tier
        matched = matched or catch_all

        if matched is None:
            return SurchargeCalculation(qty=0, amount_basis=CalcMode.WEIGHT_TIER)

        amount = _number(matched, "amount")
        if matched.get("per_ton_over") is not None and matched.get("min_kg") is not None:
            tons_over = (weight - float(matched["min_kg"])) / 1000
            amount += tons_over * float(matched["per_ton_over"])
        return SurchargeCalculation(
            qty=1,
            amount_basis=CalcMode.WEIGHT_TIER,
            amount=amount,
        )

    def calculate_per_ton_above(self, params, cargo, measure, basic_freight):
        threshold_kg = _number(params, "threshold_kg")
        if cargo.weight_kg <= threshold_kg:
            return SurchargeCalculation(qty=0, amount_basis=CalcMode.PER_TON_ABOVE)
        return SurchargeCalculation(
            qty=(cargo.weight_kg - threshold_kg) / 1000,
            amount_basis=CalcMode.PER_TON_ABOVE,
            amount=_number(params, "amount_per_ton"),
        )

    def calculate_per_tank(self, params, cargo, measure, basic_freight):
        return SurchargeCalculation(
            qty=cargo.unit_count,
            amount_basis=CalcMode.PER_TANK,
            amount=_number(params, "amount"),
        )

    def calculate_per_lm(self, params, cargo, measure, basic_freight):
        return SurchargeCalculation(
            qty=measure.chargeable_lm,
            amount_basis=CalcMode.PER_LM,
            amount=_number(params, "amount"),
        )

    def calculate_width_lm_basis(self, params, cargo, measure, basic_freight):
        trigger = _number(params, "trigger_width_gt_cm", DEFAULT_WIDTH_THRESHOLD_CM)
        if cargo.width_cm <= trigger:
            return SurchargeCalculation(qty=0, amount_basis=CalcMode.WIDTH_LM_BASIS)
        use_chargeable_lm = params.get("use_chargeable_lm", True)
        return SurchargeCalculation(
            qty=measure.chargeable_lm if use_chargeable_lm else measure.base_lm,
            amount_basis=CalcMode.WIDTH_LM_BASIS,
            amount=_number(params, "amount_per_lm"),
        )

    def calculate_width_step_blocks(self, params, cargo, measure, basic_freight):
        """Charged per started block of overwidth, multiplied by the base LM
        or by the number of units depending on ``qty_basis``."""
        threshold = _number(params, "threshold_cm", DEFAULT_WIDTH_THRESHOLD_CM)
        block = _number(params, "block_cm", DEFAULT_WIDTH_BLOCK_CM)
        trigger = _number(params, "trigger_width_gt_cm", threshold)
        if cargo.width_cm <= trigger:
            return SurchargeCalculation(qty=0, amount_basis=CalcMode.WIDTH_STEP_BLOCKS)

        blocks = width_blocks(cargo.width_cm, threshold, block)
        if params.get("qty_basis", "LM") == "LM":
            basis = measure.base_lm
        else:
            basis = cargo.unit_count
        return SurchargeCalculation(
            qty=blocks * basis,
            amount_basis=CalcMode.WIDTH_STEP_BLOCKS,
            amount=_number(params, "amount_per_block"),
        )

    def reason(self, rule, cargo) -> str:
        """A human readable explanation of why the surcharge applies."""
        params = rule.params or {}
        reason = rule.name
        if rule.calc_mode == CalcMode.WIDTH_LM_BASIS:
            trigger = _number(params, "trigger_width_gt_cm", DEFAULT_WIDTH_THRESHOLD_CM)
            reason += f" (width {cargo.width_cm:g}cm exceeds {trigger:g}cm)"
        elif rule.calc_mode == CalcMode.WIDTH_STEP_BLOCKS:
            threshold = _number(params, "threshold_cm", DEFAULT_WIDTH_THRESHOLD_CM)
            block = _number(params, "block_cm", DEFAULT_WIDTH_BLOCK_CM)
            blocks = width_blocks(cargo.width_cm, threshold, block)
            reason += f" ({blocks} blocks × {block:g}cm over {threshold:g}cm)"
        return reason
