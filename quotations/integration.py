"""Applies carrier rules to the cargo lines of a quotation."""
import logging
from decimal import Decimal
from typing import Dict
from typing import List
from typing import Optional

from django.db import transaction

from carriers.engine import CargoInput
from carriers.engine import CarrierRuleEngine
from carriers.engine import CarrierRuleResult
from carriers.models import Article
from common.exceptions import MissingScheduleContext
from quotations.models import QuotationArticle
from quotations.models import QuotationCommodityItem
from quotations.models import QuotationRequest

logger = logging.getLogger(__name__)


def as_float(value) -> float:
    return float(value) if value is not None else 0.0


def as_quantity(value) -> Decimal:
    return Decimal(str(round(float(value), 3)))


def cargo_input_for(item: QuotationCommodityItem) -> CargoInput:
    """
    Describe a cargo line for the carrier rule engine.

    :raises MissingScheduleContext: when the quotation has no carrier or port
        of discharge selected.
    """
    quotation = item.quotation
    if not quotation.has_schedule_context():
        raise MissingScheduleContext(
            f"Quotation {quotation} has no carrier and port of discharge selected",
        )
    return CargoInput(
        carrier_id=quotation.carrier_id,
        pod_port_id=quotation.pod_port_id,
        category=item.category,
        length_cm=as_float(item.length_cm),
        width_cm=as_float(item.width_cm),
        height_cm=as_float(item.height_cm),
        cbm=as_float(item.cbm),
        weight_kg=as_float(item.weight_kg),
        unit_count=item.unit_count,
        flags=list(item.flags or []),
        vessel_name=quotation.vessel_name or None,
        vessel_class=quotation.vessel_class or None,
        commodity_item_id=item.pk,
    )


class CarrierRuleIntegrationService:
    """
    Stores the outcome of the carrier rules on a cargo line and keeps the
    quotation's surcharge article lines in step with it.

    Surcharge lines added here are marked with ``carrier_rule_applied`` in
    their notes together with the event and cargo line they bill, so that they
    can be updated or removed when the cargo changes.
    """

    def __init__(self, engine: Optional[CarrierRuleEngine] = None):
        self.engine = engine or CarrierRuleEngine()

    def process_commodity_item(
        self,
        item: QuotationCommodityItem,
    ) -> Optional[CarrierRuleResult]:
        try:
            cargo = cargo_input_for(item)
        except MissingScheduleContext as e:
            logger.info("Skipping carrier rules for commodity item %s: %s", item.pk, e)
            return None

        result = self.engine.process_cargo(cargo)
        with transaction.atomic():
            self.store_result(item, result)
            self.sync_surcharge_articles(item.quotation, item, result.quote_line_drafts)

        logger.info(
            "Processed commodity item %s for carrier %s at port %s: %s, "
            "%.3f LM, %d surcharge event(s)",
            item.pk,
            cargo.carrier_id,
            cargo.pod_port_id,
            result.acceptance_status,
            result.measure.chargeable_lm,
            len(result.surcharge_events),
        )
        return result

    def process_quotation(self, quotation: QuotationRequest) -> List[CarrierRuleResult]:
        results = []
        for item in quotation.commodity_items.order_by("line_number", "pk"):
            result = self.process_commodity_item(item)
            if result is not None:
                results.append(result)
        return results

    def store_result(self, item: QuotationCommodityItem, result: CarrierRuleResult):
        measure = result.measure
        towing = self.engine.resolver.explain_towing(item.category, item.pk)
        item.chargeable_lm = as_quantity(measure.chargeable_lm)
        item.carrier_rule_meta = {
            "classified_category": result.classified_category,
            "matched_category_group": result.matched_category_group,
            "acceptance_status": str(result.acceptance.status),
            "violations": result.acceptance.violations,
            "approvals_required": result.acceptance.approvals_required,
            "warnings": result.acceptance.warnings,
            "base_lm": measure.base_lm,
            "chargeable_lm": measure.chargeable_lm,
            "transform_reason": measure.transform_reason,
            "applied_transform_rule_id": measure.applied_transform_rule_id,
            "surcharge_events": result.surcharge_events,
            "towing": {
                "applies": towing.applies,
                "reason": towing.reason,
            },
        }
        item.save(update_fields=["chargeable_lm", "carrier_rule_meta", "updated_at"])

    def sync_surcharge_articles(
        self,
        quotation: QuotationRequest,
        item: QuotationCommodityItem,
        drafts: List[Dict],
    ):
        existing = [
            line
            for line in quotation.articles.select_related("article")
            if line.is_carrier_rule_line
            and line.notes.get("commodity_item_id") == item.pk
        ]

        produced = set()
        for draft in drafts:
            event_code = draft["meta"]["event_code"]
            produced.add((draft["article_id"], event_code))
            line = next(
                (
                    line
                    for line in existing
                    if line.article_id == draft["article_id"]
                    and line.notes.get("event_code") == event_code
                ),
                None,
            )
            if line is None:
                self.add_surcharge_article(quotation, item, draft)
            else:
                self.update_surcharge_article(line, draft)

        for line in existing:
            if (line.article_id, line.notes.get("event_code")) not in produced:
                logger.info(
                    "Removing surcharge line %s for event %s no longer raised by "
                    "commodity item %s",
                    line.pk,
                    line.notes.get("event_code"),
                    item.pk,
                )
                line.delete()

        quotation.calculate_totals()
        quotation.save(update_fields=["total_amount", "updated_at"])

    @staticmethod
    def selling_price(article: Article, draft: Dict) -> Decimal:
        if draft.get("amount_override") is not None:
            return Decimal(str(draft["amount_override"])).quantize(Decimal("0.01"))
        return article.unit_price or Decimal("0")

    def add_surcharge_article(
        self,
        quotation: QuotationRequest,
        item: QuotationCommodityItem,
        draft: Dict,
    ) -> Optional[QuotationArticle]:
        article = Article.objects.filter(pk=draft["article_id"]).first()
        if article is None:
            logger.warning("Surcharge article %s not found", draft["article_id"])
            return None

        line = QuotationArticle(
            quotation=quotation,
            article=article,
            quantity=as_quantity(draft["qty"]),
            unit_type=article.unit_type or "unit",
            unit_price=article.unit_price or Decimal("0"),
            selling_price=self.selling_price(article, draft),
            currency=article.currency or "EUR",
            notes={
                "carrier_rule_applied": True,
                "event_code": draft["meta"]["event_code"],
                "reason": draft["meta"]["reason"],
                "matched_rule_id": draft["meta"]["matched_rule_id"],
                "commodity_item_id": item.pk,
            },
        )
        line.recalculate_subtotal()
        line.save()
        logger.info(
            "Added surcharge article %s for event %s to quotation %s",
            article.article_code,
            draft["meta"]["event_code"],
            quotation,
        )
        return line

    def update_surcharge_article(self, line: QuotationArticle, draft: Dict):
        line.quantity = as_quantity(draft["qty"])
        line.selling_price = self.selling_price(line.article, draft)
        line.notes = {
            **line.notes,
            "reason": draft["meta"]["reason"],
            "matched_rule_id": draft["meta"]["matched_rule_id"],
        }
        line.recalculate_subtotal()
        line.save()
