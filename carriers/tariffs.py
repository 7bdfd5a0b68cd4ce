"""Purchase tariff lookup for carrier article mappings."""
import logging
from datetime import date
from typing import Iterable
from typing import Optional

from django.conf import settings

from carriers.constants import normalise_vehicle_category
from carriers.models import CarrierArticleMapping
from carriers.models import CarrierCategoryGroup
from carriers.models import CarrierPurchaseTariff
from carriers.resolver import CarrierRuleResolver
from carriers.resolver import Resolution
from common.util import as_date
from common.util import as_int_set
from common.util import port_code_from_text
from ports.models import Port

logger = logging.getLogger(__name__)


def explain_active_tariff(
    carrier,
    port,
    category: Optional[str],
    at: Optional[date] = None,
    **scope,
) -> Resolution:
    """
    Find the purchase tariff in force for a carrier, port of discharge and
    vehicle category.

    Every article mapping in scope contributes its tariffs in effect at
    ``at``. The latest ``effective_from`` wins, undated tariffs coming last,
    then the lowest ``sort_order``.

    :param scope: ``category_group_id``, ``vessel_name`` and ``vessel_class``
        as accepted by :meth:`CarrierRuleResolver.context`.
    """
    at = as_date(at)
    resolver = CarrierRuleResolver(at=at)
    mappings = resolver.resolve_article_mappings(carrier, port, category, **scope)

    tariffs = [
        tariff
        for mapping in mappings
        for tariff in mapping.purchase_tariffs.all()
        if tariff.is_in_effect(at)
    ]
    tariffs.sort(key=CarrierPurchaseTariff.selection_key)

    ambiguous = len(tariffs) > 1 and (
        CarrierPurchaseTariff.selection_key(tariffs[0])[:-1]
        == CarrierPurchaseTariff.selection_key(tariffs[1])[:-1]
    )
    if ambiguous:
        logger.warning(
            "Purchase tariffs %s and %s are equally current for carrier %s, "
            "port %s, category %s",
            tariffs[0].pk,
            tariffs[1].pk,
            getattr(carrier, "pk", carrier),
            getattr(port, "pk", port),
            category,
        )
    return Resolution(
        selected=tariffs[0] if tariffs else None,
        candidates=tariffs,
        ambiguous=ambiguous,
    )


def resolve_active_tariff(
    carrier,
    port,
    category: Optional[str],
    at: Optional[date] = None,
    **scope,
) -> Optional[CarrierPurchaseTariff]:
    return explain_active_tariff(carrier, port, category, at=at, **scope).selected


def pdf_category_for_group_code(code: str) -> Optional[str]:
    table = settings.PDF_CATEGORY_GROUP_CODES
    code = str(code or "").upper()
    if code in table["exact"]:
        return table["exact"][code]
    for keyword, pdf_category in table["contains"].items():
        if keyword in code:
            return pdf_category
    return None


def pdf_category_for_group_codes(codes: Iterable[str]) -> Optional[str]:
    """The category of the first group code that names one, in the order the
    groups are given."""
    for code in codes:
        pdf_category = pdf_category_for_group_code(code)
        if pdf_category:
            return pdf_category
    return None


def pdf_category_for_vehicle_categories(categories: Iterable[str]) -> Optional[str]:
    keywords = {
        keyword: pdf_category
        for pdf_category, keywords in settings.PDF_CATEGORY_VEHICLE_CATEGORIES.items()
        for keyword in keywords
    }
    for category in categories:
        raw = str(category).strip().lower()
        if raw in keywords:
            return keywords[raw]
        normalised = normalise_vehicle_category(raw, warn=False)
        if normalised in keywords:
            return keywords[normalised]
    return None


def determine_pdf_category(
    mapping: CarrierArticleMapping,
    group_codes: Optional[Iterable[str]] = None,
) -> Optional[str]:
    """
    Which purchase rate sheet column (``CAR``, ``SVAN``, ``BVAN`` or ``LM``)
    an article mapping is priced in.

    The category groups of the mapping's own carrier are consulted first, in
    id order, then the mapping's vehicle categories. ``group_codes`` can be
    passed in when the caller has already loaded the codes of the mapping's
    category groups.
    """
    if group_codes is None:
        group_ids = as_int_set(mapping.category_group_ids)
        group_codes = (
            CarrierCategoryGroup.objects.filter(
                pk__in=group_ids,
                carrier_id=mapping.carrier_id,
            )
            .order_by("pk")
            .values_list("code", flat=True)
            if group_ids
            else []
        )
    return pdf_category_for_group_codes(group_codes) or (
        pdf_category_for_vehicle_categories(mapping.vehicle_categories or [])
    )


def port_for_mapping(mapping: CarrierArticleMapping) -> Optional[Port]:
    """
    The port of discharge an article mapping is for.

    The article's POD code is preferred, then a ``(CODE)`` written in its POD
    name, then the first port the mapping is scoped to.
    """
    article = mapping.article
    for code in (article.pod_code, port_code_from_text(article.pod)):
        if code:
            port = Port.objects.filter(code__iexact=code.strip()).first()
            if port is not None:
                return port
    for port_id in mapping.port_ids or []:
        port = Port.objects.filter(pk=port_id).first()
        if port is not None:
            return port
    return None
