"""Helpers shared by the carrier management commands."""
from collections import defaultdict
from typing import Dict
from typing import Iterable
from typing import List

from django.core.management.base import CommandError

from carriers.models import CarrierArticleMapping
from carriers.models import CarrierCategoryGroup
from carriers.models import ShippingCarrier
from common.util import as_int_set


def get_carrier(code: str) -> ShippingCarrier:
    try:
        return ShippingCarrier.objects.get(code__iexact=code)
    except ShippingCarrier.DoesNotExist:
        raise CommandError(f"Carrier '{code}' does not exist.")


def carrier_mappings(carrier: ShippingCarrier):
    return (
        CarrierArticleMapping.objects.filter(carrier=carrier)
        .select_related("article")
        .prefetch_related("purchase_tariffs")
        .order_by("sort_order", "pk")
    )


def group_codes_by_mapping(
    mappings: Iterable[CarrierArticleMapping],
) -> Dict[int, List[str]]:
    """Category group codes of each mapping in id order, loaded with a single
    query. Groups owned by another carrier are left out."""
    mappings = list(mappings)
    group_ids = set()
    for mapping in mappings:
        group_ids |= as_int_set(mapping.category_group_ids)
    groups = {
        pk: (carrier_id, code)
        for pk, carrier_id, code in CarrierCategoryGroup.objects.filter(
            pk__in=group_ids,
        ).values_list("pk", "carrier_id", "code")
    }
    result = defaultdict(list)
    for mapping in mappings:
        for group_id in sorted(as_int_set(mapping.category_group_ids)):
            carrier_id, code = groups.get(group_id, (None, None))
            if carrier_id is not None and carrier_id == mapping.carrier_id:
                result[mapping.pk].append(code)
    return result
