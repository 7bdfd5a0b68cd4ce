import logging
from decimal import Decimal
from typing import Optional
from typing import Tuple

from django.core.management.base import BaseCommand
from django.db import transaction

from carriers.constants import PdfCategory
from carriers.constants import TariffUnit
from carriers.management.util import carrier_mappings
from carriers.management.util import get_carrier
from carriers.management.util import group_codes_by_mapping
from carriers.tariffs import determine_pdf_category
from carriers.tariffs import port_for_mapping

logger = logging.getLogger(__name__)

TEMA = "TEM"
TAKORADI = "TKR"
COTONOU = "COO"
TARGET_PORTS = [TEMA, TAKORADI, COTONOU]

VEHICLE_CATEGORIES = {PdfCategory.CAR, PdfCategory.SVAN, PdfCategory.BVAN}


def freight_tax_for(
    port_code: str,
    category: Optional[str],
    port_additional: Optional[Decimal],
) -> Optional[Tuple[Decimal, Optional[Decimal]]]:
    """
    The freight tax and port additional amounts a tariff should carry.

    Cotonou charges freight tax on top of the port additional. Tema and
    Takoradi used to include it in the port additional, so it is split out:
    5 for cars and vans out of a port additional of 55, and 20 for LM cargo
    out of 120.
    """
    if port_code == COTONOU:
        if category in VEHICLE_CATEGORIES:
            return Decimal("5"), port_additional
        if category == PdfCategory.LM:
            return Decimal("15"), port_additional
        return None

    if port_code in (TEMA, TAKORADI):
        if category in VEHICLE_CATEGORIES:
            tax, ceiling = Decimal("5"), Decimal("50")
        elif category == PdfCategory.LM:
            tax, ceiling = Decimal("20"), Decimal("100")
        else:
            return None
        if port_additional is not None and port_additional > ceiling:
            port_additional = port_additional - tax
        return tax, port_additional

    return None


class Command(BaseCommand):
    help = (
        "Set the freight tax on the purchase tariffs in force for Tema, "
        "Takoradi and Cotonou, splitting it out of the port additional where "
        "it used to be included. Other tariff fields are left untouched."
    )

    def add_arguments(self, parser):
        parser.add_argument("carrier_code", help="Code of the shipping carrier.")
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Show what would be updated without making changes.",
        )

    def handle(self, *args, **options):
        dry_run = options["dry_run"]
        carrier = get_carrier(options["carrier_code"])

        if dry_run:
            self.stdout.write("DRY RUN - no changes will be made")
        self.stdout.write(f"Updating freight tax for {carrier} ({carrier.code})")
        self.stdout.write("")

        mappings = list(carrier_mappings(carrier))
        group_codes = group_codes_by_mapping(mappings)
        updated = dict.fromkeys(TARGET_PORTS, 0)
        skipped = 0

        with transaction.atomic():
            for mapping in mappings:
                port = port_for_mapping(mapping)
                if port is None or port.code not in TARGET_PORTS:
                    continue
                tariff = mapping.active_purchase_tariff()
                if tariff is None:
                    continue

                category = determine_pdf_category(mapping, group_codes[mapping.pk])
                amounts = freight_tax_for(
                    port.code,
                    category,
                    tariff.port_additional_amount,
                )
                if amounts is None:
                    skipped += 1
                    continue

                freight_tax, port_additional = amounts
                if (
                    tariff.freight_tax_amount == freight_tax
                    and tariff.port_additional_amount == port_additional
                ):
                    skipped += 1
                    continue

                self.stdout.write(
                    f"  {port.name} ({port.code}) - {category} - "
                    f"{mapping.article.article_code}:",
                )
                self.stdout.write(
                    f"    Current: freight_tax={tariff.freight_tax_amount}, "
                    f"port_additional={tariff.port_additional_amount}",
                )
                self.stdout.write(
                    f"    Update:  freight_tax={freight_tax}, "
                    f"port_additional={port_additional}",
                )
                updated[port.code] += 1

                if dry_run:
                    self.stdout.write("    [DRY RUN - would update]")
                    continue

                tariff.freight_tax_amount = freight_tax
                tariff.freight_tax_unit = TariffUnit.LUMPSUM
                tariff.port_additional_amount = port_additional
                tariff.save(
                    update_fields=[
                        "freight_tax_amount",
                        "freight_tax_unit",
                        "port_additional_amount",
                        "updated_at",
                    ],
                )
                logger.info(
                    "Set freight tax of tariff %s to %s, port additional %s",
                    tariff.pk,
                    freight_tax,
                    port_additional,
                )
                self.stdout.write("    Updated")

        self.stdout.write("")
        self.stdout.write("Summary:")
        self.stdout.write(f"  Tema updated: {updated[TEMA]}")
        self.stdout.write(f"  Takoradi updated: {updated[TAKORADI]}")
        self.stdout.write(f"  Cotonou updated: {updated[COTONOU]}")
        self.stdout.write(f"  Skipped: {skipped}")
        if dry_run:
            self.stdout.write("")
            self.stdout.write("Run without --dry-run to apply changes")
