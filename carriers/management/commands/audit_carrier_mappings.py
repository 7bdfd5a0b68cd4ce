from collections import defaultdict

from django.conf import settings
from django.core.management.base import BaseCommand

from carriers.management.util import carrier_mappings
from carriers.management.util import get_carrier
from carriers.management.util import group_codes_by_mapping
from carriers.tariffs import determine_pdf_category
from carriers.tariffs import port_for_mapping


class Command(BaseCommand):
    help = (
        "List a carrier's article mappings grouped by port of discharge and "
        "purchase rate sheet category, with the purchase tariff in force for "
        "each."
    )

    def add_arguments(self, parser):
        parser.add_argument("carrier_code", help="Code of the shipping carrier.")

    def handle(self, *args, **options):
        carrier = get_carrier(options["carrier_code"])
        self.stdout.write(f"Auditing article mappings of {carrier} ({carrier.code})")
        self.stdout.write("")

        mappings = list(carrier_mappings(carrier))
        if not mappings:
            self.stdout.write(self.style.WARNING("No mappings found."))
            return

        group_codes = group_codes_by_mapping(mappings)
        ports = {}
        grouped = defaultdict(lambda: defaultdict(list))
        unplaced = []

        for mapping in mappings:
            port = port_for_mapping(mapping)
            category = determine_pdf_category(mapping, group_codes[mapping.pk])
            if port is None or category is None:
                unplaced.append(mapping)
                continue
            ports[port.code] = port
            grouped[port.code][category].append(mapping)

        total = 0
        with_tariff = 0
        for code in sorted(grouped):
            self.stdout.write(f"PORT {code} ({ports[code].name})")
            for category in settings.PDF_CATEGORY_ORDER:
                for mapping in grouped[code].get(category, []):
                    tariff = mapping.active_purchase_tariff()
                    total += 1
                    with_tariff += tariff is not None
                    self.stdout.write(
                        f"  - {category:<5} | article {mapping.article.article_code} "
                        f"| mapping #{mapping.pk} "
                        f"| tariff: {f'#{tariff.pk}' if tariff else 'none'}",
                    )
            self.stdout.write("")

        if unplaced:
            self.stdout.write(
                self.style.WARNING(
                    f"Mappings without a port or category ({len(unplaced)}):",
                ),
            )
            for mapping in unplaced:
                self.stdout.write(
                    f"  - mapping #{mapping.pk} | article {mapping.article.article_code}",
                )
            self.stdout.write("")

        self.stdout.write("Summary:")
        self.stdout.write(f"  Total mappings: {total}")
        self.stdout.write(f"  Mappings with active tariffs: {with_tariff}")
        self.stdout.write(f"  Mappings without tariffs: {total - with_tariff}")
