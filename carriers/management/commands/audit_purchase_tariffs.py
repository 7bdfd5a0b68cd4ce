from datetime import date

from django.core.management.base import BaseCommand
from django.core.management.base import CommandError

from carriers.management.util import get_carrier
from carriers.models import Article
from carriers.models import CarrierArticleMapping
from common.util import as_int_set
from ports.models import Port

# Ports of the West Africa service expected to carry a full rate sheet.
EXPECTED_PORTS = [
    "ABJ",
    "FNA",
    "BJL",
    "LOS",
    "CAS",
    "TFN",
    "CKY",
    "LFW",
    "COO",
    "DKR",
    "DLA",
    "LAD",
    "ROB",
    "BTA",
    "MAL",
    "PNR",
    "LBV",
    "NKC",
    "TEM",
    "TKR",
]

# Rate sheet categories and the article code suffix each is sold under.
CATEGORY_ARTICLE_SUFFIXES = {
    "CAR": "CAR",
    "SMALL_VAN": "SV",
    "BIG_VAN": "BV",
    "LM": "HH",
}

DEFAULT_ARTICLE_PREFIX = "GANR"


class Command(BaseCommand):
    help = (
        "Check that every expected port and category has a sales article, an "
        "article mapping for the port and a purchase tariff in force."
    )

    def add_arguments(self, parser):
        parser.add_argument("carrier_code", help="Code of the shipping carrier.")
        parser.add_argument(
            "--ports",
            nargs="+",
            metavar="CODE",
            help="Port codes to check instead of the full West Africa service.",
        )
        parser.add_argument(
            "--since",
            type=date.fromisoformat,
            metavar="YYYY-MM-DD",
            help="Only count tariffs effective from this date or later.",
        )
        parser.add_argument(
            "--article-prefix",
            default=DEFAULT_ARTICLE_PREFIX,
            help=f"Prefix of the ocean freight article codes (default {DEFAULT_ARTICLE_PREFIX}).",
        )

    def handle(self, *args, **options):
        carrier = get_carrier(options["carrier_code"])
        port_codes = [code.upper() for code in options["ports"] or EXPECTED_PORTS]
        since = options["since"]
        prefix = options["article_prefix"]

        expected_total = len(port_codes) * len(CATEGORY_ARTICLE_SUFFIXES)
        if not expected_total:
            raise CommandError("No ports to check.")

        self.stdout.write(f"Auditing purchase tariffs of {carrier} ({carrier.code})")
        self.stdout.write(f"Expected ports: {len(port_codes)}")
        self.stdout.write(f"Expected categories per port: {len(CATEGORY_ARTICLE_SUFFIXES)}")
        self.stdout.write(f"Total expected tariffs: {expected_total}")
        self.stdout.write("")

        missing_ports = []
        issues = {}
        complete = []
        found = 0

        for code in port_codes:
            port = Port.objects.filter(code=code).first()
            if port is None:
                missing_ports.append(code)
                continue

            port_issues = []
            for category, suffix in CATEGORY_ARTICLE_SUFFIXES.items():
                problem = self.check(carrier, port, category, f"{prefix}{code}{suffix}", since)
                if problem:
                    port_issues.append(problem)
                else:
                    found += 1

            if port_issues:
                issues[code] = port_issues
            else:
                complete.append(code)

        if missing_ports:
            self.stdout.write(
                self.style.ERROR(f"Missing ports ({len(missing_ports)}):"),
            )
            for code in missing_ports:
                self.stdout.write(f"   - {code}")
            self.stdout.write("")

        if issues:
            self.stdout.write(
                self.style.WARNING(f"Incomplete ports ({len(issues)}):"),
            )
            for code, port_issues in issues.items():
                self.stdout.write(f"   - {code}:")
                for issue in port_issues:
                    self.stdout.write(f"     * {issue}")
            self.stdout.write("")

        self.stdout.write(f"Complete ports ({len(complete)}):")
        self.stdout.write(f"   {', '.join(complete) if complete else 'None'}")
        self.stdout.write("")

        self.stdout.write("Summary:")
        self.stdout.write(f"   Total expected tariffs: {expected_total}")
        self.stdout.write(f"   Total found tariffs: {found}")
        self.stdout.write(f"   Missing tariffs: {expected_total - found}")
        self.stdout.write(f"   Completion: {round(found / expected_total * 100, 1)}%")

    def check(self, carrier, port, category, article_code, since):
        """Describe what is missing for one port and category, or return None
        when a tariff is in force."""
        article = Article.objects.active().filter(article_code=article_code).first()
        if article is None:
            return f"Missing article: {article_code}"

        mapping = next(
            (
                mapping
                for mapping in CarrierArticleMapping.objects.filter(
                    carrier=carrier,
                    article=article,
                ).prefetch_related("purchase_tariffs")
                if port.pk in as_int_set(mapping.port_ids)
            ),
            None,
        )
        if mapping is None:
            return f"Missing mapping for article: {article_code}"

        tariff = mapping.active_purchase_tariff()
        if tariff is None:
            return f"Missing active tariff for: {category}"
        if since is not None and (
            tariff.effective_from is None or tariff.effective_from < since
        ):
            return f"Active tariff for {category} predates {since.isoformat()}"
        return None
