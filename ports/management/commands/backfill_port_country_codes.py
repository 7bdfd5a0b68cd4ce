import logging

from django.conf import settings
from django.core.management.base import BaseCommand

from ports.models import Port

logger = logging.getLogger(__name__)

UNCERTAIN_LISTING_LIMIT = 20


class Command(BaseCommand):
    help = (
        "Fill in missing port country codes from the UN/LOCODE prefix or, "
        "failing that, the port's country name."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Report what would change without writing anything.",
        )
        parser.add_argument(
            "--force-update",
            action="store_true",
            help="Recompute country codes for every port, overwriting existing values.",
        )

    def handle(self, *args, **options):
        dry_run = options["dry_run"]
        force_update = options["force_update"]

        if force_update:
            ports = list(Port.objects.all())
        else:
            ports = list(Port.objects.missing_country_code())
        self.stdout.write(f"Found {len(ports)} port(s) to check")

        updated = 0
        skipped = 0
        uncertain = []

        for port in ports:
            code = port.derive_country_code(settings.COUNTRY_NAME_CODES)
            if not code:
                uncertain.append(port)
                skipped += 1
                continue

            if port.country_code == code:
                skipped += 1
                continue

            if dry_run:
                self.stdout.write(
                    f"  [DRY RUN] Would set country_code: {port} -> {code}",
                )
            else:
                port.country_code = code
                port.save(update_fields=["country_code", "updated_at"])
                logger.info("Set country code of port %s to %s", port.code, code)
                self.stdout.write(f"  Updated: {port} -> {code}")
            updated += 1

        self.stdout.write("")
        self.stdout.write("Backfill results:")
        self.stdout.write(f"   Updated: {updated}")
        self.stdout.write(f"   Skipped: {skipped}")
        self.stdout.write(f"   Uncertain: {len(uncertain)}")

        if uncertain:
            self.stdout.write("")
            self.stdout.write(
                self.style.WARNING(
                    f"Ports with uncertain country_code (first {UNCERTAIN_LISTING_LIMIT}):",
                ),
            )
            for port in uncertain[:UNCERTAIN_LISTING_LIMIT]:
                self.stdout.write(
                    f"   - {port} - Country: {port.country or '-'}, "
                    f"UN/LOCODE: {port.unlocode or '-'}",
                )
