from django.core.management.base import BaseCommand
from django.core.management.base import CommandError

from quotations.integration import CarrierRuleIntegrationService
from quotations.models import QuotationRequest


class Command(BaseCommand):
    help = (
        "Run the carrier rules again for every cargo line of a quotation, "
        "refreshing chargeable LM, rule results and surcharge article lines."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "request_number",
            help="The quotation request number, for example QR-2026-0006.",
        )

    def handle(self, *args, **options):
        request_number = options["request_number"]
        try:
            quotation = QuotationRequest.objects.get(request_number=request_number)
        except QuotationRequest.DoesNotExist:
            raise CommandError(f"Quotation '{request_number}' does not exist.")

        if not quotation.has_schedule_context():
            raise CommandError(
                f"Quotation '{request_number}' has no carrier and port of "
                f"discharge selected.",
            )

        service = CarrierRuleIntegrationService()
        items = list(quotation.commodity_items.order_by("line_number", "pk"))
        for item in items:
            result = service.process_commodity_item(item)
            events = ", ".join(e["event_code"] for e in result.surcharge_events)
            self.stdout.write(
                f"Line {item.line_number} ({item.category or '-'}): "
                f"{result.acceptance_status}, "
                f"{result.measure.chargeable_lm:.3f} LM"
                f"{f', surcharges: {events}' if events else ''}",
            )

        quotation.refresh_from_db()
        self.stdout.write(
            self.style.SUCCESS(
                f"Processed {len(items)} commodity item(s); quotation total "
                f"{quotation.total_amount} {quotation.currency}",
            ),
        )
