import json
from typing import Dict
from typing import List

from django.conf import settings
from django.core.management.base import BaseCommand
from django.core.management.base import CommandError
from django.core.serializers.json import DjangoJSONEncoder

from carriers.constants import normalise_vehicle_category
from carriers.towing import TowingResolver
from quotations.graph import CommodityGraph
from quotations.models import QuotationRequest

ITEM_COLUMNS = [
    "Line",
    "ID",
    "Category",
    "Type",
    "Relationship",
    "Related To",
    "Quantity",
    "Stack Qty",
]
ARTICLE_COLUMNS = [
    "ID",
    "Article",
    "Article Name",
    "Commodity Type",
    "Quantity",
    "Unit Type",
    "Event Code",
    "Linked Item",
]
LM_COMMODITY_TYPE = "LM CARGO"


def format_table(headers: List[str], rows: List[List]) -> List[str]:
    rows = [["-" if cell is None else str(cell) for cell in row] for row in rows]
    widths = [
        max(len(header), *(len(row[i]) for row in rows)) if rows else len(header)
        for i, header in enumerate(headers)
    ]

    def line(cells):
        return " | ".join(cell.ljust(width) for cell, width in zip(cells, widths))

    return [
        line(headers),
        "-+-".join("-" * width for width in widths),
        *(line(row) for row in rows),
    ]


def describe(item) -> str:
    return f"Line {item.line_number} ({item.category or '-'}, ID: {item.pk})"


class Command(BaseCommand):
    help = (
        "Report the cargo lines of a quotation, how they are stacked and "
        "coupled, the articles selected for it and why towing is or is not "
        "charged for each trailer."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "request_number",
            help="The quotation request number, for example QR-2026-0006.",
        )
        parser.add_argument(
            "--json",
            action="store_true",
            help="Print the report as JSON.",
        )

    def handle(self, *args, **options):
        request_number = options["request_number"]
        quotation = (
            QuotationRequest.objects.select_related("carrier", "pod_port")
            .filter(request_number=request_number)
            .first()
        )
        if quotation is None:
            raise CommandError(f"Quotation '{request_number}' does not exist.")

        report = self.build_report(quotation)
        report["recommendations"] = self.recommendations(report)
        if options["json"]:
            self.stdout.write(json.dumps(report, cls=DjangoJSONEncoder, indent=2))
        else:
            self.write_report(report)

    def build_report(self, quotation: QuotationRequest) -> Dict:
        graph = CommodityGraph.for_quotation(quotation)
        items = sorted(graph.items.values(), key=lambda i: (i.line_number, i.pk))
        towing = TowingResolver()
        towing_codes = set(settings.TOWING_EVENT_CODES)
        towable = towing.towable_categories

        trailers = [
            item
            for item in items
            if normalise_vehicle_category(item.category, warn=False) in towable
        ]

        articles = list(quotation.articles.select_related("article").order_by("pk"))

        return {
            "quotation": {
                "id": quotation.pk,
                "request_number": quotation.request_number,
                "pol": quotation.pol,
                "pod": quotation.pod,
                "service_type": quotation.service_type,
                "carrier": quotation.carrier.name if quotation.carrier else None,
                "pod_port": quotation.pod_port.code if quotation.pod_port else None,
                "vessel_name": quotation.vessel_name or None,
                "vessel_class": quotation.vessel_class or None,
            },
            "items": [
                {
                    "line_number": item.line_number,
                    "id": item.pk,
                    "category": item.category,
                    "commodity_type": item.commodity_type,
                    "relationship_type": graph.relationship_type(item),
                    "related_item_id": item.related_item_id,
                    "related_to": (
                        describe(graph.related(item))
                        if graph.related(item)
                        else (
                            f"ID {item.related_item_id} (NOT FOUND)"
                            if item.related_item_id
                            else None
                        )
                    ),
                    "quantity": item.quantity,
                    "stack_unit_count": item.stack_unit_count,
                    "stack_group": graph.get_stack_group(item),
                }
                for item in items
            ],
            "stacks": [
                {
                    "base_id": base_id,
                    "members": [
                        {
                            "line_number": member.line_number,
                            "id": member.pk,
                            "category": member.category,
                            "relationship_type": graph.relationship_type(member),
                        }
                        for member in members
                    ],
                }
                for base_id, members in sorted(graph.stacks().items())
            ],
            "standalone": [item.pk for item in items if graph.is_separate(item)],
            "chains": [
                [
                    {
                        "from": describe(line),
                        "relationship_type": graph.relationship_type(line),
                        "to": (
                            describe(target)
                            if target is not None
                            else f"ID {line.related_item_id} (NOT FOUND)"
                        ),
                    }
                    for line, target in graph.chain(item)
                ]
                for item in items
                if item.related_item_id is not None
            ],
            "dangling": graph.dangling,
            "cycles": graph.cycles,
            "articles": [
                {
                    "id": line.pk,
                    "article_code": line.article.article_code,
                    "article_name": line.article.article_name,
                    "commodity_type": line.article.commodity_type,
                    "is_surcharge": line.article.is_surcharge,
                    "quantity": line.quantity,
                    "unit_type": line.unit_type,
                    "event_code": (line.notes or {}).get("event_code"),
                    "commodity_item_id": (line.notes or {}).get("commodity_item_id"),
                }
                for line in articles
            ],
            "towing": [
                self.towing_trace(item, towing, towing_codes) for item in trailers
            ],
        }

    def towing_trace(self, item, towing: TowingResolver, towing_codes) -> Dict:
        decision = towing.explain(item.category, item.pk)
        meta = item.carrier_rule_meta or {}
        towing_events = [
            event
            for event in meta.get("surcharge_events") or []
            if event.get("event_code") in towing_codes
        ]
        return {
            **decision.as_dict(),
            "line_number": item.line_number,
            "towing_events": towing_events,
            "consistent": not meta or bool(towing_events) == decision.applies,
        }

    def recommendations(self, report: Dict) -> List[str]:
        advice = []
        request_number = report["quotation"]["request_number"]
        for trace in report["towing"]:
            if not trace["consistent"]:
                charged = "charged" if trace["towing_events"] else "not charged"
                advice.append(
                    f"Trailer line {trace['line_number']} has towing {charged} "
                    f"but the current decision is: {trace['reason']}. Run "
                    f"'manage.py process_carrier_rules {request_number}' to "
                    f"refresh it.",
                )
        for item_id in report["dangling"]:
            advice.append(
                f"Commodity item {item_id} relates to an item that is not part of "
                f"this quotation; correct or clear its related item.",
            )
        for cycle in report["cycles"]:
            advice.append(
                f"Commodity items {', '.join(map(str, cycle))} are loaded onto "
                f"each other in a loop; one of them must be the stack base.",
            )
        has_lm_article = any(
            (article["commodity_type"] or "").upper() == LM_COMMODITY_TYPE
            for article in report["articles"]
        )
        if report["stacks"] and not has_lm_article:
            advice.append(
                "The quotation has stacks but no LM cargo article; check the "
                "carrier's article mappings for this route.",
            )
        return advice

    def heading(self, title: str):
        self.stdout.write(self.style.MIGRATE_HEADING(title))

    def write_report(self, report: Dict):
        quotation = report["quotation"]
        self.stdout.write(f"=== AUDIT REPORT: {quotation['request_number']} ===")
        self.stdout.write("")

        self.heading("QUOTATION DATA")
        for label, key in (
            ("ID", "id"),
            ("Request Number", "request_number"),
            ("POL", "pol"),
            ("POD", "pod"),
            ("Service Type", "service_type"),
            ("Carrier", "carrier"),
            ("POD Port", "pod_port"),
            ("Vessel", "vessel_name"),
            ("Vessel Class", "vessel_class"),
        ):
            self.stdout.write(f"{label}: {quotation[key] or 'N/A'}")
        if not (quotation["carrier"] and quotation["pod_port"]):
            self.stdout.write(self.style.WARNING("No carrier and POD selected"))
        self.stdout.write("")

        self.heading("COMMODITY ITEMS")
        if report["items"]:
            for line in format_table(
                ITEM_COLUMNS,
                [
                    [
                        item["line_number"],
                        item["id"],
                        item["category"],
                        item["commodity_type"],
                        item["relationship_type"],
                        item["related_to"],
                        item["quantity"],
                        item["stack_unit_count"],
                    ]
                    for item in report["items"]
                ],
            ):
                self.stdout.write(line)
        else:
            self.stdout.write(self.style.WARNING("No commodity items found"))
        self.stdout.write("")

        self.stdout.write("Stack Groupings:")
        for stack in report["stacks"]:
            self.stdout.write(f"Stack Base (ID {stack['base_id']}):")
            for member in stack["members"]:
                self.stdout.write(
                    f"  - Line {member['line_number']}: {member['category']} "
                    f"(ID: {member['id']}, Relationship: {member['relationship_type']})",
                )
        for item in report["items"]:
            if item["id"] in report["standalone"]:
                self.stdout.write(
                    f"Standalone: Line {item['line_number']} - {item['category']} "
                    f"(ID: {item['id']})",
                )
        self.stdout.write("")

        self.stdout.write("Trailer Analysis:")
        for trace in report["towing"]:
            self.stdout.write(
                f"Trailer Line {trace['line_number']} (ID: {trace['commodity_item_id']}):",
            )
            for inspected in trace["inspected"]:
                if inspected["role"] == "self":
                    continue
                self.stdout.write(
                    f"  {inspected['role'].replace('_', ' ').capitalize()}: "
                    f"Line {inspected['line_number']} - {inspected['category']}",
                )
            self.stdout.write(f"  Towing needed: {'YES' if trace['applies'] else 'NO'}")
        self.stdout.write("")

        self.stdout.write("Relationship Chain Analysis:")
        for chain in report["chains"]:
            self.stdout.write(
                " -> ".join(
                    [chain[0]["from"]]
                    + [f"{step['relationship_type']} -> {step['to']}" for step in chain],
                ),
            )
        for cycle in report["cycles"]:
            self.stdout.write(
                self.style.WARNING(
                    f"Stacking cycle between items {', '.join(map(str, cycle))}",
                ),
            )
        self.stdout.write("")

        self.heading("SELECTED ARTICLES")
        if report["articles"]:
            for line in format_table(
                ARTICLE_COLUMNS,
                [
                    [
                        article["id"],
                        article["article_code"],
                        article["article_name"],
                        article["commodity_type"],
                        article["quantity"],
                        article["unit_type"],
                        article["event_code"],
                        article["commodity_item_id"],
                    ]
                    for article in report["articles"]
                ],
            ):
                self.stdout.write(line)
        else:
            self.stdout.write(self.style.WARNING("No articles selected"))
        self.stdout.write("")

        self.heading("TOWING LOGIC TRACE")
        if not report["towing"]:
            self.stdout.write("No trailers found in commodity items")
        for trace in report["towing"]:
            self.stdout.write(
                f"--- Trailer Line {trace['line_number']} "
                f"(ID: {trace['commodity_item_id']}) ---",
            )
            self.stdout.write(f"  Vehicle Category: {trace['category']}")
            self.stdout.write(
                f"  should_apply_towing: "
                f"{'YES (towing needed)' if trace['applies'] else 'NO (no towing)'}",
            )
            self.stdout.write(f"  Reason: {trace['reason']}")
            if trace["towing_events"]:
                self.stdout.write(
                    self.style.WARNING("  Towing event found in carrier_rule_meta:"),
                )
                for event in trace["towing_events"]:
                    self.stdout.write(
                        f"    - {event.get('event_code')}: qty {event.get('qty')}, "
                        f"amount {event.get('amount')}",
                    )
            else:
                self.stdout.write("  No towing event in carrier_rule_meta")
        self.stdout.write("")

        self.heading("RECOMMENDATIONS")
        advice = report["recommendations"]
        if not advice:
            self.stdout.write("None")
        for line in advice:
            self.stdout.write(self.style.WARNING(f"- {line}"))
