from django.contrib import admin

from quotations.models import QuotationArticle
from quotations.models import QuotationCommodityItem
from quotations.models import QuotationRequest


class QuotationCommodityItemInline(admin.TabularInline):
    model = QuotationCommodityItem
    fields = (
        "line_number",
        "category",
        "quantity",
        "length_cm",
        "width_cm",
        "height_cm",
        "weight_kg",
        "relationship_type",
        "related_item_id",
        "chargeable_lm",
    )
    readonly_fields = ("chargeable_lm",)
    extra = 0


class QuotationArticleInline(admin.TabularInline):
    model = QuotationArticle
    fields = ("article", "quantity", "unit_price", "selling_price", "subtotal")
    readonly_fields = ("subtotal",)
    extra = 0


class QuotationRequestAdmin(admin.ModelAdmin):
    list_display = ("request_number", "carrier", "pod_port", "vessel_name", "total_amount")
    list_filter = ("carrier",)
    search_fields = ("request_number", "pol", "pod")
    inlines = [QuotationCommodityItemInline, QuotationArticleInline]


admin.site.register(QuotationRequest, QuotationRequestAdmin)
