from django.contrib import admin

from carriers.models import Article
from carriers.models import CarrierAcceptanceRule
from carriers.models import CarrierArticleMapping
from carriers.models import CarrierCategoryGroup
from carriers.models import CarrierCategoryGroupMember
from carriers.models import CarrierPortGroup
from carriers.models import CarrierPortGroupMember
from carriers.models import CarrierPurchaseTariff
from carriers.models import CarrierSurchargeArticleMap
from carriers.models import CarrierSurchargeRule
from carriers.models import CarrierTransformRule
from carriers.models import ShippingCarrier

RULE_LIST_DISPLAY = (
    "name",
    "carrier",
    "priority",
    "sort_order",
    "effective_from",
    "effective_to",
    "is_active",
)
RULE_LIST_FILTER = ("carrier", "is_active")


class ShippingCarrierAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "is_active")
    search_fields = ("code", "name")


class CarrierPortGroupMemberInline(admin.TabularInline):
    model = CarrierPortGroupMember
    autocomplete_fields = ("port",)
    extra = 0


class CarrierPortGroupAdmin(admin.ModelAdmin):
    list_display = ("code", "display_name", "carrier", "is_active")
    list_filter = ("carrier", "is_active")
    inlines = [CarrierPortGroupMemberInline]


class CarrierCategoryGroupMemberInline(admin.TabularInline):
    model = CarrierCategoryGroupMember
    extra = 0


class CarrierCategoryGroupAdmin(admin.ModelAdmin):
    list_display = ("code", "display_name", "carrier", "priority", "is_active")
    list_filter = ("carrier", "is_active")
    inlines = [CarrierCategoryGroupMemberInline]


class ArticleAdmin(admin.ModelAdmin):
    list_display = ("article_code", "article_name", "carrier", "pod_code", "unit_price")
    list_filter = ("carrier", "is_surcharge", "is_active")
    search_fields = ("article_code", "article_name", "pod")


class CarrierPurchaseTariffInline(admin.StackedInline):
    model = CarrierPurchaseTariff
    extra = 0


class CarrierArticleMappingAdmin(admin.ModelAdmin):
    list_display = ("__str__", "carrier", "article", "sort_order", "is_active")
    list_filter = ("carrier", "is_active")
    search_fields = ("name", "article__article_code")
    inlines = [CarrierPurchaseTariffInline]


class CarrierAcceptanceRuleAdmin(admin.ModelAdmin):
    list_display = RULE_LIST_DISPLAY
    list_filter = RULE_LIST_FILTER


class CarrierTransformRuleAdmin(admin.ModelAdmin):
    list_display = ("transform_code", *RULE_LIST_DISPLAY)
    list_filter = RULE_LIST_FILTER


class CarrierSurchargeRuleAdmin(admin.ModelAdmin):
    list_display = ("event_code", "calc_mode", *RULE_LIST_DISPLAY)
    list_filter = (*RULE_LIST_FILTER, "calc_mode")
    search_fields = ("name", "event_code")


class CarrierSurchargeArticleMapAdmin(admin.ModelAdmin):
    list_display = ("event_code", "article", "qty_mode", *RULE_LIST_DISPLAY)
    list_filter = RULE_LIST_FILTER
    search_fields = ("event_code", "article__article_code")


admin.site.register(ShippingCarrier, ShippingCarrierAdmin)
admin.site.register(CarrierPortGroup, CarrierPortGroupAdmin)
admin.site.register(CarrierCategoryGroup, CarrierCategoryGroupAdmin)
admin.site.register(Article, ArticleAdmin)
admin.site.register(CarrierArticleMapping, CarrierArticleMappingAdmin)
admin.site.register(CarrierAcceptanceRule, CarrierAcceptanceRuleAdmin)
admin.site.register(CarrierTransformRule, CarrierTransformRuleAdmin)
admin.site.register(CarrierSurchargeRule, CarrierSurchargeRuleAdmin)
admin.site.register(CarrierSurchargeArticleMap, CarrierSurchargeArticleMapAdmin)
