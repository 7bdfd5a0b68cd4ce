from django.contrib import admin

from ports.models import Port


class PortAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "country", "country_code", "unlocode", "is_active")
    list_filter = ("is_active", "country_code")
    search_fields = ("code", "name", "unlocode")


admin.site.register(Port, PortAdmin)
