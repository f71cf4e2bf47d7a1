from django.contrib import admin

from .models import Establishment


class EstablishmentAdmin(admin.ModelAdmin):
    list_display = ('name', 'category', 'city', 'state', 'owner', 'external_place_id', 'created_at')
    list_filter = ('category', 'state')
    search_fields = ('name', 'city', 'neighborhood', 'external_place_id')
    raw_id_fields = ('owner',)


admin.site.register(Establishment, EstablishmentAdmin)
