from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ('email', 'name', 'role', 'status', 'date_joined')
    list_filter = ('role', 'status', 'is_staff')
    search_fields = ('email', 'name', 'username')
    ordering = ('-date_joined',)
    fieldsets = BaseUserAdmin.fieldsets + (
        ('Platform', {'fields': ('name', 'role', 'status', 'avatar_url')}),
    )
