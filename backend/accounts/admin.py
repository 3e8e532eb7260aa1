from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ("username", "full_name", "position", "office",
                    "role", "is_active")
    search_fields = ("username", "full_name", "office")
    list_filter = ("role", "is_active", "is_staff")
    filter_horizontal = ("groups", "user_permissions")
    fieldsets = BaseUserAdmin.fieldsets + (
        ("Staff Profile", {"fields": ("full_name", "position", "office", "role")}),
    )
    add_fieldsets = BaseUserAdmin.add_fieldsets + (
        ("Staff Profile", {"fields": ("full_name", "position", "office", "role")}),
    )
