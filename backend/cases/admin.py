from django.contrib import admin

from .models import Case, Note, Service


class ServiceInline(admin.TabularInline):
    model = Service
    extra = 0


class NoteInline(admin.TabularInline):
    model = Note
    extra = 0
    readonly_fields = ("author", "content", "created_at")


@admin.register(Case)
class CaseAdmin(admin.ModelAdmin):
    list_display = ("id", "victim_name", "incident_type", "barangay",
                    "status", "priority", "encoder_name", "created_at")
    list_filter = ("status", "priority", "barangay")
    search_fields = ("victim_name", "perpetrator_name", "incident_type")
    inlines = [ServiceInline, NoteInline]


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = ("case", "type", "provider", "date_provided")
    list_filter = ("type",)
    search_fields = ("type", "provider")


@admin.register(Note)
class NoteAdmin(admin.ModelAdmin):
    list_display = ("case", "author", "created_at")
    search_fields = ("content",)
