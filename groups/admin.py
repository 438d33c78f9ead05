"""Admin configuration for groups app."""

from django.contrib import admin

from .models import Group, GroupMembership


class GroupMembershipInline(admin.TabularInline):
    model = GroupMembership
    extra = 0
    autocomplete_fields = ("user",)
    readonly_fields = ("added_at",)


@admin.register(Group)
class GroupAdmin(admin.ModelAdmin):
    list_display = ("name", "course", "id_number", "visibility", "participation")
    list_filter = ("course", "visibility", "participation")
    search_fields = ("name", "id_number", "course__title")
    autocomplete_fields = ("course",)
    readonly_fields = ("created_at", "updated_at")
    inlines = [GroupMembershipInline]
