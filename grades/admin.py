from django.contrib import admin

from .models import GradeItem


@admin.register(GradeItem)
class GradeItemAdmin(admin.ModelAdmin):
    list_display = ("name", "course", "item_type", "sort_order", "is_hidden")
    list_filter = ("item_type", "course")
    search_fields = ("name", "course__title")
    autocomplete_fields = ("course",)
