from django.contrib import admin

from .models import Course, CourseEnrollment


class CourseEnrollmentInline(admin.TabularInline):
    model = CourseEnrollment
    extra = 0
    autocomplete_fields = ("user",)
    fields = ("user", "role", "status")


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    list_display = ("title", "slug", "short_name", "is_active")
    list_filter = ("is_active",)
    search_fields = ("title", "slug", "short_name")
    prepopulated_fields = {"slug": ("title",)}
    readonly_fields = ("created_at", "updated_at")
    inlines = [CourseEnrollmentInline]


@admin.register(CourseEnrollment)
class CourseEnrollmentAdmin(admin.ModelAdmin):
    list_display = ("user", "course", "role", "status", "enrolled_at")
    list_filter = ("role", "status", "course")
    search_fields = ("user__username", "course__title")
    autocomplete_fields = ("user", "course")
    readonly_fields = ("enrolled_at",)
