from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import Document, User


class DocumentInline(admin.TabularInline):
    model = Document
    fk_name = "user"
    extra = 0
    fields = ("doc_type", "status", "file", "reviewed_at")


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    fieldsets = BaseUserAdmin.fieldsets + (
        ("Rol y verificación", {"fields": ("role", "phone", "kyc_status")}),
    )
    list_display = ("email", "username", "first_name", "last_name", "role", "kyc_status", "is_active")
    list_filter = ("role", "kyc_status", "is_active", "is_staff")
    search_fields = ("email", "username", "first_name", "last_name", "phone")
    inlines = [DocumentInline]


@admin.register(Document)
class DocumentAdmin(admin.ModelAdmin):
    list_display = ("user", "doc_type", "status", "file_name", "uploaded_at", "reviewed_at")
    list_filter = ("status", "doc_type")
    search_fields = ("user__email", "file_name")
