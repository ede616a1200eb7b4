from django.contrib import admin
from .models import SupportTicket, TicketMessage


class TicketMessageInline(admin.TabularInline):
    model = TicketMessage
    extra = 0


@admin.register(SupportTicket)
class SupportTicketAdmin(admin.ModelAdmin):
    list_display = ("id", "client", "subject", "category", "priority", "status", "lot")
    list_filter = ("status", "priority", "category")
    search_fields = ("id", "client__email", "client__username", "subject", "lot__code")
    inlines = [TicketMessageInline]
