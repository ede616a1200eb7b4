from django.contrib import admin
from .models import Payment, Reservation, SavedLot


class PaymentInline(admin.TabularInline):
    model = Payment
    extra = 0


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    list_display = ("id", "client", "lot", "status", "amount_due", "amount_paid", "expiry_date")
    list_filter = ("status", "payment_plan", "created_at")
    search_fields = ("id", "client__email", "client__username", "lot__code")
    inlines = [PaymentInline]


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ("id", "reservation", "amount", "is_validated", "payment_date")
    list_filter = ("is_validated", "payment_date")
    search_fields = ("reservation__id", "reservation__client__email", "reservation__lot__code")


@admin.register(SavedLot)
class SavedLotAdmin(admin.ModelAdmin):
    list_display = ("client", "lot", "created_at")
