from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import Payment


@receiver(post_save, sender=Payment)
def sync_reservation_on_payment(sender, instance, created, **kwargs):
    from .services import sync_amount_paid

    if instance.is_validated:
        sync_amount_paid(instance.reservation)
