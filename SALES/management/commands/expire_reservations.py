from django.core.management.base import BaseCommand

from SALES.services import expire_overdue_reservations


class Command(BaseCommand):
    help = 'Marca como vencidas las reservas abiertas cuya fecha de expiración ya pasó y libera sus lotes'

    def handle(self, *args, **options):
        expired = expire_overdue_reservations()
        for reservation in expired:
            self.stdout.write(f"RES-{reservation.pk} ({reservation.lot.code}) vencida")
        self.stdout.write(self.style.SUCCESS(f"Reservas vencidas: {len(expired)}"))
