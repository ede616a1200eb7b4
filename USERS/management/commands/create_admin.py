import os

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError


class Command(BaseCommand):
    help = 'Crea el usuario administrador desde las variables ADMIN_USERNAME, ADMIN_EMAIL y ADMIN_PASSWORD'

    def handle(self, *args, **options):
        User = get_user_model()
        username = os.environ.get('ADMIN_USERNAME')
        email = os.environ.get('ADMIN_EMAIL')
        password = os.environ.get('ADMIN_PASSWORD')

        if not username or not email or not password:
            raise CommandError('Faltan variables de entorno para el administrador en el archivo .env')

        if User.objects.filter(username=username).exists():
            self.stdout.write(self.style.WARNING(f'El usuario administrador "{username}" ya existe.'))
            return

        User.objects.create_superuser(
            username=username,
            email=email,
            password=password,
            role='ADMIN',
            kyc_status='APPROVED',
        )
        self.stdout.write(self.style.SUCCESS(f'Usuario administrador "{username}" creado exitosamente.'))
