from django.conf import settings
from django.db import models


class SupportTicket(models.Model):
    CATEGORY_CHOICES = (
        ('PAYMENT', 'Pagos'),
        ('RESERVATION', 'Reservas'),
        ('DOCUMENTS', 'Documentos'),
        ('MAP', 'Mapa / Técnico'),
        ('ACCOUNT', 'Cuenta'),
        ('LOT_INFO', 'Información de lote'),
        ('OTHER', 'Otro'),
    )
    PRIORITY_CHOICES = (
        ('NORMAL', 'Normal'),
        ('URGENT', 'Urgente'),
    )
    STATUS_OPEN = 'OPEN'
    STATUS_WAITING_ON_USER = 'WAITING_ON_USER'
    STATUS_WAITING_ON_SUPPORT = 'WAITING_ON_SUPPORT'
    STATUS_RESOLVED = 'RESOLVED'
    STATUS_CLOSED = 'CLOSED'
    STATUS_CHOICES = (
        (STATUS_OPEN, 'Abierto'),
        (STATUS_WAITING_ON_USER, 'Esperando al cliente'),
        (STATUS_WAITING_ON_SUPPORT, 'Esperando a soporte'),
        (STATUS_RESOLVED, 'Resuelto'),
        (STATUS_CLOSED, 'Cerrado'),
    )
    ACTIVE_STATUSES = (STATUS_OPEN, STATUS_WAITING_ON_USER, STATUS_WAITING_ON_SUPPORT)
    CONTACT_CHOICES = (
        ('email', 'Correo'),
        ('phone', 'Teléfono'),
        ('whatsapp', 'WhatsApp'),
    )
    BEST_TIME_CHOICES = (
        ('morning', 'Mañana (8-12)'),
        ('afternoon', 'Tarde (12-17)'),
        ('evening', 'Noche (17-20)'),
    )

    client = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='tickets')
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES, default='OTHER')
    priority = models.CharField(max_length=10, choices=PRIORITY_CHOICES, default='NORMAL')
    subject = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_OPEN)
    lot = models.ForeignKey('LOTES.Lot', on_delete=models.SET_NULL, null=True, blank=True, related_name='tickets')
    reservation = models.ForeignKey(
        'SALES.Reservation', on_delete=models.SET_NULL, null=True, blank=True, related_name='tickets'
    )
    preferred_contact = models.CharField(max_length=10, choices=CONTACT_CHOICES, default='email')
    best_time = models.CharField(max_length=10, choices=BEST_TIME_CHOICES, default='morning')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"#{self.pk} {self.subject}"

    @property
    def is_active(self):
        return self.status in self.ACTIVE_STATUSES


class TicketMessage(models.Model):
    ticket = models.ForeignKey(SupportTicket, on_delete=models.CASCADE, related_name='messages')
    sender = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE)
    message = models.TextField()
    is_admin = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['created_at']
