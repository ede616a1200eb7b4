import os

from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    ROLE_CHOICES = (
        ('ADMIN', 'Administrador'),
        ('CLIENT', 'Cliente'),
    )
    KYC_CHOICES = (
        ('PENDING', 'Pendiente'),
        ('APPROVED', 'Aprobado'),
        ('REJECTED', 'Rechazado'),
    )
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default='CLIENT')
    phone = models.CharField(max_length=30, blank=True)
    kyc_status = models.CharField(max_length=10, choices=KYC_CHOICES, default='PENDING')

    @property
    def is_admin(self):
        return self.role == 'ADMIN'


def document_upload_to(instance, filename):
    return f"documents/{instance.user_id}/{instance.doc_type}/{filename}"


class Document(models.Model):
    TYPE_CHOICES = (
        ('government_id', 'Identificación oficial'),
        ('proof_of_address', 'Comprobante de domicilio'),
        ('tax_id', 'RFC / Tax ID'),
        ('proof_of_funds', 'Comprobante de fondos'),
        ('signed_reservation', 'Reserva firmada'),
        ('purchase_agreement', 'Contrato de compraventa'),
    )
    STATUS_REQUIRED = 'REQUIRED'
    STATUS_PENDING = 'PENDING'
    STATUS_APPROVED = 'APPROVED'
    STATUS_REJECTED = 'REJECTED'
    STATUS_CHOICES = (
        (STATUS_REQUIRED, 'Requerido'),
        (STATUS_PENDING, 'En revisión'),
        (STATUS_APPROVED, 'Aprobado'),
        (STATUS_REJECTED, 'Rechazado'),
    )

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='documents')
    doc_type = models.CharField(max_length=30, choices=TYPE_CHOICES)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_REQUIRED)
    file = models.FileField(upload_to=document_upload_to, blank=True)
    file_name = models.CharField(max_length=255, blank=True)
    file_size = models.PositiveIntegerField(default=0)
    review_notes = models.TextField(blank=True)
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='reviewed_documents'
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)
    uploaded_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        unique_together = ['user', 'doc_type']
        ordering = ['user', 'doc_type']

    def __str__(self):
        return f"{self.get_doc_type_display()} - {self.user}"

    @property
    def extension(self):
        return os.path.splitext(self.file_name)[1].lstrip('.').lower()
