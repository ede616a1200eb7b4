"""Document upload checks and review."""
import logging
import os

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from .models import Document

logger = logging.getLogger(__name__)


class DocumentError(ValueError):
    pass


def ensure_required_documents(user):
    existing = set(user.documents.values_list('doc_type', flat=True))
    missing = [t for t in settings.REQUIRED_DOCUMENT_TYPES if t not in existing]
    Document.objects.bulk_create([Document(user=user, doc_type=t) for t in missing])
    return user.documents.all()


def validate_upload(uploaded):
    """Reject the file before anything reaches storage."""
    if uploaded is None:
        raise DocumentError("Selecciona un archivo.")
    if uploaded.size > settings.DOCUMENT_MAX_BYTES:
        limit_mb = settings.DOCUMENT_MAX_BYTES // (1024 * 1024)
        raise DocumentError(f"El archivo supera el límite de {limit_mb} MB.")
    ext = os.path.splitext(uploaded.name)[1].lstrip('.').lower()
    if ext not in settings.DOCUMENT_EXTENSIONS:
        allowed = ", ".join(settings.DOCUMENT_EXTENSIONS)
        raise DocumentError(f"Formato no permitido. Usa: {allowed}.")


def upload_document(user, doc_type, uploaded):
    if doc_type not in dict(Document.TYPE_CHOICES):
        raise DocumentError("Tipo de documento inválido.")
    validate_upload(uploaded)

    document, _ = Document.objects.get_or_create(user=user, doc_type=doc_type)
    if document.status == Document.STATUS_APPROVED:
        raise DocumentError("Este documento ya fue aprobado.")
    document.file.save(uploaded.name, uploaded, save=False)
    document.file_name = uploaded.name
    document.file_size = uploaded.size
    document.status = Document.STATUS_PENDING
    document.review_notes = ""
    document.uploaded_at = timezone.now()
    document.save()
    logger.info("User %s uploaded %s (%s bytes)", user.pk, doc_type, uploaded.size)
    return document


def review_document(document, approve, reviewer, notes=""):
    if document.status != Document.STATUS_PENDING:
        raise DocumentError("Solo se pueden revisar documentos en revisión.")
    with transaction.atomic():
        document.status = Document.STATUS_APPROVED if approve else Document.STATUS_REJECTED
        document.review_notes = notes
        document.reviewed_by = reviewer
        document.reviewed_at = timezone.now()
        document.save()
        refresh_kyc_status(document.user)
    logger.info("Document %s %s by %s", document.pk, document.status, reviewer.pk)
    return document


def refresh_kyc_status(user):
    statuses = list(user.documents.values_list('status', flat=True))
    if statuses and all(s == Document.STATUS_APPROVED for s in statuses):
        kyc = 'APPROVED'
    elif Document.STATUS_REJECTED in statuses:
        kyc = 'REJECTED'
    else:
        kyc = 'PENDING'
    if user.kyc_status != kyc:
        user.kyc_status = kyc
        user.save(update_fields=['kyc_status'])
    return kyc
