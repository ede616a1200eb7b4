import base64
import logging
from io import BytesIO

import qrcode
from django.template.loader import render_to_string
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from PORTAL.mail import mailjet_configured, send_mailjet_email

logger = logging.getLogger(__name__)


def reservation_summary_lines(reservation):
    client = reservation.client
    return [
        f"Reserva: RES-{reservation.pk}",
        f"Lote: {reservation.lot.code}",
        f"Cliente: {client.get_full_name() or client.email}",
        f"Precio total: ${reservation.amount_due}",
        f"Cuota de apartado: ${reservation.reservation_fee}",
        f"Saldo pendiente: ${reservation.balance()}",
        f"Plan: {reservation.payment_plan}",
        f"Próximo pago: {reservation.next_payment_due:%d/%m/%Y}" if reservation.next_payment_due else "Próximo pago: -",
    ]


def qr_attachment(reservation):
    data = "STN-RESERVA\n" + "\n".join(reservation_summary_lines(reservation)[:4])
    qr = qrcode.QRCode(version=1, error_correction=qrcode.constants.ERROR_CORRECT_L, box_size=10, border=4)
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")
    buffer = BytesIO()
    img.save(buffer, format="PNG")
    encoded = base64.b64encode(buffer.getvalue()).decode()
    buffer.close()
    return {
        'Filename': f'reserva_qr_{reservation.pk}.png',
        'ContentType': 'image/png',
        'Base64Content': encoded,
    }


def pdf_attachment(reservation):
    buffer = BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=letter)
    text = pdf.beginText(40, 750)
    text.textLine("Comprobante de reserva - Santo Tomás Nuevo")
    text.textLine("")
    for line in reservation_summary_lines(reservation):
        text.textLine(line)
    pdf.drawText(text)
    pdf.showPage()
    pdf.save()
    encoded = base64.b64encode(buffer.getvalue()).decode()
    buffer.close()
    return {
        'Filename': f'reserva_{reservation.pk}.pdf',
        'ContentType': 'application/pdf',
        'Base64Content': encoded,
    }


def notify_reservation_created(reservation):
    """Send the confirmation email. Returns True only when Mailjet accepted it."""
    client = reservation.client
    if not client.email:
        return False
    if not mailjet_configured():
        logger.info("Mailjet keys not set; skipping confirmation for reservation %s", reservation.pk)
        return False

    html_content = render_to_string('emails/reservation_confirmation.html', {
        'user_name': client.get_full_name() or client.username,
        'reservation': reservation,
        'lot': reservation.lot,
    })
    attachments = []
    for build in (qr_attachment, pdf_attachment):
        try:
            attachments.append(build(reservation))
        except (OSError, ValueError):
            logger.exception("Could not build %s for reservation %s", build.__name__, reservation.pk)

    try:
        result = send_mailjet_email(
            subject=f"Reserva confirmada - Lote {reservation.lot.code}",
            html_content=html_content,
            to_email=client.email,
            to_name=client.get_full_name() or client.username,
            attachments=attachments,
        )
    except Exception:
        logger.exception("Mailjet send failed for reservation %s", reservation.pk)
        return False
    logger.info("Mailjet reservation response: %s", result.status_code)
    return result.status_code == 200
