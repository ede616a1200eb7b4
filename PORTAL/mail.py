from django.conf import settings
from mailjet_rest import Client


def mailjet_configured():
    return bool(settings.MJ_APIKEY_PUBLIC and settings.MJ_APIKEY_PRIVATE)


def send_mailjet_email(subject, html_content, to_email, to_name='', attachments=None):
    mailjet = Client(
        auth=(settings.MJ_APIKEY_PUBLIC, settings.MJ_APIKEY_PRIVATE),
        version='v3.1'
    )
    message = {
        'From': {'Email': settings.DEFAULT_FROM_EMAIL, 'Name': 'Santo Tomás Nuevo'},
        'To': [{'Email': to_email, 'Name': to_name}],
        'Subject': subject,
        'HTMLPart': html_content,
    }
    if attachments:
        message['Attachments'] = attachments

    return mailjet.send.create(data={'Messages': [message]})
