import logging
from flask import current_app
from kombu.exceptions import OperationalError
from app.tasks import send_notification

logger = logging.getLogger(__name__)


def _notifications_enabled():
    return current_app.config.get('NOTIFY_BY_EMAIL', False)


def send_status_email(recipient, subject, body):
    """Queues a plain-text workflow notification. The workflow write stands if the broker is down."""
    if not recipient:
        return False
    try:
        send_notification.delay(subject, recipient, body, is_html=False)
    except (OperationalError, OSError) as e:
        logger.error("Could not queue notification '%s' to %s: %s", subject, recipient, e)
        return False
    logger.info("Queued notification '%s' to %s", subject, recipient)
    return True


def notify_forwarded(document, admins):
    """Tells the receiving department's admins a document arrived."""
    if not _notifications_enabled():
        return 0

    subject = f"Document #{document.id} forwarded to {document.target_department}"
    body = f"""
    Type: {document.type}
    Priority: {document.priority}
    Forwarded from: {document.forwarded_from or 'N/A'}
    Forwarded by: {document.forwarded_by_admin or 'N/A'}

    Notes: {document.comments or '-'}

    Please log in to review the request.
    """
    return sum(1 for admin in admins if send_status_email(admin.email, subject, body))


def notify_owner(document):
    """Tells the submitter their document changed status."""
    if not _notifications_enabled():
        return 0

    owner = document.owner
    if not owner or not owner.email:
        return 0

    subject = f"Your document #{document.id} is now {document.status}"
    body = f"""
    Type: {document.type}
    Status: {document.status}
    Comments: {document.comments or '-'}
    """
    return 1 if send_status_email(owner.email, subject, body) else 0
