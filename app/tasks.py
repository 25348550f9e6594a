import logging
from smtplib import SMTPException
from flask_mail import Message
from app.extensions import celery, mail

logger = logging.getLogger(__name__)


@celery.task(bind=True, max_retries=3, default_retry_delay=60)
def send_notification(self, subject, recipient, body, is_html=False):
    """Delivers one workflow notification (forwarded, approved, released ...)."""
    msg = Message(subject, recipients=[recipient])
    if is_html:
        msg.html = body
    else:
        msg.body = body

    try:
        mail.send(msg)
    except (SMTPException, OSError) as e:
        logger.warning("Mail to %s failed on attempt %s: %s", recipient, self.request.retries + 1, e)
        raise self.retry(exc=e)

    logger.info("Notification '%s' sent to %s", subject, recipient)
    return f"Email sent to {recipient}"
