from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail, Email, To
from flask import current_app
from markupsafe import escape
from ..errors import EmailDeliveryError

class EmailService:
    """Service for sending transactional emails using SendGrid"""

    @staticmethod
    def send(to, subject, html_body):
        """Send an HTML email from the fixed platform sender.

        Returns ``{'id': message_id}``. Raises EmailDeliveryError when the
        provider is not configured or does not accept the message.
        """
        api_key = current_app.config.get('SENDGRID_API_KEY')
        sender = current_app.config.get('MAIL_DEFAULT_SENDER')
        if not api_key:
            current_app.logger.error("SendGrid API key is missing!")
            raise EmailDeliveryError("Email delivery is not configured")

        current_app.logger.info(f"Sending email '{subject}' to {to}")
        message = Mail(
            from_email=Email(sender),
            to_emails=To(to),
            subject=subject,
            html_content=html_body
        )

        try:
            response = SendGridAPIClient(api_key).send(message)
        except Exception as e:
            current_app.logger.error(f"SendGrid rejected email to {to}: {str(e)}")
            raise EmailDeliveryError(f"Email to {to} could not be sent: {str(e)}") from e

        if response.status_code not in (200, 202):
            current_app.logger.error(f"Failed to send email. Status code: {response.status_code}")
            raise EmailDeliveryError(f"Email provider answered with status {response.status_code}")

        message_id = response.headers.get('X-Message-Id') if response.headers else None
        current_app.logger.info(f"Email sent to {to} (id={message_id})")
        return {'id': message_id}

    @staticmethod
    def send_commission_status(to, commission):
        """Notify an affiliate that one of their commissions changed status"""
        amount = f"{commission.commission_amount:,.2f} {commission.currency}"
        if commission.status == 'paid':
            subject = "Your commission has been paid"
            body = f"<p>Your commission of <strong>{amount}</strong> has been paid.</p>"
        else:
            subject = "Your commission has been cancelled"
            reason = (commission.commission_metadata or {}).get('cancellation_reason')
            body = f"<p>Your commission of <strong>{amount}</strong> has been cancelled.</p>"
            if reason:
                body += f"<p>Reason: {escape(reason)}</p>"
        return EmailService.send(to, subject, body)

    @staticmethod
    def send_bureau_link(bureau, interface_url, reminder=False):
        """Send the permanent access link of a syndicate bureau to its president"""
        if reminder:
            subject = f"Reminder: access link for bureau {bureau.name}"
            intro = "Here is again the permanent link to your bureau interface."
        else:
            subject = f"Welcome! Your bureau {bureau.name} has been created"
            intro = "Your syndicate bureau has been registered."
        body = (
            f"<p>{intro}</p>"
            f"<p><a href=\"{interface_url}\">{interface_url}</a></p>"
            "<p>Keep this link safe: it gives permanent access to the bureau interface.</p>"
        )
        return EmailService.send(bureau.president_email, subject, body)

    @staticmethod
    def send_worker_link(worker, interface_url, reminder=False):
        """Send a worker the permanent link to its bureau interface"""
        bureau_name = worker.bureau.name if worker.bureau else ""
        if reminder:
            subject = f"Reminder: your access to bureau {bureau_name}"
            intro = "Here is again the permanent link to your interface."
        else:
            subject = f"Your access to bureau {bureau_name}"
            intro = f"Hello {escape(worker.name)}, you have been added to bureau {escape(bureau_name)}."
        body = (
            f"<p>{intro}</p>"
            f"<p><a href=\"{interface_url}\">{interface_url}</a></p>"
            f"<p>Access level: {escape(worker.access_level)}</p>"
            "<p>Keep this link safe: it gives permanent access to your interface.</p>"
        )
        return EmailService.send(worker.email, subject, body)
