import pytest
from partnerhub import create_app, db
from partnerhub.config import TestingConfig
from partnerhub.errors import EmailDeliveryError
from partnerhub.services.email import EmailService

@pytest.fixture
def app():
    app = create_app(TestingConfig)

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()

@pytest.fixture
def client(app):
    return app.test_client()

@pytest.fixture
def sent_emails(monkeypatch):
    """Capture outgoing emails instead of calling SendGrid"""
    outbox = []

    def fake_send(to, subject, html_body):
        outbox.append({'to': to, 'subject': subject, 'html_body': html_body})
        return {'id': f'msg-{len(outbox)}'}

    monkeypatch.setattr(EmailService, 'send', staticmethod(fake_send))
    return outbox

@pytest.fixture
def failing_email(monkeypatch):
    """Make every email delivery fail"""
    def fake_send(to, subject, html_body):
        raise EmailDeliveryError(f"Email to {to} could not be sent")

    monkeypatch.setattr(EmailService, 'send', staticmethod(fake_send))
