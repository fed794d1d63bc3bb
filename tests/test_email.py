from types import SimpleNamespace

import pytest

from partnerhub.errors import EmailDeliveryError
from partnerhub.services import email as email_module
from partnerhub.services.email import EmailService

class FakeSendGridClient:
    """Stands in for SendGridAPIClient and records sent messages"""
    sent = []
    response = SimpleNamespace(status_code=202, headers={'X-Message-Id': 'msg-123'})
    error = None

    def __init__(self, api_key):
        self.api_key = api_key

    def send(self, message):
        if self.error:
            raise self.error
        FakeSendGridClient.sent.append(message.get())
        return self.response

@pytest.fixture
def sendgrid(monkeypatch):
    FakeSendGridClient.sent = []
    FakeSendGridClient.response = SimpleNamespace(status_code=202, headers={'X-Message-Id': 'msg-123'})
    FakeSendGridClient.error = None
    monkeypatch.setattr(email_module, 'SendGridAPIClient', FakeSendGridClient)
    return FakeSendGridClient

def test_send_returns_message_id(app, sendgrid):
    result = EmailService.send('affiliate@example.com', 'Hello', '<p>Hi</p>')

    assert result == {'id': 'msg-123'}
    payload = sendgrid.sent[0]
    assert payload['from']['email'] == 'noreply@partnerhub.test'
    assert payload['personalizations'][0]['to'][0]['email'] == 'affiliate@example.com'
    assert payload['subject'] == 'Hello'

def test_send_without_api_key(app, sendgrid):
    app.config['SENDGRID_API_KEY'] = None
    with pytest.raises(EmailDeliveryError):
        EmailService.send('affiliate@example.com', 'Hello', '<p>Hi</p>')
    assert sendgrid.sent == []

def test_send_rejected_status(app, sendgrid):
    sendgrid.response = SimpleNamespace(status_code=500, headers={})
    with pytest.raises(EmailDeliveryError, match='500'):
        EmailService.send('affiliate@example.com', 'Hello', '<p>Hi</p>')

def test_send_transport_error(app, sendgrid):
    sendgrid.error = ConnectionError('connection reset')
    with pytest.raises(EmailDeliveryError, match='connection reset'):
        EmailService.send('affiliate@example.com', 'Hello', '<p>Hi</p>')
