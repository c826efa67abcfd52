"""
Tests for the contact form and outbound notifications.
"""

import pytest

from utils import notifications


CONTACT_FORM = {'name': 'Grace', 'email': 'grace@example.com', 'message': 'Hello there'}


@pytest.fixture
def sent(monkeypatch):
    """Capture contact deliveries instead of sending them."""
    calls = []

    def fake_send(recipient, name, email, message):
        calls.append((recipient, name, email, message))
        return True

    monkeypatch.setattr('blueprints.portfolio.routes.send_contact_message', fake_send)
    return calls


class TestContactForm:
    """Tests for POST /contact."""

    def test_delivered(self, client, sent):
        response = client.post('/contact', data=CONTACT_FORM)

        assert response.status_code == 302
        assert response.headers['Location'].endswith('/#contact')
        assert sent == [('owner@example.com', 'Grace', 'grace@example.com', 'Hello there')]
        assert 'Message sent successfully!' in client.get('/').get_data(as_text=True)

    def test_missing_fields(self, client, sent):
        response = client.post('/contact', data=dict(CONTACT_FORM, message=' '), follow_redirects=True)

        assert sent == []
        assert 'Please fill in your name, email and message.' in response.get_data(as_text=True)

    def test_honeypot(self, client, sent):
        response = client.post('/contact', data=dict(CONTACT_FORM, website='http://spam'), follow_redirects=True)

        assert sent == []
        assert 'Message sent successfully!' in response.get_data(as_text=True)

    def test_rate_limited(self, client, sent):
        for _ in range(5):
            client.post('/contact', data=CONTACT_FORM)

        response = client.post('/contact', data=CONTACT_FORM, follow_redirects=True)

        assert len(sent) == 5
        assert 'Too many messages' in response.get_data(as_text=True)

    def test_delivery_failure(self, client, monkeypatch):
        monkeypatch.setattr('blueprints.portfolio.routes.send_contact_message', lambda *args: False)

        response = client.post('/contact', data=CONTACT_FORM, follow_redirects=True)

        assert 'Error sending message' in response.get_data(as_text=True)

    def test_french_messages(self, client, sent):
        client.post('/preferences/language')

        response = client.post('/contact', data=CONTACT_FORM, follow_redirects=True)

        assert 'Message envoyé avec succès' in response.get_data(as_text=True)


class FakeResponse:
    def __init__(self, status_code):
        self.status_code = status_code


class TestSendContactMessage:
    """Tests for utils.notifications.send_contact_message."""

    def test_no_channels_configured(self, app):
        with app.app_context():
            assert notifications.send_contact_message('owner@example.com', 'Grace', 'g@example.com', 'Hi') is False

    def test_telegram_text_is_escaped(self, app, monkeypatch):
        posted = {}

        def fake_post(url, json=None, timeout=None):
            posted.update(url=url, payload=json)
            return FakeResponse(200)

        monkeypatch.setattr(notifications.requests, 'post', fake_post)
        app.config.update(TELEGRAM_BOT_TOKEN='token', TELEGRAM_CHAT_ID='42')

        with app.app_context():
            delivered = notifications.send_contact_message(None, '<b>Eve</b>', 'eve@example.com', 'Hi & bye')

        assert delivered is True
        assert posted['url'] == 'https://api.telegram.org/bottoken/sendMessage'
        assert posted['payload']['chat_id'] == '42'
        assert '&lt;b&gt;Eve&lt;/b&gt;' in posted['payload']['text']
        assert 'Hi &amp; bye' in posted['payload']['text']

    def test_telegram_error_is_not_delivered(self, app, monkeypatch):
        monkeypatch.setattr(notifications.requests, 'post', lambda *args, **kwargs: FakeResponse(500))
        app.config.update(TELEGRAM_BOT_TOKEN='token', TELEGRAM_CHAT_ID='42')

        with app.app_context():
            assert notifications.send_contact_message(None, 'Eve', 'eve@example.com', 'Hi') is False

    def test_email_requires_smtp(self, app):
        with app.app_context():
            with pytest.raises(notifications.NotificationError):
                notifications.send_email('owner@example.com', 'Subject', 'Body')
