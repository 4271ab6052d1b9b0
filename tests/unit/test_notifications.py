"""
Unit tests for email templates, the notification dispatcher and notifier adapters.
"""

import json
import logging

import httpx
import pytest

from src.adapters.notifier.console import ConsoleEmailNotifier
from src.adapters.notifier.resend import RESEND_API_URL, ResendEmailNotifier
from src.domain.emails import VERIFICATION, WELCOME, render_email_template
from src.domain.exceptions import NotifierError
from src.domain.notifications import NotificationDispatcher
from src.domain.ports import EmailMessage, EmailNotifier, NotificationPolicy
from tests.factories import RecordingNotifier

MESSAGE = EmailMessage(subject="Hello", html="<p>Hi</p>", text="Hi")


class TestTemplates:
    def test_verification_template_substitutes_everywhere(self) -> None:
        message = render_email_template(
            VERIFICATION,
            {"VERIFICATION_LINK": "https://w.example.com/verify?token=abc", "EMAIL_ADDRESS": "a@x.com"},
        )

        assert "https://w.example.com/verify?token=abc" in message.text
        assert "https://w.example.com/verify?token=abc" in message.html
        assert "a@x.com" in message.text
        assert "{{" not in message.text
        assert "{{" not in message.html

    def test_welcome_template_includes_position(self) -> None:
        message = render_email_template(WELCOME, {"POSITION": "7", "EMAIL_ADDRESS": "a@x.com"})

        assert "#7" in message.text
        assert "#7" in message.html

    def test_html_values_are_escaped(self) -> None:
        message = render_email_template(WELCOME, {"POSITION": "1", "EMAIL_ADDRESS": "<b>@x.com"})

        assert "&lt;b&gt;@x.com" in message.html
        assert "<b>@x.com" in message.text

    def test_unknown_template(self) -> None:
        with pytest.raises(KeyError):
            render_email_template("nope", {})


class TestDispatcher:
    def test_delivers_rendered_message(self) -> None:
        notifier = RecordingNotifier()
        dispatcher = NotificationDispatcher(notifier)

        assert dispatcher.dispatch("a@x.com", WELCOME, {"POSITION": "3", "EMAIL_ADDRESS": "a@x.com"}) is True
        assert notifier.sent[0][0] == "a@x.com"

    def test_swallow_policy_logs_and_returns_false(self, caplog: pytest.LogCaptureFixture) -> None:
        dispatcher = NotificationDispatcher(RecordingNotifier(error=NotifierError("down")))

        with caplog.at_level(logging.WARNING):
            delivered = dispatcher.dispatch("a@x.com", WELCOME, {"POSITION": "1"})

        assert delivered is False
        assert "Failed to send welcome email to a@x.com" in caplog.text

    def test_propagate_policy_raises(self) -> None:
        dispatcher = NotificationDispatcher(
            RecordingNotifier(error=NotifierError("down")),
            policy=NotificationPolicy.PROPAGATE,
        )

        with pytest.raises(NotifierError):
            dispatcher.dispatch("a@x.com", WELCOME, {"POSITION": "1"})


class TestConsoleNotifier:
    def test_satisfies_protocol(self) -> None:
        def accepts_notifier(n: EmailNotifier) -> None:
            pass

        accepts_notifier(ConsoleEmailNotifier())
        assert ConsoleEmailNotifier.__bases__ == (object,)

    def test_logs_recipient_subject_and_text(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO):
            ConsoleEmailNotifier().send("a@x.com", MESSAGE)

        assert len(caplog.records) == 1
        assert caplog.records[0].levelno == logging.INFO
        assert "[EMAIL] To: a@x.com Subject: Hello" in caplog.text
        assert "Hi" in caplog.text


class TestResendNotifier:
    def make(self, handler) -> ResendEmailNotifier:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        return ResendEmailNotifier(api_key="re_test", from_email="List <noreply@x.com>", client=client)

    def test_posts_payload_with_bearer_key(self) -> None:
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(200, json={"id": "email_1"})

        self.make(handler).send("a@x.com", MESSAGE)

        request = captured[0]
        assert str(request.url) == RESEND_API_URL
        assert request.headers["Authorization"] == "Bearer re_test"
        body = json.loads(request.content)
        assert body == {
            "from": "List <noreply@x.com>",
            "to": ["a@x.com"],
            "subject": "Hello",
            "html": "<p>Hi</p>",
            "text": "Hi",
        }

    def test_error_status_raises_notifier_error(self) -> None:
        notifier = self.make(lambda request: httpx.Response(422, text="invalid from"))

        with pytest.raises(NotifierError, match="422"):
            notifier.send("a@x.com", MESSAGE)

    def test_transport_error_raises_notifier_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        with pytest.raises(NotifierError):
            self.make(handler).send("a@x.com", MESSAGE)
