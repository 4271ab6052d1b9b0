"""
Resend email notifier adapter - Implements EmailNotifier protocol.

Delivers rendered emails through the Resend HTTP API using httpx.
Any transport error or non-2xx response raises NotifierError; whether
that fails the calling operation is decided by the dispatcher policy.
"""

import logging

import httpx

from src.domain.exceptions import NotifierError
from src.domain.ports import EmailMessage

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"


class ResendEmailNotifier:
    """
    Implements EmailNotifier protocol via the Resend API.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(
        self,
        api_key: str,
        from_email: str,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        """
        Args:
            api_key: Resend API key, sent as Bearer token
            from_email: Sender address, e.g. "Waiting List <noreply@example.com>"
            timeout: Request timeout in seconds
            client: Optional preconfigured client (tests inject a mock transport)
        """
        self._api_key = api_key
        self._from_email = from_email
        self._client = client or httpx.Client(timeout=httpx.Timeout(timeout))

    def send(self, recipient: str, message: EmailMessage) -> None:
        payload = {
            "from": self._from_email,
            "to": [recipient],
            "subject": message.subject,
            "html": message.html,
            "text": message.text,
        }
        headers = {"Authorization": f"Bearer {self._api_key}"}

        try:
            response = self._client.post(RESEND_API_URL, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise NotifierError(f"Email request failed: {e}") from e

        if response.is_success:
            logger.info("Email sent successfully to %s", recipient)
            return

        raise NotifierError(f"Email API returned {response.status_code}: {response.text}")

    def close(self) -> None:
        self._client.close()
