"""
Console email notifier adapter - Implements EmailNotifier protocol.

This module provides a console-based implementation of the domain's
notifier port, logging rendered emails to stdout for development.
"""

import logging

from src.domain.ports import EmailMessage

logger = logging.getLogger(__name__)


class ConsoleEmailNotifier:
    """
    Implements EmailNotifier protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Selected when no email API key is configured. The plain-text body
    carries the verification link, so it is logged in full.
    """

    def send(self, recipient: str, message: EmailMessage) -> None:
        """
        Log the email to console (simulates delivery).

        Logged at INFO level to be visible in container logs.

        Args:
            recipient: Recipient email address
            message: Rendered email content
        """
        logger.info("[EMAIL] To: %s Subject: %s\n%s", recipient, message.subject, message.text)
