"""Email notifier adapters - Console and HTTP API implementations."""

from .console import ConsoleEmailNotifier
from .resend import ResendEmailNotifier

__all__ = ["ConsoleEmailNotifier", "ResendEmailNotifier"]
