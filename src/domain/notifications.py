"""
Notification dispatch with an explicit failure policy.

Registration and verification send email on a best-effort basis: by
default a delivery failure is logged and the operation still succeeds.
"""

import logging
from dataclasses import dataclass

from .emails import render_email_template
from .exceptions import NotifierError
from .ports import EmailNotifier, NotificationPolicy

logger = logging.getLogger(__name__)


@dataclass
class NotificationDispatcher:
    """Renders a template and hands it to the notifier."""

    notifier: EmailNotifier
    policy: NotificationPolicy = NotificationPolicy.SWALLOW

    def dispatch(self, recipient: str, template_name: str, variables: dict[str, str]) -> bool:
        """
        Render and send an email.

        Returns:
            True if delivered, False if delivery failed and was swallowed

        Raises:
            NotifierError: If delivery failed and the policy is PROPAGATE
        """
        message = render_email_template(template_name, variables)
        try:
            self.notifier.send(recipient, message)
        except NotifierError as e:
            if self.policy == NotificationPolicy.PROPAGATE:
                raise
            logger.warning("Failed to send %s email to %s: %s", template_name, recipient, e)
            return False
        return True
