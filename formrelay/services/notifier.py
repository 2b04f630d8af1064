"""Submission notifier"""
import logging

from formrelay.errors import NotifierMisconfigured
from formrelay.models.notification import DeliveryOutcome
from formrelay.models.submission import ValidatedSubmission
from formrelay.services.composer import compose_message
from formrelay.services.transports import EmailTransport

logger = logging.getLogger(__name__)


class Notifier:
    """Composes the operator email and hands it to the configured transport"""

    def __init__(self, transport: EmailTransport, recipient: str, as_html: bool = True):
        self.transport = transport
        self.recipient = recipient
        self.as_html = as_html

    async def notify(self, submission: ValidatedSubmission) -> DeliveryOutcome:
        """
        Deliver a notification for one submission, at most once

        Raises:
            NotifierMisconfigured: No recipient, or transport credentials missing
            DeliveryFailed: The transport refused the message
        """
        if not self.recipient:
            raise NotifierMisconfigured("TO_EMAIL is not configured")

        message = compose_message(submission, as_html=self.as_html)
        outcome = await self.transport.send(message, self.recipient)
        logger.info(f"Submission delivered via {self.transport.name}")
        return outcome
