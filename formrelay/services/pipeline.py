"""Submission pipeline: validate, verify, notify"""
from typing import Any, Mapping, Optional
import logging

import httpx

from formrelay.config import Settings
from formrelay.errors import BotCheckFailed
from formrelay.models.notification import DeliveryOutcome, VerificationResult
from formrelay.services import bot_verifier
from formrelay.services.notifier import Notifier
from formrelay.services.transports import EmailTransport, build_transport
from formrelay.services.validator import validate

logger = logging.getLogger(__name__)


class SubmissionPipeline:
    """
    Runs one submission through the three stages in order

    Each stage raises a SubmissionError subclass and stops the run; nothing
    is retried. Settings are bound at construction and never re-read.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[EmailTransport] = None,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        self.settings = settings
        self.http_client = http_client
        self.transport = transport or build_transport(settings, client=http_client)
        self.notifier = Notifier(
            self.transport,
            recipient=settings.to_email,
            as_html=settings.email_format == "html",
        )

    async def check_human(self, token: Optional[str]) -> VerificationResult:
        """Verify the token; raises BotCheckFailed when not accepted"""
        result = await bot_verifier.verify(
            token,
            self.settings.recaptcha_secret,
            min_score=self.settings.recaptcha_min_score,
            expected_action=self.settings.recaptcha_expected_action,
            verify_url=self.settings.recaptcha_verify_url,
            timeout=self.settings.http_timeout,
            client=self.http_client,
        )
        if not result.accepted:
            raise BotCheckFailed(result)
        return result

    async def process(self, payload: Mapping[str, Any]) -> tuple[VerificationResult, DeliveryOutcome]:
        """
        Process a raw submission body

        Args:
            payload: Decoded JSON body including `recaptchaToken`

        Returns:
            Tuple of (verification result, delivery outcome)
        """
        submission = validate(payload)
        verification = await self.check_human(payload.get("recaptchaToken"))
        outcome = await self.notifier.notify(submission)
        return verification, outcome
