"""Typed errors raised by the submission pipeline"""
from typing import List, Optional


class SubmissionError(Exception):
    """Base error for every pipeline stage.

    `public_message` is what the submitter sees; `str(exc)` may carry
    operator detail and only goes to the server log.
    """
    status_code = 500
    public_message = "Error sending form"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or self.public_message)
        self.detail = detail


class ValidationError(SubmissionError):
    """Client fault: the submission itself is unusable"""
    status_code = 400
    public_message = "Invalid submission"


class MissingField(ValidationError):
    """One or more required fields are absent or blank"""

    def __init__(self, fields: List[str]):
        self.fields = list(fields)
        super().__init__(f"Missing required fields: {', '.join(self.fields)}")

    @property
    def public_message(self) -> str:
        return f"Missing required fields: {', '.join(self.fields)}"


class VerificationError(SubmissionError):
    """Base error for the bot check"""


class MissingToken(VerificationError):
    status_code = 400
    public_message = "Missing reCAPTCHA token"


class MissingSecret(VerificationError):
    """Operator fault: no verification secret configured"""
    status_code = 500
    public_message = "Server misconfigured"


class VerificationUnreachable(VerificationError):
    status_code = 500
    public_message = "Could not verify submission"


class BotCheckFailed(VerificationError):
    """The verification endpoint did not vouch for the submitter"""
    status_code = 403
    public_message = "reCAPTCHA verification failed"

    def __init__(self, result):
        self.result = result
        super().__init__(f"Bot check rejected: {result.reason}")


class NotifyError(SubmissionError):
    """Base error for message delivery"""


class NotifierMisconfigured(NotifyError):
    """Operator fault: API key, relay host or recipient missing"""
    public_message = "Server misconfigured"


class DeliveryFailed(NotifyError):
    """The transport rejected or could not take the message"""

    def __init__(self, provider_error: str):
        self.provider_error = provider_error
        super().__init__(f"Delivery failed: {provider_error}")
