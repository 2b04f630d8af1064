"""Email delivery transports

Two interchangeable backends behind `EmailTransport.send`: the Resend HTTP
API and an SMTP relay. Neither retries; one submission gets at most one
delivery attempt.
"""
from abc import ABC, abstractmethod
from email.mime.text import MIMEText
from email.utils import formatdate, make_msgid, parseaddr
from typing import Optional
import asyncio
import logging

import aiosmtplib
import httpx

from formrelay.config import Settings
from formrelay.errors import DeliveryFailed, NotifierMisconfigured
from formrelay.models.notification import DeliveryOutcome, NotificationMessage

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"


def _single_line(value: str) -> str:
    return " ".join(value.split())


class EmailTransport(ABC):
    """Delivers one composed message to one recipient"""

    name = "transport"

    @abstractmethod
    async def send(self, message: NotificationMessage, recipient: str) -> DeliveryOutcome:
        """
        Send a message

        Raises:
            NotifierMisconfigured: Credentials or host missing
            DeliveryFailed: The provider refused or could not be reached
        """


class ResendTransport(EmailTransport):
    """Transactional email through the Resend API"""

    name = "resend"

    def __init__(
        self,
        api_key: str,
        from_email: str,
        api_url: str = RESEND_API_URL,
        timeout: float = 20.0,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.api_key = api_key
        self.from_email = from_email
        self.api_url = api_url
        self.timeout = timeout
        self.client = client

    def build_payload(self, message: NotificationMessage, recipient: str) -> dict:
        payload = {
            "from": self.from_email,
            "to": [recipient],
            "subject": message.subject,
            "reply_to": message.reply_to,
        }
        payload["html" if message.is_html else "text"] = message.body
        return payload

    async def send(self, message: NotificationMessage, recipient: str) -> DeliveryOutcome:
        if not self.api_key:
            raise NotifierMisconfigured("RESEND_API_KEY is not configured")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }
        payload = self.build_payload(message, recipient)

        try:
            if self.client is not None:
                response = await self.client.post(
                    self.api_url, headers=headers, json=payload, timeout=self.timeout
                )
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(self.api_url, headers=headers, json=payload)
        except httpx.RequestError as e:
            raise DeliveryFailed(f"{type(e).__name__}: {e}") from e

        if not response.is_success:
            raise DeliveryFailed(f"{response.status_code} - {response.text}")

        try:
            provider_response = response.json()
        except ValueError:
            provider_response = response.text

        logger.info(f"Email accepted by Resend (HTTP {response.status_code})")
        return DeliveryOutcome(delivered=True, provider_response=provider_response)


class SmtpTransport(EmailTransport):
    """Delivery through an authenticated SMTP relay"""

    name = "smtp"

    def __init__(
        self,
        host: str,
        port: int,
        from_email: str,
        username: str = "",
        password: str = "",
        secure: bool = False,
        timeout: float = 20.0
    ):
        self.host = host
        self.port = port
        self.from_email = from_email
        self.username = username
        self.password = password
        self.secure = secure
        # aiosmtplib applies this to the connect, the greeting and every reply
        self.timeout = timeout

    def build_mime(self, message: NotificationMessage, recipient: str) -> MIMEText:
        msg = MIMEText(message.body, "html" if message.is_html else "plain", "utf-8")
        msg["Subject"] = _single_line(message.subject)
        msg["From"] = self.from_email
        msg["To"] = recipient
        msg["Reply-To"] = _single_line(message.reply_to)
        msg["Date"] = formatdate(localtime=True)

        domain = parseaddr(self.from_email)[1].rpartition("@")[2] or "localhost"
        msg["Message-ID"] = make_msgid(domain=domain)
        return msg

    async def send(self, message: NotificationMessage, recipient: str) -> DeliveryOutcome:
        if not self.host:
            raise NotifierMisconfigured("SMTP_HOST is not configured")

        msg = self.build_mime(message, recipient)

        try:
            async with aiosmtplib.SMTP(
                hostname=self.host,
                port=self.port,
                use_tls=self.secure,
                timeout=self.timeout
            ) as smtp:
                if self.username and self.password:
                    await smtp.login(self.username, self.password)
                errors, response = await smtp.send_message(msg)
        except aiosmtplib.SMTPResponseException as e:
            raise DeliveryFailed(f"{e.code} {e.message}") from e
        except (aiosmtplib.SMTPException, OSError, asyncio.TimeoutError) as e:
            raise DeliveryFailed(f"{type(e).__name__}: {e}") from e

        if errors:
            rejected = "; ".join(f"{code} {text}" for code, text in errors.values())
            raise DeliveryFailed(f"Recipient refused: {rejected}")

        logger.info("Email accepted by SMTP relay")
        return DeliveryOutcome(
            delivered=True,
            provider_response={"message_id": msg["Message-ID"], "response": response}
        )


def build_transport(settings: Settings, client: Optional[httpx.AsyncClient] = None) -> EmailTransport:
    """
    Pick the delivery backend named by EMAIL_TRANSPORT

    Credentials are not checked here; a missing key or host fails the send,
    not the startup.
    """
    if settings.email_transport == "smtp":
        return SmtpTransport(
            host=settings.smtp_host,
            port=settings.smtp_port,
            from_email=settings.from_email,
            username=settings.smtp_user,
            password=settings.smtp_pass,
            secure=settings.smtp_secure,
            timeout=settings.smtp_timeout,
        )
    return ResendTransport(
        api_key=settings.resend_api_key,
        from_email=settings.from_email,
        api_url=settings.resend_api_url,
        timeout=settings.http_timeout,
        client=client,
    )
