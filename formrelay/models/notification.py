"""Verification and notification Pydantic models"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional


class VerificationResult(BaseModel):
    """Outcome of a single siteverify call"""
    model_config = ConfigDict(frozen=True)

    accepted: bool
    score: Optional[float] = Field(None, ge=0.0, le=1.0)
    reason: Optional[str] = None
    action: Optional[str] = None


class NotificationMessage(BaseModel):
    """Email composed from a validated, verified submission"""
    model_config = ConfigDict(frozen=True)

    subject: str
    body: str
    reply_to: str
    is_html: bool = True


class DeliveryOutcome(BaseModel):
    """Result of handing a message to a transport"""
    delivered: bool
    provider_response: Any = None
