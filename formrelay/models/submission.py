"""Submission-related Pydantic models"""
from pydantic import BaseModel, ConfigDict
from typing import Optional


class ValidatedSubmission(BaseModel):
    """A form submission that passed validation.

    Only built by `formrelay.services.validator.validate`; the raw request
    mapping never travels past that point.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    email: str
    phone: str
    service: str

    # Freeform blob; when set, the structured fields below are all None
    details: Optional[str] = None

    service_details: Optional[str] = None
    location: Optional[str] = None
    city: Optional[str] = None
    event_date: Optional[str] = None
    event_time: Optional[str] = None
    coordinator: Optional[str] = None

    brand: Optional[str] = None
    user_agent: Optional[str] = None


class SubmitResponse(BaseModel):
    """Successful submission response"""
    ok: bool = True
    score: Optional[float] = None
    action: Optional[str] = None
