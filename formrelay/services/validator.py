"""Submission validation"""
from typing import Any, Dict, Mapping, Optional

from formrelay.errors import MissingField
from formrelay.models.submission import ValidatedSubmission

REQUIRED_FIELDS = ("name", "email", "phone", "service")

DETAIL_FIELDS = (
    "service_details",
    "location",
    "city",
    "event_date",
    "event_time",
    "coordinator",
)

# Field names posted by the original Spanish-language form
FIELD_ALIASES = {
    "nombre": "name",
    "telefono": "phone",
    "servicio": "service",
    "mensaje": "details",
}


def _clean(value: Any) -> Optional[str]:
    """Trim a raw value; blank or null becomes None"""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _flatten(payload: Mapping[str, Any]) -> Dict[str, Optional[str]]:
    """
    Collapse the envelope and alias shapes into canonical field names

    The web client posts `{brand, data: {...}, recaptchaToken, userAgent}`;
    other callers post the fields at the top level. Non-blank fields inside
    `data` win over top-level ones, and canonical names win over aliases.
    """
    fields = {key: _clean(value) for key, value in payload.items() if key != "data"}
    nested = payload.get("data")
    if isinstance(nested, Mapping):
        for key, value in nested.items():
            cleaned = _clean(value)
            if cleaned or key not in fields:
                fields[key] = cleaned

    for alias, canonical in FIELD_ALIASES.items():
        if not fields.get(canonical) and fields.get(alias):
            fields[canonical] = fields[alias]
    return fields


def validate(payload: Mapping[str, Any]) -> ValidatedSubmission:
    """
    Validate a raw submission mapping

    Args:
        payload: Request body as decoded from JSON

    Returns:
        Frozen ValidatedSubmission

    Raises:
        MissingField: Listing every absent or blank required field, in
            REQUIRED_FIELDS order
    """
    fields = _flatten(payload)

    missing = [key for key in REQUIRED_FIELDS if not fields.get(key)]
    if missing:
        raise MissingField(missing)

    details = fields.get("details")
    structured = {key: None if details else fields.get(key) for key in DETAIL_FIELDS}

    return ValidatedSubmission(
        name=fields["name"],
        email=fields["email"],
        phone=fields["phone"],
        service=fields["service"],
        details=details,
        brand=fields.get("brand"),
        user_agent=fields.get("userAgent"),
        **structured,
    )
