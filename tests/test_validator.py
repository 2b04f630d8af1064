"""Tests for submission validation."""

import pydantic
import pytest

from formrelay.errors import MissingField
from formrelay.services.validator import REQUIRED_FIELDS, validate


class TestRequiredFields:
    """Required field presence checks."""

    def test_accepts_complete_submission(self, payload):
        """Should build a typed submission from a complete payload."""
        submission = validate(payload)

        assert submission.name == "Ana"
        assert submission.email == "a@x.com"
        assert submission.phone == "123"
        assert submission.service == "Photo"
        assert submission.details is None

    def test_reports_every_missing_field(self):
        """Should list all missing fields, not just the first."""
        with pytest.raises(MissingField) as exc_info:
            validate({"phone": "123"})

        assert exc_info.value.fields == ["name", "email", "service"]

    def test_reports_fields_in_fixed_order(self):
        """Should report missing fields in name, email, phone, service order."""
        with pytest.raises(MissingField) as exc_info:
            validate({})

        assert exc_info.value.fields == list(REQUIRED_FIELDS)

    @pytest.mark.parametrize("blank", ["", "   ", "\t\n", None])
    def test_whitespace_only_counts_as_missing(self, payload, blank):
        """Should treat blank and whitespace-only values as missing."""
        payload["email"] = blank

        with pytest.raises(MissingField) as exc_info:
            validate(payload)

        assert exc_info.value.fields == ["email"]

    def test_trims_values(self, payload):
        """Should trim surrounding whitespace before storing values."""
        payload["name"] = "  Ana  "

        assert validate(payload).name == "Ana"

    def test_no_format_checks(self, payload):
        """Should not reject malformed email or phone values."""
        payload["email"] = "not-an-email"
        payload["phone"] = "call me"

        submission = validate(payload)

        assert submission.email == "not-an-email"
        assert submission.phone == "call me"

    def test_non_string_values_are_stringified(self, payload):
        """Should accept numeric values for text fields."""
        payload["phone"] = 5551234

        assert validate(payload).phone == "5551234"

    def test_submission_is_frozen(self, payload):
        """Should produce an immutable record."""
        submission = validate(payload)

        with pytest.raises(pydantic.ValidationError):
            submission.name = "Eve"


class TestDetails:
    """Freeform vs structured detail handling."""

    def test_structured_fields_kept_without_freeform(self, payload):
        """Should keep structured detail fields when no freeform blob is sent."""
        payload.update({"city": " Miami ", "location": "  "})

        submission = validate(payload)

        assert submission.city == "Miami"
        assert submission.location is None

    def test_freeform_takes_precedence(self, payload):
        """Should drop structured fields when a freeform blob is present."""
        payload.update({"details": "Wedding in June", "city": "Miami", "coordinator": "Luz"})

        submission = validate(payload)

        assert submission.details == "Wedding in June"
        assert submission.city is None
        assert submission.coordinator is None

    def test_blank_freeform_does_not_win(self, payload):
        """Should fall back to structured fields when the blob is blank."""
        payload.update({"details": "   ", "city": "Miami"})

        submission = validate(payload)

        assert submission.details is None
        assert submission.city == "Miami"


class TestPayloadShapes:
    """Envelope and alias payloads posted by the web client."""

    def test_envelope_payload(self):
        """Should read fields from the nested data object."""
        submission = validate({
            "brand": "oasis",
            "data": {"name": "Ana", "email": "a@x.com", "phone": "1", "service": "Photo"},
            "recaptchaToken": "tok",
            "userAgent": "Mozilla/5.0",
        })

        assert submission.name == "Ana"
        assert submission.brand == "oasis"
        assert submission.user_agent == "Mozilla/5.0"

    def test_envelope_missing_fields(self):
        """Should report missing fields from the nested data object."""
        with pytest.raises(MissingField) as exc_info:
            validate({"data": {"name": "Ana", "service": "Photo"}, "recaptchaToken": "tok"})

        assert exc_info.value.fields == ["email", "phone"]

    def test_blank_envelope_field_keeps_top_level_value(self, payload):
        """Should not let a blank nested value hide a top-level one."""
        payload["data"] = {"name": "  ", "city": "Miami"}

        submission = validate(payload)

        assert submission.name == "Ana"
        assert submission.city == "Miami"

    def test_envelope_field_overrides_top_level(self, payload):
        """Should prefer a non-blank nested value over the top-level one."""
        payload["data"] = {"name": "Bea"}

        assert validate(payload).name == "Bea"

    def test_spanish_aliases(self):
        """Should map the original Spanish field names."""
        submission = validate({
            "nombre": "Ana",
            "email": "a@x.com",
            "telefono": "123",
            "servicio": "Foto",
            "mensaje": "Hola",
        })

        assert submission.name == "Ana"
        assert submission.phone == "123"
        assert submission.service == "Foto"
        assert submission.details == "Hola"

    def test_canonical_name_beats_alias(self, payload):
        """Should prefer the canonical key over its alias."""
        payload["nombre"] = "Otra"

        assert validate(payload).name == "Ana"
