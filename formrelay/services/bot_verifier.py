"""reCAPTCHA v3 verification service"""
import httpx
from typing import Optional
import logging

from formrelay.errors import MissingSecret, MissingToken, VerificationUnreachable
from formrelay.models.notification import VerificationResult

logger = logging.getLogger(__name__)

SITEVERIFY_URL = "https://www.google.com/recaptcha/api/siteverify"
DEFAULT_MIN_SCORE = 0.5


def evaluate(
    data: dict,
    min_score: float = DEFAULT_MIN_SCORE,
    expected_action: Optional[str] = None
) -> VerificationResult:
    """
    Turn a siteverify response body into a VerificationResult

    A response without a score is accepted on `success` alone. An action is
    only checked when both the caller expects one and the endpoint returns
    one. Only a literal boolean `true` counts as success.

    Raises:
        VerificationUnreachable: The score is outside 0.0-1.0 or NaN
    """
    score = data.get("score")
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        score = None
    elif not 0.0 <= score <= 1.0:
        raise VerificationUnreachable("siteverify returned an invalid score")
    action = data.get("action") or None

    if data.get("success") is not True:
        reason = "verification-failed"
        error_codes = data.get("error-codes") or []
        if error_codes:
            reason = f"{reason}: {', '.join(str(code) for code in error_codes)}"
        return VerificationResult(accepted=False, score=score, reason=reason, action=action)

    if score is not None and score < min_score:
        return VerificationResult(accepted=False, score=score, reason="low-score", action=action)

    if expected_action and action and action != expected_action:
        return VerificationResult(accepted=False, score=score, reason="action-mismatch", action=action)

    return VerificationResult(accepted=True, score=score, action=action)


async def verify(
    token: Optional[str],
    secret: Optional[str],
    min_score: float = DEFAULT_MIN_SCORE,
    expected_action: Optional[str] = None,
    verify_url: str = SITEVERIFY_URL,
    timeout: float = 20.0,
    client: Optional[httpx.AsyncClient] = None
) -> VerificationResult:
    """
    Verify a reCAPTCHA token with the siteverify endpoint

    Args:
        token: Token the browser got from grecaptcha.execute
        secret: Server-side reCAPTCHA secret
        min_score: Lowest score that still counts as human
        expected_action: Action name the page executes with, if enforced
        verify_url: siteverify endpoint
        timeout: Request timeout in seconds
        client: Shared AsyncClient; a short-lived one is opened when omitted

    Returns:
        VerificationResult, accepted or not

    Raises:
        MissingToken: No token supplied by the submitter
        MissingSecret: No secret configured on the server
        VerificationUnreachable: The endpoint could not be reached or answered garbage
    """
    if not token or not str(token).strip():
        raise MissingToken()
    if not secret:
        raise MissingSecret("RECAPTCHA_SECRET is not configured")

    form = {"secret": secret, "response": str(token).strip()}

    try:
        if client is not None:
            response = await client.post(verify_url, data=form, timeout=timeout)
        else:
            async with httpx.AsyncClient(timeout=timeout) as owned_client:
                response = await owned_client.post(verify_url, data=form)
    except httpx.RequestError as e:
        logger.error(f"siteverify request failed: {type(e).__name__}")
        raise VerificationUnreachable(f"siteverify request failed: {e}") from e

    if not response.is_success:
        logger.error(f"siteverify returned HTTP {response.status_code}")
        raise VerificationUnreachable(f"siteverify returned {response.status_code} - {response.text}")

    try:
        data = response.json()
    except ValueError as e:
        raise VerificationUnreachable("siteverify returned a non-JSON body") from e
    if not isinstance(data, dict):
        raise VerificationUnreachable("siteverify returned an unexpected body")

    result = evaluate(data, min_score=min_score, expected_action=expected_action)
    logger.info(f"reCAPTCHA check: accepted={result.accepted} reason={result.reason}")
    return result
