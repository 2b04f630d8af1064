"""Form submission endpoint"""
from fastapi import APIRouter, Body, Request
from typing import Any, Dict
import logging

from formrelay.models.submission import SubmitResponse
from formrelay.services.pipeline import SubmissionPipeline

logger = logging.getLogger(__name__)
router = APIRouter()


def get_pipeline(request: Request) -> SubmissionPipeline:
    return request.app.state.pipeline


@router.post("/submit", response_model=SubmitResponse, response_model_exclude_none=True)
async def submit_form(request: Request, payload: Dict[str, Any] = Body(...)):
    """Handle form submission (PUBLIC endpoint)

    Errors are raised as SubmissionError subclasses and turned into
    responses by the handlers in formrelay.middleware.error_handler.
    """
    pipeline = get_pipeline(request)
    verification, outcome = await pipeline.process(payload)
    logger.info(f"Form submission relayed (delivered={outcome.delivered})")

    if pipeline.settings.expose_bot_score:
        return SubmitResponse(ok=True, score=verification.score, action=verification.action)
    return SubmitResponse(ok=True)
