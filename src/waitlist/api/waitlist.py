# waitlist/api/waitlist.py
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from opentelemetry import trace
from pydantic import ValidationError

from waitlist.api.models import ErrorResponse, SuccessResponse, WaitlistSignupIn
from waitlist.config import Settings, get_settings
from waitlist.database.session import get_database_url
from waitlist.services.waitlist_service import (
    DuplicateSignupError,
    WaitlistStorageError,
    register_signup,
)
from waitlist.util.email_util import is_valid_email, normalize_email

router = APIRouter(prefix="/api", tags=["waitlist"])
tracer = trace.get_tracer(__name__)
logger = logging.getLogger(__name__)

PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

INVALID_PAYLOAD = "Invalid JSON payload."
INVALID_EMAIL = "A valid email address is required."
NOT_CONFIGURED = "WAITLIST_DB binding is not configured."
ALREADY_REGISTERED = "Already registered."
UNABLE_TO_SAVE = "Unable to save right now."


def _json(status_code: int, body: Dict[str, Any]) -> JSONResponse:
    """JSON response readable from any origin."""
    return JSONResponse(
        status_code=status_code,
        content=body,
        headers={"Access-Control-Allow-Origin": "*"},
    )


def _error(status_code: int, message: str) -> JSONResponse:
    return _json(status_code, ErrorResponse(error=message).model_dump())


@router.options("/waitlist", status_code=204, response_class=Response)
async def waitlist_preflight() -> Response:
    """Answer the browser's CORS preflight."""
    return Response(status_code=204, headers=PREFLIGHT_HEADERS)


@router.post(
    "/waitlist",
    response_model=SuccessResponse,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def join_waitlist(request: Request, settings: Settings = Depends(get_settings)):
    """Validate, hash and store an email address on the waitlist."""
    with tracer.start_as_current_span("join_waitlist_endpoint") as span:
        try:
            payload = await request.json()
        except ValueError:
            span.set_attribute("rejected", "payload")
            return _error(400, INVALID_PAYLOAD)

        try:
            data = WaitlistSignupIn.model_validate(payload)
        except ValidationError:
            span.set_attribute("rejected", "schema")
            return _error(400, INVALID_EMAIL)

        email = normalize_email(data.email)
        if not is_valid_email(email):
            span.set_attribute("rejected", "email")
            return _error(400, INVALID_EMAIL)

        database_url = get_database_url(settings)
        if not database_url:
            logger.error("[WAITLIST] WAITLIST_DB_URL is not set; refusing signup")
            return _error(500, NOT_CONFIGURED)

        source_ip = request.headers.get(settings.CLIENT_IP_HEADER) or None

        try:
            await run_in_threadpool(register_signup, database_url, email, source_ip)
        except DuplicateSignupError:
            span.set_attribute("status", 409)
            return _error(409, ALREADY_REGISTERED)
        except WaitlistStorageError:
            span.set_attribute("status", 500)
            return _error(500, UNABLE_TO_SAVE)
        except Exception as e:
            span.set_attribute("status", 500)
            logger.error(f"[WAITLIST] unexpected signup failure: {e}", exc_info=True)
            return _error(500, UNABLE_TO_SAVE)

        span.set_attribute("status", 200)
        return _json(200, SuccessResponse().model_dump())
