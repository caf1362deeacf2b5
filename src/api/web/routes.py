"""
Web routes - registration form, confirmation page and email check.

GET  /              redirect to the form
GET  /registration  empty form
POST /registration  validate, register, redirect to /success
GET  /success       confirmation, shows the one-shot flash message
GET  /check-email   plain-text "exists" / "available" for live checks
"""

import logging
from pathlib import Path
from typing import Any

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError

from src.api.dependencies import get_registration_service
from src.api.flash import flash, pop_flashes
from src.api.models import RegistrationForm, form_errors
from src.domain.exceptions import DuplicateEmail, InvalidArgument, PersistenceFailure
from src.domain.registration import RegistrationService

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=Path(__file__).parent.parent / "templates")

router = APIRouter(tags=["web"])

DUPLICATE_EMAIL_MESSAGE = "A customer with this email address already exists"
GENERIC_FAILURE_MESSAGE = "Registration failed. Please try again later."


def _render_form(
    request: Request,
    values: dict[str, Any] | None = None,
    errors: dict[str, str] | None = None,
    error_message: str | None = None,
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "registration.html",
        {
            "values": values or {},
            "errors": errors or {},
            "error_message": error_message,
        },
    )


@router.get("/", include_in_schema=False)
async def home() -> RedirectResponse:
    return RedirectResponse("/registration", status_code=status.HTTP_302_FOUND)


@router.get("/registration", response_class=HTMLResponse)
async def show_registration_form(request: Request) -> HTMLResponse:
    return _render_form(request)


@router.post("/registration", response_class=HTMLResponse, response_model=None)
async def register_customer(
    request: Request,
    service: RegistrationService = Depends(get_registration_service),
) -> HTMLResponse | RedirectResponse:
    """
    Handle the registration form.

    Field errors and duplicate emails re-render the form with the
    submitted values kept; success redirects (303) to the confirmation page.
    """
    form_data = await request.form()
    values = {key: value for key, value in form_data.items() if isinstance(value, str)}

    try:
        form = RegistrationForm.model_validate(values)
    except ValidationError as e:
        return _render_form(request, values, errors=form_errors(e))

    try:
        # Blocking psycopg I/O runs off the event loop
        customer = await run_in_threadpool(service.register_customer, form.to_customer())
    except DuplicateEmail:
        return _render_form(
            request,
            values,
            errors={"email_address": DUPLICATE_EMAIL_MESSAGE},
            error_message=DUPLICATE_EMAIL_MESSAGE,
        )
    except InvalidArgument as e:
        return _render_form(request, values, errors={"email_address": str(e)})
    except PersistenceFailure:
        logger.error("Registration failed for %s: storage unavailable", form.email_address)
        return _render_form(request, values, error_message=GENERIC_FAILURE_MESSAGE)

    flash(request, "success_message", f"Registration successful! Welcome {customer.full_name}")
    flash(request, "customer_id", customer.id)
    return RedirectResponse("/success", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/success", response_class=HTMLResponse)
async def show_success_page(request: Request) -> HTMLResponse:
    flashes = pop_flashes(request)
    return templates.TemplateResponse(
        request,
        "success.html",
        {
            "success_message": flashes.get("success_message"),
            "customer_id": flashes.get("customer_id"),
        },
    )


@router.get("/check-email", response_class=PlainTextResponse)
def check_email(
    email: str = Query(...),
    service: RegistrationService = Depends(get_registration_service),
) -> PlainTextResponse:
    """Answer "exists" or "available"; a blank email is a 400 "invalid"."""
    try:
        exists = service.is_email_registered(email)
    except InvalidArgument:
        return PlainTextResponse("invalid", status_code=status.HTTP_400_BAD_REQUEST)
    return PlainTextResponse("exists" if exists else "available")
