"""Console screens: sign-in, sign-out and company registration.

Every protected route asks the session controller for a RouteDecision
first; only an ALLOWED gate renders protected content. Redirects use
303 so the browser replaces the POST/denied route instead of re-submitting.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from admin_console.api.dependencies import (
    get_console_session,
    get_session_controller,
    get_session_id,
)
from admin_console.application.dtos.navigation import RouteDecision, RouteKind
from admin_console.application.services.console_session import ConsoleSession
from admin_console.application.services.session_controller import (
    LOGIN_PATH,
    PROVISIONING_PATH,
    SessionController,
)
from admin_console.core import messages
from admin_console.core.config import get_settings
from admin_console.core.limiter import limit_provisioning, limit_sign_in
from admin_console.domain.value_objects import CompanyForm
from admin_console.infrastructure.security.session_token import create_session_token
from admin_console.pages import (
    CONSOLE_SCRIPT,
    render_loading_page,
    render_login_page,
    render_register_company_page,
)

router = APIRouter(include_in_schema=False)


def _respond(decision: RouteDecision) -> Response:
    """Turn a non-render decision into a response."""
    if decision.kind is RouteKind.LOADING:
        return HTMLResponse(render_loading_page(get_settings().app_name))
    return RedirectResponse(decision.location or LOGIN_PATH, status_code=303)


def _provisioning_page(
    session: ConsoleSession, status_code: int = 200, **kwargs
) -> HTMLResponse:
    orchestrator = session.orchestrator
    return HTMLResponse(
        render_register_company_page(
            get_settings().app_name,
            kwargs.pop("form", session.form),
            busy=orchestrator.is_submitting,
            strict_tax_id=orchestrator.strict_tax_id,
            **kwargs,
        ),
        status_code=status_code,
    )


@router.get("/")
async def root() -> Response:
    """Site root: straight to the provisioning screen (which gates itself)."""
    return _respond(SessionController.entry_point())


@router.get("/assets/console.js")
async def console_script() -> Response:
    return Response(CONSOLE_SCRIPT, media_type="application/javascript")


@router.get(LOGIN_PATH, response_class=HTMLResponse)
async def login_page() -> HTMLResponse:
    return HTMLResponse(render_login_page(get_settings().app_name))


@router.post(LOGIN_PATH)
@limit_sign_in
async def login(
    request: Request,
    email: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
    controller: SessionController = Depends(get_session_controller),
) -> Response:
    """Sign in with e-mail/password; on success set the session cookie."""
    settings = get_settings()
    result = await controller.sign_in(email, password)
    if not result.ok:
        return HTMLResponse(
            render_login_page(settings.app_name, result.error_message, email)
        )

    previous = get_session_id(request)
    if previous and previous != result.session_id:
        await controller.sessions.close(previous)

    response = RedirectResponse(result.redirect_to or PROVISIONING_PATH, status_code=303)
    response.set_cookie(
        settings.session_cookie_name,
        create_session_token(result.session_id),
        max_age=settings.session_expire_minutes * 60,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )
    return response


@router.post("/logout")
async def logout(
    request: Request,
    controller: SessionController = Depends(get_session_controller),
) -> Response:
    decision = await controller.sign_out(get_session_id(request))
    response = _respond(decision)
    response.delete_cookie(get_settings().session_cookie_name)
    return response


@router.get(PROVISIONING_PATH)
async def register_company_page(
    controller: SessionController = Depends(get_session_controller),
    session: ConsoleSession | None = Depends(get_console_session),
) -> Response:
    decision = await controller.admit(session)
    if decision.kind is not RouteKind.RENDER:
        return _respond(decision)
    return _provisioning_page(session)


@router.post(PROVISIONING_PATH)
@limit_provisioning
async def register_company(
    request: Request,
    company_name: Annotated[str, Form()] = "",
    tax_id: Annotated[str, Form()] = "",
    admin_email: Annotated[str, Form()] = "",
    admin_password: Annotated[str, Form()] = "",
    create_master: Annotated[bool, Form()] = False,
    master_email: Annotated[str, Form()] = "",
    master_password: Annotated[str, Form()] = "",
    controller: SessionController = Depends(get_session_controller),
    session: ConsoleSession | None = Depends(get_console_session),
) -> Response:
    """Submit the provisioning form (company record, then its users)."""
    decision = await controller.admit(session)
    if decision.kind is not RouteKind.RENDER:
        return _respond(decision)

    form = CompanyForm(
        company_name=company_name,
        tax_id=tax_id,
        admin_email=admin_email,
        admin_password=admin_password,
        create_master=create_master,
        master_email=master_email,
        master_password=master_password,
    )
    outcome = await session.submit(form)
    if outcome is None:
        return _provisioning_page(
            session,
            status_code=409,
            form=form,
            notice=messages.SUBMISSION_IN_PROGRESS,
        )
    return _provisioning_page(session, outcome=outcome)
