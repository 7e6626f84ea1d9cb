"""Server-rendered console screens (sign-in, loading, company registration)."""

from admin_console.pages.console import (
    CONSOLE_SCRIPT,
    render_loading_page,
    render_login_page,
    render_register_company_page,
    tax_id_hint,
)

__all__ = [
    "CONSOLE_SCRIPT",
    "render_loading_page",
    "render_login_page",
    "render_register_company_page",
    "tax_id_hint",
]
