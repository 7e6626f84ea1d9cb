"""Console screens rendered with Jinja (autoescaped).

Whether the submit button is enabled comes from ``can_submit`` on the
retained form; CONSOLE_SCRIPT re-applies the same rules while the operator
types so the button tracks every field change.
"""

from __future__ import annotations

from jinja2 import DictLoader, Environment

from admin_console.application.dtos.company import ProvisioningOutcome
from admin_console.core import messages
from admin_console.domain.enums import SubmissionState
from admin_console.domain.validators import (
    MIN_PASSWORD_LENGTH,
    TAX_ID_LENGTH,
    can_submit,
    tax_id_problem,
)
from admin_console.domain.value_objects import CompanyForm

_LAYOUT = """<!DOCTYPE html>
<html lang="pt-BR">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    {% block head %}{% endblock %}
    <title>{{ title }} · {{ app_name }}</title>
    <style>
        * { box-sizing: border-box; }
        body { font-family: system-ui, sans-serif; margin: 0; background: #f4f5f7; color: #1d1d1f; padding: 2rem 1rem; }
        .wrap { max-width: 520px; margin: 0 auto; }
        .card { background: #fff; border: 1px solid #e1e3e8; padding: 1.5rem 1.75rem; margin-bottom: 1rem; }
        h1 { font-size: 1.375rem; margin: 0 0 1.25rem 0; }
        label { display: block; font-size: 0.875rem; margin: 0.75rem 0 0.25rem; }
        input[type=text], input[type=email], input[type=password] { width: 100%; padding: 0.5rem; border: 1px solid #c7cad1; }
        .check { display: flex; gap: 0.5rem; align-items: center; margin-top: 1rem; }
        .check label { margin: 0; }
        .hint { color: #a15c00; font-size: 0.8125rem; margin-top: 0.25rem; }
        .status { padding: 0.75rem; margin-bottom: 1rem; }
        .status.success { background: #e8f6ec; color: #1d6b36; }
        .status.error { background: #fdecec; color: #a12020; }
        button { margin-top: 1.25rem; padding: 0.6rem 1.25rem; border: 0; background: #1d4ed8; color: #fff; cursor: pointer; }
        button:disabled { background: #9aa5c0; cursor: not-allowed; }
        .topbar { display: flex; justify-content: flex-end; margin-bottom: 0.5rem; }
        .topbar button { margin: 0; background: transparent; color: #1d4ed8; padding: 0; }
    </style>
</head>
<body>
<div class="wrap">
{% block body %}{% endblock %}
</div>
</body>
</html>
"""

_LOGIN = """{% extends "layout.html" %}
{% block body %}
<div class="card">
    <h1>Entrar</h1>
    {% if error %}<div class="status error" role="alert">{{ error }}</div>{% endif %}
    <form method="post" action="/login" novalidate>
        <label for="email">E-mail</label>
        <input type="email" id="email" name="email" value="{{ email }}" autocomplete="username" required>
        <label for="password">Senha</label>
        <input type="password" id="password" name="password" autocomplete="current-password" required>
        <button type="submit">Entrar</button>
    </form>
</div>
{% endblock %}
"""

_LOADING = """{% extends "layout.html" %}
{% block head %}<meta http-equiv="refresh" content="{{ refresh_seconds }}">{% endblock %}
{% block body %}
<div class="card" aria-busy="true">
    <h1>Carregando…</h1>
    <p>Verificando permissões de acesso.</p>
</div>
{% endblock %}
"""

_REGISTER_COMPANY = """{% extends "layout.html" %}
{% block body %}
<div class="topbar">
    <form method="post" action="/logout"><button type="submit">Sair</button></form>
</div>
<div class="card">
    <h1>Cadastrar empresa</h1>
    {% if status_message %}
    <div class="status {{ status_kind }}" role="status">{{ status_message }}</div>
    {% endif %}
    {% if orphan_notice %}<div class="status error">{{ orphan_notice }}</div>{% endif %}
    <form method="post" action="/register-company" id="company-form" novalidate
          data-tax-id-length="{{ tax_id_length }}" data-min-password="{{ min_password }}"
          data-strict-tax-id="{{ 'true' if strict_tax_id else 'false' }}">
        <label for="company_name">Nome da empresa</label>
        <input type="text" id="company_name" name="company_name" value="{{ form.company_name }}">

        <label for="tax_id">CNPJ</label>
        <input type="text" id="tax_id" name="tax_id" value="{{ form.tax_id }}" inputmode="numeric">
        <div class="hint" id="tax-id-hint"{% if not tax_id_hint %} hidden{% endif %}>{{ tax_id_hint or "" }}</div>

        <label for="admin_email">E-mail do administrador</label>
        <input type="email" id="admin_email" name="admin_email" value="{{ form.admin_email }}" autocomplete="off">
        <label for="admin_password">Senha do administrador</label>
        <input type="password" id="admin_password" name="admin_password" value="{{ form.admin_password }}" autocomplete="new-password">

        <div class="check">
            <input type="checkbox" id="create_master" name="create_master" value="true"{% if form.create_master %} checked{% endif %}>
            <label for="create_master">Criar também um usuário master</label>
        </div>
        <div id="master-fields"{% if not form.create_master %} hidden{% endif %}>
            <label for="master_email">E-mail do master</label>
            <input type="email" id="master_email" name="master_email" value="{{ form.master_email }}" autocomplete="off">
            <label for="master_password">Senha do master</label>
            <input type="password" id="master_password" name="master_password" value="{{ form.master_password }}" autocomplete="new-password">
        </div>

        <button type="submit" id="submit"{% if busy or not submittable %} disabled{% endif %}>
            {% if busy %}Enviando…{% else %}Cadastrar empresa{% endif %}
        </button>
    </form>
</div>
<script src="/assets/console.js" defer></script>
{% endblock %}
"""

CONSOLE_SCRIPT = """(function () {
  var form = document.getElementById("company-form");
  if (!form) { return; }
  var taxIdLength = parseInt(form.dataset.taxIdLength, 10);
  var minPassword = parseInt(form.dataset.minPassword, 10);
  var strict = form.dataset.strictTaxId === "true";
  var emailShape = /^[^\\s@]+@[^\\s@]+\\.[^\\s@]+$/;
  function field(id) { return document.getElementById(id); }
  function digits(v) { return v.replace(/\\D/g, ""); }
  function emailOk(v) { return emailShape.test(v.trim()); }
  function checkDigit(d, weights) {
    var sum = 0;
    for (var i = 0; i < weights.length; i++) { sum += parseInt(d[i], 10) * weights[i]; }
    var r = sum % 11;
    return r < 2 ? 0 : 11 - r;
  }
  function checkDigitsOk(d) {
    if (/^(\\d)\\1*$/.test(d)) { return false; }
    var first = checkDigit(d, [5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2]);
    var second = checkDigit(d.slice(0, 12) + first, [6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2]);
    return d.slice(12) === "" + first + second;
  }
  function update() {
    var master = field("create_master").checked;
    field("master-fields").hidden = !master;
    var taxId = field("tax_id").value;
    var d = digits(taxId);
    var hint = field("tax-id-hint");
    var problem = null;
    if (d.length !== taxIdLength) {
      problem = "CNPJ deve ter " + taxIdLength + " dígitos.";
    } else if (strict && !checkDigitsOk(d)) {
      problem = "CNPJ inválido (dígitos verificadores).";
    }
    hint.textContent = problem || "";
    hint.hidden = !(taxId.length > 0 && problem);
    var ok = field("company_name").value.trim().length > 0 && problem === null &&
      emailOk(field("admin_email").value) &&
      field("admin_password").value.length >= minPassword;
    if (master) {
      ok = ok && emailOk(field("master_email").value) &&
        field("master_password").value.length >= minPassword;
    }
    field("submit").disabled = !ok;
  }
  form.addEventListener("input", update);
  form.addEventListener("change", update);
  form.addEventListener("submit", function () {
    var button = field("submit");
    button.disabled = true;
    button.textContent = "Enviando…";
  });
}());
"""

_env = Environment(
    loader=DictLoader(
        {
            "layout.html": _LAYOUT,
            "login.html": _LOGIN,
            "loading.html": _LOADING,
            "register_company.html": _REGISTER_COMPANY,
        }
    ),
    autoescape=True,
)

_TAX_ID_HINTS = {
    "length": messages.TAX_ID_LENGTH_HINT,
    "check_digits": messages.TAX_ID_CHECK_DIGITS_HINT,
}


def tax_id_hint(raw: str, strict: bool = False) -> str | None:
    """Inline hint under the tax id field; None while empty or valid."""
    problem = tax_id_problem(raw, strict)
    return _TAX_ID_HINTS[problem] if problem else None


def render_login_page(app_name: str, error: str | None = None, email: str = "") -> str:
    """Return HTML for the sign-in screen."""
    return _env.get_template("login.html").render(
        title="Entrar", app_name=app_name, error=error, email=email
    )


def render_loading_page(app_name: str, refresh_seconds: int = 1) -> str:
    """Return HTML shown while the authorization gate is still deciding."""
    return _env.get_template("loading.html").render(
        title="Carregando", app_name=app_name, refresh_seconds=refresh_seconds
    )


def render_register_company_page(
    app_name: str,
    form: CompanyForm,
    outcome: ProvisioningOutcome | None = None,
    *,
    busy: bool = False,
    strict_tax_id: bool = False,
    notice: str | None = None,
) -> str:
    """Return HTML for the provisioning screen.

    ``outcome`` supplies the status line; ``notice`` overrides it (e.g. a
    submission rejected because another one is still in flight).
    """
    status_message = notice
    status_kind = "error"
    orphan_notice = None
    if notice is None and outcome is not None:
        status_message = outcome.message
        status_kind = "success" if outcome.state is SubmissionState.SUCCESS else "error"
        if outcome.orphaned_company_id:
            orphan_notice = messages.ORPHANED_COMPANY_NOTICE.format(
                company_id=outcome.orphaned_company_id
            )
    return _env.get_template("register_company.html").render(
        title="Cadastrar empresa",
        app_name=app_name,
        form=form,
        status_message=status_message,
        status_kind=status_kind,
        orphan_notice=orphan_notice,
        tax_id_hint=tax_id_hint(form.tax_id, strict_tax_id),
        submittable=can_submit(form, strict_tax_id=strict_tax_id),
        busy=busy,
        strict_tax_id=strict_tax_id,
        tax_id_length=TAX_ID_LENGTH,
        min_password=MIN_PASSWORD_LENGTH,
    )
