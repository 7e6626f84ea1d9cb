"""Operator-facing texts (pt-BR, the operators' language).

Kept in one place so screens, orchestrator and controller report the
same wording.
"""

# Sign-in
SIGN_IN_INVALID_CREDENTIALS = "E-mail ou senha inválidos"
SIGN_IN_RETRY_LATER = "Erro ao entrar. Tente novamente."
SIGN_IN_FIELDS_REQUIRED = "Informe um e-mail válido e a senha."

# Provisioning
FORM_INVALID = "Preencha todos os campos corretamente."
TAX_ID_LENGTH_HINT = "CNPJ deve ter 14 dígitos."
TAX_ID_CHECK_DIGITS_HINT = "CNPJ inválido (dígitos verificadores)."
COMPANY_CREATION_FAILED = "Não foi possível criar a empresa."
PROVISIONING_FALLBACK = (
    "Erro ao criar empresa. Verifique permissões (Firestore Rules) e a Cloud Function."
)
ORPHANED_COMPANY_NOTICE = (
    "A empresa {company_id} foi criada, mas os usuários não. "
    "Tente novamente ou remova a empresa manualmente."
)
SUBMISSION_IN_PROGRESS = "Um cadastro já está em andamento. Aguarde."


def company_created(company_id: str) -> str:
    """Success text shown after both steps completed."""
    return f"Empresa criada com sucesso! CompanyId: {company_id}"
