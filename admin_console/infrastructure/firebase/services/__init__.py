"""Firebase service clients: Identity Toolkit sign-in and callable Cloud Functions."""

from admin_console.infrastructure.firebase.services.callable_functions import (
    CallableFunctionProvisioner,
    callable_function_url,
)
from admin_console.infrastructure.firebase.services.identity_toolkit import (
    FirebaseIdentityClient,
)

__all__ = [
    "CallableFunctionProvisioner",
    "FirebaseIdentityClient",
    "callable_function_url",
]
