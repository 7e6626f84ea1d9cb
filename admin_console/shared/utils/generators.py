"""ID generators: CUID2 for console sessions, Firestore-style auto IDs for documents."""

import secrets

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()

# Same alphabet and length the Firestore client SDKs use for add()/doc().
_AUTO_ID_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"
_AUTO_ID_LENGTH = 20


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def generate_auto_id() -> str:
    """Generate a 20-character Firestore document ID."""
    return "".join(
        secrets.choice(_AUTO_ID_ALPHABET) for _ in range(_AUTO_ID_LENGTH)
    )
