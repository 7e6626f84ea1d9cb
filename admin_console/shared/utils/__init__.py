"""Shared utilities: datetime and generators."""

from admin_console.shared.utils.datetime import ensure_utc, utc_now
from admin_console.shared.utils.generators import generate_auto_id, generate_cuid

__all__ = [
    "generate_auto_id",
    "generate_cuid",
    "utc_now",
    "ensure_utc",
]
