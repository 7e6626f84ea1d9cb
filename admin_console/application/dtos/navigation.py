"""DTOs for the session/navigation controller."""

from dataclasses import dataclass
from enum import Enum


class RouteKind(str, Enum):
    RENDER = "render"
    REDIRECT = "redirect"
    LOADING = "loading"


@dataclass(frozen=True)
class RouteDecision:
    """Screen to show for a route.

    Redirects always use replace semantics: the denied route must not be
    left in history.
    """

    kind: RouteKind
    location: str | None = None
    replace: bool = True

    @classmethod
    def render(cls) -> "RouteDecision":
        return cls(kind=RouteKind.RENDER)

    @classmethod
    def loading(cls) -> "RouteDecision":
        return cls(kind=RouteKind.LOADING)

    @classmethod
    def redirect(cls, location: str) -> "RouteDecision":
        return cls(kind=RouteKind.REDIRECT, location=location)


@dataclass(frozen=True)
class SignInResult:
    """Outcome of a sign-in attempt: a redirect target or an operator message."""

    session_id: str | None = None
    redirect_to: str | None = None
    error_message: str | None = None

    @property
    def ok(self) -> bool:
        return self.session_id is not None
