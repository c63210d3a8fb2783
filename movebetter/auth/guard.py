import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlencode

from fastapi import Depends, Request

from movebetter.auth.dependencies import get_session
from movebetter.auth.models import Role, SessionUser
from movebetter.auth.session import SessionContext
from movebetter.exceptions import GuardRedirect, SessionLoading

logger = logging.getLogger(__name__)

LOGIN_PATH = "/auth"
PATIENT_HOME_PATH = "/paciente"
ROOT_PATH = "/"
DEFAULT_ALLOWED_ROLES = (Role.ADMIN,)


class GuardState(str, Enum):
    LOADING = "loading"
    REDIRECT = "redirect"
    RENDER = "render"


@dataclass(frozen=True)
class GuardDecision:
    state: GuardState
    location: str | None = None
    user: SessionUser | None = None


def landing_path_for(role: Role) -> str:
    if role == Role.PATIENT:
        return PATIENT_HOME_PATH
    return ROOT_PATH


def login_redirect_for(requested_path: str) -> str:
    return f"{LOGIN_PATH}?{urlencode({'from': requested_path})}"


def evaluate(
    session: SessionContext,
    requested_path: str,
    allowed_roles: Iterable[Role] = DEFAULT_ALLOWED_ROLES,
) -> GuardDecision:
    allowed = frozenset(allowed_roles)

    if session.is_loading:
        return GuardDecision(GuardState.LOADING)

    if not session.is_authenticated or session.user is None:
        return GuardDecision(GuardState.REDIRECT, location=login_redirect_for(requested_path))

    if allowed and session.user.role not in allowed:
        return GuardDecision(GuardState.REDIRECT, location=landing_path_for(session.user.role))

    return GuardDecision(GuardState.RENDER, user=session.user)


class RouteGuard:
    def __init__(self, allowed_roles: Iterable[Role] = DEFAULT_ALLOWED_ROLES):
        self.allowed_roles = tuple(allowed_roles)

    def __call__(self, request: Request, session: SessionContext = Depends(get_session)) -> SessionUser:
        requested_path = request.url.path
        if request.url.query:
            requested_path = f"{requested_path}?{request.url.query}"

        decision = evaluate(session, requested_path, self.allowed_roles)
        logger.debug(
            "Guard %s on %s (role=%s, allowed=%s)",
            decision.state.value,
            requested_path,
            session.user.role.value if session.user else "none",
            [role.value for role in self.allowed_roles],
        )

        if decision.state == GuardState.LOADING:
            raise SessionLoading()
        if decision.state == GuardState.REDIRECT:
            raise GuardRedirect(decision.location)
        return decision.user
