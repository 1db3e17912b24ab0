"""Route allow-list applied to every request.

Rules are evaluated top-down and the first rule whose method and path
pattern match decides; a request no rule matches requires an
authenticated caller. A pattern ending in ``/**`` matches its prefix and
every sub-path, so ``/api/v1/projects/**`` covers ``/api/v1/projects``
and ``/api/v1/projects/status/COMPLETED`` alike.

No identity mechanism is bundled. A request to an authenticated route is
let through only when an authentication layer installed in front of this
one (Starlette's ``AuthenticationMiddleware`` contract) has placed an
authenticated ``user`` in the ASGI scope. Otherwise it is rejected with
401 in the standard error envelope.
"""

from collections.abc import Awaitable, Callable, Iterable, Sequence
from enum import StrEnum
from typing import NamedTuple

from fastapi import Request, Response, status
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from src.api.middleware.error_handler import error_response
from src.core.config import Settings
from src.core.exceptions import UnauthorizedError

ANY_METHOD = "*"
SUBTREE_SUFFIX = "/**"


class Requirement(StrEnum):
    """What a caller needs to reach a route."""

    PUBLIC = "public"
    AUTHENTICATED = "authenticated"


class AccessRule(NamedTuple):
    method: str
    pattern: str
    requirement: Requirement

    def matches(self, method: str, path: str) -> bool:
        if self.method not in (ANY_METHOD, method.upper()):
            return False
        if self.pattern.endswith(SUBTREE_SUFFIX):
            prefix = self.pattern.removesuffix(SUBTREE_SUFFIX)
            return path == prefix or path.startswith(f"{prefix}/")
        return path == self.pattern


class AccessPolicy:
    """Ordered rule table with a default for unmatched requests.

    Args:
        rules: Rules in evaluation order.
        default: Requirement applied when no rule matches.
    """

    def __init__(
        self,
        rules: Iterable[AccessRule],
        default: Requirement = Requirement.AUTHENTICATED,
    ) -> None:
        self.rules: tuple[AccessRule, ...] = tuple(rules)
        self.default = default

    def requirement_for(self, method: str, path: str) -> Requirement:
        for rule in self.rules:
            if rule.matches(method, path):
                return rule.requirement
        return self.default


def build_default_rules(settings: Settings) -> list[AccessRule]:
    """Public rules for the portfolio API plus the operational endpoints."""
    prefix = settings.api_prefix
    rules = [
        AccessRule("GET", f"{prefix}/projects{SUBTREE_SUFFIX}", Requirement.PUBLIC),
        AccessRule("GET", f"{prefix}/team{SUBTREE_SUFFIX}", Requirement.PUBLIC),
        AccessRule("GET", f"{prefix}/services{SUBTREE_SUFFIX}", Requirement.PUBLIC),
        AccessRule("POST", f"{prefix}/contact", Requirement.PUBLIC),
        AccessRule("GET", "/health", Requirement.PUBLIC),
    ]
    for url in (settings.docs_url, settings.redoc_url, settings.openapi_url):
        if url:
            rules.append(
                AccessRule("GET", f"{url}{SUBTREE_SUFFIX}", Requirement.PUBLIC)
            )
    return rules


def is_authenticated(request: Request) -> bool:
    """Whether an upstream authentication layer vouched for the caller."""
    user = request.scope.get("user")
    return bool(getattr(user, "is_authenticated", False))


class AccessPolicyMiddleware(BaseHTTPMiddleware):
    """Reject requests to non-public routes from unauthenticated callers.

    Args:
        app: The ASGI application to wrap.
        rules: Rules in evaluation order.
    """

    def __init__(self, app: ASGIApp, *, rules: Sequence[AccessRule]) -> None:
        super().__init__(app)
        self.policy = AccessPolicy(rules)

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        requirement = self.policy.requirement_for(request.method, request.url.path)
        if requirement is Requirement.PUBLIC or is_authenticated(request):
            return await call_next(request)

        error = UnauthorizedError(
            "Authentication is required for this route",
            context={"method": request.method, "path": request.url.path},
        )
        logger.warning(
            "Access denied for {method} {path}",
            method=request.method,
            path=request.url.path,
            error_code=error.error_code,
        )
        return error_response(
            status.HTTP_401_UNAUTHORIZED,
            error.error_code,
            error.message,
            error.severity,
        )
