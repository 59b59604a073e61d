"""
Central access control.

Requests are checked against ``ACCESS_RULES`` in order before any route runs;
the first rule whose pattern and method match decides. Unmatched requests
need an authenticated identity.

Patterns: ``*`` matches one path segment, a trailing ``/**`` matches any
suffix including none.
"""
import logging
import re
from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Pattern, Sequence

from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from expense_tracker.core.exceptions import AppError, AuthenticationFailure, AuthorizationFailure
from expense_tracker.core.security import Identity, decode_access_token
from expense_tracker.models.credential import Role

logger = logging.getLogger(__name__)

ANY_METHOD: FrozenSet[str] = frozenset()


def compile_pattern(pattern: str) -> Pattern:
    regex = ""
    for token in re.split(r"(/\*\*|\*)", pattern):
        if token == "/**":
            regex += "(?:/.*)?"
        elif token == "*":
            regex += "[^/]+"
        else:
            regex += re.escape(token)
    return re.compile(f"^{regex}$")


@dataclass(frozen=True)
class AccessRule:
    pattern: str
    methods: FrozenSet[str] = ANY_METHOD
    public: bool = False
    # None means any authenticated identity
    roles: Optional[FrozenSet[Role]] = None
    regex: Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "regex", compile_pattern(self.pattern))

    def matches(self, method: str, path: str) -> bool:
        if self.methods and method.upper() not in self.methods:
            return False
        return self.regex.match(path) is not None


def _public(*patterns: str) -> list:
    return [AccessRule(p, public=True) for p in patterns]


ADMIN_ONLY = frozenset({Role.ADMIN})
USER_OR_ADMIN = frozenset({Role.USER, Role.ADMIN})

ACCESS_RULES: Sequence[AccessRule] = (
    AccessRule("/**", methods=frozenset({"OPTIONS"}), public=True),
    *_public(
        "/api/auth/register",
        "/api/auth/login",
        "/api/auth/logout",
        "/health",
        "/",
        "/index.html",
        "/login.html",
        "/register.html",
        "/favicon.ico",
        "/static/**",
        "/docs",
        "/redoc",
        "/openapi.json",
    ),
    AccessRule("/api/users/**", roles=USER_OR_ADMIN),
    AccessRule("/api/expense-categories", methods=frozenset({"POST"}), roles=ADMIN_ONLY),
    AccessRule("/api/expense-categories/*", methods=frozenset({"PUT", "DELETE"}), roles=ADMIN_ONLY),
    AccessRule("/api/expense-categories/*/deactivate", methods=frozenset({"PATCH"}), roles=ADMIN_ONLY),
    AccessRule("/api/expenses/**"),
    AccessRule("/api/expense-categories/**", methods=frozenset({"GET"})),
)

DEFAULT_RULE = AccessRule("/**")


def normalize_path(path: str) -> str:
    if len(path) > 1 and path.endswith("/"):
        return path.rstrip("/") or "/"
    return path


def find_rule(method: str, path: str, rules: Sequence[AccessRule] = ACCESS_RULES) -> AccessRule:
    path = normalize_path(path)
    for rule in rules:
        if rule.matches(method, path):
            return rule
    return DEFAULT_RULE


def bearer_token(request: Request) -> Optional[str]:
    auth_header = request.headers.get("Authorization", "")
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def authorize(rule: AccessRule, token: Optional[str]) -> Optional[Identity]:
    """
    Apply a rule to the presented token.
    Returns the caller's identity (None on public routes) or raises
    AuthenticationFailure / AuthorizationFailure.
    """
    if rule.public:
        return None
    if token is None:
        raise AuthenticationFailure("Authentication required")
    identity = decode_access_token(token)
    if rule.roles is not None and identity.role not in rule.roles:
        raise AuthorizationFailure("Access denied")
    return identity


class AccessControlMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        rule = find_rule(request.method, request.url.path)
        try:
            request.state.identity = authorize(rule, bearer_token(request))
        except AppError as exc:
            logger.info(f"Rejected {request.method} {request.url.path}: {exc.message}")
            return JSONResponse(
                status_code=exc.status_code,
                content={"error": exc.message},
                headers=exc.headers,
            )
        return await call_next(request)
