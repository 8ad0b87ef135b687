"""Session resolution and role checks for every HTTP surface.

Bearer tokens are resolved against the identity store on each request, so a
role change or sign-out takes effect immediately. Routes in other bounded
contexts depend on these helpers instead of reading the identity store
themselves.
"""

from dataclasses import dataclass

from fastapi import Depends, Header

from identity.domain import identity
from identity.user.user import Role, User
from shared.errors import AuthenticationError, AuthorizationError


@dataclass(frozen=True)
class Principal:
    """The authenticated caller of a request."""

    user_id: str
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def resolve_principal(authorization: str | None) -> Principal | None:
    token = _bearer_token(authorization)
    if token is None:
        return None

    with identity.domain_context():
        user = identity.repository_for(User).find_by_session_token(token)

    if user is None:
        return None
    return Principal(user_id=str(user.id), email=user.email, role=user.role)


async def optional_principal(authorization: str | None = Header(default=None)) -> Principal | None:
    return resolve_principal(authorization)


async def current_principal(principal: Principal | None = Depends(optional_principal)) -> Principal:
    if principal is None:
        raise AuthenticationError()
    return principal


async def admin_principal(principal: Principal = Depends(current_principal)) -> Principal:
    if not principal.is_admin:
        raise AuthorizationError("Admin role required")
    return principal
