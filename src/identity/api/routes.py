"""FastAPI routes for the Identity domain — sessions and user administration."""

from fastapi import APIRouter, Depends, Query
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain
from werkzeug.security import generate_password_hash

from identity.api.auth import Principal, admin_principal, current_principal, optional_principal
from identity.api.schemas import (
    MeResponse,
    RegisterRequest,
    SessionResponse,
    SignInRequest,
    StatusResponse,
    UserIdResponse,
    UserResponse,
)
from identity.user.registration import RegisterUser
from identity.user.removal import RemoveUser
from identity.user.sessions import EndSession, StartSession, authenticate
from identity.user.user import User
from shared.errors import AuthenticationError

MIN_PASSWORD_LENGTH = 6

# ---------------------------------------------------------------------------
# Auth Router
# ---------------------------------------------------------------------------
auth_router = APIRouter(prefix="/auth", tags=["auth"])


@auth_router.post("/register", status_code=201, response_model=UserIdResponse)
async def register(body: RegisterRequest) -> UserIdResponse:
    if not body.password or len(body.password) < MIN_PASSWORD_LENGTH:
        raise ValidationError({"password": [f"Password must be at least {MIN_PASSWORD_LENGTH} characters"]})

    command = RegisterUser(
        email=body.email,
        password_hash=generate_password_hash(body.password),
        display_name=body.display_name,
    )
    result = current_domain.process(command, asynchronous=False)
    return UserIdResponse(user_id=result)


@auth_router.post("/sign-in", response_model=SessionResponse)
async def sign_in(body: SignInRequest) -> SessionResponse:
    user = authenticate(body.email, body.password)
    if user is None:
        raise AuthenticationError("Invalid email or password")

    token = current_domain.process(StartSession(user_id=str(user.id)), asynchronous=False)
    return SessionResponse(access_token=token, user_id=str(user.id), role=user.role)


@auth_router.post("/sign-out", response_model=StatusResponse)
async def sign_out(principal: Principal = Depends(current_principal)) -> StatusResponse:
    current_domain.process(EndSession(user_id=principal.user_id), asynchronous=False)
    return StatusResponse()


@auth_router.get("/me", response_model=MeResponse)
async def me(principal: Principal | None = Depends(optional_principal)) -> MeResponse:
    if principal is None:
        return MeResponse(user=None)
    user = current_domain.repository_for(User).get(principal.user_id)
    return MeResponse(user=UserResponse.from_user(user))


# ---------------------------------------------------------------------------
# Users Router (admin dashboard)
# ---------------------------------------------------------------------------
users_router = APIRouter(prefix="/users", tags=["users"])


@users_router.get("", response_model=list[UserResponse])
async def list_users(
    search: str | None = Query(default=None),
    principal: Principal = Depends(admin_principal),  # noqa: ARG001
) -> list[UserResponse]:
    users = current_domain.repository_for(User).search(search)
    return [UserResponse.from_user(user) for user in users]


@users_router.delete("/{user_id}", response_model=StatusResponse)
async def delete_user(user_id: str, principal: Principal = Depends(admin_principal)) -> StatusResponse:
    if user_id == principal.user_id:
        raise ValidationError({"user_id": ["Admins cannot delete their own account"]})
    current_domain.process(RemoveUser(user_id=user_id), asynchronous=False)
    return StatusResponse()
