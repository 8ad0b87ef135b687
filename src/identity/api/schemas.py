"""Pydantic request/response schemas for the Identity API.

These are external contracts, kept separate from the internal Protean commands.
"""

from datetime import datetime

from pydantic import BaseModel


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class RegisterRequest(BaseModel):
    email: str | None = None
    password: str | None = None
    display_name: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "email": "asha@example.com",
                    "password": "herbal-oil-123",
                    "display_name": "Asha",
                }
            ]
        }
    }


class SignInRequest(BaseModel):
    email: str | None = None
    password: str | None = None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class UserIdResponse(BaseModel):
    user_id: str


class SessionResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    role: str


class UserResponse(BaseModel):
    id: str
    email: str
    display_name: str | None = None
    role: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_user(cls, user):
        return cls(
            id=str(user.id),
            email=user.email,
            display_name=user.display_name,
            role=user.role,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class MeResponse(BaseModel):
    user: UserResponse | None = None


class StatusResponse(BaseModel):
    status: str = "ok"
