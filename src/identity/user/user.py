"""User aggregate — an account that can sign in and place orders.

Roles are coarse: every account starts as ``user``; ``admin`` is granted only
by an operator through ``manage.py promote-admin``.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from identity.domain import identity
from identity.user.events import UserRegistered, UserRoleChanged, UserSignedIn, UserSignedOut


class Role(Enum):
    USER = "user"
    ADMIN = "admin"


def normalize_email(email):
    return (email or "").strip().lower() or None


@identity.aggregate
class User:
    """A registered shopper or administrator."""

    email: String(required=True, max_length=254)
    display_name: String(max_length=100)
    role: String(choices=Role, default=Role.USER.value)
    password_hash: String(required=True, max_length=255)
    session_token: String(max_length=128)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def email_must_look_like_an_address(self):
        if not self.email:
            return
        local_part, _, domain_part = self.email.partition("@")
        if not local_part or "." not in domain_part or " " in self.email:
            raise ValidationError({"email": [f"Invalid email address: {self.email!r}"]})

    @property
    def is_admin(self):
        return self.role == Role.ADMIN.value

    @classmethod
    def register(cls, email, password_hash, display_name=None):
        now = datetime.now(UTC)
        user = cls(
            email=normalize_email(email),
            password_hash=password_hash,
            display_name=(display_name or "").strip() or None,
            role=Role.USER.value,
            created_at=now,
            updated_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                email=user.email,
                display_name=user.display_name,
                registered_at=now,
            )
        )
        return user

    def start_session(self, token):
        now = datetime.now(UTC)
        self.session_token = token
        self.updated_at = now
        self.raise_(UserSignedIn(user_id=str(self.id), signed_in_at=now))

    def end_session(self):
        now = datetime.now(UTC)
        self.session_token = None
        self.updated_at = now
        self.raise_(UserSignedOut(user_id=str(self.id), signed_out_at=now))

    def change_role(self, role):
        try:
            new_role = Role(role)
        except ValueError:
            raise ValidationError({"role": [f"Unknown role: {role}"]}) from None

        previous_role = self.role
        if previous_role == new_role.value:
            return

        now = datetime.now(UTC)
        self.role = new_role.value
        self.updated_at = now
        self.raise_(
            UserRoleChanged(
                user_id=str(self.id),
                previous_role=previous_role,
                new_role=new_role.value,
                changed_at=now,
            )
        )
