"""Repository for the User aggregate."""

from identity.domain import identity
from identity.user.user import User, normalize_email


@identity.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        email = normalize_email(email)
        if email is None:
            return None
        results = self._dao.query.filter(email=email).all()
        return results.items[0] if results.items else None

    def find_by_session_token(self, token: str) -> User | None:
        if not token:
            return None
        results = self._dao.query.filter(session_token=token).all()
        return results.items[0] if results.items else None

    def search(self, text: str | None = None) -> list[User]:
        """All users, optionally narrowed to emails containing ``text``."""
        users = self._dao.query.order_by("created_at").all().items
        needle = (text or "").strip().lower()
        if not needle:
            return list(users)
        return [user for user in users if needle in user.email]
