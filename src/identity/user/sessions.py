"""Sign-in sessions — credential check, commands and handler.

A session is a random bearer token stored on the user. Signing in again
replaces the previous token, so each account holds at most one live session.
"""

import secrets

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain
from werkzeug.security import check_password_hash

from identity.domain import identity, logger
from identity.user.user import User


def authenticate(email, password):
    """Return the user matching the credentials, or None."""
    user = current_domain.repository_for(User).find_by_email(email)
    if user is None or not password or not check_password_hash(user.password_hash, password):
        logger.info("sign_in_rejected", email=email)
        return None
    return user


@identity.command(part_of="User")
class StartSession:
    user_id = Identifier(required=True)


@identity.command(part_of="User")
class EndSession:
    user_id = Identifier(required=True)


@identity.command_handler(part_of=User)
class SessionHandler:
    @handle(StartSession)
    def start_session(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        token = secrets.token_urlsafe(32)
        user.start_session(token)
        repo.add(user)
        return token

    @handle(EndSession)
    def end_session(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.end_session()
        repo.add(user)
