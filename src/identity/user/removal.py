"""Admin-only deletion of a user account."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from identity.domain import identity, logger
from identity.user.user import User


@identity.command(part_of="User")
class RemoveUser:
    user_id = Identifier(required=True)


@identity.command_handler(part_of=User)
class RemoveUserHandler:
    @handle(RemoveUser)
    def remove_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        repo._dao.delete(user)
        logger.info("user_removed", user_id=str(command.user_id))
