"""Role changes, issued only by operators through manage.py."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.user.user import Role, User


@identity.command(part_of="User")
class ChangeRole:
    user_id = Identifier(required=True)
    role = String(required=True, choices=Role)


@identity.command_handler(part_of=User)
class ChangeRoleHandler:
    @handle(ChangeRole)
    def change_role(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.change_role(command.role)
        repo.add(user)
