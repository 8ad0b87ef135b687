"""User registration — command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.user.user import User


@identity.command(part_of="User")
class RegisterUser:
    """Create a new account. The password arrives already hashed."""

    email: String(required=True, max_length=254)
    password_hash: String(required=True, max_length=255)
    display_name: String(max_length=100)


@identity.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email) is not None:
            raise ValidationError({"email": ["Email is already registered"]})

        user = User.register(
            email=command.email,
            password_hash=command.password_hash,
            display_name=command.display_name,
        )
        repo.add(user)
        return str(user.id)
