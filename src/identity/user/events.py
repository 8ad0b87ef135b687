"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from identity.domain import identity


@identity.event(part_of="User")
class UserRegistered:
    """A new user account was created."""

    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True, max_length=254)
    display_name: String(max_length=100)
    registered_at: DateTime(required=True)


@identity.event(part_of="User")
class UserSignedIn:
    """A sign-in session was started for the user."""

    __version__ = 1

    user_id: Identifier(required=True)
    signed_in_at: DateTime(required=True)


@identity.event(part_of="User")
class UserSignedOut:
    __version__ = 1

    user_id: Identifier(required=True)
    signed_out_at: DateTime(required=True)


@identity.event(part_of="User")
class UserRoleChanged:
    """The user's role was changed out-of-band by an operator."""

    __version__ = 1

    user_id: Identifier(required=True)
    previous_role: String(required=True)
    new_role: String(required=True)
    changed_at: DateTime(required=True)
