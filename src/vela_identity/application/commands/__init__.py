from vela_identity.application.commands.create_user_command import CreateUserCommand
from vela_identity.application.commands.delete_user_command import DeleteUserCommand
from vela_identity.application.commands.update_user_command import UpdateUserCommand

__all__ = [
    "CreateUserCommand",
    "DeleteUserCommand",
    "UpdateUserCommand",
]
