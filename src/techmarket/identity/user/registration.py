"""User registration and removal — commands and handler."""

from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from techmarket.domain import techmarket
from techmarket.identity.user.user import User
from techmarket.utils.logging import get_logger

logger = get_logger(__name__)


@techmarket.command(part_of="User")
class RegisterUser:
    username = String(required=True, max_length=30)
    email = String(required=True, max_length=254)
    first_name = String(max_length=50)
    last_name = String(max_length=50)


@techmarket.command(part_of="User")
class DeleteUser:
    user_id = Identifier(required=True)


@techmarket.command_handler(part_of=User)
class UserRegistrationHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)

        if repo.find_by_username(command.username) is not None:
            raise ValidationError({"username": ["Username is already taken"]})
        if repo.find_by_email(command.email) is not None:
            raise ValidationError({"email": ["Email is already registered"]})

        user = User.register(
            username=command.username,
            email=command.email,
            first_name=command.first_name,
            last_name=command.last_name,
        )
        repo.add(user)

        logger.info("User registered", user_id=str(user.id), username=user.username)
        return str(user.id)

    @handle(DeleteUser)
    def delete_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        repo._dao.delete(user)

        logger.info("User deleted", user_id=str(command.user_id))
