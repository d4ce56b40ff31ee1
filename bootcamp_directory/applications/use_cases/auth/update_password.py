from bootcamp_directory.applications.interfaces.dtos.user import UpdatePassword
from bootcamp_directory.domain.exceptions import AuthenticationError
from bootcamp_directory.domain.models.user import User
from bootcamp_directory.domain.ports.repositories.user_repository import UserRepository
from bootcamp_directory.domain.ports.services.auth_service import AuthService


class UpdatePasswordUseCase:
    def __init__(self, user_repository: UserRepository, auth_service: AuthService):
        self.user_repository = user_repository
        self.auth_service = auth_service

    async def execute(self, user: User, passwords: UpdatePassword) -> str:
        if not self.auth_service.verify_password(passwords.current_password, user.password_hash):
            raise AuthenticationError("Password is incorrect")

        updated = await self.user_repository.update(
            user.model_copy(update={"password_hash": self.auth_service.hash_password(passwords.new_password)})
        )
        return self.auth_service.create_access_token(updated)
