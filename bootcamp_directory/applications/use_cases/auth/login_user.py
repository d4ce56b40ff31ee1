from bootcamp_directory.domain.exceptions import AuthenticationError
from bootcamp_directory.domain.ports.repositories.user_repository import UserRepository
from bootcamp_directory.domain.ports.services.auth_service import AuthService

# unknown email and wrong password must be indistinguishable
INVALID_CREDENTIALS = "Invalid credentials"


class LoginUserUseCase:
    def __init__(self, user_repository: UserRepository, auth_service: AuthService):
        self.user_repository = user_repository
        self.auth_service = auth_service

    async def execute(self, email: str, password: str) -> str:
        user = await self.user_repository.get_by_email(email)
        if not user:
            raise AuthenticationError(INVALID_CREDENTIALS)

        if not self.auth_service.verify_password(password, user.password_hash):
            raise AuthenticationError(INVALID_CREDENTIALS)

        return self.auth_service.create_access_token(user)
