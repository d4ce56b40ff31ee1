from bootcamp_directory.applications.interfaces.dtos.user import UserSchema
from bootcamp_directory.domain.exceptions import ConflictError
from bootcamp_directory.domain.models.user import Role, User
from bootcamp_directory.domain.ports.repositories.user_repository import UserRepository
from bootcamp_directory.domain.ports.services.auth_service import AuthService
from bootcamp_directory.infrastructure.logging.logger import Logger

logger = Logger.get_logger(__name__)


class CreateUserUseCase:
    def __init__(self, user_repository: UserRepository, auth_service: AuthService):
        self.user_repository = user_repository
        self.auth_service = auth_service

    async def execute(self, user_data: UserSchema) -> User:
        logger.info(f"Creating user: {user_data.email}")

        if await self.user_repository.get_by_email(user_data.email):
            raise ConflictError("Email already registered")

        user = User(
            name=user_data.name,
            email=user_data.email,
            password_hash=self.auth_service.hash_password(user_data.password),
            role=Role(user_data.role),
        )

        created_user = await self.user_repository.create(user)
        if created_user.id is None:
            raise RuntimeError("User creation failed - no ID assigned")

        logger.info(f"User created successfully: {created_user.email} ({created_user.role.value})")
        return created_user
