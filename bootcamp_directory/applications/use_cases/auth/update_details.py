from bootcamp_directory.applications.interfaces.dtos.user import UpdateDetails
from bootcamp_directory.domain.models.user import User
from bootcamp_directory.domain.ports.repositories.user_repository import UserRepository


class UpdateDetailsUseCase:
    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def execute(self, user: User, details: UpdateDetails) -> User:
        changes = details.model_dump(exclude_none=True)
        if not changes:
            return user
        return await self.user_repository.update(user.model_copy(update=changes))
