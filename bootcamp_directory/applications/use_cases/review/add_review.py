from bootcamp_directory.applications.interfaces.dtos.review import ReviewSchema
from bootcamp_directory.domain.exceptions import NotFoundError
from bootcamp_directory.domain.models.user import User
from bootcamp_directory.domain.ports.repositories.document_store import Document, DocumentStore


class AddReviewUseCase:
    def __init__(self, bootcamp_store: DocumentStore, review_store: DocumentStore):
        self.bootcamp_store = bootcamp_store
        self.review_store = review_store

    async def execute(self, bootcamp_id: int, review_data: ReviewSchema, author: User) -> Document:
        if await self.bootcamp_store.get_by_id(bootcamp_id) is None:
            raise NotFoundError(f"No bootcamp with id of {bootcamp_id}")

        data = review_data.model_dump()
        data["bootcamp_id"] = bootcamp_id
        data["user_id"] = author.id

        # one review per user per bootcamp is enforced by a unique constraint
        return await self.review_store.create(data)
