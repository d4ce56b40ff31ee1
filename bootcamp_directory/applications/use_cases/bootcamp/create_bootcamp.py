import re

from bootcamp_directory.applications.interfaces.dtos.bootcamp import BootcampSchema
from bootcamp_directory.domain.models.user import User
from bootcamp_directory.domain.ports.repositories.document_store import Document, DocumentStore
from bootcamp_directory.infrastructure.logging.logger import Logger

logger = Logger.get_logger(__name__)


def slugify(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


class CreateBootcampUseCase:
    def __init__(self, bootcamp_store: DocumentStore):
        self.bootcamp_store = bootcamp_store

    async def execute(self, bootcamp_data: BootcampSchema, owner: User) -> Document:
        logger.info(f"Creating bootcamp: {bootcamp_data.name}")

        data = bootcamp_data.model_dump(mode="json")
        data["slug"] = slugify(bootcamp_data.name)
        data["user_id"] = owner.id

        return await self.bootcamp_store.create(data)
