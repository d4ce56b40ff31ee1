from typing import Optional

from bootcamp_directory.domain.exceptions import NotFoundError
from bootcamp_directory.domain.models.user import User
from bootcamp_directory.domain.ports.repositories.document_store import Document, DocumentStore
from bootcamp_directory.domain.services.access_policy import ensure_can_modify
from bootcamp_directory.infrastructure.logging.logger import Logger

logger = Logger.get_logger(__name__)


class UpdateDocumentUseCase:
    def __init__(self, store: DocumentStore, resource: str):
        self.store = store
        self.resource = resource

    async def execute(self, document_id: int, changes: Document, actor: Optional[User] = None) -> Document:
        """Apply ``changes``; when ``actor`` is given it must own the document or be an admin."""
        existing = await self.store.get_by_id(document_id)
        if existing is None:
            raise NotFoundError(f"No {self.resource} with id of {document_id}")

        if actor is not None:
            ensure_can_modify(existing, actor, self.resource)

        if not changes:
            return existing

        updated = await self.store.update(document_id, changes)
        if updated is None:
            raise NotFoundError(f"No {self.resource} with id of {document_id}")

        logger.info(f"Updated {self.resource} {document_id}: {sorted(changes)}")
        return updated
