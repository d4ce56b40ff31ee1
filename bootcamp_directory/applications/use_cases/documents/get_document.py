from typing import Optional

from bootcamp_directory.domain.exceptions import NotFoundError
from bootcamp_directory.domain.models.query import Populate
from bootcamp_directory.domain.ports.repositories.document_store import Document, DocumentStore


class GetDocumentUseCase:
    def __init__(self, store: DocumentStore, resource: str):
        self.store = store
        self.resource = resource

    async def execute(self, document_id: int, populate: Optional[Populate] = None) -> Document:
        document = await self.store.get_by_id(document_id, populate)
        if document is None:
            raise NotFoundError(f"No {self.resource} with id of {document_id}")
        return document
