from typing import Any, Dict, List, Mapping, Optional

from bootcamp_directory.applications.interfaces.dtos.envelope import PageLink, ResultEnvelope
from bootcamp_directory.domain.models.query import PageRequest, Populate
from bootcamp_directory.domain.ports.repositories.document_store import Document, DocumentStore
from bootcamp_directory.domain.services.query_translator import QueryTranslator
from bootcamp_directory.infrastructure.logging.logger import Logger

logger = Logger.get_logger(__name__)


def paginate(documents: List[Document], page: PageRequest, total: int) -> ResultEnvelope:
    pagination: Dict[str, PageLink] = {}
    if page.offset + page.limit < total:
        pagination["next"] = PageLink(page=page.page + 1, limit=page.limit)
    if page.offset > 0:
        pagination["prev"] = PageLink(page=page.page - 1, limit=page.limit)

    return ResultEnvelope(success=True, count=len(documents), pagination=pagination, data=documents)


class ListDocumentsUseCase:
    def __init__(self, store: DocumentStore, translator: QueryTranslator):
        self.store = store
        self.translator = translator

    async def execute(self, params: Mapping[str, Any], populate: Optional[Populate] = None) -> ResultEnvelope:
        spec = self.translator.translate(params, populate)

        # next/prev are computed against the filtered total, not the collection size
        total = await self.store.count(spec.filters)
        documents = await self.store.find(spec)

        logger.debug(f"Listed {len(documents)} of {total} documents (page {spec.page.page}, limit {spec.limit})")
        return paginate(documents, spec.page, total)
