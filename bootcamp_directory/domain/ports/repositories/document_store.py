from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from bootcamp_directory.domain.models.query import FieldFilter, Populate, QuerySpec

Document = Dict[str, Any]


class DocumentStore(ABC):
    @abstractmethod
    async def find(self, spec: QuerySpec) -> List[Document]:
        pass

    @abstractmethod
    async def count(self, filters: Sequence[FieldFilter] = ()) -> int:
        pass

    @abstractmethod
    async def get_by_id(self, document_id: int, populate: Optional[Populate] = None) -> Optional[Document]:
        pass

    @abstractmethod
    async def create(self, data: Document) -> Document:
        pass

    @abstractmethod
    async def update(self, document_id: int, changes: Document) -> Optional[Document]:
        pass

    @abstractmethod
    async def delete(self, document_id: int) -> bool:
        pass

    @abstractmethod
    async def average(self, field: str, filters: Sequence[FieldFilter] = ()) -> Optional[float]:
        """Mean of ``field`` over the matching documents, or None when nothing matches."""
        pass
