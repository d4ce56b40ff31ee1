from dataclasses import dataclass
from typing import Optional

from bootcamp_directory.domain.models.query import FieldFilter, Scalar
from bootcamp_directory.domain.ports.repositories.document_store import DocumentStore
from bootcamp_directory.infrastructure.logging.logger import Logger

logger = Logger.get_logger(__name__)


@dataclass(frozen=True)
class BootcampAverage:
    source: str
    target: str


AVERAGE_COST = BootcampAverage(source="tuition", target="average_cost")
AVERAGE_RATING = BootcampAverage(source="rating", target="average_rating")


class RefreshBootcampAverageUseCase:
    """Recompute a bootcamp's denormalised average from its child documents."""

    def __init__(self, bootcamp_store: DocumentStore, child_store: DocumentStore, average: BootcampAverage):
        self.bootcamp_store = bootcamp_store
        self.child_store = child_store
        self.average = average

    async def execute(self, bootcamp_id: int) -> Optional[float]:
        value = await self.child_store.average(self.average.source, (FieldFilter("bootcamp_id", Scalar(bootcamp_id)),))
        if value is not None:
            value = round(value, 2)

        # the bootcamp may be gone when its children were removed by a cascade
        if await self.bootcamp_store.update(bootcamp_id, {self.average.target: value}) is None:
            logger.debug(f"Bootcamp {bootcamp_id} no longer exists, {self.average.target} not refreshed")
            return None

        logger.info(f"Bootcamp {bootcamp_id} {self.average.target} set to {value}")
        return value
