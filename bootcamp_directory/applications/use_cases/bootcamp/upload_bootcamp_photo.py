from pathlib import Path

from fastapi.concurrency import run_in_threadpool

from bootcamp_directory.domain.exceptions import FileUploadError, NotFoundError
from bootcamp_directory.domain.models.user import User
from bootcamp_directory.domain.ports.repositories.document_store import Document, DocumentStore
from bootcamp_directory.domain.services.access_policy import ensure_can_modify
from bootcamp_directory.infrastructure.logging.logger import Logger

logger = Logger.get_logger(__name__)


class UploadBootcampPhotoUseCase:
    def __init__(self, bootcamp_store: DocumentStore, upload_dir: str, max_size: int):
        self.bootcamp_store = bootcamp_store
        self.upload_dir = Path(upload_dir)
        self.max_size = max_size

    async def execute(
        self, bootcamp_id: int, filename: str, content_type: str, content: bytes, actor: User
    ) -> Document:
        bootcamp = await self.bootcamp_store.get_by_id(bootcamp_id)
        if bootcamp is None:
            raise NotFoundError(f"No bootcamp with id of {bootcamp_id}")
        ensure_can_modify(bootcamp, actor, "bootcamp")

        if not content:
            raise FileUploadError("Please upload a file")
        if not (content_type or "").startswith("image/"):
            raise FileUploadError("Please upload an image file")
        if len(content) > self.max_size:
            raise FileUploadError(f"Please upload an image less than {self.max_size} bytes")

        photo_name = f"photo_{bootcamp_id}{Path(filename or '').suffix.lower()}"
        path = self.upload_dir / photo_name
        # a failed update must leave the current photo in place
        staged = path.with_name(f".{photo_name}.upload")
        await run_in_threadpool(self._write, staged, content)

        try:
            updated = await self.bootcamp_store.update(bootcamp_id, {"photo": photo_name})
            if updated is None:
                raise NotFoundError(f"No bootcamp with id of {bootcamp_id}")
        except Exception:
            logger.warning(f"Discarding upload for bootcamp {bootcamp_id}, the record was not updated")
            await run_in_threadpool(staged.unlink, missing_ok=True)
            raise

        await run_in_threadpool(staged.replace, path)
        logger.info(f"Stored photo {photo_name} ({len(content)} bytes) for bootcamp {bootcamp_id}")
        return updated

    def _write(self, path: Path, content: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
