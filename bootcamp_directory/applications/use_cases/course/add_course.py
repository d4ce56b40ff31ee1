from bootcamp_directory.applications.interfaces.dtos.course import CourseSchema
from bootcamp_directory.domain.exceptions import AuthorizationError, NotFoundError
from bootcamp_directory.domain.models.user import User
from bootcamp_directory.domain.ports.repositories.document_store import Document, DocumentStore
from bootcamp_directory.infrastructure.logging.logger import Logger

logger = Logger.get_logger(__name__)


class AddCourseUseCase:
    def __init__(self, bootcamp_store: DocumentStore, course_store: DocumentStore):
        self.bootcamp_store = bootcamp_store
        self.course_store = course_store

    async def execute(self, bootcamp_id: int, course_data: CourseSchema, actor: User) -> Document:
        bootcamp = await self.bootcamp_store.get_by_id(bootcamp_id)
        if bootcamp is None:
            raise NotFoundError(f"No bootcamp with id of {bootcamp_id}")

        if not actor.is_admin and bootcamp["user_id"] != actor.id:
            raise AuthorizationError(f"User {actor.id} is not authorized to add a course to bootcamp {bootcamp_id}")

        data = course_data.model_dump(mode="json")
        data["bootcamp_id"] = bootcamp_id
        data["user_id"] = actor.id

        course = await self.course_store.create(data)
        logger.info(f"Course {course['id']} added to bootcamp {bootcamp_id}")
        return course
