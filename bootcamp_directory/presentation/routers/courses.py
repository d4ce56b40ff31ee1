from http import HTTPStatus
from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends

from bootcamp_directory.applications.interfaces.dtos.course import CourseSchema, CourseUpdate
from bootcamp_directory.applications.interfaces.dtos.envelope import DocumentResponse, ResultEnvelope
from bootcamp_directory.applications.use_cases.bootcamp.refresh_bootcamp_average import (
    AVERAGE_COST,
    RefreshBootcampAverageUseCase,
)
from bootcamp_directory.applications.use_cases.course.add_course import AddCourseUseCase
from bootcamp_directory.applications.use_cases.documents.delete_document import DeleteDocumentUseCase
from bootcamp_directory.applications.use_cases.documents.get_document import GetDocumentUseCase
from bootcamp_directory.applications.use_cases.documents.list_documents import ListDocumentsUseCase
from bootcamp_directory.applications.use_cases.documents.update_document import UpdateDocumentUseCase
from bootcamp_directory.domain.models.query import Populate
from bootcamp_directory.domain.models.user import Role, User
from bootcamp_directory.domain.ports.repositories.document_store import DocumentStore
from bootcamp_directory.domain.services.query_translator import QueryTranslator
from bootcamp_directory.infrastructure.config.dependencies import (
    get_bootcamp_store,
    get_course_store,
    get_query_translator,
    require_roles,
)
from bootcamp_directory.presentation.query_params import advanced_query

router = APIRouter(prefix="/courses", tags=["courses"])
bootcamp_courses_router = APIRouter(prefix="/bootcamps/{bootcamp_id}/courses", tags=["courses"])

COURSE_POPULATE = Populate("bootcamp", ("name", "description"))

CourseStoreDep = Annotated[DocumentStore, Depends(get_course_store)]
BootcampStoreDep = Annotated[DocumentStore, Depends(get_bootcamp_store)]
TranslatorDep = Annotated[QueryTranslator, Depends(get_query_translator)]
QueryDep = Annotated[Dict[str, Any], Depends(advanced_query)]
PublisherDep = Annotated[User, Depends(require_roles(Role.PUBLISHER, Role.ADMIN))]


@router.get("/", response_model=ResultEnvelope)
async def read_courses(params: QueryDep, course_store: CourseStoreDep, translator: TranslatorDep):
    use_case = ListDocumentsUseCase(course_store, translator)
    return await use_case.execute(params, COURSE_POPULATE)


@router.get("/{course_id}", response_model=DocumentResponse)
async def read_course(course_id: int, course_store: CourseStoreDep):
    use_case = GetDocumentUseCase(course_store, "course")
    return DocumentResponse(data=await use_case.execute(course_id, COURSE_POPULATE))


@router.put("/{course_id}", response_model=DocumentResponse)
async def update_course(
    course_id: int,
    course: CourseUpdate,
    bootcamp_store: BootcampStoreDep,
    course_store: CourseStoreDep,
    current_user: PublisherDep,
):
    use_case = UpdateDocumentUseCase(course_store, "course")
    changes = course.model_dump(exclude_unset=True)
    updated = await use_case.execute(course_id, changes, current_user)
    if "tuition" in changes:
        await RefreshBootcampAverageUseCase(bootcamp_store, course_store, AVERAGE_COST).execute(updated["bootcamp_id"])
    return DocumentResponse(data=updated)


@router.delete("/{course_id}", response_model=DocumentResponse)
async def delete_course(
    course_id: int, bootcamp_store: BootcampStoreDep, course_store: CourseStoreDep, current_user: PublisherDep
):
    use_case = DeleteDocumentUseCase(course_store, "course")
    deleted = await use_case.execute(course_id, current_user)
    await RefreshBootcampAverageUseCase(bootcamp_store, course_store, AVERAGE_COST).execute(deleted["bootcamp_id"])
    return DocumentResponse(data={})


@bootcamp_courses_router.get("/", response_model=ResultEnvelope)
async def read_bootcamp_courses(
    bootcamp_id: int, params: QueryDep, course_store: CourseStoreDep, translator: TranslatorDep
):
    use_case = ListDocumentsUseCase(course_store, translator)
    return await use_case.execute({**params, "bootcamp_id": str(bootcamp_id)}, COURSE_POPULATE)


@bootcamp_courses_router.post("/", status_code=HTTPStatus.CREATED, response_model=DocumentResponse)
async def add_course(
    bootcamp_id: int,
    course: CourseSchema,
    bootcamp_store: BootcampStoreDep,
    course_store: CourseStoreDep,
    current_user: PublisherDep,
):
    use_case = AddCourseUseCase(bootcamp_store, course_store)
    created = await use_case.execute(bootcamp_id, course, current_user)
    await RefreshBootcampAverageUseCase(bootcamp_store, course_store, AVERAGE_COST).execute(bootcamp_id)
    return DocumentResponse(data=created)
