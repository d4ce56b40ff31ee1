from http import HTTPStatus
from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends, File, UploadFile

from bootcamp_directory.applications.interfaces.dtos.bootcamp import BootcampSchema, BootcampUpdate
from bootcamp_directory.applications.interfaces.dtos.envelope import DocumentResponse, ResultEnvelope
from bootcamp_directory.applications.use_cases.bootcamp.create_bootcamp import CreateBootcampUseCase, slugify
from bootcamp_directory.applications.use_cases.bootcamp.upload_bootcamp_photo import UploadBootcampPhotoUseCase
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
    get_query_translator,
    get_settings,
    require_roles,
)
from bootcamp_directory.infrastructure.config.settings import Settings
from bootcamp_directory.presentation.query_params import advanced_query

router = APIRouter(prefix="/bootcamps", tags=["bootcamps"])

BOOTCAMP_POPULATE = Populate("courses")

BootcampStoreDep = Annotated[DocumentStore, Depends(get_bootcamp_store)]
TranslatorDep = Annotated[QueryTranslator, Depends(get_query_translator)]
QueryDep = Annotated[Dict[str, Any], Depends(advanced_query)]
PublisherDep = Annotated[User, Depends(require_roles(Role.PUBLISHER, Role.ADMIN))]
SettingsDep = Annotated[Settings, Depends(get_settings)]


@router.get("/", response_model=ResultEnvelope)
async def read_bootcamps(params: QueryDep, bootcamp_store: BootcampStoreDep, translator: TranslatorDep):
    use_case = ListDocumentsUseCase(bootcamp_store, translator)
    return await use_case.execute(params, BOOTCAMP_POPULATE)


@router.get("/{bootcamp_id}", response_model=DocumentResponse)
async def read_bootcamp(bootcamp_id: int, bootcamp_store: BootcampStoreDep):
    use_case = GetDocumentUseCase(bootcamp_store, "bootcamp")
    return DocumentResponse(data=await use_case.execute(bootcamp_id))


@router.post("/", status_code=HTTPStatus.CREATED, response_model=DocumentResponse)
async def create_bootcamp(bootcamp: BootcampSchema, bootcamp_store: BootcampStoreDep, current_user: PublisherDep):
    use_case = CreateBootcampUseCase(bootcamp_store)
    return DocumentResponse(data=await use_case.execute(bootcamp, current_user))


@router.put("/{bootcamp_id}", response_model=DocumentResponse)
async def update_bootcamp(
    bootcamp_id: int, bootcamp: BootcampUpdate, bootcamp_store: BootcampStoreDep, current_user: PublisherDep
):
    changes = bootcamp.model_dump(mode="json", exclude_unset=True)
    if changes.get("name"):
        changes["slug"] = slugify(changes["name"])

    use_case = UpdateDocumentUseCase(bootcamp_store, "bootcamp")
    return DocumentResponse(data=await use_case.execute(bootcamp_id, changes, current_user))


@router.delete("/{bootcamp_id}", response_model=DocumentResponse)
async def delete_bootcamp(bootcamp_id: int, bootcamp_store: BootcampStoreDep, current_user: PublisherDep):
    use_case = DeleteDocumentUseCase(bootcamp_store, "bootcamp")
    await use_case.execute(bootcamp_id, current_user)
    return DocumentResponse(data={})


@router.put("/{bootcamp_id}/photo", response_model=DocumentResponse)
async def upload_bootcamp_photo(
    bootcamp_id: int,
    file: Annotated[UploadFile, File()],
    bootcamp_store: BootcampStoreDep,
    settings: SettingsDep,
    current_user: PublisherDep,
):
    content = await file.read()
    use_case = UploadBootcampPhotoUseCase(bootcamp_store, settings.UPLOAD_DIR, settings.MAX_FILE_UPLOAD)
    bootcamp = await use_case.execute(bootcamp_id, file.filename, file.content_type, content, current_user)
    return DocumentResponse(data=bootcamp)
