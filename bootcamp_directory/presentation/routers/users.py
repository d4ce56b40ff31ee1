from http import HTTPStatus
from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends

from bootcamp_directory.applications.interfaces.dtos.envelope import DocumentResponse, ResultEnvelope
from bootcamp_directory.applications.interfaces.dtos.user import AdminUserSchema, UserPublic, UserResponse, UserUpdate
from bootcamp_directory.applications.use_cases.documents.delete_document import DeleteDocumentUseCase
from bootcamp_directory.applications.use_cases.documents.get_document import GetDocumentUseCase
from bootcamp_directory.applications.use_cases.documents.list_documents import ListDocumentsUseCase
from bootcamp_directory.applications.use_cases.documents.update_document import UpdateDocumentUseCase
from bootcamp_directory.applications.use_cases.user.create_user import CreateUserUseCase
from bootcamp_directory.domain.models.user import Role
from bootcamp_directory.domain.ports.repositories.document_store import DocumentStore
from bootcamp_directory.domain.ports.repositories.user_repository import UserRepository
from bootcamp_directory.domain.ports.services.auth_service import AuthService
from bootcamp_directory.domain.services.query_translator import QueryTranslator
from bootcamp_directory.infrastructure.config.dependencies import (
    get_auth_service,
    get_query_translator,
    get_user_repository,
    get_user_store,
    require_roles,
)
from bootcamp_directory.presentation.query_params import advanced_query

router = APIRouter(prefix="/users", tags=["users"], dependencies=[Depends(require_roles(Role.ADMIN))])

UserStoreDep = Annotated[DocumentStore, Depends(get_user_store)]
UserRepositoryDep = Annotated[UserRepository, Depends(get_user_repository)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
TranslatorDep = Annotated[QueryTranslator, Depends(get_query_translator)]
QueryDep = Annotated[Dict[str, Any], Depends(advanced_query)]


@router.get("/", response_model=ResultEnvelope)
async def read_users(params: QueryDep, user_store: UserStoreDep, translator: TranslatorDep):
    use_case = ListDocumentsUseCase(user_store, translator)
    return await use_case.execute(params)


@router.get("/{user_id}", response_model=DocumentResponse)
async def read_user(user_id: int, user_store: UserStoreDep):
    use_case = GetDocumentUseCase(user_store, "user")
    return DocumentResponse(data=await use_case.execute(user_id))


@router.post("/", status_code=HTTPStatus.CREATED, response_model=UserResponse)
async def create_user(user: AdminUserSchema, user_repository: UserRepositoryDep, auth_service: AuthServiceDep):
    use_case = CreateUserUseCase(user_repository, auth_service)
    created = await use_case.execute(user)
    return UserResponse(data=UserPublic.model_validate(created, from_attributes=True))


@router.put("/{user_id}", response_model=DocumentResponse)
async def update_user(user_id: int, user: UserUpdate, user_store: UserStoreDep):
    use_case = UpdateDocumentUseCase(user_store, "user")
    changes = user.model_dump(mode="json", exclude_unset=True)
    return DocumentResponse(data=await use_case.execute(user_id, changes))


@router.delete("/{user_id}", response_model=DocumentResponse)
async def delete_user(user_id: int, user_store: UserStoreDep):
    use_case = DeleteDocumentUseCase(user_store, "user")
    await use_case.execute(user_id)
    return DocumentResponse(data={})
