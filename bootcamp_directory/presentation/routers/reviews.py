from http import HTTPStatus
from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends

from bootcamp_directory.applications.interfaces.dtos.envelope import DocumentResponse, ResultEnvelope
from bootcamp_directory.applications.interfaces.dtos.review import ReviewSchema, ReviewUpdate
from bootcamp_directory.applications.use_cases.bootcamp.refresh_bootcamp_average import (
    AVERAGE_RATING,
    RefreshBootcampAverageUseCase,
)
from bootcamp_directory.applications.use_cases.documents.delete_document import DeleteDocumentUseCase
from bootcamp_directory.applications.use_cases.documents.get_document import GetDocumentUseCase
from bootcamp_directory.applications.use_cases.documents.list_documents import ListDocumentsUseCase
from bootcamp_directory.applications.use_cases.documents.update_document import UpdateDocumentUseCase
from bootcamp_directory.applications.use_cases.review.add_review import AddReviewUseCase
from bootcamp_directory.domain.models.query import Populate
from bootcamp_directory.domain.models.user import Role, User
from bootcamp_directory.domain.ports.repositories.document_store import DocumentStore
from bootcamp_directory.domain.services.query_translator import QueryTranslator
from bootcamp_directory.infrastructure.config.dependencies import (
    get_bootcamp_store,
    get_query_translator,
    get_review_store,
    require_roles,
)
from bootcamp_directory.presentation.query_params import advanced_query

router = APIRouter(prefix="/reviews", tags=["reviews"])
bootcamp_reviews_router = APIRouter(prefix="/bootcamps/{bootcamp_id}/reviews", tags=["reviews"])

REVIEW_POPULATE = Populate("bootcamp", ("name", "description"))

ReviewStoreDep = Annotated[DocumentStore, Depends(get_review_store)]
BootcampStoreDep = Annotated[DocumentStore, Depends(get_bootcamp_store)]
TranslatorDep = Annotated[QueryTranslator, Depends(get_query_translator)]
QueryDep = Annotated[Dict[str, Any], Depends(advanced_query)]
ReviewerDep = Annotated[User, Depends(require_roles(Role.USER, Role.ADMIN))]


@router.get("/", response_model=ResultEnvelope)
async def read_reviews(params: QueryDep, review_store: ReviewStoreDep, translator: TranslatorDep):
    use_case = ListDocumentsUseCase(review_store, translator)
    return await use_case.execute(params, REVIEW_POPULATE)


@router.get("/{review_id}", response_model=DocumentResponse)
async def read_review(review_id: int, review_store: ReviewStoreDep):
    use_case = GetDocumentUseCase(review_store, "review")
    return DocumentResponse(data=await use_case.execute(review_id, REVIEW_POPULATE))


@router.put("/{review_id}", response_model=DocumentResponse)
async def update_review(
    review_id: int,
    review: ReviewUpdate,
    bootcamp_store: BootcampStoreDep,
    review_store: ReviewStoreDep,
    current_user: ReviewerDep,
):
    use_case = UpdateDocumentUseCase(review_store, "review")
    changes = review.model_dump(exclude_unset=True)
    updated = await use_case.execute(review_id, changes, current_user)
    if "rating" in changes:
        await RefreshBootcampAverageUseCase(bootcamp_store, review_store, AVERAGE_RATING).execute(updated["bootcamp_id"])
    return DocumentResponse(data=updated)


@router.delete("/{review_id}", response_model=DocumentResponse)
async def delete_review(
    review_id: int, bootcamp_store: BootcampStoreDep, review_store: ReviewStoreDep, current_user: ReviewerDep
):
    use_case = DeleteDocumentUseCase(review_store, "review")
    deleted = await use_case.execute(review_id, current_user)
    await RefreshBootcampAverageUseCase(bootcamp_store, review_store, AVERAGE_RATING).execute(deleted["bootcamp_id"])
    return DocumentResponse(data={})


@bootcamp_reviews_router.get("/", response_model=ResultEnvelope)
async def read_bootcamp_reviews(
    bootcamp_id: int, params: QueryDep, review_store: ReviewStoreDep, translator: TranslatorDep
):
    use_case = ListDocumentsUseCase(review_store, translator)
    return await use_case.execute({**params, "bootcamp_id": str(bootcamp_id)}, REVIEW_POPULATE)


@bootcamp_reviews_router.post("/", status_code=HTTPStatus.CREATED, response_model=DocumentResponse)
async def add_review(
    bootcamp_id: int,
    review: ReviewSchema,
    bootcamp_store: BootcampStoreDep,
    review_store: ReviewStoreDep,
    current_user: ReviewerDep,
):
    use_case = AddReviewUseCase(bootcamp_store, review_store)
    created = await use_case.execute(bootcamp_id, review, current_user)
    await RefreshBootcampAverageUseCase(bootcamp_store, review_store, AVERAGE_RATING).execute(bootcamp_id)
    return DocumentResponse(data=created)
