from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from bootcamp_directory.domain.exceptions import AuthenticationError, AuthorizationError
from bootcamp_directory.domain.models.user import Role, User
from bootcamp_directory.domain.ports.repositories.document_store import DocumentStore
from bootcamp_directory.domain.ports.repositories.user_repository import UserRepository
from bootcamp_directory.domain.ports.services.auth_service import AuthService
from bootcamp_directory.domain.services.query_translator import QueryTranslator
from bootcamp_directory.infrastructure.adapters.repositories.sqlalchemy_document_store import (
    SQLAlchemyDocumentStore,
)
from bootcamp_directory.infrastructure.adapters.repositories.sqlalchemy_user_repository import (
    SQLAlchemyUserRepository,
)
from bootcamp_directory.infrastructure.adapters.services.jwt_auth_service import JWTAuthService
from bootcamp_directory.infrastructure.config.settings import QuerySettings, Settings
from bootcamp_directory.infrastructure.persistence import models
from bootcamp_directory.infrastructure.persistence.database import get_session

TOKEN_COOKIE = "token"

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/token", auto_error=False)


def get_settings() -> Settings:
    return Settings()


def get_query_settings() -> QuerySettings:
    return QuerySettings()


def get_query_translator(query_settings: Annotated[QuerySettings, Depends(get_query_settings)]) -> QueryTranslator:
    return QueryTranslator(
        default_limit=query_settings.default_limit,
        max_limit=query_settings.max_limit,
        default_sort=query_settings.default_sort,
    )


def get_bootcamp_store(session: Annotated[AsyncSession, Depends(get_session)]) -> DocumentStore:
    return SQLAlchemyDocumentStore(session, models.Bootcamp)


def get_course_store(session: Annotated[AsyncSession, Depends(get_session)]) -> DocumentStore:
    return SQLAlchemyDocumentStore(session, models.Course)


def get_review_store(session: Annotated[AsyncSession, Depends(get_session)]) -> DocumentStore:
    return SQLAlchemyDocumentStore(session, models.Review)


def get_user_store(session: Annotated[AsyncSession, Depends(get_session)]) -> DocumentStore:
    return SQLAlchemyDocumentStore(session, models.User)


def get_user_repository(session: Annotated[AsyncSession, Depends(get_session)]) -> UserRepository:
    return SQLAlchemyUserRepository(session)


def get_auth_service(
    user_repository: Annotated[UserRepository, Depends(get_user_repository)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AuthService:
    return JWTAuthService(user_repository, settings)


async def get_current_user(
    request: Request,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    bearer_token: Annotated[Optional[str], Depends(oauth2_scheme)] = None,
) -> User:
    token = bearer_token or request.cookies.get(TOKEN_COOKIE)
    if not token:
        raise AuthenticationError("Not authorized to access this route")

    user = await auth_service.get_current_user(token)
    if user is None:
        raise AuthenticationError("Not authorized to access this route")
    return user


def require_roles(*roles: Role):
    async def dependency(user: Annotated[User, Depends(get_current_user)]) -> User:
        if user.role not in roles:
            raise AuthorizationError(f"User role {user.role.value} is not authorized to access this route")
        return user

    return dependency
