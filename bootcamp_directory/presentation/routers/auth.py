from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, Depends, Response
from fastapi.security import OAuth2PasswordRequestForm

from bootcamp_directory.applications.interfaces.dtos.auth import LoginSchema, Token
from bootcamp_directory.applications.interfaces.dtos.envelope import DocumentResponse
from bootcamp_directory.applications.interfaces.dtos.user import (
    UpdateDetails,
    UpdatePassword,
    UserPublic,
    UserResponse,
    UserSchema,
)
from bootcamp_directory.applications.use_cases.auth.login_user import LoginUserUseCase
from bootcamp_directory.applications.use_cases.auth.update_details import UpdateDetailsUseCase
from bootcamp_directory.applications.use_cases.auth.update_password import UpdatePasswordUseCase
from bootcamp_directory.applications.use_cases.user.create_user import CreateUserUseCase
from bootcamp_directory.domain.models.user import User
from bootcamp_directory.domain.ports.repositories.user_repository import UserRepository
from bootcamp_directory.domain.ports.services.auth_service import AuthService
from bootcamp_directory.infrastructure.config.dependencies import (
    TOKEN_COOKIE,
    get_auth_service,
    get_current_user,
    get_settings,
    get_user_repository,
)
from bootcamp_directory.infrastructure.config.settings import Settings

router = APIRouter(prefix="/auth", tags=["auth"])

OAuth2Form = Annotated[OAuth2PasswordRequestForm, Depends()]
UserRepositoryDep = Annotated[UserRepository, Depends(get_user_repository)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
CurrentUserDep = Annotated[User, Depends(get_current_user)]
SettingsDep = Annotated[Settings, Depends(get_settings)]


def send_token(response: Response, token: str, settings: Settings) -> Token:
    response.set_cookie(
        TOKEN_COOKIE,
        token,
        max_age=settings.COOKIE_EXPIRE_DAYS * 24 * 60 * 60,
        httponly=True,
        secure=settings.ENVIRONMENT == "production",
    )
    return Token(access_token=token)


@router.post("/register", status_code=HTTPStatus.CREATED, response_model=Token)
async def register(
    user: UserSchema,
    response: Response,
    user_repository: UserRepositoryDep,
    auth_service: AuthServiceDep,
    settings: SettingsDep,
):
    created = await CreateUserUseCase(user_repository, auth_service).execute(user)
    return send_token(response, auth_service.create_access_token(created), settings)


@router.post("/login", response_model=Token)
async def login(
    credentials: LoginSchema,
    response: Response,
    user_repository: UserRepositoryDep,
    auth_service: AuthServiceDep,
    settings: SettingsDep,
):
    use_case = LoginUserUseCase(user_repository, auth_service)
    token = await use_case.execute(credentials.email, credentials.password)
    return send_token(response, token, settings)


@router.post("/token", response_model=Token)
async def login_for_access_token(form_data: OAuth2Form, user_repository: UserRepositoryDep, auth_service: AuthServiceDep):
    use_case = LoginUserUseCase(user_repository, auth_service)
    return Token(access_token=await use_case.execute(form_data.username, form_data.password))


@router.get("/me", response_model=UserResponse)
async def read_me(current_user: CurrentUserDep):
    return UserResponse(data=UserPublic.model_validate(current_user, from_attributes=True))


@router.put("/updatedetails", response_model=UserResponse)
async def update_details(details: UpdateDetails, current_user: CurrentUserDep, user_repository: UserRepositoryDep):
    updated = await UpdateDetailsUseCase(user_repository).execute(current_user, details)
    return UserResponse(data=UserPublic.model_validate(updated, from_attributes=True))


@router.put("/updatepassword", response_model=Token)
async def update_password(
    passwords: UpdatePassword,
    response: Response,
    current_user: CurrentUserDep,
    user_repository: UserRepositoryDep,
    auth_service: AuthServiceDep,
    settings: SettingsDep,
):
    token = await UpdatePasswordUseCase(user_repository, auth_service).execute(current_user, passwords)
    return send_token(response, token, settings)


@router.get("/logout", response_model=DocumentResponse)
async def logout(response: Response, current_user: CurrentUserDep):
    response.delete_cookie(TOKEN_COOKIE)
    return DocumentResponse(data={})
