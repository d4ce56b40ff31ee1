from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bootcamp_directory.domain.exceptions import ConflictError, NotFoundError
from bootcamp_directory.domain.models.user import Role
from bootcamp_directory.domain.models.user import User as DomainUser
from bootcamp_directory.domain.ports.repositories.user_repository import UserRepository
from bootcamp_directory.infrastructure.persistence.models import User as SQLUser


class SQLAlchemyUserRepository(UserRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    def _to_domain(self, sql_user: SQLUser) -> DomainUser:
        return DomainUser(
            id=sql_user.id,
            name=sql_user.name,
            email=sql_user.email,
            password_hash=sql_user.password,
            role=Role(sql_user.role),
            created_at=sql_user.created_at,
        )

    async def create(self, user: DomainUser) -> DomainUser:
        sql_user = SQLUser(
            name=user.name,
            email=user.email,
            password=user.password_hash,
            role=user.role.value,
        )
        self.session.add(sql_user)
        await self._commit()
        await self.session.refresh(sql_user)
        return self._to_domain(sql_user)

    async def get_by_id(self, user_id: int) -> Optional[DomainUser]:
        sql_user = await self.session.scalar(select(SQLUser).where(SQLUser.id == user_id))
        return self._to_domain(sql_user) if sql_user else None

    async def get_by_email(self, email: str) -> Optional[DomainUser]:
        sql_user = await self.session.scalar(select(SQLUser).where(SQLUser.email == email))
        return self._to_domain(sql_user) if sql_user else None

    async def update(self, user: DomainUser) -> DomainUser:
        sql_user = await self.session.scalar(select(SQLUser).where(SQLUser.id == user.id))
        if not sql_user:
            raise NotFoundError(f"No user with id of {user.id}")

        sql_user.name = user.name
        sql_user.email = user.email
        sql_user.password = user.password_hash
        sql_user.role = user.role.value

        await self._commit()
        await self.session.refresh(sql_user)
        return self._to_domain(sql_user)

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError("Duplicate field value entered") from e
