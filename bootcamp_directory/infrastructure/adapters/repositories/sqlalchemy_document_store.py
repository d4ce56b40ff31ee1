import operator
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Type

from sqlalchemy import func, inspect, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from bootcamp_directory.domain.exceptions import ConflictError, InvalidQueryError, RepositoryError, ValidationError
from bootcamp_directory.domain.models.query import (
    Comparison,
    ComparisonOperator,
    FieldFilter,
    Populate,
    QuerySpec,
    SortKey,
)
from bootcamp_directory.domain.ports.repositories.document_store import Document, DocumentStore
from bootcamp_directory.infrastructure.logging.logger import Logger

logger = Logger.get_logger(__name__)

PRIVATE_COLUMNS = frozenset({"password"})

_OPERATORS = {
    ComparisonOperator.GT: operator.gt,
    ComparisonOperator.GTE: operator.ge,
    ComparisonOperator.LT: operator.lt,
    ComparisonOperator.LTE: operator.le,
}

_FILTERABLE_TYPES = (bool, int, float, Decimal, str, datetime, date)

_TRUE_VALUES = {"true", "1", "yes"}
_FALSE_VALUES = {"false", "0", "no"}

# SQLSTATE for unique_violation
_UNIQUE_VIOLATION = "23505"


def _parse_bool(value: str) -> bool:
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(value)


def _is_unique_violation(error: IntegrityError) -> bool:
    sqlstate = getattr(error.orig, "sqlstate", None)
    if sqlstate is not None:
        return sqlstate == _UNIQUE_VIOLATION
    # sqlite reports "UNIQUE constraint failed" without a SQLSTATE
    return "unique" in str(error.orig).lower()


def _visible_columns(model: Type[Any]) -> List[str]:
    return [attr.key for attr in inspect(model).column_attrs if attr.key not in PRIVATE_COLUMNS]


class SQLAlchemyDocumentStore(DocumentStore):
    """Exposes one mapped table as a collection of plain-dict documents."""

    def __init__(self, session: AsyncSession, model: Type[Any]):
        self.session = session
        self.model = model
        self._columns = _visible_columns(model)
        self._writable = {attr.key for attr in inspect(model).column_attrs} - {"id", "created_at"}
        self._relationships = {rel.key for rel in inspect(model).relationships}

    @property
    def name(self) -> str:
        return self.model.__tablename__

    async def find(self, spec: QuerySpec) -> List[Document]:
        fields = self._projection(spec.projection)
        stmt = (
            select(self.model)
            .where(*self._conditions(spec.filters))
            .order_by(*self._ordering(spec.sort))
            .offset(spec.offset)
            .limit(spec.limit)
        )
        if spec.populate is not None:
            stmt = stmt.options(self._loader(spec.populate))

        logger.debug(f"find on {self.name}: {spec}")
        instances = (await self.session.scalars(stmt)).all()
        return [self._to_document(instance, fields, spec.populate) for instance in instances]

    async def count(self, filters: Sequence[FieldFilter] = ()) -> int:
        stmt = select(func.count()).select_from(self.model).where(*self._conditions(filters))
        return await self.session.scalar(stmt) or 0

    async def average(self, field: str, filters: Sequence[FieldFilter] = ()) -> Optional[float]:
        stmt = select(func.avg(self._column(field))).where(*self._conditions(filters))
        value = await self.session.scalar(stmt)
        return float(value) if value is not None else None

    async def get_by_id(self, document_id: int, populate: Optional[Populate] = None) -> Optional[Document]:
        stmt = select(self.model).where(self.model.id == document_id)
        if populate is not None:
            stmt = stmt.options(self._loader(populate))
        instance = await self.session.scalar(stmt)
        return self._to_document(instance, self._columns, populate) if instance else None

    async def create(self, data: Document) -> Document:
        self._check_writable(data)
        instance = self.model(**data)
        self.session.add(instance)
        await self._commit()
        await self.session.refresh(instance)
        return self._to_document(instance, self._columns)

    async def update(self, document_id: int, changes: Document) -> Optional[Document]:
        self._check_writable(changes)
        instance = await self.session.get(self.model, document_id)
        if instance is None:
            return None

        for key, value in changes.items():
            setattr(instance, key, value)

        await self._commit()
        await self.session.refresh(instance)
        return self._to_document(instance, self._columns)

    async def delete(self, document_id: int) -> bool:
        # cascades need the child collections loaded before the delete is flushed
        loaders = [selectinload(getattr(self.model, key)) for key in self._relationships]
        stmt = select(self.model).where(self.model.id == document_id).options(*loaders)
        instance = await self.session.scalar(stmt)
        if instance is None:
            return False

        await self.session.delete(instance)
        await self._commit()
        return True

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning(f"Integrity error on {self.name}: {e.orig}")
            if _is_unique_violation(e):
                raise ConflictError("Duplicate field value entered") from e
            raise ValidationError(f"Invalid value for {self.name}") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise RepositoryError(f"Failed to write to {self.name}") from e

    def _check_writable(self, data: Document) -> None:
        unknown = set(data) - self._writable
        if unknown:
            raise InvalidQueryError(f"Unknown field(s) for {self.name}: {', '.join(sorted(unknown))}")

    def _column(self, field: str):
        if field not in self._columns:
            raise InvalidQueryError(f"Unknown field '{field}' on {self.name}")
        return getattr(self.model, field)

    def _conditions(self, filters: Sequence[FieldFilter]) -> list:
        conditions = []
        for field_filter in filters:
            column = self._column(field_filter.field)
            condition = field_filter.condition

            if not isinstance(condition, Comparison):
                conditions.append(column == self._coerce(field_filter.field, condition.value))
            elif condition.operator is ComparisonOperator.IN:
                values = [self._coerce(field_filter.field, value) for value in condition.value]
                conditions.append(column.in_(values))
            else:
                compare = _OPERATORS[condition.operator]
                conditions.append(compare(column, self._coerce(field_filter.field, condition.value)))
        return conditions

    def _coerce(self, field: str, value: Any) -> Any:
        column_type = self._column(field).type
        try:
            python_type = column_type.python_type
        except NotImplementedError:
            python_type = object

        if not issubclass(python_type, _FILTERABLE_TYPES):
            raise InvalidQueryError(f"Field '{field}' cannot be filtered")
        if not isinstance(value, str) or python_type is str:
            return value

        try:
            if python_type is bool:
                return _parse_bool(value)
            if python_type is datetime:
                return datetime.fromisoformat(value)
            if python_type is date:
                return date.fromisoformat(value)
            return python_type(value)
        except (ValueError, ArithmeticError):
            raise InvalidQueryError(f"Invalid value '{value}' for field '{field}'")

    def _ordering(self, sort: Sequence[SortKey]) -> list:
        ordering = []
        for key in sort:
            column = self._column(key.field)
            ordering.append(column.desc() if key.descending else column.asc())
        ordering.append(self.model.id.asc())
        return ordering

    def _projection(self, projection: Optional[Sequence[str]]) -> List[str]:
        if projection is None:
            return self._columns
        for field in projection:
            self._column(field)
        return list(dict.fromkeys(["id", *projection]))

    def _loader(self, populate: Populate):
        if populate.relation not in self._relationships:
            raise InvalidQueryError(f"Cannot populate '{populate.relation}' on {self.name}")
        return selectinload(getattr(self.model, populate.relation))

    def _to_document(self, instance: Any, fields: Sequence[str], populate: Optional[Populate] = None) -> Document:
        document: Dict[str, Any] = {name: getattr(instance, name) for name in fields}
        if populate is None:
            return document

        related = getattr(instance, populate.relation)
        if isinstance(related, list):
            document[populate.relation] = [self._related_document(item, populate.fields) for item in related]
        else:
            document[populate.relation] = (
                self._related_document(related, populate.fields) if related is not None else None
            )
        return document

    @staticmethod
    def _related_document(instance: Any, fields: Optional[Sequence[str]]) -> Document:
        columns = _visible_columns(type(instance))
        if fields:
            columns = list(dict.fromkeys(["id", *(field for field in fields if field in columns)]))
        return {name: getattr(instance, name) for name in columns}
