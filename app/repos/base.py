from typing import Any, Generic, TypeVar, cast

from fastapi_async_sqlalchemy import db
from sqlalchemy import ScalarResult, delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSessionTransaction
from sqlalchemy.sql.elements import ColumnElement
from sqlalchemy.sql.selectable import Select

from app.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepo(Generic[ModelType]):
    """Base repository using the request-scoped fastapi_async_sqlalchemy session."""

    def __init__(self, model: type[ModelType]) -> None:
        self._model = model
        self._db = db

    @property
    def model(self) -> type[ModelType]:
        return self._model

    @property
    def base_stmt(self) -> Select[tuple[ModelType]]:
        """Base select statement for the model."""
        return select(self._model)

    async def get(self, id: Any) -> ModelType | None:
        """Get a model by ID."""
        return cast(ModelType | None, await self._db.session.get(self._model, id))

    async def execute(self, query: Select[tuple[ModelType]]) -> ScalarResult[ModelType]:
        """Execute a query and return scalar results."""
        result = await self._db.session.execute(query)
        return cast(ScalarResult[ModelType], result.scalars())

    async def add(self, model: ModelType, commit: bool = False) -> None:
        """Add a model instance."""
        self._db.session.add(model)
        if commit:
            await self.commit()
        else:
            await self.flush()

    async def update(self, model: ModelType, values: dict[str, Any]) -> ModelType:
        """Set attributes on a model instance and flush."""
        for key, value in values.items():
            setattr(model, key, value)
        await self.flush()
        return model

    async def insert_ignore(self, values: dict[str, Any], conflict_columns: list[str]) -> None:
        """INSERT ... ON CONFLICT DO NOTHING on the given unique columns."""
        stmt = insert(self._model).values(**values).on_conflict_do_nothing(index_elements=conflict_columns)
        await self._db.session.execute(stmt)
        await self.flush()

    async def delete(self, model: ModelType) -> None:
        """Delete a model instance."""
        await self._db.session.delete(model)
        await self.flush()

    async def delete_where(self, *criteria: ColumnElement[bool]) -> int:
        """Delete every row matching the criteria and return how many went away."""
        result = await self._db.session.execute(delete(self._model).where(*criteria))
        return int(getattr(result, "rowcount", 0) or 0)

    def savepoint(self) -> AsyncSessionTransaction:
        """Open a nested transaction; use as ``async with repo.savepoint():``."""
        return self._db.session.begin_nested()

    async def commit(self) -> None:
        """Commit the current transaction."""
        await self._db.session.commit()

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        await self._db.session.rollback()

    async def flush(self) -> None:
        """Flush the current session."""
        await self._db.session.flush()
