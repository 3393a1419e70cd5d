"""
Base repository - generic data access plus translation of driver failures into storage errors.
Challenge: Consistent data access, testability via mocks, one place that knows SQLAlchemy exceptions.
"""

from typing import Generic, TypeVar

from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession

from houseback.core.errors import ConflictError, StorageError, StorageTimeout, StorageUnavailable
from houseback.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)

# PostgreSQL query_canceled, raised when statement_timeout fires
QUERY_CANCELED = "57014"


def _sqlstate(exc: DBAPIError) -> str | None:
    orig = exc.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def storage_error(exc: Exception) -> StorageError:
    """Map a driver/pool exception to StorageTimeout or StorageUnavailable."""
    if isinstance(exc, (PoolTimeoutError, TimeoutError)):
        return StorageTimeout("database operation timed out")
    if isinstance(exc, DBAPIError) and _sqlstate(exc) == QUERY_CANCELED:
        return StorageTimeout("database statement timed out")
    return StorageUnavailable("database unavailable")


class BaseRepository(Generic[ModelType]):
    """Generic async repository. Subclasses define model-specific methods."""

    def __init__(self, session: AsyncSession, model: type[ModelType]):
        self.session = session
        self.model = model

    async def add(self, entity: ModelType) -> ModelType:
        """Insert one row and read back server defaults. Does not commit.

        A unique violation rolls the session back and raises ConflictError so the
        request session stays usable; other driver failures become StorageError.
        """
        self.session.add(entity)
        try:
            await self.session.flush()
            await self.session.refresh(entity)
        except IntegrityError as exc:
            await self.session.rollback()
            raise ConflictError(f"{self.model.__tablename__} row violates a unique constraint") from exc
        except (PoolTimeoutError, TimeoutError, DBAPIError) as exc:
            await self.session.rollback()
            raise storage_error(exc) from exc
        return entity

    async def commit(self) -> None:
        """Make pending writes durable. Failures roll back and surface as domain errors."""
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            raise ConflictError(f"{self.model.__tablename__} row violates a unique constraint") from exc
        except (PoolTimeoutError, TimeoutError, DBAPIError) as exc:
            await self.session.rollback()
            raise storage_error(exc) from exc
