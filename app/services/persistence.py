"""Persistence gateway - row-level access to the boxes and goods tables.

The gateway knows nothing about cascades or duplication. It hands out
transactions; everything done through one ``GatewayTransaction`` commits
together or not at all.
"""
import enum
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Iterable, List, Optional, Set
from uuid import UUID

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from app.database import Database
from app.errors import ConstraintViolationError, StoreUnavailableError
from app.models.box import BoxRow
from app.models.good import GoodRow

logger = logging.getLogger(__name__)


class EntityKind(str, enum.Enum):
    """Entity tables reachable through the gateway."""
    BOX = "box"
    GOOD = "good"


_MODELS = {
    EntityKind.BOX: BoxRow,
    EntityKind.GOOD: GoodRow,
}

# Only goods reference another table
_FOREIGN_KEYS = {
    EntityKind.GOOD: GoodRow.box_uid,
}

_ORDERING = {
    EntityKind.BOX: (BoxRow.name, BoxRow.uid),
    EntityKind.GOOD: (GoodRow.title, GoodRow.uid),
}


def _foreign_key(kind: EntityKind):
    try:
        return _FOREIGN_KEYS[kind]
    except KeyError:
        raise ValueError(f"{kind.value} rows have no foreign key") from None


class GatewayTransaction:
    """Row operations bound to a single session/transaction."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def insert(self, kind: EntityKind, rows: List[Dict[str, Any]]) -> int:
        if not rows:
            return 0
        await self._session.execute(insert(_MODELS[kind]), rows)
        return len(rows)

    async def fetch_all(self, kind: EntityKind, with_goods: bool = False) -> list:
        model = _MODELS[kind]
        stmt = select(model).order_by(*_ORDERING[kind])
        if with_goods:
            if kind is not EntityKind.BOX:
                raise ValueError("Only boxes can be loaded with goods")
            stmt = stmt.options(joinedload(BoxRow.goods))
        result = await self._session.execute(stmt)
        if with_goods:
            result = result.unique()
        return list(result.scalars().all())

    async def fetch_by_uid(self, kind: EntityKind, uid: UUID):
        model = _MODELS[kind]
        result = await self._session.execute(select(model).where(model.uid == uid))
        return result.scalar_one_or_none()

    async def fetch_by_foreign_key(self, kind: EntityKind, value: UUID) -> list:
        column = _foreign_key(kind)
        stmt = select(_MODELS[kind]).where(column == value).order_by(*_ORDERING[kind])
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def existing_uids(self, kind: EntityKind, uids: Iterable[UUID]) -> Set[UUID]:
        """Subset of ``uids`` that have a row."""
        wanted = set(uids)
        if not wanted:
            return set()
        model = _MODELS[kind]
        result = await self._session.execute(select(model.uid).where(model.uid.in_(wanted)))
        return set(result.scalars().all())

    async def update_by_uid(self, kind: EntityKind, uid: UUID, values: Dict[str, Any]) -> int:
        model = _MODELS[kind]
        result = await self._session.execute(
            update(model)
            .where(model.uid == uid)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def delete_by_uid(self, kind: EntityKind, uid: UUID) -> int:
        model = _MODELS[kind]
        result = await self._session.execute(
            delete(model).where(model.uid == uid).execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def delete_by_foreign_key(self, kind: EntityKind, value: UUID) -> int:
        column = _foreign_key(kind)
        result = await self._session.execute(
            delete(_MODELS[kind]).where(column == value).execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def delete_all(self, kind: EntityKind) -> int:
        result = await self._session.execute(
            delete(_MODELS[kind]).execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def count(self, kind: EntityKind) -> int:
        result = await self._session.execute(select(func.count()).select_from(_MODELS[kind]))
        return result.scalar_one()


class PersistenceGateway:
    """The only component that opens sessions against the store."""

    def __init__(self, database: Database):
        self._database = database

    @property
    def shares_connection(self) -> bool:
        return self._database.shares_connection

    @asynccontextmanager
    async def transaction(self, operation: Optional[str] = None) -> AsyncIterator[GatewayTransaction]:
        """Open a write transaction; commit on exit, roll back on error."""
        async with self._session(operation) as tx:
            yield tx

    @asynccontextmanager
    async def snapshot(self, operation: Optional[str] = None) -> AsyncIterator[GatewayTransaction]:
        """Open a read transaction over committed state."""
        async with self._session(operation) as tx:
            yield tx

    @asynccontextmanager
    async def _session(self, operation: Optional[str]) -> AsyncIterator[GatewayTransaction]:
        session = self._database.session_factory()
        try:
            async with session.begin():
                yield GatewayTransaction(session)
        except IntegrityError as e:
            logger.error("Integrity error during %s: %s", operation, e.orig)
            raise ConstraintViolationError("Integrity constraint violated", operation) from e
        except SQLAlchemyError as e:
            logger.error("Store error during %s: %s", operation, e)
            raise StoreUnavailableError("Backing store unavailable", operation) from e
        finally:
            await session.close()
