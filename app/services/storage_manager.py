"""Storage manager - the public async contract over boxes and goods.

Writes are serialized through one lock and each one runs inside a single
gateway transaction, so a cascade delete or a duplication with goods is
committed as one unit. Reads never take the lock on a store with
per-session connections; they see the state before or after a write,
never in between. On a single shared connection (in-memory SQLite) an
open write is visible to every session, so reads queue behind writes.
"""
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional, Sequence
from uuid import UUID

from app.errors import ConstraintViolationError, NotFoundError
from app.schemas.box import Box
from app.schemas.good import Good
from app.services.entity_mapper import (
    box_from_row,
    box_to_values,
    boxes_from_rows,
    good_from_row,
    good_to_values,
    goods_from_rows,
)
from app.services.persistence import EntityKind, GatewayTransaction, PersistenceGateway

logger = logging.getLogger(__name__)

# Appended on every duplication; a copy of a copy gets it twice
COPY_SUFFIX = " (copy)"


def copy_name(name: str) -> str:
    return f"{name}{COPY_SUFFIX}"


class StorageManager:
    """Add, fetch, update, remove and duplicate boxes and their goods."""

    def __init__(self, gateway: PersistenceGateway):
        self._gateway = gateway
        self._write_lock = asyncio.Lock()

    @asynccontextmanager
    async def _write(self, operation: str) -> AsyncIterator[GatewayTransaction]:
        # asyncio.Lock wakes waiters in FIFO order
        async with self._write_lock:
            async with self._gateway.transaction(operation) as tx:
                yield tx

    @asynccontextmanager
    async def _read(self, operation: str) -> AsyncIterator[GatewayTransaction]:
        if self._gateway.shares_connection:
            async with self._write_lock:
                async with self._gateway.snapshot(operation) as tx:
                    yield tx
        else:
            async with self._gateway.snapshot(operation) as tx:
                yield tx

    # ------------------------------------------------------------------ add

    async def add_boxes(self, boxes: Sequence[Box]) -> None:
        async with self._write("add_boxes") as tx:
            await tx.insert(EntityKind.BOX, [box_to_values(box) for box in boxes])
        logger.info("Added %d boxes", len(boxes))

    async def add_goods(self, goods: Sequence[Good]) -> None:
        """Insert goods; every ``box_uid`` that is set must name a live box."""
        async with self._write("add_goods") as tx:
            referenced = {good.box_uid for good in goods if good.box_uid is not None}
            missing = referenced - await tx.existing_uids(EntityKind.BOX, referenced)
            if missing:
                raise ConstraintViolationError(
                    "Goods reference unknown boxes: " + ", ".join(sorted(str(uid) for uid in missing)),
                    "add_goods",
                )
            await tx.insert(EntityKind.GOOD, [good_to_values(good) for good in goods])
        logger.info("Added %d goods", len(goods))

    # ---------------------------------------------------------------- fetch

    async def fetch_boxes(self, uid: Optional[UUID] = None) -> List[Box]:
        """All boxes, or the zero-or-one box with ``uid``. Items are not loaded."""
        async with self._read("fetch_boxes") as tx:
            if uid is None:
                return boxes_from_rows(await tx.fetch_all(EntityKind.BOX))
            row = await tx.fetch_by_uid(EntityKind.BOX, uid)
        if row is None:
            logger.debug("Box %s not found", uid)
            return []
        return [box_from_row(row)]

    async def fetch_goods(self, uid: Optional[UUID] = None, box_uid: Optional[UUID] = None) -> List[Good]:
        """All goods, the good with ``uid``, or the goods of box ``box_uid``.

        When both are given the good is returned only if it belongs to
        that box.
        """
        async with self._read("fetch_goods") as tx:
            if uid is not None:
                row = await tx.fetch_by_uid(EntityKind.GOOD, uid)
                rows = [row] if row is not None else []
            elif box_uid is not None:
                rows = await tx.fetch_by_foreign_key(EntityKind.GOOD, box_uid)
            else:
                rows = await tx.fetch_all(EntityKind.GOOD)
        goods = goods_from_rows(rows)
        if uid is not None and box_uid is not None:
            goods = [good for good in goods if good.box_uid == box_uid]
        return goods

    async def fetch_boxes_with_goods(self) -> List[Box]:
        async with self._read("fetch_boxes_with_goods") as tx:
            rows = await tx.fetch_all(EntityKind.BOX, with_goods=True)
            return boxes_from_rows(rows, with_goods=True)

    async def fetch_boxes_quantity(self) -> int:
        async with self._read("fetch_boxes_quantity") as tx:
            return await tx.count(EntityKind.BOX)

    async def fetch_goods_quantity(self) -> int:
        async with self._read("fetch_goods_quantity") as tx:
            return await tx.count(EntityKind.GOOD)

    # --------------------------------------------------------------- remove

    async def remove_box(self, uid: UUID) -> None:
        """Delete a box and every good inside it. Missing uids are a no-op."""
        async with self._write("remove_box") as tx:
            goods_removed = await tx.delete_by_foreign_key(EntityKind.GOOD, uid)
            boxes_removed = await tx.delete_by_uid(EntityKind.BOX, uid)
        if boxes_removed:
            logger.info("Removed box %s with %d goods", uid, goods_removed)
        else:
            logger.debug("Box %s already absent", uid)

    async def remove_good(self, uid: UUID) -> None:
        async with self._write("remove_good") as tx:
            removed = await tx.delete_by_uid(EntityKind.GOOD, uid)
        if removed:
            logger.info("Removed good %s", uid)
        else:
            logger.debug("Good %s already absent", uid)

    async def remove_all_boxes(self) -> None:
        """Clear both tables, goods first."""
        async with self._write("remove_all_boxes") as tx:
            goods_removed = await tx.delete_all(EntityKind.GOOD)
            boxes_removed = await tx.delete_all(EntityKind.BOX)
        logger.info("Removed all boxes (%d) and goods (%d)", boxes_removed, goods_removed)

    # --------------------------------------------------------------- update

    async def update_box(self, box: Box) -> None:
        """Overwrite the stored name of ``box.uid``.

        Raises NotFoundError when no such box exists.
        """
        async with self._write("update_box") as tx:
            updated = await tx.update_by_uid(EntityKind.BOX, box.uid, {"name": box.name})
            if not updated:
                raise NotFoundError(f"Box {box.uid} not found", "update_box")
        logger.info("Updated box %s", box.uid)

    # ------------------------------------------------------------ duplicate

    async def duplicate_box(self, uid: UUID, with_goods: bool) -> Box:
        """Copy a box under a new uid, optionally copying its goods too.

        Returns the new box with ``items`` holding the copied goods.
        """
        async with self._write("duplicate_box") as tx:
            row = await tx.fetch_by_uid(EntityKind.BOX, uid)
            if row is None:
                raise NotFoundError(f"Box {uid} not found", "duplicate_box")
            copy = Box(name=copy_name(row.name))
            await tx.insert(EntityKind.BOX, [box_to_values(copy)])
            if with_goods:
                originals = goods_from_rows(await tx.fetch_by_foreign_key(EntityKind.GOOD, uid))
                copy.items = [Good(title=copy_name(good.title), box_uid=copy.uid) for good in originals]
                await tx.insert(EntityKind.GOOD, [good_to_values(good) for good in copy.items])
        logger.info("Duplicated box %s as %s with %d goods", uid, copy.uid, len(copy.items))
        return copy

    async def duplicate_good(self, uid: UUID) -> Good:
        """Copy a good under a new uid into the same box."""
        async with self._write("duplicate_good") as tx:
            row = await tx.fetch_by_uid(EntityKind.GOOD, uid)
            if row is None:
                raise NotFoundError(f"Good {uid} not found", "duplicate_good")
            original = good_from_row(row)
            copy = Good(title=copy_name(original.title), box_uid=original.box_uid)
            await tx.insert(EntityKind.GOOD, [good_to_values(copy)])
        logger.info("Duplicated good %s as %s", uid, copy.uid)
        return copy
