"""PersistenceGateway row operations and error mapping."""
from uuid import uuid4

import pytest

from app.database import Database
from app.errors import ConstraintViolationError, StoreUnavailableError
from app.services.persistence import EntityKind, PersistenceGateway
from app.services.storage_manager import StorageManager


@pytest.fixture
async def rows(gateway):
    box_uid = uuid4()
    good_uids = [uuid4(), uuid4()]
    async with gateway.transaction("seed") as tx:
        await tx.insert(EntityKind.BOX, [{"uid": box_uid, "name": "Crate"}])
        await tx.insert(
            EntityKind.GOOD,
            [{"uid": uid, "title": f"Nail {i}", "box_uid": box_uid} for i, uid in enumerate(good_uids)],
        )
    return box_uid, good_uids


async def test_insert_and_count(gateway, rows):
    async with gateway.snapshot() as tx:
        assert await tx.count(EntityKind.BOX) == 1
        assert await tx.count(EntityKind.GOOD) == 2


async def test_insert_nothing(gateway):
    async with gateway.transaction() as tx:
        assert await tx.insert(EntityKind.BOX, []) == 0


async def test_fetch_by_uid_and_foreign_key(gateway, rows):
    box_uid, good_uids = rows
    async with gateway.snapshot() as tx:
        box = await tx.fetch_by_uid(EntityKind.BOX, box_uid)
        goods = await tx.fetch_by_foreign_key(EntityKind.GOOD, box_uid)
        missing = await tx.fetch_by_uid(EntityKind.GOOD, uuid4())

    assert box.name == "Crate"
    assert [good.uid for good in goods] == good_uids
    assert missing is None


async def test_fetch_all_with_goods(gateway, rows):
    box_uid, good_uids = rows
    async with gateway.snapshot() as tx:
        boxes = await tx.fetch_all(EntityKind.BOX, with_goods=True)

    assert len(boxes) == 1
    assert [good.uid for good in boxes[0].goods] == good_uids


async def test_fetch_all_with_goods_only_for_boxes(gateway):
    async with gateway.snapshot() as tx:
        with pytest.raises(ValueError):
            await tx.fetch_all(EntityKind.GOOD, with_goods=True)


async def test_boxes_have_no_foreign_key(gateway):
    async with gateway.snapshot() as tx:
        with pytest.raises(ValueError):
            await tx.fetch_by_foreign_key(EntityKind.BOX, uuid4())


async def test_existing_uids(gateway, rows):
    box_uid, _ = rows
    other = uuid4()
    async with gateway.snapshot() as tx:
        assert await tx.existing_uids(EntityKind.BOX, [box_uid, other]) == {box_uid}
        assert await tx.existing_uids(EntityKind.BOX, []) == set()


async def test_update_and_delete_report_rowcounts(gateway, rows):
    box_uid, good_uids = rows
    async with gateway.transaction() as tx:
        assert await tx.update_by_uid(EntityKind.BOX, box_uid, {"name": "Bin"}) == 1
        assert await tx.update_by_uid(EntityKind.BOX, uuid4(), {"name": "Bin"}) == 0
        assert await tx.delete_by_uid(EntityKind.GOOD, good_uids[0]) == 1
        assert await tx.delete_by_uid(EntityKind.GOOD, good_uids[0]) == 0
        assert await tx.delete_by_foreign_key(EntityKind.GOOD, box_uid) == 1
        assert await tx.delete_all(EntityKind.BOX) == 1


async def test_failed_transaction_rolls_back(gateway, rows):
    box_uid, _ = rows
    with pytest.raises(RuntimeError):
        async with gateway.transaction() as tx:
            await tx.delete_by_foreign_key(EntityKind.GOOD, box_uid)
            raise RuntimeError("abort")

    async with gateway.snapshot() as tx:
        assert await tx.count(EntityKind.GOOD) == 2


async def test_dangling_foreign_key_is_a_constraint_violation(gateway):
    with pytest.raises(ConstraintViolationError) as exc_info:
        async with gateway.transaction("insert_good") as tx:
            await tx.insert(EntityKind.GOOD, [{"uid": uuid4(), "title": "Orphan", "box_uid": uuid4()}])
    assert exc_info.value.operation == "insert_good"


async def test_duplicate_uid_is_a_constraint_violation(gateway, rows):
    box_uid, _ = rows
    with pytest.raises(ConstraintViolationError):
        async with gateway.transaction() as tx:
            await tx.insert(EntityKind.BOX, [{"uid": box_uid, "name": "Again"}])


async def test_unreachable_store(tmp_path):
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'store.db'}")
    manager = StorageManager(PersistenceGateway(database))
    try:
        with pytest.raises(StoreUnavailableError) as exc_info:
            await manager.fetch_boxes()
        assert exc_info.value.operation == "fetch_boxes"
        with pytest.raises(StoreUnavailableError):
            await manager.remove_all_boxes()
        assert await database.health_check() is False
    finally:
        await database.dispose()


async def test_shared_connection_detection(database):
    assert database.shares_connection is False

    memory = Database("sqlite+aiosqlite://")
    try:
        assert memory.shares_connection is True
        assert PersistenceGateway(memory).shares_connection is True
    finally:
        await memory.dispose()
