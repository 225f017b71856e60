"""Row <-> value type conversion."""
from uuid import uuid4

from app.models.box import BoxRow
from app.models.good import GoodRow
from app.schemas.box import Box
from app.schemas.good import Good
from app.services import entity_mapper


def test_good_round_trip():
    good = Good(title="Lamp", box_uid=uuid4())
    row = GoodRow(**entity_mapper.good_to_values(good))
    assert entity_mapper.good_from_row(row) == good


def test_box_values_skip_items():
    box = Box(name="Crate", items=[Good(title="Lamp")])
    assert entity_mapper.box_to_values(box) == {"uid": box.uid, "name": "Crate"}


def test_box_from_row_without_goods():
    row = BoxRow(uid=uuid4(), name="Crate")
    box = entity_mapper.box_from_row(row)
    assert box.uid == row.uid
    assert box.items == []


def test_box_from_row_with_goods():
    box_uid = uuid4()
    row = BoxRow(uid=box_uid, name="Crate")
    row.goods = [GoodRow(uid=uuid4(), title="Lamp", box_uid=box_uid)]

    box = entity_mapper.box_from_row(row, with_goods=True)

    assert [good.title for good in box.items] == ["Lamp"]
    assert box.items[0].box_uid == box_uid
