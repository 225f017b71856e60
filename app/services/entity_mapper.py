"""Conversion between ORM rows and the Box/Good value types.

Pure functions: no session access, no shared state. Rows passed to
``box_from_row(..., with_goods=True)`` must have ``goods`` loaded already.
"""
from typing import Any, Dict, Iterable, List

from app.models.box import BoxRow
from app.models.good import GoodRow
from app.schemas.box import Box
from app.schemas.good import Good


def good_from_row(row: GoodRow) -> Good:
    return Good(uid=row.uid, title=row.title, box_uid=row.box_uid)


def box_from_row(row: BoxRow, with_goods: bool = False) -> Box:
    items = [good_from_row(good) for good in row.goods] if with_goods else []
    return Box(uid=row.uid, name=row.name, items=items)


def good_to_values(good: Good) -> Dict[str, Any]:
    """Column values for inserting a good."""
    return {"uid": good.uid, "title": good.title, "box_uid": good.box_uid}


def box_to_values(box: Box) -> Dict[str, Any]:
    """Column values for inserting a box. ``items`` is never written."""
    return {"uid": box.uid, "name": box.name}


def goods_from_rows(rows: Iterable[GoodRow]) -> List[Good]:
    return [good_from_row(row) for row in rows]


def boxes_from_rows(rows: Iterable[BoxRow], with_goods: bool = False) -> List[Box]:
    return [box_from_row(row, with_goods=with_goods) for row in rows]
