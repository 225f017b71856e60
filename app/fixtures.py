"""Deterministic sample inventory for tests and local seeding."""
from uuid import UUID

from app.schemas.box import Box
from app.schemas.good import Good


class FakeInventoryConstants:
    """Three boxes and five goods; every good sits in the first box."""

    NEW_BOX_NAME = "Renamed box"

    boxes = [
        Box(uid=UUID("6f1c2a8e-0b7d-4c1e-9a55-000000000001"), name="Kitchen"),
        Box(uid=UUID("6f1c2a8e-0b7d-4c1e-9a55-000000000002"), name="Garage"),
        Box(uid=UUID("6f1c2a8e-0b7d-4c1e-9a55-000000000003"), name="Attic"),
    ]

    goods = [
        Good(uid=UUID("0d4b7e91-5c3a-4f6e-8b12-000000000001"), title="Cups", box_uid=boxes[0].uid),
        Good(uid=UUID("0d4b7e91-5c3a-4f6e-8b12-000000000002"), title="Plates", box_uid=boxes[0].uid),
        Good(uid=UUID("0d4b7e91-5c3a-4f6e-8b12-000000000003"), title="Forks", box_uid=boxes[0].uid),
        Good(uid=UUID("0d4b7e91-5c3a-4f6e-8b12-000000000004"), title="Kettle", box_uid=boxes[0].uid),
        Good(uid=UUID("0d4b7e91-5c3a-4f6e-8b12-000000000005"), title="Toaster", box_uid=boxes[0].uid),
    ]

    @classmethod
    def fresh_boxes(cls):
        """Copies safe to mutate in a test."""
        return [box.model_copy(deep=True) for box in cls.boxes]

    @classmethod
    def fresh_goods(cls):
        return [good.model_copy(deep=True) for good in cls.goods]
