"""Box schemas."""
from typing import List
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from app.schemas.good import Good


class Box(BaseModel):
    """A container of goods.

    ``items`` is only populated by reads that join goods; plain reads
    leave it empty.
    """
    uid: UUID = Field(default_factory=uuid4)
    name: str
    items: List[Good] = []


class BoxCreate(BaseModel):
    """Schema for creating a box."""
    uid: UUID = Field(default_factory=uuid4)
    name: str


class BoxUpdate(BaseModel):
    """Schema for updating a box."""
    name: str
