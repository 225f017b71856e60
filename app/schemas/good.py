"""Good schemas."""
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class Good(BaseModel):
    """An item, optionally assigned to one box."""
    uid: UUID = Field(default_factory=uuid4)
    title: str
    box_uid: Optional[UUID] = None


class GoodCreate(BaseModel):
    """Schema for creating a good."""
    uid: UUID = Field(default_factory=uuid4)
    title: str
    box_uid: Optional[UUID] = None


class Quantity(BaseModel):
    """Row count response."""
    count: int
