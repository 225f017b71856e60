"""Good routes."""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status, Query

from app.dependencies import get_storage
from app.schemas.good import Good, GoodCreate, Quantity
from app.services.storage_manager import StorageManager

router = APIRouter(prefix="/goods", tags=["Goods"])


@router.get("/", response_model=List[Good])
async def list_goods(
    box_uid: Optional[UUID] = Query(None, description="Filter by box"),
    storage: StorageManager = Depends(get_storage),
):
    """List all goods, optionally filtered by box."""
    return await storage.fetch_goods(box_uid=box_uid)


@router.get("/count", response_model=Quantity)
async def count_goods(storage: StorageManager = Depends(get_storage)):
    """Number of stored goods."""
    return Quantity(count=await storage.fetch_goods_quantity())


@router.post("/", response_model=Good, status_code=status.HTTP_201_CREATED)
async def create_good(
    good_data: GoodCreate,
    storage: StorageManager = Depends(get_storage),
):
    """Create a new good, optionally inside a box."""
    good = Good(**good_data.model_dump())
    await storage.add_goods([good])
    return good


@router.get("/{uid}", response_model=Good)
async def get_good(
    uid: UUID,
    storage: StorageManager = Depends(get_storage),
):
    """Get a specific good."""
    goods = await storage.fetch_goods(uid=uid)
    if not goods:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Good not found"
        )
    return goods[0]


@router.delete("/{uid}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_good(
    uid: UUID,
    storage: StorageManager = Depends(get_storage),
):
    """Delete a single good."""
    await storage.remove_good(uid)
    return None


@router.post("/{uid}/duplicate", response_model=Good, status_code=status.HTTP_201_CREATED)
async def duplicate_good(
    uid: UUID,
    storage: StorageManager = Depends(get_storage),
):
    """Duplicate a good into the same box."""
    return await storage.duplicate_good(uid)
