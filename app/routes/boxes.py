"""Box routes."""
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status, Query

from app.dependencies import get_storage
from app.schemas.box import Box, BoxCreate, BoxUpdate
from app.schemas.good import Quantity
from app.services.storage_manager import StorageManager

router = APIRouter(prefix="/boxes", tags=["Boxes"])


@router.get("/", response_model=List[Box])
async def list_boxes(
    with_goods: bool = Query(False, description="Include the goods of each box"),
    storage: StorageManager = Depends(get_storage),
):
    """List all boxes, optionally with their goods."""
    if with_goods:
        return await storage.fetch_boxes_with_goods()
    return await storage.fetch_boxes()


@router.get("/count", response_model=Quantity)
async def count_boxes(storage: StorageManager = Depends(get_storage)):
    """Number of stored boxes."""
    return Quantity(count=await storage.fetch_boxes_quantity())


@router.post("/", response_model=Box, status_code=status.HTTP_201_CREATED)
async def create_box(
    box_data: BoxCreate,
    storage: StorageManager = Depends(get_storage),
):
    """Create a new box."""
    box = Box(**box_data.model_dump())
    await storage.add_boxes([box])
    return box


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT)
async def delete_all_boxes(storage: StorageManager = Depends(get_storage)):
    """Delete every box and every good."""
    await storage.remove_all_boxes()
    return None


@router.get("/{uid}", response_model=Box)
async def get_box(
    uid: UUID,
    storage: StorageManager = Depends(get_storage),
):
    """Get a specific box."""
    boxes = await storage.fetch_boxes(uid=uid)
    if not boxes:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Box not found"
        )
    return boxes[0]


@router.put("/{uid}", response_model=Box)
async def update_box(
    uid: UUID,
    box_update: BoxUpdate,
    storage: StorageManager = Depends(get_storage),
):
    """Rename a box."""
    box = Box(uid=uid, name=box_update.name)
    await storage.update_box(box)
    return box


@router.delete("/{uid}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_box(
    uid: UUID,
    storage: StorageManager = Depends(get_storage),
):
    """Delete a box together with its goods."""
    await storage.remove_box(uid)
    return None


@router.post("/{uid}/duplicate", response_model=Box, status_code=status.HTTP_201_CREATED)
async def duplicate_box(
    uid: UUID,
    with_goods: bool = Query(True, description="Copy the goods as well"),
    storage: StorageManager = Depends(get_storage),
):
    """Duplicate a box, by default with its goods."""
    return await storage.duplicate_box(uid, with_goods=with_goods)
