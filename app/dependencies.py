"""FastAPI dependencies."""
from fastapi import Request

from app.services.storage_manager import StorageManager


def get_storage(request: Request) -> StorageManager:
    """Storage manager created by the app lifespan."""
    return request.app.state.storage
