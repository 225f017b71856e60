"""Script to seed the configured database with sample boxes and goods."""
import asyncio
import logging
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.config import settings
from app.database import Database
from app.fixtures import FakeInventoryConstants
from app.logging_config import setup_logging
from app.services.persistence import PersistenceGateway
from app.services.storage_manager import StorageManager

logger = logging.getLogger("seed_inventory")


async def seed_inventory():
    """Create tables and add the sample data if no boxes exist yet."""
    database = Database(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
    try:
        await database.create_all()
        manager = StorageManager(PersistenceGateway(database))
        
        existing = await manager.fetch_boxes_quantity()
        if existing:
            logger.info("Database already holds %d boxes, nothing to seed", existing)
            return
        
        await manager.add_boxes(FakeInventoryConstants.fresh_boxes())
        await manager.add_goods(FakeInventoryConstants.fresh_goods())
        logger.info(
            "Seeded %d boxes and %d goods",
            await manager.fetch_boxes_quantity(),
            await manager.fetch_goods_quantity(),
        )
    finally:
        await database.dispose()


if __name__ == "__main__":
    setup_logging(settings.LOG_LEVEL)
    asyncio.run(seed_inventory())
