"""
Database startup preparation.
Ensures collections and indexes exist before the first request.
"""
from motor.motor_asyncio import AsyncIOMotorClient

from secret_santa.config import get_settings
from secret_santa.database.databases import santa_db


async def create_indexes(client: AsyncIOMotorClient) -> None:
    """Create collections and indexes for the santa database."""
    db = client[get_settings().santa_db_name]
    await santa_db.ensure_collections(db)
    await santa_db.create_santa_indexes(db)
