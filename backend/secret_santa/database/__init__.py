"""
Database module - MongoDB and Redis connections and database definitions.
"""
from secret_santa.database.connections import (
    get_mongo_client,
    get_redis_client,
    close_connections,
    get_database,
    get_santa_database,
)
from secret_santa.database.databases import santa_db

__all__ = [
    "get_mongo_client",
    "get_redis_client",
    "close_connections",
    "get_database",
    "get_santa_database",
    "santa_db",
]
