"""
Database definitions and collection constants.
"""
from secret_santa.database.databases import santa_db

__all__ = ["santa_db"]
