"""
Santa database configuration.
Stores the assignment ledger and the pool of unassigned names.

Structure:
- assignments: One document per registrant (append-only)
- name_pool: Singleton document {_id: "pool", unassigned: [Person]}
"""
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import OperationFailure

DB_NAME = "santa_db"

# _id of the singleton pool document
POOL_ID = "pool"


class Collections:
    """Collection names in santa_db."""
    ASSIGNMENTS = "assignments"   # Registrant -> assigned person
    NAME_POOL = "name_pool"       # Remaining unassigned candidates

    # Index definitions for each collection
    INDEXES = {
        "assignments": [
            # Backstop for duplicate registrations racing past the app check
            {"keys": [("registrant.email", 1)], "unique": True},
            # No person is handed to two registrants
            {"keys": [("assigned_person.name", 1)], "unique": True},
        ],
    }


async def create_santa_indexes(db: AsyncIOMotorDatabase) -> None:
    """Create indexes for santa database collections."""
    for collection_name, indexes in Collections.INDEXES.items():
        collection = db[collection_name]
        for index_def in indexes:
            keys = index_def["keys"]
            kwargs = {k: v for k, v in index_def.items() if k != "keys"}
            await collection.create_index(keys, **kwargs)


async def ensure_collections(db: AsyncIOMotorDatabase) -> None:
    """
    Create the collections up front.

    MongoDB cannot create a collection implicitly inside a multi-document
    transaction on older servers, so the first assignment would abort.
    """
    existing = set(await db.list_collection_names())
    for name in (Collections.ASSIGNMENTS, Collections.NAME_POOL):
        if name in existing:
            continue
        try:
            await db.create_collection(name)
        except OperationFailure as e:
            # NamespaceExists: another instance created it first
            if e.code != 48:
                raise
