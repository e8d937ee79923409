#!/usr/bin/env python3
"""
Name Pool Seeding Worker

Loads the list of Secret Santa candidates from a JSON file and writes the
singleton pool document into MongoDB. Run once before registrations open.

File format:
    {"unassigned": [{"name": "...", "email": "...", "drive_link": "...", "description": "..."}]}

Usage:
    python seed_pool.py data/names.json
    python seed_pool.py data/names.json --replace

Environment Variables:
    MONGO_URI: MongoDB connection string
    SANTA_DB_NAME: Database name (default: santa_db)
    LOG_LEVEL: Logging level (default: INFO)
"""
import argparse
import asyncio
import json
import logging
import sys
from enum import Enum
from pathlib import Path

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pydantic import Field, TypeAdapter
from pydantic_settings import BaseSettings, SettingsConfigDict
from pymongo.errors import PyMongoError

from secret_santa.database.databases import santa_db
from secret_santa.models.person import Person


# ==================== Configuration ====================

class SeedConfig(BaseSettings):
    """Worker configuration from environment."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    mongo_uri: str = Field(default="mongodb://mongodb:27017/?replicaSet=rs0")
    santa_db_name: str = Field(default=santa_db.DB_NAME)
    log_level: str = Field(default="INFO")


config = SeedConfig()


# ==================== Logging Setup ====================

logging.basicConfig(
    level=getattr(logging, config.log_level.upper()),
    format="%(asctime)s | %(levelname)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("pool_seed")


class SeedOutcome(str, Enum):
    """What seed_pool did to the pool document."""
    CREATED = "created"
    REPLACED = "replaced"
    SKIPPED = "skipped"


class SeedError(ValueError):
    """The names file cannot be seeded as-is."""


# ==================== Loading ====================

def parse_pool(data: dict) -> list[Person]:
    """Validate the decoded names file and return its candidates."""
    if not isinstance(data, dict) or "unassigned" not in data:
        raise SeedError("Names file must be an object with an 'unassigned' list")

    people = TypeAdapter(list[Person]).validate_python(data["unassigned"])

    seen: set[str] = set()
    for person in people:
        key = person.name.strip().casefold()
        if key in seen:
            raise SeedError(f"Duplicate name in pool: {person.name}")
        seen.add(key)
    return people


def load_pool_file(path: Path) -> list[Person]:
    """Read and validate a names JSON file."""
    with open(path, encoding="utf-8") as f:
        return parse_pool(json.load(f))


# ==================== Seeding ====================

async def seed_pool(
    db: AsyncIOMotorDatabase,
    people: list[Person],
    replace: bool = False,
) -> SeedOutcome:
    """
    Write the pool document.

    Args:
        db: Santa database
        people: Candidates to place in the pool
        replace: Overwrite an existing pool instead of leaving it alone

    Returns:
        What happened to the pool document

    Raises:
        SeedError: If a candidate has already been assigned to someone
    """
    assignments = db[santa_db.Collections.ASSIGNMENTS]
    pool = db[santa_db.Collections.NAME_POOL]

    names = [p.name for p in people]
    already = await assignments.find_one({"assigned_person.name": {"$in": names}})
    if already is not None:
        raise SeedError(
            f"{already['assigned_person']['name']} is already assigned; remove them from the file"
        )

    documents = [p.model_dump() for p in people]

    if replace:
        result = await pool.replace_one(
            {"_id": santa_db.POOL_ID},
            {"_id": santa_db.POOL_ID, "unassigned": documents},
            upsert=True,
        )
        outcome = SeedOutcome.CREATED if result.upserted_id is not None else SeedOutcome.REPLACED
    else:
        result = await pool.update_one(
            {"_id": santa_db.POOL_ID},
            {"$setOnInsert": {"unassigned": documents}},
            upsert=True,
        )
        outcome = SeedOutcome.CREATED if result.upserted_id is not None else SeedOutcome.SKIPPED

    logger.info(f"Pool {outcome.value} with {len(documents)} candidates")
    return outcome


# ==================== Main Entry Point ====================

def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed the Secret Santa name pool")
    parser.add_argument("names_file", type=Path, help="Path to the names JSON file")
    parser.add_argument(
        "--replace",
        action="store_true",
        help="Overwrite the existing pool document",
    )
    return parser.parse_args(argv)


async def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        people = load_pool_file(args.names_file)
    except (OSError, json.JSONDecodeError, ValueError) as e:
        logger.error(f"Cannot load {args.names_file}: {e}")
        return 1

    client = AsyncIOMotorClient(config.mongo_uri)
    try:
        await client.admin.command("ping")
        logger.info("Connected to MongoDB")
        db = client[config.santa_db_name]
        await santa_db.ensure_collections(db)
        await santa_db.create_santa_indexes(db)
        outcome = await seed_pool(db, people, replace=args.replace)
    except SeedError as e:
        logger.error(str(e))
        return 1
    except PyMongoError as e:
        logger.error(f"MongoDB error while seeding: {e}")
        return 1
    finally:
        client.close()

    if outcome is SeedOutcome.SKIPPED:
        logger.info("Pool already exists; pass --replace to overwrite it")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
