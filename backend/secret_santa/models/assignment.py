"""
Assignment and name pool models for the santa database.
"""
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from secret_santa.database.databases.santa_db import POOL_ID
from secret_santa.models.person import Person


class Registrant(BaseModel):
    """The person who registered and must buy a gift."""
    name: str = Field(..., description="Registrant's own name")
    email: str = Field(..., description="Lowercased email, unique across assignments")
    password_hash: str = Field(..., description="Bcrypt hash of the shared secret")


class Assignment(BaseModel):
    """
    Assignment document model for MongoDB santa_db.assignments collection.
    """
    id: Optional[str] = Field(None, alias="_id", description="MongoDB ObjectId as string")
    registrant: Registrant = Field(..., description="Who is giving")
    assigned_person: Person = Field(..., description="Who they are giving to")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Assignment creation timestamp"
    )

    class Config:
        populate_by_name = True

    def to_document(self) -> dict:
        """Serialize for insertion (MongoDB generates the _id)."""
        return self.model_dump(exclude={"id"})


class NamePool(BaseModel):
    """
    Singleton pool document in santa_db.name_pool.
    """
    id: str = Field(default=POOL_ID, alias="_id", description="Always 'pool'")
    unassigned: list[Person] = Field(default_factory=list, description="Candidates not yet assigned")

    class Config:
        populate_by_name = True

    def candidates_for(self, registrant_name: str) -> list[Person]:
        """Candidates the registrant may receive (everyone except themselves)."""
        return [p for p in self.unassigned if not p.matches_name(registrant_name)]
