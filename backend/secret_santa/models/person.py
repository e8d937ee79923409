"""
Person model for name pool candidates and assigned recipients.
"""
from pydantic import BaseModel, Field


class Person(BaseModel):
    """
    A gift recipient, as stored in santa_db.name_pool.unassigned and
    embedded in santa_db.assignments.assigned_person.
    """
    name: str = Field(..., min_length=1, description="Display name, unique within the pool")
    email: str = Field(default="", description="Recipient email address")
    drive_link: str = Field(default="", description="Link to the recipient's wishlist folder")
    description: str = Field(default="", description="Free-text hints about the recipient")

    class Config:
        frozen = True

    def matches_name(self, name: str) -> bool:
        """Case-insensitive name comparison used for self-exclusion."""
        return self.name.strip().casefold() == name.strip().casefold()
