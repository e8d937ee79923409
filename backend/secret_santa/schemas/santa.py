"""
Assignment request/response schemas.

Request fields are optional on purpose: a missing field and a blank one are
both rejected by the service with the same validation error.
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from secret_santa.models.person import Person


class SantaAction(str, Enum):
    """Operations accepted by POST /santa."""
    CREATE = "create"
    CHECK = "check"


class CreateAssignmentRequest(BaseModel):
    """Register and draw a recipient."""
    email: Optional[str] = Field(None, description="Registrant email (case-insensitive)")
    password: Optional[str] = Field(None, description="Shared secret used to check the assignment later")
    name: Optional[str] = Field(None, description="Registrant's own name, excluded from the draw")


class CheckAssignmentRequest(BaseModel):
    """Look up an existing assignment."""
    email: Optional[str] = Field(None, description="Registrant email (case-insensitive)")
    password: Optional[str] = Field(None, description="Shared secret given at registration")


class SantaActionRequest(BaseModel):
    """Combined body for POST /santa, dispatched on `action`."""
    action: Optional[str] = Field(None, description="'create' or 'check'")
    email: Optional[str] = Field(None, description="Registrant email (case-insensitive)")
    password: Optional[str] = Field(None, description="Shared secret")
    name: Optional[str] = Field(None, description="Registrant's own name (create only)")


class AssignmentResponse(BaseModel):
    """The assigned recipient. Never carries the registrant's password."""
    name: str = Field(..., description="Recipient name")
    description: str = Field(..., description="Recipient description")
    drive_link: str = Field(..., alias="driveLink", description="Recipient wishlist link")

    class Config:
        populate_by_name = True

    @classmethod
    def from_person(cls, person: Person) -> "AssignmentResponse":
        return cls(
            name=person.name,
            description=person.description,
            drive_link=person.drive_link,
        )


class ErrorResponse(BaseModel):
    """Structured error body returned for every failure."""
    error: str = Field(..., description="Machine-readable error kind")
    detail: str = Field(..., description="Human-readable message")
