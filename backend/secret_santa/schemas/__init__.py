"""
Request and response schemas for API endpoints.
"""
from secret_santa.schemas.santa import (
    SantaAction,
    SantaActionRequest,
    CreateAssignmentRequest,
    CheckAssignmentRequest,
    AssignmentResponse,
    ErrorResponse,
)

__all__ = [
    "SantaAction",
    "SantaActionRequest",
    "CreateAssignmentRequest",
    "CheckAssignmentRequest",
    "AssignmentResponse",
    "ErrorResponse",
]
