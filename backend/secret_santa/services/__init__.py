"""
Service layer for business logic.
"""
from secret_santa.services.assignment_service import AssignmentService

__all__ = [
    "AssignmentService",
]
