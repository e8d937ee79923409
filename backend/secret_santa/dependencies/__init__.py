"""
Dependencies for dependency injection in routes.
"""
from secret_santa.dependencies.santa import get_assignment_service, AssignmentServiceDep

__all__ = [
    "get_assignment_service",
    "AssignmentServiceDep",
]
