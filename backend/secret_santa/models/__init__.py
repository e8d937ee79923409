"""
Pydantic models for database documents and data structures.
"""
from secret_santa.models.person import Person
from secret_santa.models.assignment import Assignment, NamePool, Registrant

__all__ = [
    "Person",
    "Assignment",
    "NamePool",
    "Registrant",
]
