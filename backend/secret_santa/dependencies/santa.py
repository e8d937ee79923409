"""
Assignment service dependency for route handlers.
"""
from typing import Annotated

from fastapi import Depends

from secret_santa.database.connections import get_santa_database
from secret_santa.services.assignment_service import AssignmentService


async def get_assignment_service() -> AssignmentService:
    """Dependency to get AssignmentService instance."""
    db = await get_santa_database()
    return AssignmentService(db)


# Type alias for cleaner route signatures
AssignmentServiceDep = Annotated[AssignmentService, Depends(get_assignment_service)]
