"""
Assignment router for registering and checking Secret Santa draws.
"""
from fastapi import APIRouter, Request

from secret_santa.config import get_settings
from secret_santa.core.errors import ValidationError
from secret_santa.core.rate_limit import enforce_rate_limit
from secret_santa.dependencies.santa import AssignmentServiceDep
from secret_santa.schemas.santa import (
    AssignmentResponse,
    CheckAssignmentRequest,
    CreateAssignmentRequest,
    ErrorResponse,
    SantaAction,
    SantaActionRequest,
)
from secret_santa.services.assignment_service import AssignmentService

router = APIRouter(tags=["Santa"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or blank field"},
    429: {"model": ErrorResponse, "description": "Too many requests"},
    503: {"model": ErrorResponse, "description": "Database unavailable"},
}

CREATE_RESPONSES = {
    **ERROR_RESPONSES,
    404: {"model": ErrorResponse, "description": "No names left to assign"},
    409: {"model": ErrorResponse, "description": "Email already registered"},
    500: {"model": ErrorResponse, "description": "Assignment transaction failed"},
}

CHECK_RESPONSES = {
    **ERROR_RESPONSES,
    401: {"model": ErrorResponse, "description": "Invalid email or password"},
}


async def _create(
    request: Request,
    service: AssignmentService,
    name: str | None,
    email: str | None,
    password: str | None,
) -> AssignmentResponse:
    await enforce_rate_limit(request, "create", get_settings().create_rate_limit_per_minute)
    return await service.create_assignment(name=name, email=email, password=password)


async def _check(
    request: Request,
    service: AssignmentService,
    email: str | None,
    password: str | None,
) -> AssignmentResponse:
    await enforce_rate_limit(request, "check", get_settings().check_rate_limit_per_minute)
    return await service.check_assignment(email=email, password=password)


@router.post(
    "/santa",
    response_model=AssignmentResponse,
    responses={**CREATE_RESPONSES, **CHECK_RESPONSES},
    summary="Create or check an assignment",
)
async def santa(
    request: Request,
    body: SantaActionRequest,
    service: AssignmentServiceDep,
):
    """
    Single entry point used by the registration form.

    - **action**: `create` to register and draw, `check` to look up
    - **email**, **password**: always required
    - **name**: required for `create`
    """
    if body.action == SantaAction.CREATE.value:
        return await _create(request, service, body.name, body.email, body.password)
    if body.action == SantaAction.CHECK.value:
        return await _check(request, service, body.email, body.password)
    raise ValidationError("Invalid action")


@router.post(
    "/santa/create",
    response_model=AssignmentResponse,
    responses=CREATE_RESPONSES,
    summary="Register and draw a recipient",
)
async def create_assignment(
    request: Request,
    body: CreateAssignmentRequest,
    service: AssignmentServiceDep,
):
    """
    Register a participant and assign them a random recipient.

    The registrant's own name is never drawn. Each email can register once.
    """
    return await _create(request, service, body.name, body.email, body.password)


@router.post(
    "/santa/check",
    response_model=AssignmentResponse,
    responses=CHECK_RESPONSES,
    summary="Look up an assignment",
)
async def check_assignment(
    request: Request,
    body: CheckAssignmentRequest,
    service: AssignmentServiceDep,
):
    """Return the recipient assigned at registration."""
    return await _check(request, service, body.email, body.password)


@router.post(
    "/recheck",
    response_model=AssignmentResponse,
    responses=CHECK_RESPONSES,
    summary="Look up an assignment (legacy path)",
    include_in_schema=False,
)
async def recheck(
    request: Request,
    body: CheckAssignmentRequest,
    service: AssignmentServiceDep,
):
    return await _check(request, service, body.email, body.password)
