"""
Core module - Errors, security, rate limiting, and logging.
"""
from secret_santa.core.errors import (
    SantaError,
    ValidationError,
    DuplicateRegistration,
    PoolExhausted,
    InvalidCredentials,
    RateLimited,
    AssignmentFailed,
    StoreUnavailable,
)
from secret_santa.core.security import (
    hash_password,
    verify_password,
    dummy_verify,
)
from secret_santa.core.rate_limit import check_rate_limit, enforce_rate_limit
from secret_santa.core.logging import configure_logging

__all__ = [
    "SantaError",
    "ValidationError",
    "DuplicateRegistration",
    "PoolExhausted",
    "InvalidCredentials",
    "RateLimited",
    "AssignmentFailed",
    "StoreUnavailable",
    "hash_password",
    "verify_password",
    "dummy_verify",
    "check_rate_limit",
    "enforce_rate_limit",
    "configure_logging",
]
