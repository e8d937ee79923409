"""
API Routers module.
"""
from secret_santa.routers import health, santa

__all__ = ["health", "santa"]
