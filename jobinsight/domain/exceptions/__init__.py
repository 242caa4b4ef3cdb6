"""
Domain exceptions package.
"""

from .not_found_error import CustomerNotFoundError, JobNotFoundError, NotFoundError
from .store_error import StoreError
from .validation_error import InvalidIdentifierError, ValidationError

__all__ = [
    "CustomerNotFoundError",
    "InvalidIdentifierError",
    "JobNotFoundError",
    "NotFoundError",
    "StoreError",
    "ValidationError",
]
