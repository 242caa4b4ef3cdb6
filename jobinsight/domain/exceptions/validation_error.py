"""
Validation-related domain exceptions.
"""


class ValidationError(Exception):
    """Base exception for validation errors."""

    pass


class InvalidIdentifierError(ValidationError):
    """Raised when a path identifier is not a valid UUID."""

    def __init__(self, field_name: str, value: str):
        self.field_name = field_name
        self.value = value
        super().__init__(f"Invalid {field_name} format: {value!r}")
