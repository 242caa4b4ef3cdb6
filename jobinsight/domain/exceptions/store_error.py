"""
Record-store domain exceptions.
"""


class StoreError(Exception):
    """Raised when the record store is unreachable or a query fails."""

    def __init__(self, operation: str, message: str):
        self.operation = operation
        self.message = message
        super().__init__(f"Store error during {operation}: {message}")
