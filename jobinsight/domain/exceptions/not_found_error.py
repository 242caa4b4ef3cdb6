"""
Lookup-related domain exceptions.
"""


class NotFoundError(Exception):
    """Base exception for lookups that yield no rows."""

    pass


class JobNotFoundError(NotFoundError):
    """Raised when a job lookup yields no rows."""

    def __init__(self, job_id: str):
        self.job_id = job_id
        super().__init__(f"Job {job_id} not found")


class CustomerNotFoundError(NotFoundError):
    """Raised when a customer lookup yields no rows."""

    def __init__(self, customer_id: str):
        self.customer_id = customer_id
        super().__init__(f"Customer {customer_id} not found")
