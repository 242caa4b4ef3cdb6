"""
API schemas package.
"""

from .common import Envelope, OverviewEnvelope, failure_response

__all__ = ["Envelope", "OverviewEnvelope", "failure_response"]
