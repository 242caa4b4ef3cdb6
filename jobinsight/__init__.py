"""
Field-service job analytics and metrics precomputation service.
"""

__version__ = "0.1.0"
