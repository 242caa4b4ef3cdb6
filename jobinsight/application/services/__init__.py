"""
Application services package.
"""

from .cache_resolver import CachedOverview, CacheResolver
from .filter_normalizer import FilterNormalizer, RawFilterParams, parse_identifier
from .overview_aggregation import OverviewAggregation
from .result_formatter import ResultFormatter

__all__ = [
    "CacheResolver",
    "CachedOverview",
    "FilterNormalizer",
    "OverviewAggregation",
    "RawFilterParams",
    "ResultFormatter",
    "parse_identifier",
]
