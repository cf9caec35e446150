"""
GOV.UK API clients.

This module provides the Content API and Search API facades, which share
one rate limited, retried request executor.
"""

from .content import ContentClient
from .events import DataObservers
from .search import SearchClient


__all__ = [
    "ContentClient",
    "SearchClient",
    "DataObservers",
]
