"""Store package: bounded caches and the deal sink."""

from .bounded_cache import BoundedTTLCache
from .deal_store import InMemoryDealStore

__all__ = ["BoundedTTLCache", "InMemoryDealStore"]
