"""Cache adapters - Implementations of the CachePort."""

from .memory_cache import InMemoryCache

__all__ = ["InMemoryCache"]
