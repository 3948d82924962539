"""Cache providers.

In-memory TTL cache used to avoid redundant provider round-trips when the
same query is looked up repeatedly (e.g. a chat bot answering the same song
request from several users within a few minutes).

TTLCache is a dict-based cache: fast, but not shared across processes.
"""

from lyrlib.providers.cache.memory_cache import TTLCache

__all__ = ["TTLCache"]
