"""
Pond

Persistent local key-value cache backed by a single SQLite file.

This package provides:
- Cache: durable store/get keyed by UUID
- Pluggable serialization boundary (pydantic JSON codec by default)
- YAML configuration for cache settings
- A small maintenance CLI for inspecting cache files
"""

from pond.cache import Cache
from pond.codec import Codec, JsonCodec
from pond.errors import CacheError, DeserializationError, SerializationError, StorageError
from pond.schemas import CacheConfig, CacheInfo

__version__ = "0.1.0"

__all__ = [
    "Cache",
    "CacheConfig",
    "CacheError",
    "CacheInfo",
    "Codec",
    "DeserializationError",
    "JsonCodec",
    "SerializationError",
    "StorageError",
]
