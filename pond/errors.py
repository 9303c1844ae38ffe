"""Exceptions raised by the cache.

A cache miss is not an error: ``Cache.get`` returns ``None`` for it.
"""


class CacheError(Exception):
    """Base exception for all cache errors."""
    pass


class StorageError(CacheError):
    """Raised when the backing file cannot be opened, read or written."""
    pass


class SerializationError(CacheError):
    """Raised when a value passed to ``store`` cannot be encoded."""
    pass


class DeserializationError(CacheError):
    """Raised when a stored payload cannot be decoded into the requested type."""
    pass
