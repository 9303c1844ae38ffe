"""Serialization boundary between caller values and stored payloads."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Protocol, TypeVar

import pydantic_core
from pydantic import TypeAdapter, ValidationError

from pond.errors import DeserializationError, SerializationError


logger = logging.getLogger(__name__)

T = TypeVar("T")


class Codec(Protocol):
    """Encode values to bytes and decode bytes back into a requested type."""

    def encode(self, value: object) -> bytes:
        ...

    def decode(self, payload: bytes, type_: Any) -> Any:
        ...


@lru_cache(maxsize=256)
def _cached_adapter(type_: Any) -> TypeAdapter[Any]:
    return TypeAdapter(type_)


def _adapter_for(type_: Any) -> TypeAdapter[Any]:
    try:
        return _cached_adapter(type_)
    except TypeError:
        # unhashable annotations (e.g. Annotated with dict metadata) skip the cache
        return TypeAdapter(type_)


class JsonCodec:
    """JSON codec built on pydantic.

    Values are dumped with ``pydantic_core.to_json`` so models, dataclasses,
    UUIDs and datetimes serialize without extra hooks. Payloads are validated
    against the requested type with a ``TypeAdapter``; in strict mode a
    payload is never coerced into a different shape (``"5"`` does not become
    ``5``).
    """

    strict: bool

    def __init__(self, strict: bool = True) -> None:
        self.strict = strict

    def encode(self, value: object) -> bytes:
        try:
            return pydantic_core.to_json(value)
        except (ValueError, TypeError) as exc:
            raise SerializationError(
                f"Cannot encode value of type {type(value).__name__}: {exc}"
            ) from exc

    def decode(self, payload: bytes, type_: Any) -> Any:
        try:
            adapter = _adapter_for(type_)
        except TypeError as exc:
            raise DeserializationError(f"Unsupported target type {type_!r}: {exc}") from exc
        try:
            return adapter.validate_json(payload, strict=self.strict)
        except ValidationError as exc:
            logger.warning(f"Payload does not match requested type {type_!r}")
            raise DeserializationError(
                f"Stored payload cannot be decoded as {type_!r}: {exc}"
            ) from exc

    def __repr__(self) -> str:
        return f"JsonCodec(strict={self.strict})"
