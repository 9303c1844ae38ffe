from __future__ import annotations

from collections.abc import Mapping
from typing import Literal, TypeVar

from pydantic import BaseModel, Field


TBaseSchema = TypeVar("TBaseSchema", bound="BaseSchema")

JournalMode = Literal["delete", "truncate", "persist", "memory", "wal", "off"]
SynchronousMode = Literal["off", "normal", "full", "extra"]


class BaseSchema(BaseModel):
    def to_json(self) -> str:
        return self.model_dump_json()

    def to_dict(self) -> dict[str, object]:
        return self.model_dump()

    @classmethod
    def from_json(cls: type[TBaseSchema], data: str) -> TBaseSchema:
        return cls.model_validate_json(data)

    @classmethod
    def from_dict(cls: type[TBaseSchema], data: Mapping[str, object]) -> TBaseSchema:
        return cls.model_validate(data)


class CacheConfig(BaseSchema):
    path: str
    timeout_seconds: float = Field(default=5.0, ge=0)
    journal_mode: JournalMode = "delete"
    synchronous: SynchronousMode = "full"
    strict: bool = True


class CacheInfo(BaseSchema):
    path: str
    entries: int = Field(ge=0)
    payload_bytes: int = Field(ge=0)
    file_size_bytes: int = Field(ge=0)
