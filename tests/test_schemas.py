import pytest
from pydantic import ValidationError

from pond.schemas import CacheConfig, CacheInfo


def test_cache_config_json_round_trip() -> None:
    config = CacheConfig(path="cache.db", timeout_seconds=2.0, synchronous="normal")

    restored = CacheConfig.from_json(config.to_json())

    assert restored.to_dict() == config.to_dict()


def test_cache_config_from_dict_rejects_unknown_mode() -> None:
    with pytest.raises(ValidationError):
        CacheConfig.from_dict({"path": "cache.db", "synchronous": "sometimes"})


def test_cache_info_rejects_negative_counts() -> None:
    with pytest.raises(ValidationError):
        CacheInfo(path="cache.db", entries=-1, payload_bytes=0, file_size_bytes=0)
