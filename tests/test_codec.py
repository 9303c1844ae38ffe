from dataclasses import dataclass
from uuid import uuid4

import pytest

from pond.codec import Codec, JsonCodec
from pond.errors import DeserializationError, SerializationError
from pond.cache import Cache


@dataclass
class Point:
    x: int
    y: int


def test_encode_produces_json_bytes() -> None:
    codec = JsonCodec()
    assert codec.encode({"a": 1}) == b'{"a":1}'
    assert codec.encode(Point(1, 2)) == b'{"x":1,"y":2}'


def test_decode_into_requested_type() -> None:
    codec = JsonCodec()
    assert codec.decode(b'{"x":1,"y":2}', Point) == Point(1, 2)
    assert codec.decode(b"[1,2]", list[int]) == [1, 2]


def test_decode_invalid_json_raises() -> None:
    with pytest.raises(DeserializationError):
        JsonCodec().decode(b"{not json", dict[str, int])


def test_decode_shape_mismatch_raises() -> None:
    with pytest.raises(DeserializationError):
        JsonCodec().decode(b'{"x":1}', Point)


def test_encode_unknown_type_raises() -> None:
    with pytest.raises(SerializationError):
        JsonCodec().encode(object())


class RecordingCodec:
    def __init__(self) -> None:
        self.inner = JsonCodec()
        self.encoded = 0
        self.decoded = 0

    def encode(self, value: object) -> bytes:
        self.encoded += 1
        return self.inner.encode(value)

    def decode(self, payload: bytes, type_: object) -> object:
        self.decoded += 1
        return self.inner.decode(payload, type_)


def test_cache_uses_supplied_codec(tmp_path) -> None:
    codec = RecordingCodec()
    key = uuid4()
    with Cache(tmp_path / "cache.db", codec=codec) as cache:
        cache.store(key, Point(3, 4))
        assert cache.get(key, Point) == Point(3, 4)
        assert cache.get(uuid4(), Point) is None

    assert codec.encoded == 1
    assert codec.decoded == 1


def test_recording_codec_satisfies_protocol() -> None:
    codec: Codec = RecordingCodec()
    assert codec.decode(codec.encode("x"), str) == "x"
