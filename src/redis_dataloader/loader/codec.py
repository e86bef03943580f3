"""
Stored Value Codec

Every string the loader writes to Redis carries a one-character tag:

    "v" + payload   serialized domain value
    "n"             negative entry (key confirmed absent)

Payloads always get the "v" tag, so no serializer output can be mistaken for
a negative entry. Strings written by something other than this loader are
only read back whole when they do not start with a tag: a foreign "value"
is indistinguishable from the tagged payload "alue". Namespaces are meant to
be written by their loader alone.

Also provides the orjson value codec used when a loader is built without
its own serializer pair.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

import orjson

from redis_dataloader.core.config.constants import NOT_FOUND_TAG, VALUE_TAG

NOT_FOUND_ENTRY = NOT_FOUND_TAG


class StoredKind(str, Enum):
    ABSENT = "absent"
    VALUE = "value"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class StoredValue:
    """Classification of a raw Redis reply."""

    kind: StoredKind
    payload: str | None = None


_ABSENT = StoredValue(StoredKind.ABSENT)
_NOT_FOUND = StoredValue(StoredKind.NOT_FOUND)


def encode_value(payload: str) -> str:
    """Tag a serialized payload for storage."""
    return VALUE_TAG + payload


def decode_stored(raw: str | None) -> StoredValue:
    """
    Classify a raw GET reply.

    A leading "v" is always taken as the value tag and stripped.
    """
    if raw is None:
        return _ABSENT
    if raw == NOT_FOUND_ENTRY:
        return _NOT_FOUND
    if raw.startswith(VALUE_TAG):
        return StoredValue(StoredKind.VALUE, raw[len(VALUE_TAG):])
    return StoredValue(StoredKind.VALUE, raw)


def orjson_serialize(value: Any) -> str:
    """Default serializer: JSON via orjson."""
    return orjson.dumps(value).decode("utf-8")


def orjson_deserialize(key: Any, data: str) -> Any:
    """Default deserializer: JSON via orjson. The key is unused."""
    return orjson.loads(data)
