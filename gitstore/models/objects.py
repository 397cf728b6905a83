import binascii
import hashlib
import logging
import re
from dataclasses import dataclass
from enum import StrEnum, auto
from functools import cached_property

from gitstore.errors import DecodeError, InvalidHashError, ObjectNotFound

__all__ = [
    "ObjectKind",
    "GitObject",
    "serialize",
    "deserialize",
    "hash_bytes",
    "object_key",
    "write_object",
    "read_object",
]

logger = logging.getLogger(__name__)

NULL_BYTE = b"\x00"
HASH_PATTERN = re.compile(r"[0-9a-f]{40}")


class ObjectKind(StrEnum):
    BLOB = auto()
    TREE = auto()

    @classmethod
    def from_bytes(cls, tag: bytes) -> "ObjectKind":
        try:
            return cls(tag.decode("ascii"))
        except (UnicodeDecodeError, ValueError):
            raise DecodeError(f"Unknown object type: {tag!r}") from None


def serialize(kind: ObjectKind, body: bytes) -> bytes:
    header = f"{kind} {len(body)}".encode()
    return header + NULL_BYTE + body


def hash_bytes(data: bytes, *, hasher=hashlib.sha1) -> str:
    return hasher(data).hexdigest()


@dataclass(frozen=True, kw_only=True)
class GitObject:
    kind: ObjectKind
    body: bytes

    @classmethod
    def blob(cls, body: bytes) -> "GitObject":
        return cls(kind=ObjectKind.BLOB, body=body)

    @classmethod
    def tree(cls, body: bytes) -> "GitObject":
        return cls(kind=ObjectKind.TREE, body=body)

    @property
    def size(self) -> int:
        return len(self.body)

    @property
    def header(self) -> bytes:
        return f"{self.kind} {self.size}".encode()

    def serialize(self) -> bytes:
        return serialize(self.kind, self.body)

    @cached_property
    def hash(self) -> str:
        return hash_bytes(self.serialize())

    @property
    def raw_hash(self) -> bytes:
        return binascii.unhexlify(self.hash)


def deserialize(data: bytes, *, strict: bool = True) -> GitObject:
    """Parse ``"<kind> <size>\\0<body>"`` back into a :class:`GitObject`.

    With ``strict`` (the default) the declared size must match the body length.
    """
    header, sep, body = data.partition(NULL_BYTE)
    if not sep:
        raise DecodeError("Missing NUL separator after object header")

    fields = header.split()
    if len(fields) != 2:
        raise DecodeError(f"Malformed object header: {header!r}")
    tag, raw_size = fields

    kind = ObjectKind.from_bytes(tag)
    if not raw_size.isdigit():
        raise DecodeError(f"Invalid object size: {raw_size!r}")
    size = int(raw_size)
    if strict and size != len(body):
        raise DecodeError(
            f"Object size mismatch: header says {size}, body has {len(body)}"
        )
    return GitObject(kind=kind, body=body)


def validate_hash(hash_value: str) -> str:
    if not isinstance(hash_value, str) or not HASH_PATTERN.fullmatch(hash_value):
        raise InvalidHashError(hash_value)
    return hash_value


def object_key(hash_value: str) -> str:
    validate_hash(hash_value)
    return f"{hash_value[:2]}/{hash_value[2:]}"


def write_object(store, obj: GitObject) -> str:
    hash_value = obj.hash
    store.write(object_key(hash_value), obj.serialize())
    logger.debug("Wrote %s %s (%d bytes)", obj.kind, hash_value, obj.size)
    return hash_value


def read_object(store, hash_value: str) -> GitObject:
    try:
        data = store.read(object_key(hash_value))
    except ObjectNotFound as exc:
        raise ObjectNotFound(hash_value) from exc
    return deserialize(data)
