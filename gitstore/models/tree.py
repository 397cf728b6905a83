import binascii
from dataclasses import dataclass, field
from enum import StrEnum
from operator import attrgetter
from typing import Iterable, Iterator

from gitstore.errors import DecodeError, NotATreeError
from gitstore.models.objects import GitObject, ObjectKind

__all__ = ["TreeMode", "TreeEntry", "Tree", "encode", "decode"]

NULL_BYTE = b"\x00"
HASH_SIZE = 20


class TreeMode(StrEnum):
    FILE = "100644"
    DIRECTORY = "040000"

    @classmethod
    def from_bytes(cls, raw: bytes) -> "TreeMode":
        # git itself writes directories as "40000"
        match raw:
            case b"100644":
                return cls.FILE
            case b"040000" | b"40000":
                return cls.DIRECTORY
            case _:
                raise DecodeError(f"Unknown tree entry mode: {raw!r}")

    @property
    def kind(self) -> ObjectKind:
        match self:
            case TreeMode.FILE:
                return ObjectKind.BLOB
            case TreeMode.DIRECTORY:
                return ObjectKind.TREE


@dataclass(frozen=True, kw_only=True)
class TreeEntry:
    mode: TreeMode
    name: str
    raw_hash: bytes

    def __post_init__(self):
        if not self.name or "/" in self.name or "\x00" in self.name:
            raise ValueError(f"Invalid tree entry name: {self.name!r}")
        if len(self.raw_hash) != HASH_SIZE:
            raise ValueError(f"Tree entry hash must be {HASH_SIZE} bytes")

    @classmethod
    def for_object(cls, mode: TreeMode, name: str, hash_value: str) -> "TreeEntry":
        return cls(mode=TreeMode(mode), name=name, raw_hash=binascii.unhexlify(hash_value))

    @property
    def hash(self) -> str:
        return binascii.hexlify(self.raw_hash).decode()

    @property
    def kind(self) -> ObjectKind:
        return self.mode.kind

    @property
    def sort_key(self) -> bytes:
        return self.name.encode()

    def encode(self) -> bytes:
        return f"{self.mode} {self.name}".encode() + NULL_BYTE + self.raw_hash

    def __str__(self):
        return f"{self.mode} {self.kind} {self.hash}\t{self.name}"


def encode(entries: Iterable[TreeEntry]) -> bytes:
    ordered = sorted(entries, key=attrgetter("sort_key"))
    for previous, current in zip(ordered, ordered[1:]):
        if previous.name == current.name:
            raise ValueError(f"Duplicate tree entry: {current.name!r}")
    return b"".join(entry.encode() for entry in ordered)


def _iter_entries(body: bytes) -> Iterator[TreeEntry]:
    offset = 0
    while offset < len(body):
        null_index = body.find(NULL_BYTE, offset)
        if null_index == -1:
            raise DecodeError(f"Tree entry at offset {offset} has no NUL terminator")

        mode_name = body[offset:null_index]
        raw_mode, sep, raw_name = mode_name.partition(b" ")
        if not sep:
            raise DecodeError(f"Tree entry {mode_name!r} has no mode separator")

        hash_start = null_index + 1
        raw_hash = body[hash_start : hash_start + HASH_SIZE]
        if len(raw_hash) != HASH_SIZE:
            raise DecodeError(
                f"Truncated hash in tree entry {raw_name!r}: "
                f"expected {HASH_SIZE} bytes, got {len(raw_hash)}"
            )

        mode = TreeMode.from_bytes(raw_mode)
        try:
            entry = TreeEntry(mode=mode, name=raw_name.decode(), raw_hash=raw_hash)
        except ValueError as exc:
            # UnicodeDecodeError is a ValueError too
            raise DecodeError(f"Bad tree entry name {raw_name!r}: {exc}") from exc
        yield entry
        offset = hash_start + HASH_SIZE


def decode(body: bytes) -> list[TreeEntry]:
    return list(_iter_entries(body))


@dataclass
class Tree:
    """A directory listing being assembled, then frozen into a tree object."""

    entries: list[TreeEntry] = field(default_factory=list)

    @classmethod
    def from_object(cls, obj: GitObject) -> "Tree":
        if obj.kind != ObjectKind.TREE:
            raise NotATreeError(f"Not a tree object: {obj.header!r}")
        return cls(entries=decode(obj.body))

    def add(self, mode: TreeMode, name: str, hash_value: str) -> TreeEntry:
        entry = TreeEntry.for_object(mode, name, hash_value)
        self.entries.append(entry)
        return entry

    def encode(self) -> bytes:
        return encode(self.entries)

    def to_object(self) -> GitObject:
        return GitObject.tree(self.encode())

    def __iter__(self):
        return iter(self.entries)

    def __len__(self):
        return len(self.entries)
