import contextlib
import logging
import os
import pathlib
import tempfile
import zlib

from gitstore.errors import CompressionError, ObjectNotFound

__all__ = ["CompressedStore", "MemoryStore"]

logger = logging.getLogger(__name__)

# Loose objects are never rewritten
OBJECT_MODE = 0o444


def compress(data: bytes, *, compressor=zlib.compress) -> bytes:
    return compressor(data)


def decompress(data: bytes, *, decompressor=zlib.decompress) -> bytes:
    try:
        return decompressor(data)
    except zlib.error as exc:
        raise CompressionError(f"Corrupt compressed stream: {exc}") from exc


class CompressedStore:
    """Byte-in/byte-out zlib store on the filesystem.

    Keys are relative paths such as ``"ab/cdef..."``; the store knows nothing
    about what the bytes mean.
    """

    def __init__(self, root: os.PathLike):
        self.root = pathlib.Path(root)

    def __repr__(self):
        return f"{type(self).__name__}({str(self.root)!r})"

    def path_for(self, key: str) -> pathlib.Path:
        return self.root / key

    def exists(self, key: str) -> bool:
        return self.path_for(key).is_file()

    def write(self, key: str, data: bytes) -> None:
        path = self.path_for(key)
        if path.exists():
            logger.debug("Object %s already stored, skipping write", key)
            return
        path.parent.mkdir(parents=True, exist_ok=True)

        # Write next to the target and rename so readers never see a partial file
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".tmp-")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(compress(data))
            os.chmod(tmp_name, OBJECT_MODE)
            os.replace(tmp_name, path)
        except BaseException:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(tmp_name)
            raise
        logger.debug("Stored %s (%d bytes)", key, len(data))

    def read(self, key: str) -> bytes:
        path = self.path_for(key)
        try:
            with path.open("rb") as f:
                compressed = f.read()
        except FileNotFoundError as exc:
            raise ObjectNotFound(key) from exc
        return decompress(compressed)


class MemoryStore:
    """Dict-backed stand-in for :class:`CompressedStore`."""

    def __init__(self):
        self.objects: dict[str, bytes] = {}

    def __len__(self):
        return len(self.objects)

    def __contains__(self, key):
        return key in self.objects

    def exists(self, key: str) -> bool:
        return key in self.objects

    def write(self, key: str, data: bytes) -> None:
        self.objects.setdefault(key, compress(data))

    def read(self, key: str) -> bytes:
        try:
            compressed = self.objects[key]
        except KeyError:
            raise ObjectNotFound(key) from None
        return decompress(compressed)
