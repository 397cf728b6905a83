__all__ = [
    "GitStoreError",
    "ObjectNotFound",
    "DecodeError",
    "NotATreeError",
    "CompressionError",
    "InvalidHashError",
    "RepositoryExistsError",
]


class GitStoreError(Exception):
    """Base class for every error raised by gitstore."""


class ObjectNotFound(GitStoreError, FileNotFoundError):
    def __init__(self, key: str):
        super().__init__(f"Object not found: {key}")
        self.key = key


class DecodeError(GitStoreError, ValueError):
    pass


class NotATreeError(DecodeError):
    pass


class CompressionError(GitStoreError):
    pass


class InvalidHashError(GitStoreError, ValueError):
    def __init__(self, hash_value):
        super().__init__(f"Not a valid object name: {hash_value!r}")
        self.hash_value = hash_value


class RepositoryExistsError(GitStoreError, FileExistsError):
    pass
