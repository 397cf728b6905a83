from gitstore.config import StoreConfig
from gitstore.models import Git, GitObject, ObjectKind

__all__ = ["Git", "GitObject", "ObjectKind", "StoreConfig"]
__version__ = "0.1.0"
