from gitstore.models.git import Git
from gitstore.models.objects import GitObject, ObjectKind
from gitstore.models.store import CompressedStore, MemoryStore
from gitstore.models.tree import Tree, TreeEntry, TreeMode

__all__ = [
    "Git",
    "GitObject",
    "ObjectKind",
    "CompressedStore",
    "MemoryStore",
    "Tree",
    "TreeEntry",
    "TreeMode",
]
