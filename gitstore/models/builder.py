import logging
import os
import pathlib

from gitstore.config import GIT_DIR_NAME
from gitstore.models.objects import GitObject, write_object
from gitstore.models.tree import Tree, TreeMode

__all__ = ["build_tree"]

logger = logging.getLogger(__name__)


def build_tree(
    store,
    directory: os.PathLike,
    *,
    ignore: frozenset[str] = frozenset({GIT_DIR_NAME}),
) -> GitObject:
    """Persist ``directory`` recursively and return its root tree object.

    Every blob and every subtree is written to ``store`` on the way; only
    entries whose name is in ``ignore`` are skipped. Any ``OSError`` aborts
    the whole walk.
    """
    dir_path = pathlib.Path(directory)
    tree = Tree()

    for entry in sorted(dir_path.iterdir()):
        if entry.name in ignore:
            continue

        if entry.is_dir():
            subtree = build_tree(store, entry, ignore=ignore)
            tree.add(TreeMode.DIRECTORY, entry.name, subtree.hash)
        elif entry.is_file():
            blob = GitObject.blob(entry.read_bytes())
            tree.add(TreeMode.FILE, entry.name, write_object(store, blob))
        else:
            logger.debug("Skipping %s: not a regular file or directory", entry)

    tree_object = tree.to_object()
    write_object(store, tree_object)
    logger.debug("Built tree %s for %s (%d entries)", tree_object.hash, dir_path, len(tree))
    return tree_object
