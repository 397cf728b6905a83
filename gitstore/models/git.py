import logging
import pathlib
import sys
from os import PathLike

from gitstore.config import StoreConfig
from gitstore.errors import RepositoryExistsError
from gitstore.models.builder import build_tree
from gitstore.models.objects import GitObject, ObjectKind, read_object, write_object
from gitstore.models.store import CompressedStore
from gitstore.models.tree import Tree, TreeEntry

__all__ = ["Git"]

logger = logging.getLogger(__name__)

DEFAULT_HEAD = "ref: refs/heads/main\n"


class Git:
    def __init__(self, config: StoreConfig | None = None, *, store=None, stdout=None):
        self.config = config or StoreConfig.from_env()
        self.store = store if store is not None else CompressedStore(self.config.objects_dir)
        self._stdout = stdout

    @property
    def stdout(self):
        return self._stdout or sys.stdout

    def resolve(self, path: PathLike | None = None) -> pathlib.Path:
        # Relative paths are taken from the work tree, not the process cwd
        if path is None:
            return self.config.work_tree
        return self.config.work_tree / path

    def init_repo(self) -> pathlib.Path:
        git_dir = self.config.git_dir
        if git_dir.exists():
            raise RepositoryExistsError(f"Repository already exists at {git_dir}")
        for _dir in (self.config.objects_dir, self.config.refs_dir):
            _dir.mkdir(parents=True, exist_ok=False)
        self.config.head_file.write_text(DEFAULT_HEAD)
        logger.info("Initialized empty repository in %s", git_dir)
        return git_dir

    def write_to_store(self, kind: ObjectKind, body: bytes) -> str:
        return write_object(self.store, GitObject(kind=ObjectKind(kind), body=body))

    def read_from_store(self, hash_value: str) -> tuple[ObjectKind, bytes]:
        obj = read_object(self.store, hash_value)
        return obj.kind, obj.body

    def build_tree(self, path: PathLike | None = None) -> str:
        directory = self.resolve(path)
        tree = build_tree(self.store, directory, ignore=frozenset({self.config.git_dir_name}))
        return tree.hash

    def cat_file(self, hash_value: str, *, pretty_print: bool = False) -> GitObject:
        obj = read_object(self.store, hash_value)
        if pretty_print:
            match obj.kind:
                case ObjectKind.BLOB:
                    self.stdout.flush()
                    getattr(self.stdout, "buffer", self.stdout).write(obj.body)
                case ObjectKind.TREE:
                    for entry in Tree.from_object(obj):
                        self.stdout.write(f"{entry}\n")
        return obj

    def hash_object(
        self,
        path: pathlib.Path,
        *,
        write: bool = False,
        pretty_print: bool = True,
    ) -> str:
        blob = GitObject.blob(self.resolve(path).read_bytes())
        hash_value = write_object(self.store, blob) if write else blob.hash
        if pretty_print:
            self.stdout.write(hash_value)
        return hash_value

    def ls_tree(self, hash_value: str, *, name_only: bool = False) -> list[TreeEntry]:
        tree = Tree.from_object(read_object(self.store, hash_value))
        for entry in tree:
            self.stdout.write(f"{entry.name if name_only else entry}\n")
        return tree.entries

    def write_tree(self, *, pretty_print: bool = True) -> str:
        hash_value = self.build_tree()
        if pretty_print:
            self.stdout.write(hash_value)
        return hash_value
