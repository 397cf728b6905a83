import os
import pathlib
from dataclasses import dataclass

__all__ = ["StoreConfig", "GIT_DIR_NAME", "ENV_WORK_TREE"]

GIT_DIR_NAME = ".git"
ENV_WORK_TREE = "GITSTORE_WORK_TREE"


@dataclass(frozen=True, kw_only=True)
class StoreConfig:
    """Where a repository lives on disk.

    Every component receives one of these explicitly; nothing reads the
    process working directory behind the caller's back.
    """

    work_tree: pathlib.Path
    git_dir_name: str = GIT_DIR_NAME

    @classmethod
    def from_env(cls, work_tree=None, *, git_dir_name: str = GIT_DIR_NAME):
        if work_tree is None:
            work_tree = os.environ.get(ENV_WORK_TREE) or os.getcwd()
        return cls(work_tree=pathlib.Path(work_tree), git_dir_name=git_dir_name)

    @property
    def git_dir(self) -> pathlib.Path:
        return self.work_tree / self.git_dir_name

    @property
    def objects_dir(self) -> pathlib.Path:
        return self.git_dir / "objects"

    @property
    def refs_dir(self) -> pathlib.Path:
        return self.git_dir / "refs"

    @property
    def head_file(self) -> pathlib.Path:
        return self.git_dir / "HEAD"
