import contextlib

import pytest

from gitstore.config import StoreConfig
from gitstore.models import Git, MemoryStore


@pytest.fixture
def change_to_tmp_dir(tmp_path):
    with contextlib.chdir(tmp_path):
        yield tmp_path


@pytest.fixture
def git(tmp_path):
    git = Git(StoreConfig(work_tree=tmp_path))
    git.init_repo()
    return git


@pytest.fixture
def memory_store():
    return MemoryStore()
