import contextlib

import pytest

from gitstore.main import FATAL_EXIT_CODE, main


@pytest.fixture
def repo(tmp_path):
    assert main(["-C", str(tmp_path), "init"]) == 0
    return tmp_path


def test_init(repo):
    assert (repo / ".git" / "objects").is_dir()
    assert (repo / ".git" / "HEAD").read_text() == "ref: refs/heads/main\n"


def test_init_twice_is_fatal(repo, capsys):
    assert main(["-C", str(repo), "init"]) == FATAL_EXIT_CODE
    assert capsys.readouterr().err.startswith("fatal: ")


def test_hash_object_then_cat_file(repo, capsys):
    (repo / "doc.txt").write_text("what is up, doc?")
    assert main(["-C", str(repo), "hash-object", "-w", str(repo / "doc.txt")]) == 0
    hash_value = capsys.readouterr().out
    assert hash_value == "bd9dbf5aae1a3862dd1526723246b20206e5fc37"

    assert main(["-C", str(repo), "cat-file", "-p", hash_value]) == 0
    assert capsys.readouterr().out == "what is up, doc?"


def test_relative_path_resolved_against_work_tree(repo, tmp_path_factory, capsys):
    (repo / "doc.txt").write_text("what is up, doc?")
    with contextlib.chdir(tmp_path_factory.mktemp("elsewhere")):
        assert main(["-C", str(repo), "hash-object", "-w", "doc.txt"]) == 0
    assert capsys.readouterr().out == "bd9dbf5aae1a3862dd1526723246b20206e5fc37"
    assert (repo / ".git" / "objects" / "bd").is_dir()


def test_write_tree_then_ls_tree(repo, capsys):
    (repo / "b.txt").write_text("b")
    (repo / "a.txt").write_text("a")
    (repo / "c").mkdir()
    assert main(["-C", str(repo), "write-tree"]) == 0
    tree_hash = capsys.readouterr().out

    assert main(["-C", str(repo), "ls-tree", "--name-only", tree_hash]) == 0
    assert capsys.readouterr().out == "a.txt\nb.txt\nc\n"


@pytest.mark.parametrize(
    "hash_value", ["bd9dbf5aae1a3862dd1526723246b20206e5fc37", "not-a-hash"]
)
def test_cat_file_errors_are_fatal(repo, capsys, hash_value):
    assert main(["-C", str(repo), "cat-file", "-p", hash_value]) == FATAL_EXIT_CODE
    assert capsys.readouterr().err.startswith("fatal: ")


def test_corrupt_object_is_fatal(repo, capsys):
    hash_value = "bd9dbf5aae1a3862dd1526723246b20206e5fc37"
    path = repo / ".git" / "objects" / hash_value[:2] / hash_value[2:]
    path.parent.mkdir()
    path.write_bytes(b"not zlib")
    assert main(["-C", str(repo), "cat-file", "-p", hash_value]) == FATAL_EXIT_CODE
    assert "Corrupt compressed stream" in capsys.readouterr().err
