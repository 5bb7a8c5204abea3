"""Shared pytest fixtures for Cairn tests."""

import pytest
import tempfile
import shutil
from pathlib import Path

from cairn.core.config import Config
from cairn.core.repository import Repository
from cairn.core.objects import Blob, Tree, Commit, MODE_FILE


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Keep tests away from the user's ~/.cairnconfig and CAIRN_* variables."""
    home = tmp_path_factory.mktemp('home')
    monkeypatch.setattr(Config, 'GLOBAL_CONFIG_PATH', home / '.cairnconfig')
    for key in ('CAIRN_CORE_COMPRESSION', 'CAIRN_CORE_IGNOREFILE', 'CAIRN_INIT_DEFAULTBRANCH'):
        monkeypatch.delenv(key, raising=False)
    return home


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir).resolve()
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def repo(temp_dir):
    """Create an initialized repository."""
    repo = Repository(str(temp_dir))
    repo.init()
    return repo


@pytest.fixture
def working_files(repo):
    """Create sample file structure in repository."""
    file1 = repo.work_tree / "test1.txt"
    file2 = repo.work_tree / "test2.txt"

    (repo.work_tree / "subdir").mkdir()
    file3 = repo.work_tree / "subdir" / "test3.txt"

    file1.write_text("Content 1")
    file2.write_text("Content 2")
    file3.write_text("Content 3")

    return {
        'file1': file1,
        'file2': file2,
        'file3': file3
    }


@pytest.fixture
def repo_with_commit(repo, working_files):
    """Repository with one commit of the sample files on main."""
    repo.stage()
    repo.commit("First commit")
    return repo


@pytest.fixture
def sample_blob():
    """Create a sample blob object."""
    return Blob(b"Hello, World!\n")


@pytest.fixture
def sample_tree(sample_blob):
    """Create a sample tree with one blob."""
    tree = Tree()
    tree.add_entry(MODE_FILE, 'test.txt', sample_blob.hash)
    return tree


@pytest.fixture
def sample_commit(sample_tree):
    """Sample root commit."""
    return Commit.create(sample_tree.hash, None, "Test commit")


def write_files(root: Path, files: dict) -> None:
    """Create files under root from a {relative path: text} mapping."""
    for rel_path, content in files.items():
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
