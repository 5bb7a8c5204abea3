"""Unit tests for the commit engine."""

import pytest

from cairn.core.objects import Blob, Commit, Tree
from cairn.core.store import PERMANENT, STAGING
from cairn.errors import NothingToCommit, UnresolvableHead


def snapshot(path):
    """Every file under path with its bytes."""
    return {p.relative_to(path): p.read_bytes() for p in path.rglob('*') if p.is_file()}


def test_commit_requires_staged_objects(repo, working_files):
    """Test commit on empty staging fails and writes nothing."""
    before = snapshot(repo.cairn_dir)

    with pytest.raises(NothingToCommit):
        repo.commit("Nothing here")

    assert snapshot(repo.cairn_dir) == before


def test_first_commit_parent_is_initial_commit(repo, working_files):
    initial = repo.refs.head_commit()
    repo.stage()

    commit = repo.read_object(repo.commit("First"))

    assert isinstance(commit, Commit)
    assert commit.parent == initial
    assert commit.message == "First"


def test_commit_chain(repo, working_files):
    """Test the second commit's parent is the first commit."""
    repo.stage()
    first = repo.commit("First")

    working_files['file1'].write_text("changed")
    repo.stage()
    second = repo.commit("Second")

    assert repo.read_object(second).parent == first
    assert repo.refs.read_branch('main') == second


def test_commit_without_prior_commit_has_no_parent(repo, working_files):
    """Test committing on an unborn branch creates a root commit."""
    repo.refs.set_head_to_branch('orphan')
    repo.stage()

    commit_hash = repo.commit("Root")

    assert repo.read_object(commit_hash).parent is None
    assert repo.refs.read_branch('orphan') == commit_hash


def test_commit_promotes_and_clears_staging(repo, working_files):
    result = repo.stage()
    staged = repo.store.staged_hashes()

    commit_hash = repo.commit("Promote")

    assert repo.store.is_staging_empty()
    for obj_hash in staged:
        assert repo.store.contains(PERMANENT, obj_hash)
    assert repo.read_object(commit_hash, PERMANENT).tree == result.tree_hash


def test_commit_written_directly_to_permanent(repo, working_files):
    repo.stage()
    commit_hash = repo.commit("Direct")
    assert repo.store.contains(PERMANENT, commit_hash)
    assert not repo.store.contains(STAGING, commit_hash)


def test_commit_tree_reflects_working_directory_at_commit_time(repo, working_files):
    """Test files changed after staging are captured by the commit."""
    repo.stage()
    working_files['file2'].write_text("edited after stage")

    commit = repo.read_object(repo.commit("Late edit"))
    tree = repo.read_object(commit.tree)

    assert tree.get('test2.txt').hash == Blob(b"edited after stage").hash
    assert repo.store.contains(PERMANENT, Blob(b"edited after stage").hash)


def test_commit_advances_only_current_branch(repo, working_files):
    repo.create_branch('feature')
    feature_before = repo.refs.read_branch('feature')
    repo.stage()

    commit_hash = repo.commit("On main")

    assert repo.refs.read_branch('main') == commit_hash
    assert repo.refs.read_branch('feature') == feature_before
    assert repo.head_file.read_text() == 'ref: refs/heads/main\n'


def test_detached_head_commit(repo, working_files):
    initial = repo.refs.head_commit()
    repo.refs.checkout_commit(initial)
    repo.stage()

    commit_hash = repo.commit("Detached")

    assert repo.head_file.read_text() == commit_hash + '\n'
    assert repo.read_object(commit_hash).parent == initial
    assert repo.refs.read_branch('main') == initial


def test_detached_head_to_missing_commit(repo, working_files):
    repo.head_file.write_text('f' * 40 + '\n')
    repo.stage()

    with pytest.raises(UnresolvableHead):
        repo.commit("Broken HEAD")

    assert not repo.store.is_staging_empty()


def test_commit_of_empty_work_tree(repo):
    (repo.work_tree / '.cairnignore').unlink()
    repo.stage()
    commit = repo.read_object(repo.commit("Empty"))
    assert commit.tree == Tree().hash
