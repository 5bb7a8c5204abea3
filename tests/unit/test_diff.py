"""Unit tests for tree comparison."""

import pytest

from cairn.core.objects import Blob, Tree, MODE_DIRECTORY, MODE_EXECUTABLE, MODE_FILE
from cairn.core.store import PERMANENT, STAGING
from cairn.errors import InvalidObject, ObjectNotFound
from cairn.operations.diff import TreeDiffer, TreeChange, ADDED, DELETED, MODIFIED


def make_tree(entries):
    tree = Tree()
    for name, mode, obj_hash in entries:
        tree.add_entry(mode, name, obj_hash)
    return tree


@pytest.fixture
def differ(repo):
    return TreeDiffer(repo.store)


def statuses(changes):
    return {change.path: change.status for change in changes}


def test_added_and_deleted(repo, differ):
    """Test a.txt unchanged, b.txt removed, c.txt added."""
    hash_x, hash_y, hash_z = '1' * 40, '2' * 40, '3' * 40
    tree_a = make_tree([('a.txt', MODE_FILE, hash_x), ('b.txt', MODE_FILE, hash_y)])
    tree_b = make_tree([('a.txt', MODE_FILE, hash_x), ('c.txt', MODE_EXECUTABLE, hash_z)])

    changes = differ.diff(repo.write_object(tree_a), repo.write_object(tree_b))

    assert statuses(changes) == {'b.txt': DELETED, 'c.txt': ADDED}


def test_modified_content(repo, differ):
    tree_a = make_tree([('a.txt', MODE_FILE, Blob(b'one').hash)])
    tree_b = make_tree([('a.txt', MODE_FILE, Blob(b'two').hash)])

    changes = differ.diff(repo.write_object(tree_a), repo.write_object(tree_b))

    assert len(changes) == 1
    change = changes[0]
    assert change == TreeChange('a.txt', MODIFIED, old=tree_a.entries[0], new=tree_b.entries[0])
    assert str(change) == 'M a.txt (modified)'


def test_modified_mode_only(repo, differ):
    blob_hash = Blob(b'script').hash
    tree_a = make_tree([('run', MODE_FILE, blob_hash)])
    tree_b = make_tree([('run', MODE_EXECUTABLE, blob_hash)])

    changes = differ.diff(repo.write_object(tree_a), repo.write_object(tree_b))

    assert statuses(changes) == {'run': MODIFIED}


def test_identical_trees(repo, differ):
    tree = make_tree([('a.txt', MODE_FILE, '1' * 40)])
    tree_hash = repo.write_object(tree)
    assert differ.diff(tree_hash, tree_hash) == []


def test_subdirectory_not_expanded(repo, differ):
    """Test a changed subdirectory shows up as one modified entry."""
    sub_a = make_tree([('inner.txt', MODE_FILE, '1' * 40)])
    sub_b = make_tree([('inner.txt', MODE_FILE, '2' * 40), ('new.txt', MODE_FILE, '3' * 40)])
    tree_a = make_tree([('src', MODE_DIRECTORY, repo.write_object(sub_a))])
    tree_b = make_tree([('src', MODE_DIRECTORY, repo.write_object(sub_b))])

    changes = differ.diff(repo.write_object(tree_a), repo.write_object(tree_b))

    assert [(c.path, c.status) for c in changes] == [('src', MODIFIED)]


def test_output_sorted_and_unique(repo, differ):
    tree_a = make_tree([(name, MODE_FILE, '1' * 40) for name in ('d', 'b', 'x')])
    tree_b = make_tree([(name, MODE_FILE, '2' * 40) for name in ('c', 'b', 'a')])

    changes = differ.diff(repo.write_object(tree_a), repo.write_object(tree_b))

    assert [c.path for c in changes] == ['a', 'b', 'c', 'd', 'x']
    assert statuses(changes) == {'a': ADDED, 'b': MODIFIED, 'c': ADDED, 'd': DELETED, 'x': DELETED}


def test_reads_staged_trees(repo, differ):
    tree_a = make_tree([('a.txt', MODE_FILE, '1' * 40)])
    tree_b = Tree()
    hash_a = repo.write_object(tree_a, STAGING)
    hash_b = repo.write_object(tree_b, PERMANENT)

    assert statuses(differ.diff(hash_a, hash_b)) == {'a.txt': DELETED}


def test_missing_tree(repo, differ):
    with pytest.raises(ObjectNotFound):
        differ.diff('0' * 40, repo.write_object(Tree()))


def test_not_a_tree(repo, differ):
    blob_hash = repo.write_object(Blob(b'not a tree'))
    with pytest.raises(InvalidObject):
        differ.diff(blob_hash, repo.write_object(Tree()))


def test_diff_between_commits(repo_with_commit):
    repo = repo_with_commit
    (repo.work_tree / 'test1.txt').unlink()
    (repo.work_tree / 'added.txt').write_text('new')
    (repo.work_tree / 'subdir' / 'test3.txt').write_text('changed')
    repo.stage()
    repo.commit('Second')

    first = repo.read_object(repo.read_object(repo.refs.head_commit()).parent)
    second = repo.read_object(repo.refs.head_commit())

    assert statuses(repo.diff(first.tree, second.tree)) == {
        'added.txt': ADDED,
        'test1.txt': DELETED,
        'subdir': MODIFIED,
    }
