"""Unit tests for the partitioned object store."""

import pytest

from cairn.core.hash import compress
from cairn.core.objects import Blob
from cairn.core.store import ObjectStore, PERMANENT, STAGING
from cairn.errors import CorruptionError, InvalidObject, ObjectNotFound


@pytest.fixture
def store(tmp_path):
    objects = tmp_path / 'objects'
    staging = tmp_path / 'staging'
    objects.mkdir()
    staging.mkdir()
    return ObjectStore(objects, staging)


def test_object_path_is_sharded(store):
    obj_hash = 'ab' + 'c' * 38
    path = store.object_path(obj_hash, STAGING)
    assert path.parent.name == 'ab'
    assert path.name == 'c' * 38
    assert path.parent.parent == store.staging_dir


def test_put_and_get(store):
    store.put(PERMANENT, 'ab' + '0' * 38, b'payload')
    assert store.get(PERMANENT, 'ab' + '0' * 38) == b'payload'


def test_put_is_idempotent(store):
    blob = Blob(b'same')
    store.write(blob, PERMANENT)
    before = store.object_path(blob.hash).read_bytes()

    store.write(blob, PERMANENT)
    assert store.object_path(blob.hash).read_bytes() == before
    assert list(store.iter_hashes(PERMANENT)) == [blob.hash]


def test_get_missing(store):
    with pytest.raises(ObjectNotFound) as exc_info:
        store.get(STAGING, 'f' * 40)
    assert exc_info.value.partition == STAGING


def test_unknown_partition(store):
    with pytest.raises(ValueError):
        store.partition_dir('elsewhere')


def test_write_then_read(store):
    obj_hash = store.write(Blob(b'content'), STAGING)
    assert store.read(obj_hash, STAGING).data == b'content'


def test_read_corrupt_object(store):
    store.put(PERMANENT, 'e' * 40, b'not compressed')
    with pytest.raises(CorruptionError):
        store.read('e' * 40)


def test_staging_isolation(store):
    """Test staged objects are invisible in the permanent partition."""
    obj_hash = store.write(Blob(b'staged'), STAGING)
    assert store.contains(STAGING, obj_hash)
    assert not store.contains(PERMANENT, obj_hash)
    with pytest.raises(ObjectNotFound):
        store.get(PERMANENT, obj_hash)


def test_locate_prefers_permanent(store):
    blob = Blob(b'both')
    store.write(blob, STAGING)
    assert store.locate(blob.hash) == STAGING
    store.write(blob, PERMANENT)
    assert store.locate(blob.hash) == PERMANENT
    assert store.locate('0' * 40) is None


def test_promote_moves_bytes(store):
    obj_hash = store.write(Blob(b'promote me'), STAGING)
    staged_bytes = store.get(STAGING, obj_hash)

    store.promote(obj_hash)

    assert store.get(PERMANENT, obj_hash) == staged_bytes
    assert not store.contains(STAGING, obj_hash)


def test_promote_overwrites_existing(store):
    blob = Blob(b'already there')
    store.write(blob, PERMANENT)
    store.write(blob, STAGING)

    store.promote(blob.hash)
    assert store.read(blob.hash).data == b'already there'


def test_promote_missing(store):
    with pytest.raises(ObjectNotFound):
        store.promote('1' * 40)


def test_promote_all(store):
    hashes = sorted(store.write(Blob(data), STAGING) for data in (b'a', b'b', b'c'))

    promoted = store.promote_all()

    assert sorted(promoted) == hashes
    assert store.is_staging_empty()
    assert sorted(store.iter_hashes(PERMANENT)) == hashes


def test_is_staging_empty(store):
    assert store.is_staging_empty()
    store.write(Blob(b'x'), STAGING)
    assert not store.is_staging_empty()


def test_clear_staging(store):
    store.write(Blob(b'x'), STAGING)
    store.write(Blob(b'y'), STAGING)

    store.clear_staging()

    assert store.staging_dir.is_dir()
    assert store.is_staging_empty()
    assert store.staged_hashes() == []


def test_compression_level_is_applied(tmp_path):
    store = ObjectStore(tmp_path / 'o', tmp_path / 's', compression_level=0)
    blob = Blob(b'z' * 100)
    store.write(blob, PERMANENT)
    assert store.get(PERMANENT, blob.hash) == compress(blob.to_bytes(), 0)


@pytest.mark.parametrize('bad', ['../../../etc/passwd', 'ab', 'A' * 40, 'g' * 40, 'a' * 40 + '\n'])
def test_malformed_hash_is_rejected(store, bad):
    with pytest.raises(InvalidObject):
        store.object_path(bad)
    with pytest.raises(ObjectNotFound):
        store.get(PERMANENT, bad)
    assert not store.contains(STAGING, bad)
    assert store.locate(bad) is None


def test_iter_hashes_skips_stray_files(store):
    blob_hash = store.write(Blob(b'x'), STAGING)
    (store.staging_dir / 'ab').mkdir()
    (store.staging_dir / 'ab' / 'notes.txt').write_text('stray')

    assert store.staged_hashes() == [blob_hash]
