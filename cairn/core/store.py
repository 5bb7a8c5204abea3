"""Partitioned, content-addressed object storage."""

import logging
import shutil
from pathlib import Path
from typing import Iterator, Optional

from cairn.errors import InvalidObject, ObjectNotFound
from .hash import compress, decompress
from .objects import CairnObject, is_valid_hash, parse_object

logger = logging.getLogger(__name__)

PERMANENT = 'objects'
STAGING = 'staging'
PARTITIONS = (PERMANENT, STAGING)


class ObjectStore:
    """
    Object database split into a permanent and a staging partition.

    Both partitions are directories keyed by hash: the first two hex
    characters name a shard directory and the remaining 38 characters name
    the file. Objects written to staging stay invisible to permanent readers
    until they are promoted.
    """

    def __init__(self, objects_dir: Path, staging_dir: Path, compression_level: int = -1):
        """
        Initialize object store.

        Args:
            objects_dir: Directory of the permanent partition
            staging_dir: Directory of the staging partition
            compression_level: zlib level used when writing objects
        """
        self.objects_dir = Path(objects_dir)
        self.staging_dir = Path(staging_dir)
        self.compression_level = compression_level

    def partition_dir(self, partition: str) -> Path:
        if partition == PERMANENT:
            return self.objects_dir
        if partition == STAGING:
            return self.staging_dir
        raise ValueError(f"Unknown partition: {partition}")

    def object_path(self, obj_hash: str, partition: str = PERMANENT) -> Path:
        """
        Get filesystem path for an object.

        Example: ab/cdef0123456789... for hash abcdef0123456789...

        Args:
            obj_hash: 40-character SHA-1 hash
            partition: PERMANENT or STAGING

        Returns:
            Path: Full path to object file

        Raises:
            InvalidObject: If obj_hash is not a 40-character hex hash
        """
        if not is_valid_hash(obj_hash):
            raise InvalidObject(f"Invalid object hash: {obj_hash!r}")
        return self.partition_dir(partition) / obj_hash[:2] / obj_hash[2:]

    def put(self, partition: str, obj_hash: str, compressed: bytes) -> None:
        """
        Store compressed object bytes under a hash.

        Writing a hash that already exists overwrites it with the same bytes,
        so repeated writes are harmless.
        """
        path = self.object_path(obj_hash, partition)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(compressed)
        logger.debug("wrote %s to %s", obj_hash, partition)

    def get(self, partition: str, obj_hash: str) -> bytes:
        """
        Read compressed object bytes.

        Raises:
            ObjectNotFound: If the hash is absent from the partition
        """
        if not is_valid_hash(obj_hash):
            raise ObjectNotFound(obj_hash, partition)
        path = self.object_path(obj_hash, partition)
        if not path.is_file():
            raise ObjectNotFound(obj_hash, partition)
        return path.read_bytes()

    def contains(self, partition: str, obj_hash: str) -> bool:
        if not is_valid_hash(obj_hash):
            return False
        return self.object_path(obj_hash, partition).is_file()

    def write(self, obj: CairnObject, partition: str = PERMANENT) -> str:
        """
        Serialize, compress and store an object.

        Args:
            obj: Object to write
            partition: PERMANENT or STAGING

        Returns:
            str: Hash of the object
        """
        obj_hash = obj.hash
        self.put(partition, obj_hash, compress(obj.to_bytes(), self.compression_level))
        return obj_hash

    def read(self, obj_hash: str, partition: str = PERMANENT) -> CairnObject:
        """
        Read and decode an object.

        Raises:
            ObjectNotFound: If the object is absent
            CorruptionError: If the stored bytes are not valid zlib data
            InvalidObject: If the decompressed bytes are not a valid object
        """
        return parse_object(decompress(self.get(partition, obj_hash)))

    def locate(self, obj_hash: str) -> Optional[str]:
        """Return the partition holding a hash, preferring the permanent one."""
        for partition in PARTITIONS:
            if self.contains(partition, obj_hash):
                return partition
        return None

    def iter_hashes(self, partition: str = PERMANENT) -> Iterator[str]:
        """Yield every hash stored in a partition, in sorted order."""
        root = self.partition_dir(partition)
        if not root.is_dir():
            return
        for shard in sorted(root.iterdir()):
            if not shard.is_dir() or len(shard.name) != 2:
                continue
            for entry in sorted(shard.iterdir()):
                obj_hash = shard.name + entry.name
                if entry.is_file() and is_valid_hash(obj_hash):
                    yield obj_hash

    def staged_hashes(self) -> list[str]:
        return list(self.iter_hashes(STAGING))

    def is_staging_empty(self) -> bool:
        if not self.staging_dir.is_dir():
            return True
        return not any(self.staging_dir.iterdir())

    def promote(self, obj_hash: str) -> None:
        """
        Move one staged object into the permanent partition.

        The staged file is copied first and removed only after the copy has
        landed, so an interruption leaves the object in both partitions
        rather than in neither.

        Raises:
            ObjectNotFound: If the object is not staged
        """
        source = self.object_path(obj_hash, STAGING)
        if not source.is_file():
            raise ObjectNotFound(obj_hash, STAGING)

        destination = self.object_path(obj_hash, PERMANENT)
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, destination)
        source.unlink()

        try:
            source.parent.rmdir()
        except OSError:
            pass  # shard still holds other objects

        logger.debug("promoted %s", obj_hash)

    def promote_all(self) -> list[str]:
        """
        Promote every staged object.

        Returns:
            list[str]: Hashes that were promoted
        """
        promoted = []
        for obj_hash in self.staged_hashes():
            self.promote(obj_hash)
            promoted.append(obj_hash)
        logger.debug("promoted %d staged object(s)", len(promoted))
        return promoted

    def clear_staging(self) -> None:
        """Remove all staged objects, leaving an empty staging directory."""
        if self.staging_dir.exists():
            shutil.rmtree(self.staging_dir)
        self.staging_dir.mkdir(parents=True)

    def __repr__(self) -> str:
        return f"ObjectStore(objects={self.objects_dir}, staging={self.staging_dir})"
