"""Build tree and blob objects from a directory on disk."""

import logging
import os
import stat
from pathlib import Path
from typing import Callable, Optional

from cairn.core.objects import (Blob, Tree, MODE_DIRECTORY, MODE_EXECUTABLE, MODE_FILE,
                                MODE_SYMLINK)
from cairn.core.store import ObjectStore, STAGING

logger = logging.getLogger(__name__)

IgnorePredicate = Callable[[str], bool]


def file_mode(path: Path) -> Optional[str]:
    """
    Tree entry mode for a path, or None for entries that are not stored
    (sockets, fifos, devices).
    """
    st = path.lstat()
    if stat.S_ISLNK(st.st_mode):
        return MODE_SYMLINK
    if stat.S_ISDIR(st.st_mode):
        return MODE_DIRECTORY
    if stat.S_ISREG(st.st_mode):
        return MODE_EXECUTABLE if st.st_mode & stat.S_IXUSR else MODE_FILE
    return None


class TreeBuilder:
    """
    Recursively turns a directory into Tree and Blob objects.

    Every object is written into one partition of the store (staging by
    default). Entries are visited in name order, so the resulting hashes
    only depend on directory content.
    """

    def __init__(self, store: ObjectStore, root: Path, ignore: Optional[IgnorePredicate] = None,
                 partition: str = STAGING):
        """
        Initialize tree builder.

        Args:
            store: Object store to write into
            root: Repository root; ignore checks receive paths relative to it
            ignore: Predicate returning True for relative paths to skip
            partition: Partition receiving the objects
        """
        self.store = store
        self.root = Path(root)
        self.ignore = ignore or (lambda path: False)
        self.partition = partition
        self.objects_written = 0

    def build(self, directory: Optional[Path] = None) -> str:
        """
        Build and store the tree for a directory.

        Args:
            directory: Directory to snapshot (defaults to the root)

        Returns:
            str: Hash of the directory's tree
        """
        directory = Path(directory) if directory is not None else self.root
        tree_hash = self._build_directory(directory)
        logger.debug("built tree %s for %s (%d objects)", tree_hash, directory, self.objects_written)
        return tree_hash

    def _build_directory(self, directory: Path) -> str:
        tree = Tree()

        for item in sorted(directory.iterdir(), key=lambda p: p.name):
            rel_path = item.relative_to(self.root).as_posix()
            if self.ignore(rel_path):
                logger.debug("ignoring %s", rel_path)
                continue

            mode = file_mode(item)
            if mode is None:
                logger.debug("skipping special file %s", rel_path)
                continue

            if mode == MODE_DIRECTORY:
                obj_hash = self._build_directory(item)
            elif mode == MODE_SYMLINK:
                obj_hash = self._write(Blob(os.readlink(item).encode()))
            else:
                obj_hash = self._write(Blob.from_file(str(item)))

            tree.add_entry(mode, item.name, obj_hash)

        return self._write(tree)

    def _write(self, obj) -> str:
        self.objects_written += 1
        return self.store.write(obj, self.partition)


def build_tree(store: ObjectStore, root: Path, ignore: Optional[IgnorePredicate] = None,
               partition: str = STAGING) -> str:
    """Snapshot root into the store and return its tree hash."""
    return TreeBuilder(store, root, ignore, partition).build()
