"""Shallow comparison of two trees."""

from dataclasses import dataclass
from typing import Dict, List, Optional

from cairn.core.objects import Tree, TreeEntry
from cairn.errors import InvalidObject, ObjectNotFound

ADDED = 'added'
DELETED = 'deleted'
MODIFIED = 'modified'


@dataclass(frozen=True)
class TreeChange:
    """One differing entry between two trees."""
    path: str
    status: str
    old: Optional[TreeEntry] = None
    new: Optional[TreeEntry] = None

    @property
    def symbol(self) -> str:
        return {ADDED: '+', DELETED: '-', MODIFIED: 'M'}[self.status]

    def __str__(self) -> str:
        return f"{self.symbol} {self.path} ({self.status})"


class TreeDiffer:
    """
    Compares the immediate entries of two trees.

    Subdirectories are not expanded: a directory whose content changed is
    reported once, as a modified entry.
    """

    def __init__(self, store):
        """
        Initialize tree differ.

        Args:
            store: ObjectStore to load trees from; both partitions are searched
        """
        self.store = store

    def load_tree(self, tree_hash: str) -> Tree:
        partition = self.store.locate(tree_hash)
        if partition is None:
            raise ObjectNotFound(tree_hash, 'objects or staging')

        obj = self.store.read(tree_hash, partition)
        if not isinstance(obj, Tree):
            raise InvalidObject(f"{tree_hash} is a {obj.type}, not a tree")
        return obj

    @staticmethod
    def entry_map(tree: Tree) -> Dict[str, TreeEntry]:
        return {entry.name: entry for entry in tree.entries}

    def diff_trees(self, tree_a: Tree, tree_b: Tree) -> List[TreeChange]:
        entries_a = self.entry_map(tree_a)
        entries_b = self.entry_map(tree_b)

        changes = []
        for name in sorted(entries_a.keys() | entries_b.keys()):
            old = entries_a.get(name)
            new = entries_b.get(name)

            if old is None:
                changes.append(TreeChange(name, ADDED, new=new))
            elif new is None:
                changes.append(TreeChange(name, DELETED, old=old))
            elif (old.mode, old.hash) != (new.mode, new.hash):
                changes.append(TreeChange(name, MODIFIED, old=old, new=new))

        return changes

    def diff(self, hash_a: str, hash_b: str) -> List[TreeChange]:
        """
        Compare two trees by hash.

        Args:
            hash_a: Hash of the old tree
            hash_b: Hash of the new tree

        Returns:
            List of TreeChange sorted by path; identical entries are omitted

        Raises:
            ObjectNotFound: If either hash is in neither partition
            InvalidObject: If either hash is not a tree
        """
        return self.diff_trees(self.load_tree(hash_a), self.load_tree(hash_b))
