"""Promote staged objects into a commit."""

import logging

from cairn.core.objects import Commit
from cairn.core.store import PERMANENT
from cairn.errors import NothingToCommit

logger = logging.getLogger(__name__)


class CommitEngine:
    """
    Turns the staging partition into a commit.

    The steps run in a fixed order and the ref update comes last: until it
    happens the previous commit stays authoritative, and anything written
    before a failure is either still staged (safe to retry) or an
    unreferenced permanent object.
    """

    def __init__(self, repo):
        """
        Initialize commit engine.

        Args:
            repo: Repository instance
        """
        self.repo = repo
        self.store = repo.store
        self.refs = repo.refs

    def commit(self, message: str) -> str:
        """
        Commit the working tree.

        1. Refuse when nothing is staged.
        2. Resolve the parent from HEAD.
        3. Snapshot the working directory into staging.
        4. Promote every staged object.
        5. Write the commit to the permanent partition.
        6. Clear staging.
        7. Advance the branch HEAD names, or HEAD itself when detached.

        Args:
            message: Commit message

        Returns:
            str: Hash of the new commit

        Raises:
            NothingToCommit: If staging is empty; nothing is written
            UnresolvableHead: If a detached HEAD points to a missing commit
        """
        if self.store.is_staging_empty():
            raise NothingToCommit("Nothing staged to commit")

        parent_hash = self.refs.head_commit(allow_unborn=True)

        tree_hash = self.repo.build_tree()
        promoted = self.store.promote_all()

        commit = Commit.create(tree_hash, parent_hash, message)
        commit_hash = self.store.write(commit, PERMANENT)

        self.store.clear_staging()

        moved = self.refs.advance_head(commit_hash)
        logger.info("committed %s on %s (tree %s, %d object(s) promoted)",
                    commit_hash, moved, tree_hash, len(promoted))
        return commit_hash
