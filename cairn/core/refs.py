"""Reference management for Cairn."""

import logging
from dataclasses import dataclass
from typing import List, Optional

from cairn.errors import BranchExists, BranchNotFound, InvalidBranchName, UnresolvableHead
from .objects import Commit
from .store import PERMANENT

logger = logging.getLogger(__name__)

SYMREF_PREFIX = 'ref: '
HEADS_PREFIX = 'refs/heads/'


@dataclass(frozen=True)
class HeadRef:
    """
    Parsed content of the HEAD file.

    kind is 'branch' when HEAD names a branch symbolically, 'commit' when
    HEAD holds a commit hash directly (detached).
    """
    kind: str
    branch: Optional[str] = None
    hash: Optional[str] = None

    @property
    def is_detached(self) -> bool:
        return self.kind == 'commit'


@dataclass(frozen=True)
class BranchInfo:
    name: str
    commit: str
    current: bool = False


def validate_branch_name(name: str) -> None:
    """
    Reject names that cannot safely map to a file under refs/heads.

    Raises:
        InvalidBranchName: If the name is empty, absolute, or escapes the
            heads directory
    """
    if not name or name.startswith('/') or name.endswith('/'):
        raise InvalidBranchName(f"Invalid branch name: {name!r}")
    if any(part in ('', '.', '..') for part in name.split('/')):
        raise InvalidBranchName(f"Invalid branch name: {name!r}")
    if any(c in name for c in ('\0', '\n', '\\', ' ')):
        raise InvalidBranchName(f"Invalid branch name: {name!r}")


class RefManager:
    """
    Manages HEAD and branch references.

    A branch is a file under refs/heads holding a commit hash. HEAD either
    names a branch ("ref: refs/heads/<name>") or holds a commit hash
    directly (detached HEAD).
    """

    def __init__(self, repo):
        """
        Initialize reference manager.

        Args:
            repo: Repository instance
        """
        self.repo = repo
        self.heads_dir = repo.heads_dir
        self.head_file = repo.head_file

    def branch_path(self, name: str):
        validate_branch_name(name)
        return self.heads_dir / name

    def resolve_head(self) -> HeadRef:
        """
        Parse the HEAD file.

        Returns:
            HeadRef naming either a branch or a commit

        Raises:
            UnresolvableHead: If HEAD is missing or empty
        """
        if not self.head_file.exists():
            raise UnresolvableHead("HEAD does not exist")

        content = self.head_file.read_text().strip()
        if not content:
            raise UnresolvableHead("HEAD is empty")

        if content.startswith(SYMREF_PREFIX):
            target = content[len(SYMREF_PREFIX):]
            if target.startswith(HEADS_PREFIX):
                target = target[len(HEADS_PREFIX):]
            return HeadRef(kind='branch', branch=target)

        return HeadRef(kind='commit', hash=content)

    def read_branch(self, name: str) -> Optional[str]:
        """
        Read the commit hash a branch points to.

        Returns:
            Commit hash or None if the branch doesn't exist
        """
        path = self.branch_path(name)
        if not path.is_file():
            return None
        return path.read_text().strip()

    def branch_exists(self, name: str) -> bool:
        """True if a branch ref file exists; names that cannot be branches never do."""
        try:
            return self.branch_path(name).is_file()
        except InvalidBranchName:
            return False

    def head_commit(self, allow_unborn: bool = False) -> Optional[str]:
        """
        Resolve HEAD to a commit hash, following a symbolic HEAD through its branch.

        Args:
            allow_unborn: Return None instead of failing when HEAD names a
                branch that has no ref file yet

        Raises:
            UnresolvableHead: If HEAD names a missing branch (unless
                allow_unborn) or holds a hash that is not a stored commit
        """
        head = self.resolve_head()

        if head.is_detached:
            if not self._is_commit(head.hash):
                raise UnresolvableHead(f"HEAD points to nonexistent commit {head.hash}")
            return head.hash

        commit_hash = self.read_branch(head.branch)
        if commit_hash is None:
            if allow_unborn:
                return None
            raise UnresolvableHead(f"HEAD points to missing branch '{head.branch}'")
        return commit_hash

    def current_branch(self) -> Optional[str]:
        """
        Get the current branch name.

        Returns:
            Branch name or None if in detached HEAD state
        """
        head = self.resolve_head()
        return None if head.is_detached else head.branch

    def is_detached(self) -> bool:
        return self.resolve_head().is_detached

    def set_head_to_branch(self, name: str) -> None:
        validate_branch_name(name)
        self.head_file.write_text(f'{SYMREF_PREFIX}{HEADS_PREFIX}{name}\n')
        logger.info("HEAD -> %s", name)

    def set_head_to_commit(self, commit_hash: str) -> None:
        self.head_file.write_text(commit_hash + '\n')
        logger.info("HEAD -> %s (detached)", commit_hash)

    def update_branch(self, name: str, commit_hash: str) -> None:
        """Point a branch at a commit, creating the ref file if needed."""
        path = self.branch_path(name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(commit_hash + '\n')
        logger.info("%s -> %s", name, commit_hash)

    def advance_head(self, commit_hash: str) -> str:
        """
        Move whatever HEAD designates to a new commit.

        A symbolic HEAD advances its branch; a detached HEAD is rewritten.

        Returns:
            str: Branch name that moved, or 'HEAD' when detached
        """
        head = self.resolve_head()
        if head.is_detached:
            self.set_head_to_commit(commit_hash)
            return 'HEAD'
        self.update_branch(head.branch, commit_hash)
        return head.branch

    def create_branch(self, name: str) -> str:
        """
        Create a branch at the commit HEAD currently resolves to.

        HEAD itself is left where it is.

        Returns:
            str: Commit hash the new branch points to

        Raises:
            BranchExists: If the branch already exists
            UnresolvableHead: If HEAD cannot be resolved to a commit
        """
        if self.branch_exists(name):
            raise BranchExists(f"Branch '{name}' already exists")

        commit_hash = self.head_commit()
        self.update_branch(name, commit_hash)
        return commit_hash

    def checkout_branch(self, name: str) -> str:
        """
        Make HEAD name a branch. The working directory is not touched.

        Returns:
            str: Commit hash of the branch

        Raises:
            BranchNotFound: If no such branch exists
        """
        commit_hash = self.read_branch(name)
        if commit_hash is None:
            raise BranchNotFound(f"Branch '{name}' does not exist")
        self.set_head_to_branch(name)
        return commit_hash

    def checkout_commit(self, commit_hash: str) -> None:
        """
        Detach HEAD at a commit. The working directory is not touched.

        Raises:
            UnresolvableHead: If the hash is not a stored commit
        """
        if not self._is_commit(commit_hash):
            raise UnresolvableHead(f"Not a commit: {commit_hash}")
        self.set_head_to_commit(commit_hash)

    def list_branches(self) -> List[BranchInfo]:
        """
        List all branches sorted by name.

        The branch HEAD names is flagged current; a detached HEAD flags none.
        """
        if not self.heads_dir.exists():
            return []

        head = self.resolve_head()
        current = None if head.is_detached else head.branch

        branches = []
        for branch_file in self.heads_dir.rglob('*'):
            if branch_file.is_file():
                name = branch_file.relative_to(self.heads_dir).as_posix()
                branches.append(BranchInfo(
                    name=name,
                    commit=branch_file.read_text().strip(),
                    current=(name == current),
                ))

        return sorted(branches, key=lambda b: b.name)

    def _is_commit(self, commit_hash: Optional[str]) -> bool:
        if not commit_hash or not self.repo.store.contains(PERMANENT, commit_hash):
            return False
        return isinstance(self.repo.store.read(commit_hash), Commit)
