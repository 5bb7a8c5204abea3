"""Repository management for Cairn."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from cairn.errors import (InvalidConfig, InvalidObject, ObjectNotFound, RepositoryAlreadyExists,
                          RepositoryNotFound)
from cairn.utils.ignore import DEFAULT_IGNORE_PATTERNS, IgnoreList, load_ignore_list
from .config import Config
from .objects import CairnObject, Commit, Tree
from .refs import validate_branch_name
from .store import ObjectStore, PERMANENT, STAGING

logger = logging.getLogger(__name__)

REPO_DIR_NAME = '.cairn'
INITIAL_COMMIT_MESSAGE = 'Initial commit'


@dataclass
class StageResult:
    """Outcome of staging the working tree."""
    tree_hash: str
    tree: Tree

    @property
    def names(self) -> List[str]:
        return [entry.name for entry in self.tree.entries]


class Repository:
    """
    Represents a Cairn repository.

    A repository manages the .cairn directory and wires together the object
    store, the reference manager and the operations working on them. Every
    path is derived from the work tree given at construction; nothing
    depends on the process working directory.
    """

    def __init__(self, path: str = '.'):
        """
        Initialize repository.

        Args:
            path: Path to repository root (defaults to current directory)
        """
        self.work_tree = Path(path).resolve()
        self.cairn_dir = self.work_tree / REPO_DIR_NAME
        self.objects_dir = self.cairn_dir / PERMANENT
        self.staging_dir = self.cairn_dir / STAGING
        self.refs_dir = self.cairn_dir / 'refs'
        self.heads_dir = self.refs_dir / 'heads'
        self.head_file = self.cairn_dir / 'HEAD'
        self.config_file = self.cairn_dir / 'config'

        self._config = None
        self._store = None
        self._ref_manager = None
        self._commit_engine = None
        self._differ = None

    @property
    def config(self) -> Config:
        if self._config is None:
            self._config = Config(self.config_file)
        return self._config

    @property
    def store(self) -> ObjectStore:
        """Get ObjectStore instance."""
        if self._store is None:
            level = self.config.get_int('core', 'compression', -1)
            if not -1 <= level <= 9:
                raise InvalidConfig(f"core.compression must be between -1 and 9, got {level}")
            self._store = ObjectStore(self.objects_dir, self.staging_dir, level)
        return self._store

    @property
    def refs(self):
        """Get RefManager instance."""
        if self._ref_manager is None:
            from .refs import RefManager
            self._ref_manager = RefManager(self)
        return self._ref_manager

    @property
    def commits(self):
        """Get CommitEngine instance."""
        if self._commit_engine is None:
            from cairn.operations.commit import CommitEngine
            self._commit_engine = CommitEngine(self)
        return self._commit_engine

    @property
    def differ(self):
        """Get TreeDiffer instance."""
        if self._differ is None:
            from cairn.operations.diff import TreeDiffer
            self._differ = TreeDiffer(self.store)
        return self._differ

    @property
    def ignore_file(self) -> Path:
        return self.work_tree / self.config.get('core', 'ignorefile')

    def exists(self) -> bool:
        return self.cairn_dir.is_dir()

    def init(self, default_branch: Optional[str] = None) -> 'Repository':
        """
        Initialize a new repository.

        Creates the .cairn directory structure:
        .cairn/
        ├── objects/       # Committed objects
        ├── staging/       # Objects awaiting commit
        ├── refs/heads/    # Branch references
        ├── HEAD           # Current branch/commit
        └── config         # Repository configuration

        Writes a default ignore file when the work tree has none, stores the
        empty tree, and points the default branch at an initial commit of
        that tree.

        Returns:
            Repository: self for method chaining

        Raises:
            RepositoryAlreadyExists: If .cairn already exists
            InvalidBranchName: If the first branch name is unusable
            InvalidConfig: If core.compression is not a zlib level
        """
        if self.cairn_dir.exists():
            raise RepositoryAlreadyExists(f"Repository already exists at {self.cairn_dir}")

        # Settings are checked before anything is created on disk
        branch = default_branch or self.config.get('init', 'defaultbranch')
        validate_branch_name(branch)
        store = self.store

        self.cairn_dir.mkdir(parents=True)
        self.objects_dir.mkdir()
        self.staging_dir.mkdir()
        self.heads_dir.mkdir(parents=True)

        self.config_file.write_text('[core]\nrepositoryformatversion = 0\n')
        self._config = None

        if not self.ignore_file.exists():
            self.ignore_file.write_text(''.join(f'{p}\n' for p in DEFAULT_IGNORE_PATTERNS))

        empty_tree_hash = store.write(Tree(), PERMANENT)
        initial = Commit.create(empty_tree_hash, None, INITIAL_COMMIT_MESSAGE)
        initial_hash = store.write(initial, PERMANENT)

        self.refs.update_branch(branch, initial_hash)
        self.refs.set_head_to_branch(branch)

        logger.info("initialized repository in %s", self.cairn_dir)
        return self

    @classmethod
    def find_repository(cls, path: str = '.') -> Optional['Repository']:
        """
        Find repository by searching up the directory tree.

        Returns:
            Repository if found, None otherwise
        """
        current = Path(path).resolve()

        while True:
            if (current / REPO_DIR_NAME).is_dir():
                return cls(str(current))
            if current == current.parent:
                return None
            current = current.parent

    @classmethod
    def open(cls, path: str = '.') -> 'Repository':
        """
        Like find_repository, but fails when there is no repository.

        Raises:
            RepositoryNotFound: If no .cairn directory is found
        """
        repo = cls.find_repository(path)
        if repo is None:
            raise RepositoryNotFound(f"Not a cairn repository: {Path(path).resolve()}")
        return repo

    def ignore_list(self) -> IgnoreList:
        return load_ignore_list(self.work_tree, self.config.get('core', 'ignorefile'), REPO_DIR_NAME)

    def build_tree(self) -> str:
        """Snapshot the working directory into staging and return the root tree hash."""
        from cairn.operations.builder import build_tree
        return build_tree(self.store, self.work_tree, self.ignore_list(), STAGING)

    def stage(self) -> StageResult:
        """
        Stage the working tree.

        Returns:
            StageResult with the root tree hash and the decoded root tree
        """
        tree_hash = self.build_tree()
        tree = self.store.read(tree_hash, STAGING)
        logger.info("staged working tree %s", tree_hash)
        return StageResult(tree_hash, tree)

    def commit(self, message: str) -> str:
        return self.commits.commit(message)

    def diff(self, hash_a: str, hash_b: str):
        return self.differ.diff(hash_a, hash_b)

    def create_branch(self, name: str) -> str:
        return self.refs.create_branch(name)

    def list_branches(self):
        return self.refs.list_branches()

    def checkout_branch(self, name: str) -> str:
        return self.refs.checkout_branch(name)

    def write_object(self, obj: CairnObject, partition: str = PERMANENT) -> str:
        return self.store.write(obj, partition)

    def read_object(self, obj_hash: str, partition: Optional[str] = None) -> CairnObject:
        """
        Read object from repository.

        Args:
            obj_hash: 40-character SHA-1 hash
            partition: Partition to read from; when None the permanent
                partition is tried first, then staging

        Raises:
            ObjectNotFound: If the object is not stored
        """
        if partition is None:
            partition = self.store.locate(obj_hash)
            if partition is None:
                raise ObjectNotFound(obj_hash, 'objects or staging')
        return self.store.read(obj_hash, partition)

    def resolve_tree(self, rev: str) -> str:
        """
        Resolve a revision to a tree hash.

        Accepts 'HEAD', a branch name, a commit hash or a tree hash.

        Raises:
            ObjectNotFound: If rev names no branch and no stored object
            InvalidObject: If rev resolves to a blob
        """
        if rev == 'HEAD':
            obj_hash = self.refs.head_commit()
        elif self.refs.branch_exists(rev):
            obj_hash = self.refs.read_branch(rev)
        else:
            obj_hash = rev

        obj = self.read_object(obj_hash)
        if isinstance(obj, Commit):
            return obj.tree
        if isinstance(obj, Tree):
            return obj_hash
        raise InvalidObject(f"{rev} is a {obj.type}, not a tree or commit")

    def __repr__(self) -> str:
        return f"Repository(path={self.work_tree})"
