"""Exceptions raised by Cairn."""


class CairnError(Exception):
    """Base class for all Cairn errors."""


class RepositoryAlreadyExists(CairnError):
    """Raised when initializing a directory that already holds a repository."""


class RepositoryNotFound(CairnError):
    """Raised when no repository can be found."""


class ObjectNotFound(CairnError):
    """Raised when a hash is absent from the requested partition."""

    def __init__(self, obj_hash: str, partition: str = 'objects'):
        super().__init__(f"Object {obj_hash} not found in {partition}")
        self.hash = obj_hash
        self.partition = partition


class CorruptionError(CairnError):
    """Raised when stored object bytes cannot be decompressed."""


class InvalidObject(CairnError):
    """Raised when a decompressed object has a malformed header or body."""


class NothingToCommit(CairnError):
    """Raised when committing with an empty staging area."""


class BranchExists(CairnError):
    """Raised when creating a branch whose name is already taken."""


class BranchNotFound(CairnError):
    """Raised when a branch does not exist."""


class UnresolvableHead(CairnError):
    """Raised when HEAD points at a missing branch or a nonexistent commit."""


class InvalidBranchName(CairnError):
    """Raised when a branch name cannot be stored as a ref file."""


class InvalidConfig(CairnError):
    """Raised when a configuration value cannot be used."""
