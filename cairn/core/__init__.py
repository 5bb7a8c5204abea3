"""Core functionality for Cairn.

This module contains the core data structures:
- Cairn objects (Blob, Tree, Commit)
- The partitioned object store
- Repository management
- Reference management
- Configuration management
- Hashing and compression

For staging, committing and diffing, see cairn.operations
"""

from cairn.core.objects import CairnObject, Blob, Tree, TreeEntry, Commit, parse_object
from cairn.core.repository import Repository, StageResult
from cairn.core.hash import hash_object, compress, decompress
from cairn.core.store import ObjectStore, PERMANENT, STAGING
from cairn.core.refs import RefManager, HeadRef, BranchInfo
from cairn.core.config import Config

__all__ = [
    'CairnObject',
    'Blob',
    'Tree',
    'TreeEntry',
    'Commit',
    'parse_object',
    'Repository',
    'StageResult',
    'ObjectStore',
    'PERMANENT',
    'STAGING',
    'RefManager',
    'HeadRef',
    'BranchInfo',
    'Config',
    'hash_object',
    'compress',
    'decompress',
]
