"""Operations on a repository.

This module contains:
- Tree building (staging the working directory)
- Commit creation
- Tree comparison
"""

from cairn.operations.builder import TreeBuilder, build_tree
from cairn.operations.commit import CommitEngine
from cairn.operations.diff import TreeDiffer, TreeChange, ADDED, DELETED, MODIFIED

__all__ = [
    'TreeBuilder', 'build_tree',
    'CommitEngine',
    'TreeDiffer', 'TreeChange', 'ADDED', 'DELETED', 'MODIFIED',
]
