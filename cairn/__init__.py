"""Cairn - a minimal content-addressable version control store."""

__version__ = '0.1.0'

from cairn.core.repository import Repository
from cairn.core.objects import CairnObject, Blob, Tree, Commit

__all__ = [
    'Repository',
    'CairnObject',
    'Blob',
    'Tree',
    'Commit',
]
