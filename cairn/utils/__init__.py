"""Utilities module.

This module contains:
- Ignore list handling (.cairnignore)
"""

from cairn.utils.ignore import IgnoreList, load_ignore_list, DEFAULT_IGNORE_PATTERNS

__all__ = [
    'IgnoreList', 'load_ignore_list', 'DEFAULT_IGNORE_PATTERNS',
]
