"""Ignore list handling for .cairnignore files.

Patterns are plain relative paths, one per line. A path is ignored when it
equals a pattern or lies underneath one.
"""

from pathlib import Path
from typing import Iterable, List, Optional

DEFAULT_IGNORE_PATTERNS = ['.cairn', '.git']


def normalize_path(path: str) -> str:
    """Normalize a relative path to forward slashes without ./ or trailing /."""
    path = path.strip().replace('\\', '/')
    while path.startswith('./'):
        path = path[2:]
    return path.rstrip('/')


class IgnoreList:
    """Matches repository-relative paths against a flat list of patterns."""

    def __init__(self, patterns: Optional[Iterable[str]] = None):
        self.patterns: List[str] = []
        if patterns:
            self.add_patterns(patterns)

    def add_pattern(self, pattern: str) -> None:
        """
        Add a pattern.

        Blank lines and lines starting with # are skipped.
        """
        pattern = normalize_path(pattern)
        if not pattern or pattern.startswith('#'):
            return
        if pattern not in self.patterns:
            self.patterns.append(pattern)

    def add_patterns(self, patterns: Iterable[str]) -> None:
        for pattern in patterns:
            self.add_pattern(pattern)

    def load_file(self, path: Path) -> bool:
        """
        Load patterns from an ignore file.

        Returns:
            True if the file existed and was loaded
        """
        if not path.is_file():
            return False
        self.add_patterns(path.read_text().splitlines())
        return True

    def is_ignored(self, path: str) -> bool:
        """
        Check whether a repository-relative path is excluded.

        Args:
            path: Path relative to the repository root
        """
        path = normalize_path(path)
        return any(
            path == pattern or path.startswith(pattern + '/')
            for pattern in self.patterns
        )

    __call__ = is_ignored

    def __len__(self) -> int:
        return len(self.patterns)

    def __repr__(self) -> str:
        return f"IgnoreList(patterns={self.patterns})"


def load_ignore_list(repo_root: Path, ignore_file: str = '.cairnignore', repo_dir_name: str = '.cairn') -> IgnoreList:
    """
    Build the ignore list for a repository.

    Uses the ignore file when present and the built-in defaults otherwise.
    The repository directory itself is always ignored.

    Args:
        repo_root: Repository root directory
        ignore_file: Ignore file name relative to the root
        repo_dir_name: Name of the repository metadata directory
    """
    ignore = IgnoreList()
    if not ignore.load_file(Path(repo_root) / ignore_file):
        ignore.add_patterns(DEFAULT_IGNORE_PATTERNS)
    ignore.add_pattern(repo_dir_name)
    return ignore
