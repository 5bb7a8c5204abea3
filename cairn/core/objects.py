"""Content-addressed objects for Cairn."""

import re
from abc import ABC, abstractmethod
from typing import Optional

from cairn.errors import InvalidObject
from .hash import hash_object

# Tree entry modes
MODE_DIRECTORY = '40000'
MODE_FILE = '100644'
MODE_EXECUTABLE = '100755'
MODE_SYMLINK = '120000'

TREE_MODES = (MODE_DIRECTORY, MODE_FILE, MODE_EXECUTABLE, MODE_SYMLINK)

HASH_HEX_LENGTH = 40
HASH_PATTERN = re.compile(r'[0-9a-f]{40}')

# Tree entry names round-trip arbitrary filesystem bytes
NAME_ENCODING = 'utf-8'
NAME_ERRORS = 'surrogateescape'


def is_valid_hash(value: str) -> bool:
    """True for a full 40-character lowercase hex object hash."""
    return isinstance(value, str) and HASH_PATTERN.fullmatch(value) is not None


class CairnObject(ABC):
    """Base class for all Cairn objects."""

    def __init__(self):
        self._hash: Optional[str] = None

    @abstractmethod
    def serialize(self) -> bytes:
        """
        Serialize the object body to bytes.

        Returns:
            bytes: Body without the type/size header
        """
        pass

    @abstractmethod
    def deserialize(self, data: bytes) -> None:
        """
        Load the object body from bytes.

        Args:
            data: Body without the type/size header
        """
        pass

    @property
    def type(self) -> str:
        """
        Return object type name.

        Returns:
            str: Object type (blob, tree, commit)
        """
        return self.__class__.__name__.lower()

    def to_bytes(self) -> bytes:
        """
        Full canonical serialization, the bytes that are hashed and stored.

        Format: <type> <size>\\0<body>

        Returns:
            bytes: Header followed by body
        """
        body = self.serialize()
        header = f"{self.type} {len(body)}\0".encode()
        return header + body

    def compute_hash(self) -> str:
        """
        Compute and cache object hash.

        Returns:
            str: 40-character SHA-1 hash of to_bytes()
        """
        if self._hash is None:
            self._hash = hash_object(self.to_bytes())
        return self._hash

    @property
    def hash(self) -> str:
        """40-character SHA-1 hash."""
        return self.compute_hash()

    def __eq__(self, other) -> bool:
        if not isinstance(other, CairnObject):
            return NotImplemented
        return self.type == other.type and self.serialize() == other.serialize()

    def __hash__(self) -> int:
        return hash(self.hash)


class Blob(CairnObject):
    """
    Represents file content.

    A blob stores the raw content of a file without any metadata
    like filename or permissions.
    """

    def __init__(self, data: Optional[bytes] = None):
        super().__init__()
        self.data = data or b''

    def serialize(self) -> bytes:
        return self.data

    def deserialize(self, data: bytes) -> None:
        self.data = data
        self._hash = None

    @classmethod
    def from_file(cls, filepath: str) -> 'Blob':
        """
        Create blob from file.

        Args:
            filepath: Path to file

        Returns:
            Blob: New blob containing file content
        """
        with open(filepath, 'rb') as f:
            return cls(f.read())

    def __repr__(self) -> str:
        return f"Blob(hash={self.hash[:7]}, size={len(self.data)})"


class TreeEntry:
    """
    A single entry in a tree: mode, name and the hash of the child object.

    Directory entries (mode 40000) reference trees, everything else
    references blobs.
    """

    def __init__(self, mode: str, name: str, obj_hash: str):
        self.mode = mode
        self.name = name
        self.hash = obj_hash

    @property
    def is_tree(self) -> bool:
        return self.mode == MODE_DIRECTORY

    @property
    def type(self) -> str:
        return 'tree' if self.is_tree else 'blob'

    def encode(self) -> bytes:
        """
        Encode as <mode> <name>\\0<hex hash>.

        Names that are not valid UTF-8 on disk reach us as surrogate escapes
        (see os.fsdecode) and are written back as their original bytes.
        """
        name = self.name.encode(NAME_ENCODING, NAME_ERRORS)
        return f"{self.mode} ".encode() + name + f"\0{self.hash}".encode()

    def __eq__(self, other) -> bool:
        if not isinstance(other, TreeEntry):
            return NotImplemented
        return (self.mode, self.name, self.hash) == (other.mode, other.name, other.hash)

    def __lt__(self, other: 'TreeEntry') -> bool:
        """Sort entries by name for consistent ordering."""
        return self.name < other.name

    def __repr__(self) -> str:
        return f"TreeEntry({self.mode} {self.type} {self.hash[:7]} {self.name})"


class Tree(CairnObject):
    """
    Represents directory structure.

    A tree contains entries pointing to blobs (files) and other trees
    (subdirectories). Entries are always encoded in name order so that two
    directories with the same content hash identically regardless of the
    order in which the filesystem listed them.
    """

    def __init__(self):
        super().__init__()
        self.entries: list[TreeEntry] = []

    def add_entry(self, mode: str, name: str, obj_hash: str) -> None:
        """
        Add entry to tree.

        Args:
            mode: Entry mode (one of TREE_MODES)
            name: Entry name
            obj_hash: Hash of the child object
        """
        if mode not in TREE_MODES:
            raise InvalidObject(f"Unknown tree entry mode: {mode}")
        if '/' in name or '\0' in name or not name:
            raise InvalidObject(f"Invalid tree entry name: {name!r}")
        self.entries.append(TreeEntry(mode, name, obj_hash))
        self.entries.sort()
        self._hash = None

    def get(self, name: str) -> Optional[TreeEntry]:
        for entry in self.entries:
            if entry.name == name:
                return entry
        return None

    def serialize(self) -> bytes:
        """
        Serialize tree entries.

        Format per entry: <mode> <name>\\0<40-char hex hash>

        Returns:
            bytes: Concatenated entries
        """
        return b''.join(entry.encode() for entry in sorted(self.entries))

    def deserialize(self, data: bytes) -> None:
        self.entries = []
        pos = 0

        try:
            while pos < len(data):
                space_pos = data.index(b' ', pos)
                mode = data[pos:space_pos].decode()

                null_pos = data.index(b'\0', space_pos)
                name = data[space_pos + 1:null_pos].decode(NAME_ENCODING, NAME_ERRORS)

                hash_end = null_pos + 1 + HASH_HEX_LENGTH
                obj_hash = data[null_pos + 1:hash_end].decode()
                if not is_valid_hash(obj_hash):
                    raise InvalidObject(f"Bad hash in tree entry: {name}")

                self.add_entry(mode, name, obj_hash)
                pos = hash_end
        except (ValueError, UnicodeDecodeError) as e:
            raise InvalidObject(f"Malformed tree body: {e}") from e

        self._hash = None

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"Tree(entries={len(self.entries)})"


class Commit(CairnObject):
    """
    Represents a commit: a tree snapshot, an optional parent and a message.
    """

    def __init__(self, tree: str = '', parent: Optional[str] = None, message: str = ''):
        super().__init__()
        self.tree = tree
        self.parent = parent
        self.message = message

    def serialize(self) -> bytes:
        """
        Serialize commit.

        Format:
        tree <tree-hash>
        parent <parent-hash>  (only when there is a parent)

        <commit message>

        Returns:
            bytes: Serialized commit body
        """
        lines = [f'tree {self.tree}']
        if self.parent:
            lines.append(f'parent {self.parent}')
        return ('\n'.join(lines) + f'\n\n{self.message}\n').encode()

    def deserialize(self, data: bytes) -> None:
        try:
            content = data.decode()
        except UnicodeDecodeError as e:
            raise InvalidObject(f"Commit is not valid UTF-8: {e}") from e

        headers, sep, message = content.partition('\n\n')
        if not sep:
            raise InvalidObject("Commit has no message separator")

        self.tree = ''
        self.parent = None
        for line in headers.split('\n'):
            if line.startswith('tree '):
                self.tree = line[5:]
            elif line.startswith('parent '):
                self.parent = line[7:]
            else:
                raise InvalidObject(f"Unexpected commit header: {line!r}")

        if not self.tree:
            raise InvalidObject("Commit has no tree")

        self.message = message[:-1] if message.endswith('\n') else message
        self._hash = None

    @classmethod
    def create(cls, tree_hash: str, parent_hash: Optional[str], message: str) -> 'Commit':
        """
        Create a new commit.

        Args:
            tree_hash: Hash of tree object
            parent_hash: Hash of the parent commit, or None for a root commit
            message: Commit message

        Returns:
            Commit: New commit object
        """
        return cls(tree=tree_hash, parent=parent_hash, message=message)

    def __repr__(self) -> str:
        parent_info = f", parent={self.parent[:7]}" if self.parent else ""
        msg_preview = self.message.split('\n')[0][:50]
        return f"Commit(hash={self.hash[:7]}{parent_info}, msg='{msg_preview}')"


OBJECT_TYPES = {
    'blob': Blob,
    'tree': Tree,
    'commit': Commit,
}


def parse_object(content: bytes) -> CairnObject:
    """
    Decode a full serialization (<type> <size>\\0<body>) into an object.

    Args:
        content: Uncompressed object bytes

    Returns:
        CairnObject: Blob, Tree or Commit

    Raises:
        InvalidObject: If the header is malformed, the size does not match
            or the type is unknown
    """
    null_idx = content.find(b'\0')
    if null_idx < 0:
        raise InvalidObject("Object header is not terminated")

    header = content[:null_idx].decode(errors='replace')
    data = content[null_idx + 1:]

    try:
        obj_type, size_str = header.split(' ', 1)
        size = int(size_str)
    except ValueError:
        raise InvalidObject(f"Invalid object header: {header}")

    if len(data) != size:
        raise InvalidObject(f"Object size mismatch: expected {size}, got {len(data)}")

    cls = OBJECT_TYPES.get(obj_type)
    if cls is None:
        raise InvalidObject(f"Unknown object type: {obj_type}")

    obj = cls()
    obj.deserialize(data)
    return obj
