"""Hash and compression utilities for Cairn."""

import hashlib
import zlib

from cairn.errors import CorruptionError


def hash_object(data: bytes) -> str:
    """
    Compute SHA-1 hash of data.
    
    Args:
        data: Bytes to hash
        
    Returns:
        40-character hex string
    """
    return hashlib.sha1(data).hexdigest()


def compress(data: bytes, level: int = -1) -> bytes:
    """
    Compress object bytes for storage.
    
    Args:
        data: Uncompressed bytes
        level: zlib compression level (-1 for the zlib default)
        
    Returns:
        bytes: zlib stream
    """
    return zlib.compress(data, level)


def decompress(data: bytes) -> bytes:
    """
    Decompress stored object bytes.
    
    Args:
        data: zlib stream produced by compress()
        
    Returns:
        bytes: Original bytes
        
    Raises:
        CorruptionError: If data is not a valid zlib stream
    """
    try:
        return zlib.decompress(data)
    except zlib.error as e:
        raise CorruptionError(f"Invalid compressed object data: {e}") from e
