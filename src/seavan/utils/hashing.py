"""File hashing utilities."""

import hashlib
from pathlib import Path

CHUNK_SIZE = 1024 * 1024


def compute_file_hash(file_path: Path) -> str:
    """Compute SHA256 hash of file content.

    The file is read in chunks so large files are not loaded into memory.

    Args:
        file_path: Path to file to hash

    Returns:
        Hexadecimal SHA256 hash string
    """
    sha256 = hashlib.sha256()
    with open(file_path, "rb") as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
            sha256.update(chunk)
    return sha256.hexdigest()
