"""Platform abstraction layer (filesystem access and content hashing)."""

from .dirhash import hash_dir, hash_files, hash_single_file
from .files import atomic_write_text, read_text_if_exists

__all__ = [
    # dirhash
    "hash_dir",
    "hash_files",
    "hash_single_file",
    # files
    "atomic_write_text",
    "read_text_if_exists",
]
