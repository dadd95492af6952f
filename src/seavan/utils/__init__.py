"""Utility functions for image packaging."""

from .hashing import compute_file_hash

__all__ = ["compute_file_hash"]
