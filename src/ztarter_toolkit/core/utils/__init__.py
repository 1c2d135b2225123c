"""
Core Utilities Package

Shared file helpers.
"""

from .files import atomic_write_bytes, atomic_write_json

__all__ = [
    "atomic_write_bytes",
    "atomic_write_json",
]
