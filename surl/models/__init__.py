"""
Database models for the SQLite-backed store.

A single table holds both namespaces: generated identifiers mapping to
URL bytes, and the reserved counter metadata key.
"""

from .record import KVRecord

__all__ = ["KVRecord"]
