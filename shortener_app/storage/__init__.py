"""
URL storage module.

This module implements the Strategy Pattern for the relational store
that holds the authoritative URL records.
"""

from .strategies import URLStoreStrategy, SQLAlchemyURLStore, InMemoryURLStore

__all__ = [
    "URLStoreStrategy",
    "SQLAlchemyURLStore",
    "InMemoryURLStore",
]
