"""
Database package for the SQL document store backend.
"""

from .base import Base, create_database_engine, get_database_url, init_database
from .models import DocumentModel

__all__ = [
    "Base",
    "DocumentModel",
    "create_database_engine",
    "get_database_url",
    "init_database",
]
