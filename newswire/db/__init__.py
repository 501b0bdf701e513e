"""Database management for the Postgres-backed store."""

from .connection import DatabaseConfig, close_connection_pool, get_connection, get_connection_pool
from .init import init_database, validate_connection

__all__ = [
    "DatabaseConfig",
    "close_connection_pool",
    "get_connection",
    "get_connection_pool",
    "init_database",
    "validate_connection",
]
