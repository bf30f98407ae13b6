"""
Database module for MongoDB connection management.
"""

from dragons.db.mongodb import (
    close_mongo_connection,
    connect_to_mongo,
    get_app_database,
    get_database,
)

__all__ = [
    "get_app_database",
    "get_database",
    "connect_to_mongo",
    "close_mongo_connection",
]
