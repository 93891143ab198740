import os

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

# Module-level cache for the database instance
_mongo_db: AsyncDatabase | None = None

def create_mongo_db() -> AsyncDatabase:
    global _mongo_db
    if _mongo_db is not None:
        return _mongo_db

    MONGO_URL = os.environ.get("MONGO_URL")
    if not MONGO_URL: raise ValueError("Please set MONGO_URL in your environment variables.")

    MONGO_DB_NAME = os.environ.get("MONGO_DB_NAME")
    if not MONGO_DB_NAME: raise ValueError("Please set MONGO_DB_NAME in your environment variables.")

    # Initialize database. The client connects lazily on first use.
    mongo_client = AsyncMongoClient(MONGO_URL)
    _mongo_db = mongo_client[MONGO_DB_NAME]
    return _mongo_db

def reset_mongo_db() -> None:
    """ Forget the cached database so the next create_mongo_db() reads the environment again. """
    global _mongo_db
    _mongo_db = None
