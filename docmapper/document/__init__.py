"""
Document module for mapping records to MongoDB collections.

This module provides functionality for:
- Building models bound to a collection (create_model)
- Tracking new vs. persisted documents and their changes
- Saving documents with conflict and not-found detection
- Querying collections through a model
"""

from .clean_delta import clean_delta
from .create_model import create_model
from .model import Model
from .model_config import ModelConfig
from .model_context import ModelContext
from .mongo_db import create_mongo_db, reset_mongo_db
from .query import Query
from .save_document import save_document
from .tracked_document import TrackedDocument
