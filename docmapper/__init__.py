"""
docmapper

A small object-document mapper for MongoDB: models bound to collections, documents that track their own
changes, and a save protocol that detects conflicting inserts and vanished documents.
"""

from .document import (
    Model,
    ModelConfig,
    Query,
    TrackedDocument,
    clean_delta,
    create_model,
    create_mongo_db,
    reset_mongo_db,
)
from .schema import CompiledSchema, Field, Schema
from .utilities.errors import (
    DocumentConflictError,
    DocumentNotFoundError,
    ModelSetupError,
    SchemaCompilationError,
    ValidationError,
)
from .utilities.logger import set_log_level, set_logger
