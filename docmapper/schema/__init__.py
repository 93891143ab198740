"""
Schema module.

Schemas are immutable field declarations which are compiled once into a CompiledSchema,
which validates records and fills in default values.
"""

from .field_declaration import Field, FieldDeclaration
from .field_schema import FieldSchema
from .schema import Schema, CompiledSchema, ID_FIELD
