from types import MappingProxyType
from typing import Any, Mapping, MutableMapping

from bson import ObjectId

from .field_declaration import Field, FieldDeclaration
from .field_schema import FieldSchema
from .get_type_expectation_from_type_annotation import get_type_expectation_from_type_annotation
from ..utilities.errors import SchemaCompilationError, ValidationError
from ..utilities.logger import logger
from ..utilities.undefined import UNDEFINED


ID_FIELD = "_id"


class Schema:
    """ An immutable map of field name -> FieldDeclaration.

    Bare annotations are accepted as declarations:

        Schema({
            "name": str,
            "age": int | None,
            "tags": Field(list[str], default_factory=list),
        })

    Use with_id_field() to guarantee an _id declaration, then compile() once to get a CompiledSchema.
    """
    def __init__(self, fields: Mapping[str, Any] | None = None) -> None:
        declarations: dict[str, FieldDeclaration] = {}
        for field_name, declaration in (fields or {}).items():
            if not isinstance(declaration, FieldDeclaration):
                declaration = Field(declaration)
            declarations[field_name] = declaration
        self._fields = MappingProxyType(declarations)

    def __repr__(self) -> str:
        return f"Schema({', '.join(self._fields)})"

    @property
    def fields(self) -> Mapping[str, FieldDeclaration]:
        return self._fields

    def declares(self, field_name: str) -> bool:
        return field_name in self._fields

    def with_field(self, field_name: str, declaration: Any) -> 'Schema':
        """ Return a new Schema with the field added (or replaced). """
        return Schema({**self._fields, field_name: declaration})

    def with_id_field(self) -> 'Schema':
        """ Return a Schema that is guaranteed to declare _id. Schemas which already declare it are returned as is. """
        if self.declares(ID_FIELD):
            return self
        return self.with_field(ID_FIELD, Field(ObjectId, default_factory=ObjectId))

    def compile(self) -> 'CompiledSchema':
        """ Resolve every declaration into a FieldSchema. Raises SchemaCompilationError on the first invalid field. """
        field_schemas: dict[str, FieldSchema] = {}
        for field_name, declaration in self._fields.items():
            if not isinstance(field_name, str) or not field_name:
                raise SchemaCompilationError(field_name, "Field names must be non-empty strings.")

            if declaration.default_value is not UNDEFINED and declaration.default_factory is not None:
                raise SchemaCompilationError(field_name, "Cannot specify both default and default_factory.")

            try:
                type_expectation = get_type_expectation_from_type_annotation(declaration.annotation)
            except (ValueError, NotImplementedError) as e:
                raise SchemaCompilationError(field_name, str(e)) from e

            # Validate that any default value conforms to the type annotation
            if declaration.default_value is not UNDEFINED and not type_expectation._is_valid_value(declaration.default_value):
                raise SchemaCompilationError(field_name, f"Expected a default of type '{type_expectation}' but got {declaration.default_value!r}.")

            field_schemas[field_name] = FieldSchema(
                field_name=field_name,
                type_expectation=type_expectation,
                declaration=declaration
            )

        logger.debug(f"Compiled schema with fields: {', '.join(field_schemas)}")
        return CompiledSchema(self, field_schemas)


class CompiledSchema:
    """ The validated form of a Schema. Produced by Schema.compile(). """
    def __init__(self, schema: Schema, field_schemas: dict[str, FieldSchema]) -> None:
        self.schema = schema
        self.field_schemas = MappingProxyType(field_schemas)

    def __repr__(self) -> str:
        return f"CompiledSchema({', '.join(repr(field_schema) for field_schema in self.field_schemas.values())})"

    def validate(self, record: Mapping[str, Any]) -> None:
        """ Raise a ValidationError if the record does not satisfy this schema. Undeclared fields are allowed. """
        for field_name, field_schema in self.field_schemas.items():
            if field_name not in record:
                if field_schema.is_required:
                    raise ValidationError(f"Missing required field '{field_name}'.")
                continue
            field_schema.validate_field_value(record[field_name])

    def apply_defaults(self, record: MutableMapping[str, Any]) -> None:
        """ Fill in missing fields which declare a default. Modifies the record in place. """
        for field_name, field_schema in self.field_schemas.items():
            if field_name not in record and field_schema.declaration.has_default():
                record[field_name] = field_schema.declaration.get_default()
