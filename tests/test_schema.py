"""Tests for Schema declarations, compilation and validation."""

from typing import Any, Optional

import pytest
from bson import ObjectId

from docmapper import Field, Schema, SchemaCompilationError, ValidationError
from docmapper.schema import ID_FIELD


def _no_spaces(value):
    if " " in value:
        raise ValidationError("Usernames cannot contain spaces.")


class TestDeclaration:

    def test_bare_annotations_become_fields(self):
        schema = Schema({"name": str})
        assert schema.fields["name"] == Field(str)

    def test_fields_are_read_only(self):
        schema = Schema({"name": str})
        with pytest.raises(TypeError):
            schema.fields["age"] = Field(int)

    def test_with_field_returns_new_schema(self):
        schema = Schema({"name": str})
        extended = schema.with_field("age", int)

        assert extended is not schema
        assert extended.declares("age")
        assert not schema.declares("age")

    def test_with_id_field_adds_object_id(self):
        schema = Schema({"name": str}).with_id_field()
        declaration = schema.fields[ID_FIELD]

        assert declaration.annotation is ObjectId
        assert isinstance(declaration.get_default(), ObjectId)

    def test_with_id_field_keeps_existing(self):
        schema = Schema({"_id": str})
        assert schema.with_id_field() is schema


class TestCompile:

    def test_compiles_supported_annotations(self):
        compiled = Schema({
            "name": str,
            "nickname": str | None,
            "legacy": Optional[int],
            "tags": list[str],
            "meta": dict[str, Any],
            "anything": Any,
        }).compile()

        assert set(compiled.field_schemas) == {"name", "nickname", "legacy", "tags", "meta", "anything"}
        assert compiled.field_schemas["nickname"].type_expectation.is_nullable
        assert compiled.field_schemas["tags"].type_expectation.type_info.sub_type is str
        assert str(compiled.field_schemas["nickname"].type_expectation) == "str | None"

    def test_three_way_union_fails(self):
        with pytest.raises(SchemaCompilationError) as exc_info:
            Schema({"value": int | str | None}).compile()
        assert exc_info.value.field_name == "value"

    def test_non_nullable_union_fails(self):
        with pytest.raises(SchemaCompilationError):
            Schema({"value": int | str}).compile()

    def test_not_a_type_fails(self):
        with pytest.raises(SchemaCompilationError, match="'age'"):
            Schema({"age": "int"}).compile()

    def test_multi_parameter_generic_fails(self):
        with pytest.raises(SchemaCompilationError):
            Schema({"pair": tuple[int, str]}).compile()

    def test_default_of_wrong_type_fails(self):
        with pytest.raises(SchemaCompilationError, match="default"):
            Schema({"age": Field(int, default="zero")}).compile()

    def test_default_and_factory_fails(self):
        with pytest.raises(SchemaCompilationError, match="both default and default_factory"):
            Schema({"tags": Field(list, default=[], default_factory=list)}).compile()

    def test_empty_field_name_fails(self):
        with pytest.raises(SchemaCompilationError):
            Schema({"": str}).compile()


class TestValidate:

    @pytest.fixture
    def compiled(self):
        return Schema({
            "username": Field(str, validation_func=_no_spaces),
            "age": int | None,
            "tags": Field(list[str], default_factory=list),
        }).compile()

    def test_valid_record(self, compiled):
        compiled.validate({"username": "ada", "age": 36, "tags": ["math"], "extra": object()})

    def test_missing_required_field(self, compiled):
        with pytest.raises(ValidationError, match="Missing required field 'username'"):
            compiled.validate({"age": 36})

    def test_optional_and_defaulted_fields_may_be_missing(self, compiled):
        compiled.validate({"username": "ada"})

    def test_wrong_type(self, compiled):
        with pytest.raises(ValidationError, match="'age'"):
            compiled.validate({"username": "ada", "age": "36"})

    def test_wrong_element_type(self, compiled):
        with pytest.raises(ValidationError):
            compiled.validate({"username": "ada", "tags": ["math", 1]})

    def test_validation_func(self, compiled):
        with pytest.raises(ValidationError, match="spaces"):
            compiled.validate({"username": "ada lovelace"})

    def test_apply_defaults(self, compiled):
        record = {"username": "ada"}
        compiled.apply_defaults(record)
        assert record == {"username": "ada", "tags": []}

    def test_apply_defaults_keeps_values(self, compiled):
        record = {"username": "ada", "tags": ["math"]}
        compiled.apply_defaults(record)
        assert record["tags"] == ["math"]

    def test_default_factory_called_per_record(self, compiled):
        first, second = {"username": "a"}, {"username": "b"}
        compiled.apply_defaults(first)
        compiled.apply_defaults(second)
        assert first["tags"] is not second["tags"]
