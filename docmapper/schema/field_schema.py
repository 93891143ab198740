from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .field_declaration import FieldDeclaration
    from .type_expectation import TypeExpectation


class FieldSchema:
    """ Stores the compiled schema for a single field. """
    def __init__(self,
                 field_name: str,
                 type_expectation: TypeExpectation,
                 declaration: FieldDeclaration
                ) -> None:
        self.field_name = field_name
        self.type_expectation = type_expectation
        self.declaration = declaration

    def __repr__(self) -> str:
        return f"FieldSchema({self.field_name}: {self.type_expectation})"

    @property
    def is_required(self) -> bool:
        """ A field must be present in a record unless it has a default or accepts None. """
        return not self.declaration.has_default() and not self.type_expectation.is_nullable

    def validate_field_value(self, field_value: Any) -> None:
        """ Validates the field value first against the type expectation, then against the validation func, if any.
        These should raise a ValidationError with a client-shareable error mesage. """
        self.type_expectation.validate(field_value, self.field_name)

        if self.declaration.validation_func is not None:
            self.declaration.validation_func(field_value)
