from dataclasses import dataclass
from typing import Any

from .type_info import TypeInfo
from ..utilities.errors import ValidationError


SEQUENCE_TYPES = (list, tuple, set, frozenset)


@dataclass
class TypeExpectation:
    type_info: TypeInfo
    is_nullable: bool

    def __str__(self) -> str:
        type_ = self.type_info.type_
        output = getattr(type_, "__name__", repr(type_))
        if self.type_info.sub_type is not None:
            sub_type = self.type_info.sub_type
            output += f"[{getattr(sub_type, '__name__', sub_type)}]"
        if self.is_nullable:
            output += " | None"

        return output

    def validate(self, value: Any, field_name: str | None = None) -> None:
        """ Raises a ValidationError if the provided value does not match this TypeExpectation. """
        if not self._is_valid_value(value):
            location = f" for field '{field_name}'" if field_name else ""
            raise ValidationError(f"Value {value!r}{location} does not match the expected type '{self}'.")

    def _is_valid_value(self, value: Any) -> bool:
        """ Validate that a value is consistent with this TypeExpectation. """
        if value is None:
            return self.is_nullable

        if self.type_info.type_ is Any:
            return True

        if not isinstance(value, self.type_info.type_):
            return False

        # Only plain classes are checked for sequence elements
        sub_type = self.type_info.sub_type
        if isinstance(value, SEQUENCE_TYPES) and isinstance(sub_type, type):
            return all(isinstance(item, sub_type) for item in value)

        return True
