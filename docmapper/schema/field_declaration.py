from dataclasses import dataclass
from typing import Any, Callable

from ..utilities.undefined import Undefined, UNDEFINED


@dataclass(frozen=True)
class FieldDeclaration:
    """ Do not instantiate this directly. Use Field() instead. """
    annotation: Any
    default_value: Any | Undefined = UNDEFINED
    default_factory: Callable[[], Any] | None = None
    validation_func: Callable[[Any], None] | None = None
    """ Runs after the type check. Should raise a ValidationError with a user-shareable message. """

    def has_default(self) -> bool:
        if self.default_value is not UNDEFINED or self.default_factory is not None:
            return True
        return False

    def get_default(self) -> Any:
        if self.default_value is not UNDEFINED:
            return self.default_value
        elif self.default_factory is not None:
            return self.default_factory()
        else:
            raise ValueError("No default value set.")

def Field(
        annotation: Any,
        *,
        default: Any | Undefined = UNDEFINED,
        default_factory: Callable[[], Any] | None = None,
        validation_func: Callable[[Any], None] | None = None
    ) -> FieldDeclaration:
    """ Use this to add configurations to schema fields.

    A bare annotation inside a Schema is shorthand for Field(annotation).
    Conflicting options (default together with default_factory) are reported when the schema is compiled. """
    return FieldDeclaration(
        annotation=annotation,
        default_value=default,
        default_factory=default_factory,
        validation_func=validation_func
    )
