import copy
from typing import Any, Mapping

from .save_document import save_document
from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from .model import Model
    from ..schema.schema import CompiledSchema


class TrackedDocument(dict[str, Any]):
    """ A record bound to a Model which knows whether it has been persisted, and what has changed since.

    Created by calling a Model: `users({"name": "Ada"})` is a new document, `users(record, False)` wraps a record
    that already exists in the collection. The record is shallow-copied, so its top-level keys are never modified.

    Nothing is written until `await document.save()`.
    """
    def __init__(self, record: Mapping[str, Any], is_new: bool, model: 'Model') -> None:
        super().__init__(record)
        self._is_new = is_new
        self._model = model
        # The last-persisted values. New documents have not been persisted, so everything counts as changed.
        self._snapshot: dict[str, Any] = {} if is_new else copy.deepcopy(dict(self))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict.__repr__(self)}, is_new={self._is_new})"

    def is_new(self) -> bool:
        return self._is_new

    def set_is_new(self, value: bool) -> None:
        self._is_new = value

    def model(self) -> 'Model':
        """ Returns the Model that created this document. """
        return self._model

    def schema(self) -> 'CompiledSchema | None':
        """ Returns the compiled schema of the owning Model, if any. """
        return self._model.context.schema

    def delta(self) -> dict[str, dict[str, Any]]:
        """ Compute the changes since the last-persisted snapshot as {"$set": {...}, "$unset": {...}}.
        Both keys are always present. Nested dicts are compared key by key and reported in dot notation. """
        set_fields: dict[str, Any] = {}
        unset_fields: dict[str, Any] = {}
        _diff(self._snapshot, self, "", set_fields, unset_fields)
        return {"$set": set_fields, "$unset": unset_fields}

    def reset_snapshot(self) -> None:
        """ Mark the current values as persisted. """
        self._snapshot = copy.deepcopy(dict(self))

    async def save(self) -> None:
        """ Insert the document if it is new, otherwise apply its delta. See save_document(). """
        await save_document(self, self._model.context)

def _diff(before: Mapping[str, Any], after: Mapping[str, Any], prefix: str, set_fields: dict[str, Any], unset_fields: dict[str, Any]) -> None:
    for key, value in after.items():
        path = f"{prefix}{key}"
        if key not in before:
            set_fields[path] = value
            continue

        previous_value = before[key]
        if isinstance(value, Mapping) and isinstance(previous_value, Mapping):
            _diff(previous_value, value, f"{path}.", set_fields, unset_fields)
        # Compare types too, so that 1 -> True is still a change
        elif type(value) is not type(previous_value) or value != previous_value:
            set_fields[path] = value

    for key in before:
        if key not in after:
            # Mongo ignores the value given to $unset
            unset_fields[f"{prefix}{key}"] = ""
