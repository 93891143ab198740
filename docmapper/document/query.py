from typing import Any, Mapping

from pymongo.results import DeleteResult, UpdateResult

from ..utilities.logger import logger

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from pymongo.asynchronous.collection import AsyncCollection

    from .model import Model
    from .tracked_document import TrackedDocument
    from ..schema.schema import CompiledSchema


class Query:
    """ Runs reads and writes against a model's collection.

    Arguments are passed through to the matching AsyncCollection method unchanged. Records returned by the
    store are wrapped as existing TrackedDocuments of the model. Replacement documents are validated against
    the schema, when there is one.
    """
    def __init__(self, model: 'Model', schema: 'CompiledSchema | None', collection: 'AsyncCollection') -> None:
        self.model = model
        self.schema = schema
        self.collection = collection

    def _wrap(self, record: Mapping[str, Any] | None) -> 'TrackedDocument | None':
        if record is None:
            return None
        return self.model(record, False)

    def _validate(self, replacement: Mapping[str, Any]) -> None:
        if self.schema is not None:
            self.schema.validate(replacement)

    def _log(self, operation: str, filter: Any) -> None:
        logger.debug(f"{self.model.context.namespace()}: {operation} {filter!r}")

    # Retrieval
    async def count(self, filter: Mapping[str, Any] | None = None, **kwargs: Any) -> int:
        """ Return the number of documents matching the filter. """
        filter = filter or {}
        self._log("count", filter)
        return await self.collection.count_documents(filter, **kwargs)

    async def distinct(self, key: str, filter: Mapping[str, Any] | None = None, **kwargs: Any) -> list[Any]:
        self._log(f"distinct {key}", filter)
        return await self.collection.distinct(key, filter, **kwargs)

    async def find(self, filter: Mapping[str, Any] | None = None, *args: Any, **kwargs: Any) -> list['TrackedDocument']:
        """ Return all matching documents. """
        self._log("find", filter)
        cursor = self.collection.find(filter, *args, **kwargs)
        return [self.model(record, False) async for record in cursor]

    async def find_one(self, filter: Any | None = None, *args: Any, **kwargs: Any) -> 'TrackedDocument | None':
        """ Return the first matching document, or None if there are no matching documents. """
        self._log("find_one", filter)
        return self._wrap(await self.collection.find_one(filter, *args, **kwargs))

    # Deletion
    async def delete_one(self, filter: Mapping[str, Any], **kwargs: Any) -> DeleteResult:
        self._log("delete_one", filter)
        return await self.collection.delete_one(filter, **kwargs)

    async def delete_many(self, filter: Mapping[str, Any], **kwargs: Any) -> DeleteResult:
        self._log("delete_many", filter)
        return await self.collection.delete_many(filter, **kwargs)

    # Modification
    async def replace_one(self, filter: Mapping[str, Any], replacement: Mapping[str, Any], **kwargs: Any) -> UpdateResult:
        self._validate(replacement)
        self._log("replace_one", filter)
        return await self.collection.replace_one(filter, replacement, **kwargs)

    async def update_one(self, filter: Mapping[str, Any], update: Any, **kwargs: Any) -> UpdateResult:
        self._log("update_one", filter)
        return await self.collection.update_one(filter, update, **kwargs)

    async def update_many(self, filter: Mapping[str, Any], update: Any, **kwargs: Any) -> UpdateResult:
        self._log("update_many", filter)
        return await self.collection.update_many(filter, update, **kwargs)

    # Find and modify
    async def find_one_and_delete(self, filter: Mapping[str, Any], **kwargs: Any) -> 'TrackedDocument | None':
        """ Delete a single document and return it, or None if nothing matched. """
        self._log("find_one_and_delete", filter)
        return self._wrap(await self.collection.find_one_and_delete(filter, **kwargs))

    async def find_one_and_replace(self, filter: Mapping[str, Any], replacement: Mapping[str, Any], **kwargs: Any) -> 'TrackedDocument | None':
        """ Replace a single document, returning either the original or the replaced document (see return_document). """
        self._validate(replacement)
        self._log("find_one_and_replace", filter)
        return self._wrap(await self.collection.find_one_and_replace(filter, replacement, **kwargs))

    async def find_one_and_update(self, filter: Mapping[str, Any], update: Any, **kwargs: Any) -> 'TrackedDocument | None':
        """ Update a single document, returning either the original or the updated document (see return_document). """
        self._log("find_one_and_update", filter)
        return self._wrap(await self.collection.find_one_and_update(filter, update, **kwargs))
