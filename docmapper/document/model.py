import asyncio
from collections.abc import Coroutine
from typing import Any, Iterable, Mapping

from bson import ObjectId
from pymongo.results import DeleteResult, UpdateResult

from .model_context import ModelContext
from .query import Query
from .tracked_document import TrackedDocument
from ..utilities.undefined import UNDEFINED, Undefined

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from pymongo.asynchronous.collection import AsyncCollection
    from pymongo.asynchronous.database import AsyncDatabase

    from ..schema.schema import CompiledSchema


class Model:
    """ A callable bound to one collection. Use create_model() to build one.

    Calling the model wraps a record as a TrackedDocument:
        users = create_model(db, "users")
        ada = users({"name": "Ada"})          # new
        await ada.save()                      # inserts
        same = users(record, False)           # existing

    The collection helpers below each build a fresh Query over the shared ModelContext. They return coroutines;
    nothing is sent to the store until they are awaited.
    """
    def __init__(self, context: ModelContext) -> None:
        self.context = context

    def __repr__(self) -> str:
        return f"Model({self.context.namespace()})"

    def __call__(self, record: Mapping[str, Any] | None = None, is_new: bool | None | Undefined = UNDEFINED) -> TrackedDocument:
        """ Wrap a record. A record passed on its own is new; calling with no arguments wraps an empty existing
        document. is_new overrides both.
        New records get the schema's defaults, or an ObjectId _id (when missing or None) when the model has no schema. """
        if is_new is UNDEFINED:
            new = record is not None
        else:
            new = bool(is_new)
        document = TrackedDocument(record or {}, new, self)
        if new:
            # A None _id counts as missing, so it gets the default instead of being upserted as null
            if document.get("_id") is None:
                document.pop("_id", None)
            if self.context.schema is not None:
                self.context.schema.apply_defaults(document)
            else:
                document.setdefault("_id", ObjectId())
        return document

    @property
    def collection_name(self) -> str:
        return self.context.collection_name

    @property
    def collection(self) -> 'AsyncCollection':
        return self.context.collection

    @property
    def schema(self) -> 'CompiledSchema | None':
        return self.context.schema

    def db(self) -> 'AsyncDatabase':
        """ Returns the database this model was created with. """
        return self.context.db

    def _query(self) -> Query:
        return self.context.query_cls(self, self.context.schema, self.context.collection)

    # Helpers delegating to Query
    def count(self, *args: Any, **kwargs: Any) -> Coroutine[Any, Any, int]:
        return self._query().count(*args, **kwargs)

    def distinct(self, *args: Any, **kwargs: Any) -> Coroutine[Any, Any, list[Any]]:
        return self._query().distinct(*args, **kwargs)

    def find(self, *args: Any, **kwargs: Any) -> Coroutine[Any, Any, list[TrackedDocument]]:
        return self._query().find(*args, **kwargs)

    def find_one(self, *args: Any, **kwargs: Any) -> Coroutine[Any, Any, TrackedDocument | None]:
        return self._query().find_one(*args, **kwargs)

    def delete_one(self, *args: Any, **kwargs: Any) -> Coroutine[Any, Any, DeleteResult]:
        return self._query().delete_one(*args, **kwargs)

    def delete_many(self, *args: Any, **kwargs: Any) -> Coroutine[Any, Any, DeleteResult]:
        return self._query().delete_many(*args, **kwargs)

    def replace_one(self, *args: Any, **kwargs: Any) -> Coroutine[Any, Any, UpdateResult]:
        return self._query().replace_one(*args, **kwargs)

    def update_one(self, *args: Any, **kwargs: Any) -> Coroutine[Any, Any, UpdateResult]:
        return self._query().update_one(*args, **kwargs)

    def update_many(self, *args: Any, **kwargs: Any) -> Coroutine[Any, Any, UpdateResult]:
        return self._query().update_many(*args, **kwargs)

    def find_one_and_delete(self, *args: Any, **kwargs: Any) -> Coroutine[Any, Any, TrackedDocument | None]:
        return self._query().find_one_and_delete(*args, **kwargs)

    def find_one_and_replace(self, *args: Any, **kwargs: Any) -> Coroutine[Any, Any, TrackedDocument | None]:
        return self._query().find_one_and_replace(*args, **kwargs)

    def find_one_and_update(self, *args: Any, **kwargs: Any) -> Coroutine[Any, Any, TrackedDocument | None]:
        return self._query().find_one_and_update(*args, **kwargs)

    # Helpers operating on records
    def insert_one(self, record: Mapping[str, Any]) -> Coroutine[Any, Any, None]:
        """ Wrap the record as a new document and save it. """
        return self(record, True).save()

    async def insert_many(self, records: Iterable[Mapping[str, Any]], *, return_exceptions: bool = False) -> list[Any]:
        """ Save each record as an independent new document, concurrently. Results are in the order of the records.

        There is no atomicity across records: a failed insert never undoes the others. Every save settles before
        this returns. By default the first failure (in record order) is then raised. With return_exceptions=True
        failures are returned in place of the result instead. """
        saves = [self(record, True).save() for record in records]
        results = await asyncio.gather(*saves, return_exceptions=True)
        if not return_exceptions:
            for result in results:
                if isinstance(result, BaseException):
                    raise result
        return results
