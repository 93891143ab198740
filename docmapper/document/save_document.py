from typing import Any

from .clean_delta import clean_delta
from ..utilities.errors import DocumentConflictError, DocumentNotFoundError
from ..utilities.logger import logger

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from .model_context import ModelContext
    from .tracked_document import TrackedDocument


async def save_document(document: 'TrackedDocument', context: 'ModelContext') -> None:
    """ Persist a single tracked document.

    New documents are written with an upsert keyed on _id. The upsert must report a newly created document,
    otherwise another document already owns the _id and a DocumentConflictError is raised. Only once the write
    is acknowledged is the document marked as no longer new.

    Existing documents send only their cleaned delta. When nothing changed the store is not contacted at all.
    The update must modify exactly one document, otherwise a DocumentNotFoundError is raised.

    Errors from the driver propagate unchanged.
    """
    document_id = document.get("_id")
    if document.is_new():
        await _insert_document(document, context, document_id)
    else:
        await _update_document(document, context, document_id)

async def _insert_document(document: 'TrackedDocument', context: 'ModelContext', document_id: Any) -> None:
    if context.schema is not None:
        context.schema.validate(document)

    logger.debug(f"{context.namespace()}: new doc {document!r}")

    result = await context.collection.replace_one({"_id": document_id}, dict(document), upsert=True)
    # upserted_id is None both when nothing was upserted and when the upserted _id is None
    if "upserted" not in result.raw_result:
        raise DocumentConflictError(document_id)

    document.set_is_new(False)
    document.reset_snapshot()

async def _update_document(document: 'TrackedDocument', context: 'ModelContext', document_id: Any) -> None:
    delta = clean_delta(document.delta())
    if delta is None:
        return

    if context.schema is not None:
        context.schema.validate(document)

    logger.debug(f"{context.namespace()}: updating doc with id {document_id}, delta: {delta!r}")

    result = await context.collection.update_one({"_id": document_id}, delta)
    if result.modified_count != 1:
        raise DocumentNotFoundError(document_id)

    document.reset_snapshot()
