from typing import Any, Mapping

from .model import Model
from .model_config import ModelConfig
from .model_context import ModelContext
from .query import Query
from ..utilities.logger import logger

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from pymongo.asynchronous.database import AsyncDatabase


def create_model(db: 'AsyncDatabase', config: str | Mapping[str, Any] | ModelConfig, *, query_cls: type[Query] = Query) -> Model:
    """ Build a Model bound to a collection of the database.

    config is a collection name, a mapping with "collection" and an optional "schema", or a ModelConfig.
    When a schema is given it is completed with an _id declaration (ObjectId) if it lacks one, then compiled once.
    SchemaCompilationErrors propagate to the caller. """
    model_config = ModelConfig.parse(config)

    compiled_schema = None
    if model_config.schema is not None:
        compiled_schema = model_config.schema.with_id_field().compile()

    context = ModelContext(
        db=db,
        config=model_config,
        collection=db[model_config.collection],
        query_cls=query_cls,
        schema=compiled_schema
    )
    logger.debug(f"Created model for {context.namespace()}")
    return Model(context)
