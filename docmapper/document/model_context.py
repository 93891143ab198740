from __future__ import annotations
from dataclasses import dataclass

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from pymongo.asynchronous.collection import AsyncCollection
    from pymongo.asynchronous.database import AsyncDatabase

    from .model_config import ModelConfig
    from .query import Query
    from ..schema.schema import CompiledSchema


@dataclass(frozen=True)
class ModelContext:
    """ State shared by a Model, its Queries and every TrackedDocument it creates. """
    db: AsyncDatabase
    """ Borrowed from the caller. """

    config: ModelConfig
    collection: AsyncCollection
    query_cls: type[Query]
    schema: CompiledSchema | None = None

    @property
    def collection_name(self) -> str:
        return self.config.collection

    def namespace(self) -> str:
        """ <database>.<collection>, used for logging. """
        return f"{self.db.name}.{self.config.collection}"
