from dataclasses import dataclass
from typing import Any, Mapping

from ..schema.schema import Schema
from ..utilities.errors import ModelSetupError


RECOGNIZED_OPTIONS = ("collection", "schema")


@dataclass(frozen=True)
class ModelConfig:
    collection: str
    """ Name of the collection the model reads from and writes to. """

    schema: Schema | None = None

    @classmethod
    def parse(cls, config: 'str | Mapping[str, Any] | ModelConfig') -> 'ModelConfig':
        """ Accepts a ModelConfig, a mapping of options, or a bare collection name (shorthand for {"collection": name}). """
        if isinstance(config, ModelConfig):
            model_config = config
        elif isinstance(config, str):
            model_config = ModelConfig(collection=config)
        elif isinstance(config, Mapping):
            unknown_options = [key for key in config if key not in RECOGNIZED_OPTIONS]
            if unknown_options:
                raise ModelSetupError(f"Unrecognized model options: {', '.join(map(str, unknown_options))}. Recognized options are: {', '.join(RECOGNIZED_OPTIONS)}.")
            if "collection" not in config:
                raise ModelSetupError("Model configuration must specify a collection.")
            model_config = ModelConfig(collection=config["collection"], schema=config.get("schema"))
        else:
            raise ModelSetupError(f"Expected a collection name or a model configuration, got {type(config).__name__}.")

        if not isinstance(model_config.collection, str) or not model_config.collection:
            raise ModelSetupError("Model collection name must be a non-empty string.")
        if model_config.schema is not None and not isinstance(model_config.schema, Schema):
            raise ModelSetupError(f"Model schema must be a Schema, got {type(model_config.schema).__name__}.")
        return model_config
