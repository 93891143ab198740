from typing import Any


class ModelSetupError(Exception):
    """Exception raised for model configuration errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class SchemaCompilationError(Exception):
    """Exception raised when a schema field declaration cannot be compiled."""

    def __init__(self, field_name: Any, reason: str):
        self.field_name = field_name
        self.message = f"Unable to compile schema field '{field_name}': {reason}"
        super().__init__(self.message)


class ValidationError(Exception):
    """Exception raised when a record does not satisfy its compiled schema.
    NOTE: Messages in these errors should be shareable to the user. """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class DocumentConflictError(Exception):
    """ Raised when inserting a document whose _id is already taken in the collection. """

    def __init__(self, document_id: Any) -> None:
        self.document_id = document_id
        self.message = f"There is already a document with _id {document_id}"
        super().__init__(self.message)


class DocumentNotFoundError(Exception):
    """ Raised when updating a document whose _id no longer matches a stored document. """

    def __init__(self, document_id: Any) -> None:
        self.document_id = document_id
        self.message = f"No documents with _id {document_id} found"
        super().__init__(self.message)
