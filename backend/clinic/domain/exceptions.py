"""Domain-specific exceptions — framework-independent."""


class AppError(Exception):
    """An error that already knows which HTTP status it should surface as."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(message)


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class InvalidQueryError(Exception):
    """Raised when request-supplied query input cannot be applied to a model.

    Covers unknown sort/select/populate/date fields, unknown filter operators
    and operands that cannot be coerced to the column type.
    """

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class QueryConfigurationError(Exception):
    """Raised when a query builder is configured with fields the model lacks."""

    def __init__(self, model_name: str, unknown_fields: list[str]):
        self.model_name = model_name
        self.unknown_fields = unknown_fields
        super().__init__(
            f"{model_name} has no queryable field(s): {', '.join(unknown_fields)}"
        )
