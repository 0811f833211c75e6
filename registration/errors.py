from pydantic import BaseModel, ConfigDict


class FieldValidationFailure(BaseModel):
    """A single field that failed its rule chain. Returned as data, never raised."""

    model_config = ConfigDict(frozen=True)

    field: str
    message: str


class UnknownFieldError(ValueError):
    def __init__(self, field: str):
        super().__init__(f"Unknown form field: {field!r}")
        self.field = field


class SchemaDefinitionError(ValueError):
    pass


class MissingFieldError(ValueError):
    def __init__(self, field: str):
        super().__init__(f"Form values missing declared field: {field!r}")
        self.field = field
