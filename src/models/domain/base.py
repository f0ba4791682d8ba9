"""Shared pydantic base for domain models."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Model whose fields are snake_case in Python and camelCase on the wire.

    Stored items and API payloads use the camelCase names; dump with
    ``by_alias=True`` to produce them.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict:
        """JSON-compatible camelCase dict without unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
