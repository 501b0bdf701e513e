"""Base model for records persisted in the key-value store."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base model for store records.

    Field names are snake_case in Python and camelCase in the store.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_store(self) -> Dict[str, Any]:
        """Serialize to the store representation (aliases, no empty optionals)."""
        return self.model_dump(by_alias=True, exclude_none=True)
