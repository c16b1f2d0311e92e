"""Base model shared by all wire DTOs.

Public API (the "studs"):
    WireModel: Base class with camelCase aliases and name population
    WIRE_DUMP_OPTIONS: Keyword arguments used when writing wire documents
"""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Outgoing documents use aliases and never emit nulls.
WIRE_DUMP_OPTIONS: dict[str, Any] = {"by_alias": True, "exclude_none": True}


class WireModel(BaseModel):
    """Base class for wire DTOs.

    Attributes use snake_case; the wire uses lowerCamelCase. Both spellings
    are accepted on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """Return the JSON-compatible wire document for this model."""
        return self.model_dump(mode="json", **WIRE_DUMP_OPTIONS)


__all__ = ["WireModel", "WIRE_DUMP_OPTIONS"]
