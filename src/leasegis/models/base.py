"""
Base class for derived (engine-produced) value models.
"""
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DerivedModel(BaseModel):
    """Immutable result model serialized with camelCase keys."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-compatible dictionary using the external camelCase contract."""
        return self.model_dump(by_alias=True, mode="json")
