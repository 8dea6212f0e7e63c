# =============================================================================
# core/models/base.py - Shared Model Configuration
# =============================================================================
# Python attributes are snake_case; the JSON API and the stored documents use
# camelCase (averageCost, minimumSkill, ...). Every request model inherits
# from CamelModel so both spellings are accepted on input and camelCase is
# produced on output.
# =============================================================================

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model with camelCase aliases and whitespace trimming."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    def to_document(self, exclude_unset: bool = False) -> dict[str, Any]:
        """Dump to a dict ready for MongoDB (camelCase keys, JSON-safe values)."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=exclude_unset)
