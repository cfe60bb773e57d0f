"""
Common base models for riftimpact contracts.
All models use Pydantic V2.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseContract(BaseModel):
    """Base model for all data contracts with common configuration.

    Riot payloads use camelCase keys; contracts expose snake_case attributes
    and accept either spelling on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        # Upstream adds fields between patches; ignore what we do not model
        extra="ignore",
        validate_assignment=True,
    )

    def to_payload(self) -> dict[str, Any]:
        """Serialize with the camelCase keys used on the wire."""
        return self.model_dump(mode="json", by_alias=True)


class RecordContract(BaseContract):
    """Immutable upstream record (match history never changes once played)."""

    model_config = ConfigDict(frozen=True)
