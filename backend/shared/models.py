"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base model whose wire and document format is camelCase.

    Stored documents and JSON responses use camelCase keys (boothId,
    lastActive, isReturningUser) while Python code keeps snake_case
    attribute names.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_document(self) -> dict:
        """Dump to a camelCase dict suitable for Firestore or JSON."""
        return self.model_dump(by_alias=True)
