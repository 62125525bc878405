"""Client data model."""

from pydantic import Field, field_validator

from src.models.base import BaseDataModel


class Client(BaseDataModel):
    """A client that bookings are made for.

    Attributes:
        id: Unique client identifier
        name: Display name, used as the key of monthly reports
    """

    id: str = Field(..., min_length=1, description="Unique client identifier")
    name: str = Field(..., min_length=1, description="Client display name")

    @field_validator("id", "name")
    @classmethod
    def validate_not_empty(cls, v: str, info) -> str:
        """Validate that string fields are not empty or whitespace only."""
        if not v or not v.strip():
            raise ValueError(f"{info.field_name} cannot be empty or whitespace")
        return v.strip()
