"""Base model for all data models in the booking calendar.

This module provides a base Pydantic model with the configuration shared by
clients, projects and bookings.
"""

from pydantic import BaseModel, ConfigDict


class BaseDataModel(BaseModel):
    """Base class for all data models.

    Records arrive from an external store that uses camelCase field names
    (``startTime``, ``clientId``), so every field may be populated either by
    its Python name or by its alias.

    Example:
        >>> class Room(BaseDataModel):
        ...     name: str
        >>> Room(name="Studio").model_dump()
        {'name': 'Studio'}
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        validate_assignment=True,
        populate_by_name=True,
        strict=False,
        # Stored documents carry bookkeeping fields (createdAt, ownerId, ...)
        # that the calculations never read
        extra="ignore",
        frozen=False,
    )
