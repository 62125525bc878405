"""Project data model for the booking calendar.

A project carries the billing metadata that decides the hourly rate of all
bookings made under it: either a fixed custom rate or tiered package pricing
driven by the project's cumulative booked hours.
"""
from decimal import Decimal
from typing import Any, Literal, Optional

from pydantic import Field, field_validator

from src.models.base import BaseDataModel

BillingType = Literal["custom", "package"]
PackageTier = Literal["single", "pack_10", "pack_20", "pack_40"]

PACKAGE_TIERS = ("single", "pack_10", "pack_20", "pack_40")
LOWEST_PACKAGE_TIER = "single"

# Labels written by older versions of the booking app
BILLING_TYPE_ALIASES = {
    "personalizado": "custom",
    "pacote": "package",
}


class Project(BaseDataModel):
    """Represents a billable project.

    Attributes:
        id: Unique project identifier
        name: Project display name
        billing_type: ``custom`` (fixed hourly rate) or ``package`` (tiered)
        custom_rate: Hourly rate used when billing_type is ``custom``
        package_tier: Contracted package label; unset or unknown labels
            normalize to the lowest tier

    Example:
        >>> project = Project(id="p-1", name="Brand refresh", billingType="pacote")
        >>> project.billing_type
        'package'
        >>> project.package_tier
        'single'
    """

    id: str = Field(..., min_length=1, description="Unique project identifier")
    name: str = Field(..., min_length=1, description="Project name")
    billing_type: BillingType = Field(
        "package", alias="billingType", description="Billing model"
    )
    custom_rate: Optional[Decimal] = Field(
        None, ge=0, alias="customRate", description="Fixed hourly rate"
    )
    package_tier: PackageTier = Field(
        LOWEST_PACKAGE_TIER, alias="packageTier", description="Package tier label"
    )

    @field_validator("id", "name")
    @classmethod
    def validate_not_empty(cls, v: str, info) -> str:
        """Validate that string fields are not empty or whitespace only."""
        if not v or not v.strip():
            raise ValueError(f"{info.field_name} cannot be empty or whitespace")
        return v.strip()

    @field_validator("billing_type", mode="before")
    @classmethod
    def normalize_billing_type(cls, v: Any) -> Any:
        """Map legacy billing labels onto ``custom`` / ``package``."""
        if isinstance(v, str):
            label = v.strip().lower()
            return BILLING_TYPE_ALIASES.get(label, label)
        return v

    @field_validator("package_tier", mode="before")
    @classmethod
    def normalize_package_tier(cls, v: Any) -> str:
        """Fall back to the lowest tier for missing or unrecognized labels."""
        if isinstance(v, str) and v.strip().lower() in PACKAGE_TIERS:
            return v.strip().lower()
        return LOWEST_PACKAGE_TIER

    @field_validator("custom_rate", mode="before")
    @classmethod
    def convert_to_decimal(cls, v: Any) -> Optional[Decimal]:
        """Convert numeric values to Decimal for precision.

        Raises:
            ValueError: If the value cannot be converted to Decimal
        """
        if v is None or isinstance(v, Decimal):
            return v
        if isinstance(v, bool):
            raise ValueError(f"Cannot convert {v!r} to Decimal")
        try:
            return Decimal(str(v))
        except ArithmeticError as e:
            raise ValueError(f"Cannot convert {v} to Decimal: {e}")
