"""Unit tests for the Project and Client models."""
from decimal import Decimal

import pytest
from pydantic import ValidationError

from src.models.client import Client
from src.models.project import LOWEST_PACKAGE_TIER, Project


class TestProjectModel:
    """Test Project model creation and validation."""

    def test_create_package_project(self):
        """Test creating a package project with defaults."""
        project = Project(id="p-1", name="Brand refresh")

        assert project.billing_type == "package"
        assert project.custom_rate is None
        assert project.package_tier == LOWEST_PACKAGE_TIER

    def test_create_custom_project(self):
        """Test creating a custom-rate project."""
        project = Project(id="p-1", name="Audit", billing_type="custom", custom_rate=300)

        assert project.billing_type == "custom"
        assert project.custom_rate == Decimal("300")
        assert isinstance(project.custom_rate, Decimal)

    def test_camel_case_aliases(self):
        """Test the store's camelCase field names are accepted."""
        project = Project.model_validate(
            {
                "id": "p-1",
                "name": "Audit",
                "billingType": "custom",
                "customRate": "275.50",
                "packageTier": "pack_20",
            }
        )

        assert project.custom_rate == Decimal("275.50")
        assert project.package_tier == "pack_20"

    @pytest.mark.parametrize(
        "label,expected",
        [
            ("personalizado", "custom"),
            ("pacote", "package"),
            ("Custom", "custom"),
            (" PACKAGE ", "package"),
        ],
    )
    def test_billing_type_normalized(self, label, expected):
        """Test legacy and mixed-case billing labels."""
        assert Project(id="p-1", name="X", billing_type=label).billing_type == expected

    def test_unknown_billing_type_raises_error(self):
        """Test that unknown billing types are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            Project(id="p-1", name="X", billing_type="hourly")

        assert "billing_type" in str(exc_info.value) or "billingType" in str(exc_info.value)

    @pytest.mark.parametrize("tier", [None, "", "pack_15", "enterprise", 10])
    def test_unknown_package_tier_falls_back(self, tier):
        """Test unset or unknown tiers normalize to the lowest tier."""
        project = Project(id="p-1", name="X", package_tier=tier)
        assert project.package_tier == "single"

    def test_package_tier_case_insensitive(self):
        """Test tier labels are matched case-insensitively."""
        assert Project(id="p-1", name="X", package_tier="PACK_40").package_tier == "pack_40"

    def test_negative_custom_rate_raises_error(self):
        """Test that negative rates are rejected."""
        with pytest.raises(ValidationError):
            Project(id="p-1", name="X", billing_type="custom", custom_rate="-1")

    def test_invalid_custom_rate_raises_error(self):
        """Test that non-numeric rates are rejected."""
        with pytest.raises(ValidationError):
            Project(id="p-1", name="X", billing_type="custom", custom_rate="a lot")

    def test_boolean_custom_rate_raises_error(self):
        """Test that booleans are not taken as rates."""
        with pytest.raises(ValidationError):
            Project(id="p-1", name="X", billing_type="custom", custom_rate=True)

    def test_empty_name_raises_error(self):
        """Test that empty project name raises validation error."""
        with pytest.raises(ValidationError) as exc_info:
            Project(id="p-1", name="   ")

        assert "name" in str(exc_info.value).lower()

    def test_whitespace_stripped(self):
        """Test identifiers and names are stripped."""
        project = Project(id=" p-1 ", name=" Audit ")

        assert project.id == "p-1"
        assert project.name == "Audit"


class TestClientModel:
    """Test Client model creation and validation."""

    def test_create_client(self):
        """Test creating a client."""
        client = Client(id="c-1", name="Acme")

        assert client.id == "c-1"
        assert client.name == "Acme"

    def test_empty_id_raises_error(self):
        """Test that empty client id raises validation error."""
        with pytest.raises(ValidationError):
            Client(id="", name="Acme")

    def test_whitespace_name_raises_error(self):
        """Test that whitespace-only names are rejected."""
        with pytest.raises(ValidationError):
            Client(id="c-1", name="  ")

    def test_extra_fields_ignored(self):
        """Test store bookkeeping fields are ignored."""
        client = Client.model_validate({"id": "c-1", "name": "Acme", "email": "a@b.c"})
        assert not hasattr(client, "email")
