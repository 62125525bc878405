"""Validation layer for booking data quality."""

from src.validators.booking_validator import BookingValidator
from src.validators.validation_report import (
    ValidationIssue,
    ValidationReport,
    ValidationSeverity,
)

__all__ = [
    "BookingValidator",
    "ValidationReport",
    "ValidationIssue",
    "ValidationSeverity",
]
