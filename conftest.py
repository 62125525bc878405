"""
Global pytest configuration and fixtures.
"""
import datetime as dt
import json
from typing import Dict

import pytest

from src.config import CalendarSettings, reload_config
from src.config.logging_config import reset_logging
from src.models import BookingRecord, Client, Project

CONFIG_ENV_VARS = (
    "CALENDAR_START_HOUR",
    "CALENDAR_END_HOUR",
    "BUFFER_HOURS",
    "CALENDAR_TIMEZONE",
    "PACKAGE_RATE_TIERS",
    "UNKNOWN_CLIENT_LABEL",
    "UNKNOWN_PROJECT_LABEL",
    "SERVICE_PREFIX",
    "ENVIRONMENT",
    "DEBUG",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FILE",
    "LOG_CONSOLE",
    "LOG_FILE_ENABLED",
    "LOG_MAX_FILE_SIZE",
    "LOG_BACKUP_COUNT",
)


@pytest.fixture(scope="session")
def test_env_vars() -> Dict[str, str]:
    """Test environment variables for configuration."""
    return {
        "ENVIRONMENT": "testing",
        "DEBUG": "false",
        "LOG_LEVEL": "DEBUG",
    }


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep a developer's .env and shell settings out of every test."""
    for key in CONFIG_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)

    import src.config.settings
    src.config.settings._config = None

    yield

    src.config.settings._config = None
    reset_logging()


@pytest.fixture
def mock_env(test_env_vars, monkeypatch):
    """Mock environment variables for testing."""
    for key, value in test_env_vars.items():
        monkeypatch.setenv(key, value)
    yield test_env_vars


@pytest.fixture
def test_config(mock_env) -> CalendarSettings:
    """Test configuration instance."""
    return reload_config()


@pytest.fixture
def clients():
    """Two known clients."""
    return [
        Client(id="c-acme", name="Acme"),
        Client(id="c-globex", name="Globex"),
    ]


@pytest.fixture
def projects():
    """A package project, a second package project and a custom project."""
    return [
        Project(id="p-brand", name="Brand refresh", billing_type="package"),
        Project(id="p-web", name="Website", billing_type="package"),
        Project(
            id="p-audit",
            name="Audit",
            billing_type="custom",
            custom_rate="300",
        ),
    ]


def make_record(
    booking_id: str,
    start: dt.datetime,
    hours: float,
    client_id: str = "c-acme",
    project_id: str = "p-brand",
    with_duration: bool = True,
) -> BookingRecord:
    """Build a booking record lasting ``hours`` from ``start``."""
    return BookingRecord(
        id=booking_id,
        start_time=start,
        end_time=start + dt.timedelta(hours=hours),
        client_id=client_id,
        project_id=project_id,
        duration=hours if with_duration else None,
    )


@pytest.fixture
def record_factory():
    """Factory for booking records."""
    return make_record


@pytest.fixture
def sample_data_document():
    """Booking data export in the store's camelCase shape."""
    return {
        "clients": [
            {"id": "c-acme", "name": "Acme"},
            {"id": "c-globex", "name": "Globex"},
        ],
        "projects": [
            {"id": "p-brand", "name": "Brand refresh", "billingType": "pacote"},
            {
                "id": "p-audit",
                "name": "Audit",
                "billingType": "personalizado",
                "customRate": 300,
            },
        ],
        "bookings": [
            {
                "id": "b-1",
                "startTime": "2024-05-06T14:00:00",
                "endTime": "2024-05-06T16:00:00",
                "clientId": "c-acme",
                "projectId": "p-brand",
                "duration": 2,
            },
            {
                "id": "b-2",
                "startTime": "2024-05-08T10:00:00",
                "endTime": "2024-05-08T11:30:00",
                "clientId": "c-globex",
                "projectId": "p-audit",
                "duration": 1.5,
            },
        ],
    }


@pytest.fixture
def sample_data_file(tmp_path, sample_data_document):
    """Booking data export written to a JSON file."""
    path = tmp_path / "bookings.json"
    path.write_text(json.dumps(sample_data_document), encoding="utf-8")
    return path


# Pytest configuration for different test types
def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "cli: mark test as exercising the command line"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on location."""
    for item in items:
        if "tests/unit/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        if "tests/unit/cli/" in str(item.fspath):
            item.add_marker(pytest.mark.cli)
