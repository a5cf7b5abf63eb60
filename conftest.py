"""
Global pytest configuration and fixtures.
"""
import datetime as dt
import os
from decimal import Decimal
from typing import Dict, List

import pytest

import fleet_billing.config.settings
from fleet_billing.config import FleetBillingConfig, reload_config
from fleet_billing.config.logging_config import reset_logging
from fleet_billing.models import EntryStatus, TripEntry

# Settings that would leak into tests from the developer's shell
_SETTING_PREFIXES = ("SALARY_", "BILLING_", "LOG_")
_SETTING_NAMES = (
    "ENVIRONMENT",
    "DEBUG",
    "TRIPSHEET_PREFIX",
    "BILL_PREFIX",
    "SALARY_PREFIX",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Run every test without fleet billing settings from the environment."""
    for key in list(os.environ):
        if key.startswith(_SETTING_PREFIXES) or key in _SETTING_NAMES:
            monkeypatch.delenv(key, raising=False)

    # load_dotenv() looks for .env in the working directory
    monkeypatch.chdir(tmp_path)
    fleet_billing.config.settings._config = None

    yield

    fleet_billing.config.settings._config = None
    reset_logging()


@pytest.fixture(scope="session")
def test_env_vars() -> Dict[str, str]:
    """Test environment variables for configuration."""
    return {
        "ENVIRONMENT": "testing",
        "DEBUG": "true",
        "LOG_LEVEL": "DEBUG",
        "SALARY_BASE_SALARY": "21000",
        "BILLING_DEFAULT_BASE_AMOUNT": "60000",
        "BILLING_BASE_KM_POLICY": "per_working_day",
    }


@pytest.fixture
def mock_env(test_env_vars, monkeypatch):
    """Set test environment variables and force a config reload."""
    for key, value in test_env_vars.items():
        monkeypatch.setenv(key, value)

    fleet_billing.config.settings._config = None
    yield test_env_vars


@pytest.fixture
def test_config(mock_env) -> FleetBillingConfig:
    """Test configuration instance."""
    return reload_config()


@pytest.fixture
def working_entry() -> TripEntry:
    """A Monday with odometer and clock readings (120 km, 13.0 hours)."""
    return TripEntry(
        date=dt.date(2025, 9, 1),
        status=EntryStatus.WORKING,
        starting_km=10000,
        closing_km=10120,
        starting_time="07:00",
        closing_time="20:00",
        fuel_litres=Decimal("20"),
        fuel_amount=Decimal("2000"),
    )


@pytest.fixture
def sample_entries() -> List[TripEntry]:
    """Four days of September 2025: three working days and one off day."""
    return [
        TripEntry(
            date=dt.date(2025, 9, 3),
            status=EntryStatus.WORKING,
            starting_km=10200,
            closing_km=10350,
            starting_time="08:00",
            closing_time="23:00",
        ),
        TripEntry(
            date=dt.date(2025, 9, 1),
            status=EntryStatus.WORKING,
            starting_km=10000,
            closing_km=10120,
            starting_time="07:00",
            closing_time="20:00",
            fuel_litres=Decimal("20"),
            fuel_amount=Decimal("2000"),
        ),
        TripEntry(
            date=dt.date(2025, 9, 2),
            status=EntryStatus.WORKING,
            starting_km=10120,
            closing_km=10200,
            starting_time="09:00",
            closing_time="17:00",
        ),
        TripEntry(date=dt.date(2025, 9, 4), status=EntryStatus.OFF),
    ]


TRIPSHEET_CSV = """Date,Status,Starting KM,Closing KM,Starting Time,Closing Time,Fuel Litres,Fuel Amount,Remarks
2025-09-01,working,10000,10120,07:00,20:00,20,2000,Airport run
2025-09-02,working,10120,10200,9:00,17:00,,,
2025-09-03,working,10200,10350,08:00,23:00,,,
2025-09-04,off,,,,,,,
,,,,,,,,
"""


@pytest.fixture
def tripsheet_csv(tmp_path):
    """A small tripsheet CSV file for September 2025."""
    path = tmp_path / "tripsheet.csv"
    path.write_text(TRIPSHEET_CSV, encoding="utf-8")
    return path


# Pytest configuration for different test types
def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


def pytest_collection_modifyitems(config, items):
    """Add the unit marker to tests under tests/unit/."""
    for item in items:
        if os.path.join("tests", "unit") in str(item.fspath):
            item.add_marker(pytest.mark.unit)
