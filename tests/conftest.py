"""Pytest configuration and fixtures."""

import shutil
import tempfile

import pytest


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    temp_path = tempfile.mkdtemp()
    yield temp_path
    shutil.rmtree(temp_path)


@pytest.fixture
def sample_config_data():
    """Config file contents as written by the store."""
    return {
        "apps": [
            {
                "name": "factorio",
                "exe": "/usr/bin/factorio",
                "sessions": [
                    {
                        "timestamp": "2024-08-10T23:14:00-04:00[America/New_York]",
                        "duration": "PT2H4M",
                    },
                    {
                        "timestamp": "2024-08-12T09:30:15.250000+02:00[Europe/Berlin]",
                        "duration": "PT45M12.5S",
                    },
                ],
            },
            {
                "name": "Factorio",
                "exe": "factorio-beta",
                "sessions": [],
            },
        ]
    }


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")
