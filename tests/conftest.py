"""
Pytest configuration and fixtures for adoption-dashboard tests

This module provides shared fixtures for unit, integration, and E2E tests.
"""
import os

import pytest

from adoption_dashboard.config import DashboardSettings
from adoption_dashboard.core.coercion import CoercionPolicy
from adoption_dashboard.pipeline import DashboardPipeline
from adoption_dashboard.readers import CsvParser


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external services"
    )
    config.addinivalue_line(
        "markers", "integration: Tests that exercise several components together"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests that drive the CLI"
    )


# =======================
# FILE FIXTURES
# =======================

@pytest.fixture(scope="session")
def test_data_dir() -> str:
    """
    Get path to test data fixtures directory

    Returns:
        Path to tests/fixtures directory
    """
    return os.path.join(os.path.dirname(__file__), "fixtures")


@pytest.fixture(scope="session")
def sample_csv_path(test_data_dir) -> str:
    """Path to the twelve-column AI adoption sample file"""
    return os.path.join(test_data_dir, "ai_adoption_sample.csv")


@pytest.fixture(scope="session")
def sample_csv_text(sample_csv_path) -> str:
    with open(sample_csv_path, encoding="utf-8") as f:
        return f.read()


@pytest.fixture(scope="session")
def test_config_path(test_data_dir) -> str:
    return os.path.join(test_data_dir, "dashboard_test.yaml")


@pytest.fixture
def example_csv_text() -> str:
    """Three-row example used throughout the docs"""
    return (
        "Country,Industry,Year,AI Adoption Rate (%),Regulation Status\n"
        "USA,Tech,2020,50,Strict\n"
        "USA,Tech,2021,60,Strict\n"
        "USA,Health,2020,30,Lenient\n"
    )


# =======================
# DATASET FIXTURES
# =======================

@pytest.fixture(params=[CoercionPolicy.EAGER, CoercionPolicy.LAZY], ids=["eager", "lazy"])
def policy(request) -> CoercionPolicy:
    """Runs a test once per coercion policy"""
    return request.param


@pytest.fixture
def sample_dataset(sample_csv_text, policy):
    """Sample file parsed with each coercion policy"""
    return CsvParser(policy=policy).parse(sample_csv_text, source_name="ai_adoption_sample.csv")


@pytest.fixture
def example_dataset(example_csv_text):
    return CsvParser().parse(example_csv_text)


@pytest.fixture
def pipeline(sample_csv_text) -> DashboardPipeline:
    """Pipeline with default settings and the sample file loaded"""
    dashboard = DashboardPipeline(DashboardSettings())
    dashboard.load_text(sample_csv_text, source_name="ai_adoption_sample.csv")
    return dashboard


# =======================
# CONFIGURATION FIXTURES
# =======================

@pytest.fixture
def clean_env(monkeypatch):
    """Remove dashboard environment overrides for the duration of a test"""
    for name in list(os.environ):
        if name.startswith("DASHBOARD_"):
            monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture(scope="session", autouse=True)
def test_env_vars(test_data_dir):
    """
    Set test environment variables

    This fixture loads tests/fixtures/test.env without overriding values
    already set in the environment
    """
    from dotenv import load_dotenv

    env_path = os.path.join(test_data_dir, "test.env")
    if os.path.exists(env_path):
        load_dotenv(env_path, override=False)
