"""Test configuration and fixtures."""

import os
from unittest.mock import MagicMock

import pytest
import requests

from core.dependencies import clear_settings
from core.logging import configure_logging
from core.settings import Settings
from payments.paypal_client import PayPalClient
from tests.helpers import SUCCESS_BODY, MockResponse


@pytest.fixture(scope="session", autouse=True)
def configure_test_logging():
    """Importing the client leaves logging alone; the test session sets it up."""
    configure_logging(Settings(PAYPAL_USERNAME="test_user", ENVIRONMENT="test"))


@pytest.fixture(autouse=True)
def setup_test_environment():
    """Setup test environment variables before each test."""
    original_env = dict(os.environ)

    os.environ.update(
        {
            "PAYPAL_USERNAME": "seller_api1.example.com",
            "PAYPAL_PASSWORD": "1234567890",
            "PAYPAL_SIGNATURE": "AFcWxV21C7fd0v3bYYYRCpSSRl31A",
            "PAYPAL_SANDBOX": "true",
            "ENVIRONMENT": "test",
            "DISABLE_TRACING": "1",
        }
    )
    clear_settings()

    yield

    clear_settings()
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def mock_settings():
    return Settings(
        PAYPAL_USERNAME="test_user",
        PAYPAL_PASSWORD="test_password",
        PAYPAL_SIGNATURE="test_signature",
        PAYPAL_SANDBOX=True,
        ENVIRONMENT="test",
    )


@pytest.fixture
def mock_session():
    """A requests.Session whose post() answers with a successful NVP reply."""
    session = MagicMock(spec=requests.Session)
    session.post.return_value = MockResponse(SUCCESS_BODY)
    return session


@pytest.fixture
def sandbox_client(mock_session):
    return PayPalClient("user", "pass", "sig", True, session=mock_session)


@pytest.fixture
def production_client(mock_session):
    return PayPalClient("user", "pass", "sig", False, session=mock_session)


# Pytest markers for different test types
def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
