"""
Fixtures for real-browser tests.

These tests need Chrome or Firefox with a matching driver and, for the
application tests, Guia Turístico served at ``browser.base_url``. They are
skipped unless ``RUN_BROWSER_TESTS=1``.
"""

import os

import httpx
import pytest

from guia_harness.browser.driver_factory import BrowserUnavailableError, create_driver
from guia_harness.config_manager import Config, ConsoleConfig, load_config
from guia_harness.console.capture import ConsoleCapture
from guia_harness.server.mock_geolocation import MockGeolocationServer


def pytest_collection_modifyitems(config, items):
    if os.getenv("RUN_BROWSER_TESTS") == "1":
        return
    skip = pytest.mark.skip(reason="set RUN_BROWSER_TESTS=1 to run browser tests")
    for item in items:
        if item.get_closest_marker("browser") is not None:
            item.add_marker(skip)


@pytest.fixture(scope="session")
def harness_config() -> Config:
    return load_config()


@pytest.fixture(scope="session")
def mock_server(harness_config):
    """Mock network geolocation endpoint for Firefox."""
    config = harness_config.mock_server.model_copy(update={"port": 0})
    with MockGeolocationServer(config) as server:
        yield server


@pytest.fixture
def driver(harness_config, mock_server):
    """WebDriver session for the preferred browser, quit after the test."""
    try:
        session = create_driver(harness_config.browser, geolocation_url=mock_server.url)
    except BrowserUnavailableError as e:
        pytest.skip(str(e))
    yield session
    session.quit()


@pytest.fixture
def console(driver):
    capture = ConsoleCapture(driver)
    yield capture
    summary = capture.get_log_summary()
    if summary.total:
        print(f"\nConsole Log Summary: {summary.to_dict()}")


@pytest.fixture
def console_autoclear(driver):
    return ConsoleCapture(driver, ConsoleConfig(auto_clear=True))


@pytest.fixture(scope="session")
def base_url(harness_config) -> str:
    """Application URL; tests needing the app are skipped when it is not served."""
    url = harness_config.browser.base_url.rstrip("/")
    try:
        httpx.get(url, timeout=2.0, trust_env=False)
    except httpx.HTTPError:
        pytest.skip(f"Application not reachable at {url}")
    return url
