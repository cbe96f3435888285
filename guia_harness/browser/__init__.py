# ============================================================================
# guia_harness/browser/__init__.py
# ============================================================================
"""WebDriver session helpers."""
from guia_harness.browser.driver_factory import (
    BrowserUnavailableError,
    create_driver,
    create_chrome_driver,
    create_firefox_driver,
    probe_drivers
)
from guia_harness.browser.geolocation import (
    MockGeolocation,
    create_custom_position,
    setup_mock_geolocation,
    verify_mock_configuration,
    probe_mock_provider,
    reset_geolocation_service,
    wait_for_app_library
)
from guia_harness.browser.visual import VisualHierarchyInspector

__all__ = [
    'BrowserUnavailableError',
    'create_driver',
    'create_chrome_driver',
    'create_firefox_driver',
    'probe_drivers',
    'MockGeolocation',
    'create_custom_position',
    'setup_mock_geolocation',
    'verify_mock_configuration',
    'probe_mock_provider',
    'reset_geolocation_service',
    'wait_for_app_library',
    'VisualHierarchyInspector',
]
