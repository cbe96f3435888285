"""
Mock geolocation helpers for Selenium tests.

Instead of overriding ``navigator.geolocation``, these helpers install the
application's own ``MockGeolocationProvider`` and wrap ``GeolocationService``
so every service instance created by the page uses it.

Usage:
    from guia_harness.browser.geolocation import MockGeolocation

    with MockGeolocation(driver, latitude=-18.4696091, longitude=-43.4953982) as result:
        assert result.success
"""
from typing import Any, Optional

from selenium.common.exceptions import WebDriverException
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.support.ui import WebDriverWait

from guia_harness.config_manager import GeolocationConfig
from guia_harness.models.position import (
    Coordinates,
    MockPosition,
    MockSetupResult,
    MockVerification,
    ProviderProbeResult,
)
from guia_harness.utils.logger import get_logger

logger = get_logger("geolocation")

LIBRARY_LOADED_SCRIPT = """
return typeof window.MockGeolocationProvider !== 'undefined' &&
       typeof window.GeolocationService !== 'undefined' &&
       typeof window.WebGeocodingManager !== 'undefined';
"""

# arguments[0]: {position, delay}
SETUP_SCRIPT = """
const opts = arguments[0];
try {
    const position = opts.position;
    if (position.timestamp === null) {
        position.timestamp = Date.now();
    }
    window.TEST_POSITION = position;

    window.TEST_MOCK_PROVIDER = new window.MockGeolocationProvider({
        defaultPosition: window.TEST_POSITION,
        supported: true,
        delay: opts.delay
    });

    if (!window._OriginalGeolocationService) {
        window._OriginalGeolocationService = window.GeolocationService;
    }

    window.GeolocationService = function(locationResult, provider, pm, config) {
        console.log('[TEST] GeolocationService created with MockGeolocationProvider');
        return new window._OriginalGeolocationService(
            locationResult,
            window.TEST_MOCK_PROVIDER,
            pm,
            config
        );
    };
    window.GeolocationService.prototype = window._OriginalGeolocationService.prototype;
    Object.setPrototypeOf(window.GeolocationService, window._OriginalGeolocationService);

    console.log('[TEST] MockGeolocationProvider configured successfully');
    console.log('[TEST] Test coordinates:', position.coords.latitude, position.coords.longitude);

    return {
        success: true,
        coordinates: {
            latitude: position.coords.latitude,
            longitude: position.coords.longitude,
            accuracy: position.coords.accuracy
        },
        providerType: 'MockGeolocationProvider'
    };
} catch (error) {
    console.error('[TEST] Failed to configure mock:', error);
    return {success: false, error: error.message, stack: error.stack};
}
"""

VERIFY_SCRIPT = """
try {
    if (typeof window.TEST_MOCK_PROVIDER === 'undefined') {
        return {configured: false, error: 'TEST_MOCK_PROVIDER not found'};
    }
    return {
        configured: true,
        providerExists: true,
        isSupported: window.TEST_MOCK_PROVIDER.isSupported(),
        hasPosition: !!window.TEST_MOCK_PROVIDER.config.defaultPosition,
        position: window.TEST_POSITION ? {
            latitude: window.TEST_POSITION.coords.latitude,
            longitude: window.TEST_POSITION.coords.longitude,
            accuracy: window.TEST_POSITION.coords.accuracy
        } : null
    };
} catch (error) {
    return {configured: false, error: error.message};
}
"""

PROBE_SCRIPT = """
const done = arguments[arguments.length - 1];
try {
    if (typeof window.TEST_MOCK_PROVIDER === 'undefined') {
        done({success: false, error: 'TEST_MOCK_PROVIDER not configured'});
        return;
    }
    window.TEST_MOCK_PROVIDER.getCurrentPosition(
        function(position) {
            done({
                success: true,
                latitude: position.coords.latitude,
                longitude: position.coords.longitude,
                accuracy: position.coords.accuracy,
                timestamp: position.timestamp
            });
        },
        function(error) {
            done({success: false, error: error.message || 'Unknown error', code: error.code});
        },
        {}
    );
} catch (error) {
    done({success: false, error: error.message, stack: error.stack});
}
"""

RESET_SCRIPT = """
try {
    if (window._OriginalGeolocationService) {
        window.GeolocationService = window._OriginalGeolocationService;
        delete window._OriginalGeolocationService;
        delete window.TEST_MOCK_PROVIDER;
        delete window.TEST_POSITION;
        console.log('[TEST] GeolocationService reset to original');
        return true;
    }
    return false;
} catch (error) {
    console.error('[TEST] Reset failed:', error);
    return false;
}
"""


def wait_for_app_library(driver: WebDriver, timeout: float = 10.0) -> bool:
    """
    Wait for the application's geolocation classes to be defined.

    Raises:
        TimeoutException: If the library doesn't load within timeout
    """
    wait = WebDriverWait(driver, timeout)
    return bool(wait.until(lambda d: d.execute_script(LIBRARY_LOADED_SCRIPT)))


def create_custom_position(
    latitude: float, longitude: float, accuracy: float = 10, **kwargs: Any
) -> MockPosition:
    """
    Create a position object compatible with the Geolocation API.

    Args:
        latitude: Latitude coordinate
        longitude: Longitude coordinate
        accuracy: Position accuracy in meters
        **kwargs: altitude, altitudeAccuracy, heading, speed, timestamp
    """
    return MockPosition(
        coords=Coordinates(
            latitude=latitude,
            longitude=longitude,
            accuracy=accuracy,
            altitude=kwargs.get('altitude'),
            altitudeAccuracy=kwargs.get('altitudeAccuracy'),
            heading=kwargs.get('heading'),
            speed=kwargs.get('speed'),
        ),
        timestamp=kwargs.get('timestamp'),
    )


def setup_mock_geolocation(
    driver: WebDriver,
    latitude: float,
    longitude: float,
    accuracy: float = 10,
    delay: int = 100,
    library_timeout: float = 10.0,
) -> MockSetupResult:
    """
    Install MockGeolocationProvider with the given coordinates.

    Args:
        driver: WebDriver session on an application page
        latitude: Test latitude coordinate
        longitude: Test longitude coordinate
        accuracy: Position accuracy in meters
        delay: Simulated provider delay in ms
        library_timeout: Seconds to wait for the application classes

    Returns:
        Setup result reported by the page
    """
    try:
        wait_for_app_library(driver, library_timeout)
    except WebDriverException as e:
        logger.warning(f"Application library not loaded: {e}")
        return MockSetupResult(success=False, error='guia.js library not loaded')

    position = create_custom_position(latitude, longitude, accuracy)
    result = driver.execute_script(
        SETUP_SCRIPT, {"position": position.to_js_dict(), "delay": delay}
    )
    if not isinstance(result, dict):
        return MockSetupResult(success=False, error=f"Unexpected setup result: {result!r}")

    setup = MockSetupResult(**result)
    if setup.success:
        logger.info(f"Mock geolocation configured at {latitude}, {longitude}")
    else:
        logger.warning(f"Mock geolocation setup failed: {setup.error}")
    return setup


def verify_mock_configuration(driver: WebDriver) -> MockVerification:
    """Check that the mock provider is installed in the page."""
    return MockVerification(**driver.execute_script(VERIFY_SCRIPT))


def probe_mock_provider(driver: WebDriver, timeout: float = 5.0) -> ProviderProbeResult:
    """
    Call getCurrentPosition on the installed mock provider.

    Useful for debugging a mock configuration before driving the UI.
    """
    driver.set_script_timeout(timeout)
    return ProviderProbeResult(**driver.execute_async_script(PROBE_SCRIPT))


def reset_geolocation_service(driver: WebDriver) -> bool:
    """
    Restore the original GeolocationService.

    Returns:
        True if a wrapped service was restored
    """
    return bool(driver.execute_script(RESET_SCRIPT))


class MockGeolocation:
    """Context manager that installs the mock provider and restores it on exit."""

    def __init__(
        self,
        driver: WebDriver,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        config: Optional[GeolocationConfig] = None,
    ):
        self.driver = driver
        self.config = config or GeolocationConfig()
        self.latitude = self.config.latitude if latitude is None else latitude
        self.longitude = self.config.longitude if longitude is None else longitude
        self.result: Optional[MockSetupResult] = None

    def __enter__(self) -> MockSetupResult:
        self.result = setup_mock_geolocation(
            self.driver,
            self.latitude,
            self.longitude,
            accuracy=self.config.accuracy,
            delay=self.config.delay_ms,
            library_timeout=self.config.library_timeout,
        )
        return self.result

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            reset_geolocation_service(self.driver)
        except WebDriverException as e:
            logger.warning(f"Could not reset geolocation service: {e}")
        return False
