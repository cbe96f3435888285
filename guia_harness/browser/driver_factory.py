"""
WebDriver construction with Chrome/Firefox fallback.
"""
import os
from typing import Dict, Optional

from selenium import webdriver
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.firefox.options import Options as FirefoxOptions
from selenium.webdriver.remote.webdriver import WebDriver

from guia_harness.config_manager import BrowserConfig
from guia_harness.utils.logger import get_logger

logger = get_logger("driver")


class BrowserUnavailableError(RuntimeError):
    """Raised when no supported browser can be started."""

    def __init__(self, causes: Dict[str, Exception]):
        self.causes = causes
        details = ", ".join(f"{name}: {error}" for name, error in causes.items())
        super().__init__(f"No browser available. {details}")


def find_firefox_binary(config: BrowserConfig) -> Optional[str]:
    """
    Locate the Firefox executable.

    ``config.firefox_binary`` wins, then ``$FIREFOX_BIN``, then the first
    existing candidate path.
    """
    if config.firefox_binary:
        return config.firefox_binary

    for path in [os.environ.get('FIREFOX_BIN'), *config.firefox_binary_candidates]:
        if path and os.path.exists(path):
            return path
    return None


def firefox_options(
    config: BrowserConfig, geolocation_url: Optional[str] = None
) -> FirefoxOptions:
    """
    Build Firefox options for geolocation tests.

    Args:
        config: Browser settings
        geolocation_url: Optional network geolocation endpoint (the mock server)

    Returns:
        Configured FirefoxOptions
    """
    options = FirefoxOptions()

    # Mirror page console output on stdout
    options.set_preference("devtools.console.stdout.content", True)

    # Grant geolocation permission without prompting
    options.set_preference("geo.enabled", True)
    options.set_preference("geo.provider.use_corelocation", False)
    options.set_preference("geo.prompt.testing", True)
    options.set_preference("geo.prompt.testing.allow", True)
    if geolocation_url:
        options.set_preference("geo.provider.network.url", geolocation_url)

    options.set_preference("dom.webnotifications.enabled", False)
    options.set_preference("dom.push.enabled", False)

    options.set_preference("browser.cache.disk.enable", False)
    options.set_preference("browser.cache.memory.enable", False)
    options.set_preference("browser.cache.offline.enable", False)
    options.set_preference("network.http.use-cache", False)

    if config.headless:
        options.add_argument("--headless")

    binary = find_firefox_binary(config)
    if binary:
        options.binary_location = binary

    return options


def chrome_options(config: BrowserConfig) -> ChromeOptions:
    """Build Chrome options with browser log collection enabled."""
    options = ChromeOptions()
    if config.headless:
        options.add_argument("--headless=new")
    options.add_argument("--no-sandbox")
    options.add_argument("--disable-dev-shm-usage")
    options.add_argument("--disable-gpu")
    options.add_argument(f"--window-size={config.window_width},{config.window_height}")
    options.set_capability("goog:loggingPrefs", {"browser": "ALL"})
    return options


def _prepare(driver: WebDriver, config: BrowserConfig) -> WebDriver:
    """Size the window and set the implicit wait, quitting the session on failure."""
    try:
        driver.set_window_size(config.window_width, config.window_height)
        driver.implicitly_wait(config.implicit_wait)
    except WebDriverException:
        driver.quit()
        raise
    return driver


def create_firefox_driver(
    config: Optional[BrowserConfig] = None, geolocation_url: Optional[str] = None
) -> WebDriver:
    """Start a Firefox session."""
    config = config or BrowserConfig()
    driver = webdriver.Firefox(options=firefox_options(config, geolocation_url))
    logger.info("Firefox WebDriver started")
    return _prepare(driver, config)


def create_chrome_driver(config: Optional[BrowserConfig] = None) -> WebDriver:
    """Start a Chrome session."""
    config = config or BrowserConfig()
    driver = webdriver.Chrome(options=chrome_options(config))
    logger.info("Chrome WebDriver started")
    return _prepare(driver, config)


def create_driver(
    config: Optional[BrowserConfig] = None, geolocation_url: Optional[str] = None
) -> WebDriver:
    """
    Start the preferred browser, falling back to the other one.

    Args:
        config: Browser settings
        geolocation_url: Network geolocation endpoint, used by Firefox only

    Returns:
        Running WebDriver session

    Raises:
        BrowserUnavailableError: If neither browser starts
    """
    config = config or BrowserConfig()
    factories = {
        "chrome": lambda: create_chrome_driver(config),
        "firefox": lambda: create_firefox_driver(config, geolocation_url),
    }
    order = [config.preferred] + [name for name in factories if name != config.preferred]

    causes: Dict[str, Exception] = {}
    for name in order:
        try:
            return factories[name]()
        except (WebDriverException, OSError) as e:
            logger.warning(f"{name.capitalize()} not available: {e}")
            causes[name] = e

    raise BrowserUnavailableError(causes)


def probe_drivers(config: Optional[BrowserConfig] = None) -> Dict[str, bool]:
    """
    Report which browsers can start a session.

    Each browser is started headless and quit immediately.
    """
    config = (config or BrowserConfig()).model_copy(update={"headless": True})
    results: Dict[str, bool] = {}

    for name, factory in (("chrome", create_chrome_driver), ("firefox", create_firefox_driver)):
        try:
            driver = factory(config)
        except (WebDriverException, OSError) as e:
            logger.info(f"✗ {name.capitalize()} WebDriver unavailable: {e}")
            results[name] = False
            continue
        try:
            driver.quit()
        except WebDriverException as e:
            logger.warning(f"{name.capitalize()} WebDriver did not quit cleanly: {e}")
        logger.info(f"✓ {name.capitalize()} WebDriver available")
        results[name] = True

    return results
