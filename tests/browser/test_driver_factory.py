"""Tests for WebDriver construction and fallback."""

from pathlib import Path
from unittest.mock import Mock

import pytest
from selenium.common.exceptions import WebDriverException

from guia_harness.browser import driver_factory
from guia_harness.browser.driver_factory import (
    BrowserUnavailableError,
    chrome_options,
    create_driver,
    find_firefox_binary,
    firefox_options,
    probe_drivers,
)
from guia_harness.config_manager import BrowserConfig


@pytest.fixture
def no_firefox(monkeypatch: pytest.MonkeyPatch) -> BrowserConfig:
    monkeypatch.delenv("FIREFOX_BIN", raising=False)
    return BrowserConfig(firefox_binary_candidates=[])


class TestFindFirefoxBinary:
    def test_explicit_binary_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FIREFOX_BIN", str(tmp_path))
        config = BrowserConfig(firefox_binary="/custom/firefox")
        assert find_firefox_binary(config) == "/custom/firefox"

    def test_environment_before_candidates(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        env_binary = tmp_path / "firefox-env"
        candidate = tmp_path / "firefox-candidate"
        env_binary.touch()
        candidate.touch()
        monkeypatch.setenv("FIREFOX_BIN", str(env_binary))

        config = BrowserConfig(firefox_binary_candidates=[str(candidate)])

        assert find_firefox_binary(config) == str(env_binary)

    def test_first_existing_candidate(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("FIREFOX_BIN", raising=False)
        existing = tmp_path / "firefox-esr"
        existing.touch()
        config = BrowserConfig(firefox_binary_candidates=[str(tmp_path / "missing"), str(existing)])

        assert find_firefox_binary(config) == str(existing)

    def test_nothing_found(self, no_firefox: BrowserConfig) -> None:
        assert find_firefox_binary(no_firefox) is None


class TestOptions:
    def test_firefox_geolocation_prefs(self, no_firefox: BrowserConfig) -> None:
        options = firefox_options(no_firefox, geolocation_url="http://127.0.0.1:9876/")

        prefs = options.preferences
        assert prefs["geo.enabled"] is True
        assert prefs["geo.prompt.testing"] is True
        assert prefs["geo.prompt.testing.allow"] is True
        assert prefs["geo.provider.use_corelocation"] is False
        assert prefs["geo.provider.network.url"] == "http://127.0.0.1:9876/"
        assert prefs["devtools.console.stdout.content"] is True
        assert prefs["browser.cache.disk.enable"] is False
        assert "--headless" not in options.arguments

    def test_firefox_headless_and_no_network_url(self, no_firefox: BrowserConfig) -> None:
        config = no_firefox.model_copy(update={"headless": True})
        options = firefox_options(config)

        assert "--headless" in options.arguments
        assert "geo.provider.network.url" not in options.preferences

    def test_firefox_binary_location(self) -> None:
        options = firefox_options(BrowserConfig(firefox_binary="/opt/firefox/firefox"))
        assert options.binary_location == "/opt/firefox/firefox"

    def test_chrome_arguments(self) -> None:
        options = chrome_options(BrowserConfig(headless=True, window_width=1024, window_height=768))

        assert "--headless=new" in options.arguments
        assert "--no-sandbox" in options.arguments
        assert "--window-size=1024,768" in options.arguments
        assert options.to_capabilities()["goog:loggingPrefs"] == {"browser": "ALL"}

    def test_chrome_headed_by_default(self) -> None:
        assert "--headless=new" not in chrome_options(BrowserConfig()).arguments


class FakeBrowsers:
    """Replaces webdriver.Chrome and webdriver.Firefox with recording fakes."""

    def __init__(self, monkeypatch: pytest.MonkeyPatch, failing=()):
        self.started = []
        self.drivers = {}
        for name in ("Chrome", "Firefox"):
            monkeypatch.setattr(driver_factory.webdriver, name, self._factory(name.lower(), failing))

    def _factory(self, name, failing):
        def start(options=None):
            self.started.append(name)
            if name in failing:
                raise WebDriverException(f"{name} binary not found")
            driver = Mock(name=name)
            self.drivers[name] = driver
            return driver
        return start


class TestCreateDriver:
    def test_preferred_browser_started(self, monkeypatch: pytest.MonkeyPatch, no_firefox) -> None:
        browsers = FakeBrowsers(monkeypatch)
        config = no_firefox.model_copy(update={"preferred": "firefox"})

        driver = create_driver(config)

        assert browsers.started == ["firefox"]
        driver.set_window_size.assert_called_once_with(1280, 800)
        driver.implicitly_wait.assert_called_once_with(10.0)

    def test_falls_back_to_other_browser(self, monkeypatch: pytest.MonkeyPatch, no_firefox) -> None:
        browsers = FakeBrowsers(monkeypatch, failing=("chrome",))

        driver = create_driver(no_firefox)

        assert browsers.started == ["chrome", "firefox"]
        assert driver is browsers.drivers["firefox"]

    def test_both_fail(self, monkeypatch: pytest.MonkeyPatch, no_firefox) -> None:
        FakeBrowsers(monkeypatch, failing=("chrome", "firefox"))

        with pytest.raises(BrowserUnavailableError) as exc_info:
            create_driver(no_firefox)

        assert set(exc_info.value.causes) == {"chrome", "firefox"}
        assert "No browser available" in str(exc_info.value)
        assert "chrome binary not found" in str(exc_info.value)


def test_probe_drivers(monkeypatch: pytest.MonkeyPatch, no_firefox) -> None:
    browsers = FakeBrowsers(monkeypatch, failing=("firefox",))

    assert probe_drivers(no_firefox) == {"chrome": True, "firefox": False}
    browsers.drivers["chrome"].quit.assert_called_once_with()


def test_setup_failure_quits_session_before_fallback(monkeypatch: pytest.MonkeyPatch, no_firefox) -> None:
    browsers = FakeBrowsers(monkeypatch)
    chrome = Mock(name="chrome")
    chrome.set_window_size.side_effect = WebDriverException("window not resizable")
    monkeypatch.setattr(driver_factory.webdriver, "Chrome", lambda options=None: chrome)

    driver = create_driver(no_firefox)

    chrome.quit.assert_called_once_with()
    assert driver is browsers.drivers["firefox"]


def test_probe_drivers_tolerates_quit_failure(monkeypatch: pytest.MonkeyPatch, no_firefox) -> None:
    browsers = FakeBrowsers(monkeypatch)
    chrome = Mock(name="chrome")
    chrome.quit.side_effect = WebDriverException("session already gone")
    monkeypatch.setattr(driver_factory.webdriver, "Chrome", lambda options=None: chrome)

    assert probe_drivers(no_firefox) == {"chrome": True, "firefox": True}
    browsers.drivers["firefox"].quit.assert_called_once_with()
