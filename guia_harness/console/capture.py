"""
Browser console log capture for Selenium-driven tests.

The capture library injects a listener into the page that mirrors every
``console.*`` call, uncaught error and unhandled promise rejection into
``window._captured_logs``. Records are pulled back over the WebDriver
connection, normalized to ERROR/WARNING/INFO/DEBUG and filtered.
"""
import re
import time
from typing import Any, Dict, Iterable, List, Optional, Pattern, Union

from selenium.common.exceptions import (
    JavascriptException,
    NoSuchWindowException,
    WebDriverException,
)
from selenium.webdriver.remote.webdriver import WebDriver

from guia_harness.config_manager import ConsoleConfig
from guia_harness.console.scripts import (
    CLEAR_SCRIPT,
    LISTENER_SCRIPT,
    LISTENER_VERSION,
    RETRIEVE_SCRIPT,
)
from guia_harness.models.console_entry import ConsoleLogEntry, LogSummary
from guia_harness.utils.logger import get_logger

logger = get_logger("console")

_LEVEL_ALIASES = {
    "SEVERE": "ERROR",
    "ERROR": "ERROR",
    "WARNING": "WARNING",
    "WARN": "WARNING",
    "INFO": "INFO",
    "LOG": "INFO",
    "DEBUG": "DEBUG",
}


def normalize_level(level_str: str) -> str:
    """
    Map a browser or console level name to ERROR, WARNING, INFO or DEBUG.

    Args:
        level_str: Raw level (``console`` method name or WebDriver level)

    Returns:
        Normalized level

    Raises:
        ValueError: If the level is unknown
    """
    if not isinstance(level_str, str):
        raise ValueError(f"Unknown log level: {level_str!r}")
    try:
        return _LEVEL_ALIASES[level_str.strip().upper()]
    except KeyError:
        raise ValueError(f"Unknown log level: {level_str}") from None


class ConsoleCapture:
    """
    Capture JavaScript console logs during Selenium tests.

    Works with any WebDriver session. Firefox offers no native browser log
    endpoint, so capture relies on the injected listener; Chromium sessions
    can additionally merge ``get_log("browser")`` records.

    Example:
        >>> driver = webdriver.Firefox()
        >>> console = ConsoleCapture(driver)
        >>> driver.get("http://localhost:8080")
        >>> console.assert_no_errors("Page should load without errors")
    """

    def __init__(self, driver: WebDriver, config: Optional[ConsoleConfig] = None) -> None:
        """
        Initialize console capture.

        Args:
            driver: WebDriver session
            config: Optional capture settings

        Raises:
            TypeError: If driver is not a WebDriver instance
        """
        if not isinstance(driver, WebDriver):
            raise TypeError(
                f"Expected a selenium WebDriver instance, got {type(driver).__name__}"
            )

        self.driver = driver
        self.config = config or ConsoleConfig()
        self._listener_injected = False

    def inject_listener(self) -> str:
        """
        Install the console listener in the current page.

        Safe to call repeatedly: the page keeps its existing buffer if the
        listener is already present, and a fresh page gets a new one.

        Returns:
            Listener version reported by the page

        Raises:
            WebDriverException: If the script cannot be executed
        """
        options = {
            "version": LISTENER_VERSION,
            "bufferLimit": self.config.buffer_limit,
            "bufferKeep": self.config.buffer_keep,
        }
        try:
            version = self.driver.execute_script(LISTENER_SCRIPT, options)
        except (JavascriptException, NoSuchWindowException, WebDriverException) as e:
            raise WebDriverException(f"Failed to inject console listener: {e}") from e

        if not self._listener_injected:
            logger.debug(f"Console listener {version} injected")
        self._listener_injected = True
        return version

    def _retrieve_captured_logs(self) -> List[Dict[str, Any]]:
        """Return the page buffer, or an empty list when it cannot be read."""
        try:
            logs = self.driver.execute_script(RETRIEVE_SCRIPT)
        except (JavascriptException, NoSuchWindowException, WebDriverException) as e:
            logger.debug(f"Could not read captured console logs: {e}")
            return []
        return logs if isinstance(logs, list) else []

    def _retrieve_native_logs(self) -> List[Dict[str, Any]]:
        """Return Chromium ``browser`` log records when the driver exposes them."""
        get_log = getattr(self.driver, "get_log", None)
        if get_log is None:
            return []
        try:
            logs = get_log("browser")
        except (WebDriverException, ValueError) as e:
            logger.debug(f"Native browser log unavailable: {e}")
            return []
        return logs if isinstance(logs, list) else []

    def _parse_log_level(self, level_str: str) -> str:
        return normalize_level(level_str)

    def _filter_logs(
        self, logs: Iterable[Any], level: Optional[str] = None
    ) -> List[ConsoleLogEntry]:
        """
        Convert raw records to entries, applying the level filter and limit.

        Malformed records (not a mapping, unknown level, bad field types)
        are skipped.
        """
        wanted = self._parse_log_level(level) if level else None
        filtered: List[ConsoleLogEntry] = []

        for log in logs:
            if not isinstance(log, dict):
                continue
            try:
                log_level = self._parse_log_level(log.get("level") or self.config.default_level)
                if wanted and log_level != wanted:
                    continue

                entry = ConsoleLogEntry(
                    timestamp=log.get("timestamp") or 0,
                    level=log_level,
                    message=log.get("message", ""),
                    source=(log.get("source") or "unknown") if self.config.include_source else "unknown",
                    line_number=log.get("line_number"),
                    column_number=log.get("column_number"),
                )
            except ValueError:
                # pydantic.ValidationError is a ValueError as well
                continue
            filtered.append(entry)

            if len(filtered) >= self.config.max_entries:
                break

        return filtered

    def get_logs(self, level: Optional[str] = None) -> List[ConsoleLogEntry]:
        """
        Retrieve console logs from the page.

        Args:
            level: Optional level filter (ERROR, WARNING, INFO, DEBUG or an alias)

        Returns:
            List of console log entries

        Example:
            >>> logs = console.get_logs()
            >>> error_logs = console.get_logs(level="ERROR")
        """
        self.inject_listener()
        raw_logs = self._retrieve_captured_logs()
        if self.config.include_native_logs:
            raw_logs = raw_logs + self._retrieve_native_logs()

        entries = self._filter_logs(raw_logs, level)

        if self.config.auto_clear:
            self.clear_logs()

        return entries

    def get_errors(self) -> List[ConsoleLogEntry]:
        """Get only ERROR level console logs."""
        return self.get_logs(level="ERROR")

    def get_warnings(self) -> List[ConsoleLogEntry]:
        """Get only WARNING level console logs."""
        return self.get_logs(level="WARNING")

    def find_logs(
        self, message_pattern: Union[str, Pattern[str]], level: Optional[str] = None
    ) -> List[ConsoleLogEntry]:
        """Return entries whose message matches ``message_pattern``."""
        pattern = re.compile(message_pattern)
        return [log for log in self.get_logs(level=level) if pattern.search(log.message)]

    def clear_logs(self) -> None:
        """
        Clear all captured console logs in the page.

        The listener is injected first so later records are still captured.
        """
        self.inject_listener()
        try:
            self.driver.execute_script(CLEAR_SCRIPT)
        except (JavascriptException, NoSuchWindowException, WebDriverException) as e:
            logger.debug(f"Could not clear captured console logs: {e}")

    def wait_for_log(
        self,
        message_pattern: Union[str, Pattern[str]],
        timeout: Optional[float] = None,
        level: Optional[str] = None,
    ) -> Optional[ConsoleLogEntry]:
        """
        Wait for a console log matching the specified pattern.

        The page is polled every ``config.poll_interval`` seconds. At least
        one check is made, even with a zero timeout.

        Args:
            message_pattern: Regex searched in each message
            timeout: Maximum wait in seconds (default: config.wait_timeout)
            level: Optional level filter

        Returns:
            First matching entry, or None on timeout

        Example:
            >>> log = console.wait_for_log(r"Address resolved", timeout=5.0)
            >>> assert log is not None, "Expected log not found"
        """
        if timeout is None:
            timeout = self.config.wait_timeout
        pattern = re.compile(message_pattern)
        deadline = time.monotonic() + timeout

        while True:
            for log in self.get_logs(level=level):
                if pattern.search(log.message):
                    return log

            if time.monotonic() >= deadline:
                break
            time.sleep(self.config.poll_interval)

        logger.debug(f"No console log matched {pattern.pattern!r} within {timeout}s")
        return None

    def has_errors(self) -> bool:
        """Check if any console errors exist."""
        return len(self.get_errors()) > 0

    def assert_no_errors(
        self,
        message: str = "Console errors detected",
        ignore: Optional[List[str]] = None,
    ) -> None:
        """
        Assert that no console errors exist.

        Args:
            message: Custom assertion message
            ignore: Regexes for errors that are tolerated (e.g. favicon 404s)

        Raises:
            AssertionError: If console errors are present
        """
        ignored = [re.compile(p) for p in ignore or []]
        errors = [
            e for e in self.get_errors()
            if not any(p.search(e.message) for p in ignored)
        ]
        if errors:
            error_messages = "\n".join(f"  {e.format()}" for e in errors)
            raise AssertionError(f"{message}:\n{error_messages}")

    def get_log_summary(self) -> LogSummary:
        """
        Get summary count of logs by level.

        Example:
            >>> summary = console.get_log_summary()
            >>> print(f"Errors: {summary.ERROR}, Warnings: {summary.WARNING}")
        """
        summary = LogSummary()
        for log in self.get_logs():
            summary.add(log.level)
        return summary
