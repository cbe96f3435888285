"""Test fixtures and configuration."""

from __future__ import annotations

import sys
import textwrap
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import Mock

import pytest

# Add the project root directory to the Python path
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))

from selenium.webdriver.remote.webdriver import WebDriver  # noqa: E402

from guia_harness.config_manager import ConsoleConfig, DocsConfig  # noqa: E402
from guia_harness.console.scripts import (  # noqa: E402
    CLEAR_SCRIPT,
    LISTENER_SCRIPT,
    RETRIEVE_SCRIPT,
)


class FakeConsolePage:
    """In-memory stand-in for a page running the console listener."""

    def __init__(self) -> None:
        self.logs: Optional[List[Any]] = None
        self.version: Optional[str] = None
        self.options: Dict[str, Any] = {}
        self.inject_calls = 0
        self.retrieve_calls = 0
        self.on_retrieve: Optional[Callable[[int], None]] = None

    def execute_script(self, script: str, *args: Any) -> Any:
        if script == LISTENER_SCRIPT:
            self.inject_calls += 1
            if self.logs is None:
                self.logs = []
                self.options = args[0]
                self.version = self.options["version"]
            return self.version
        if script == RETRIEVE_SCRIPT:
            self.retrieve_calls += 1
            if self.on_retrieve is not None:
                self.on_retrieve(self.retrieve_calls)
            return list(self.logs or [])
        if script == CLEAR_SCRIPT:
            self.logs = []
            return None
        raise AssertionError(f"Unexpected script: {script[:40]}")

    def navigate(self) -> None:
        """Simulate a navigation: the page's window state is gone."""
        self.logs = None
        self.version = None

    def console(self, level: str, message: str, **extra: Any) -> None:
        if self.logs is None:
            self.logs = []
        record = {
            "timestamp": 1767225600000 + len(self.logs),
            "level": level,
            "message": message,
            "source": "http://localhost:8080/src/app.js",
            "line_number": 10,
            "column_number": 5,
        }
        record.update(extra)
        self.logs.append(record)


@pytest.fixture
def fake_page() -> FakeConsolePage:
    """Create a fake page with an empty console buffer."""
    return FakeConsolePage()


@pytest.fixture
def fake_driver(fake_page: FakeConsolePage) -> Mock:  # pylint: disable=redefined-outer-name
    """Create a WebDriver double backed by the fake page."""
    driver = Mock(spec=WebDriver)
    driver.execute_script.side_effect = fake_page.execute_script
    return driver


@pytest.fixture
def fast_console_config() -> ConsoleConfig:
    """Console settings with short polling for wait tests."""
    return ConsoleConfig(wait_timeout=0.2, poll_interval=0.01)


@pytest.fixture
def docs_tree(tmp_path: Path) -> Callable[[Dict[str, str]], Path]:
    """Write a markdown corpus below tmp_path and return its root."""

    def _write(files: Dict[str, str]) -> Path:
        for relative, body in files.items():
            path = tmp_path / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(body).lstrip("\n"), encoding="utf-8")
        return tmp_path

    return _write


@pytest.fixture
def docs_config(tmp_path: Path) -> DocsConfig:
    """Documentation settings rooted at tmp_path."""
    return DocsConfig(root=str(tmp_path))
