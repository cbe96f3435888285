"""
guia-harness: browser test harness and documentation checks for Guia Turístico.

Main exports for easy access.
"""

# Version
__version__ = "1.0.0"

# Config
from guia_harness.config_manager import (
    Config,
    ConsoleConfig,
    BrowserConfig,
    GeolocationConfig,
    MockServerConfig,
    DocsConfig,
    LoggingConfig,
    load_config,
    create_default_config,
)

# Console capture
from guia_harness.console.capture import ConsoleCapture, normalize_level

# Models
from guia_harness.models.console_entry import ConsoleLogEntry, LogSummary
from guia_harness.models.findings import CheckReport

# Browser helpers
from guia_harness.browser.driver_factory import BrowserUnavailableError, create_driver
from guia_harness.browser.geolocation import MockGeolocation, setup_mock_geolocation
from guia_harness.browser.visual import VisualHierarchyInspector

# Mock server
from guia_harness.server.mock_geolocation import MockGeolocationServer

# Documentation checks
from guia_harness.docs.links import LinkChecker
from guia_harness.docs.references import ReferenceChecker
from guia_harness.docs.terminology import TerminologyChecker

# Utilities
from guia_harness.utils.logger import setup_logger, get_logger

__all__ = [
    # Config
    "Config",
    "ConsoleConfig",
    "BrowserConfig",
    "GeolocationConfig",
    "MockServerConfig",
    "DocsConfig",
    "LoggingConfig",
    "load_config",
    "create_default_config",

    # Console
    "ConsoleCapture",
    "normalize_level",

    # Models
    "ConsoleLogEntry",
    "LogSummary",
    "CheckReport",

    # Browser
    "BrowserUnavailableError",
    "create_driver",
    "MockGeolocation",
    "setup_mock_geolocation",
    "VisualHierarchyInspector",

    # Server
    "MockGeolocationServer",

    # Docs
    "LinkChecker",
    "ReferenceChecker",
    "TerminologyChecker",

    # Utils
    "setup_logger",
    "get_logger",

    # Version
    "__version__",
]
