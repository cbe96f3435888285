"""
Configuration management for guia-harness.
Centralized config loading and validation.
"""
import os
import re
import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv


# Test coordinates: Milho Verde, Serro, MG
MILHO_VERDE_LATITUDE = -18.4696091
MILHO_VERDE_LONGITUDE = -43.4953982

LOG_LEVELS = ("ERROR", "WARNING", "INFO", "DEBUG")


class ConsoleConfig(BaseSettings):
    """Console log capture configuration."""

    default_level: str = Field(default="INFO", description="Level assumed for records without one")
    auto_clear: bool = False
    include_source: bool = True
    max_entries: int = Field(default=1000, ge=1)
    wait_timeout: float = Field(default=10.0, gt=0.0)
    poll_interval: float = Field(default=0.1, gt=0.0)
    buffer_limit: int = Field(default=10000, ge=1)
    buffer_keep: int = Field(default=5000, ge=1)
    include_native_logs: bool = False

    model_config = SettingsConfigDict(env_prefix="CONSOLE_", frozen=True)

    @field_validator('default_level')
    @classmethod
    def level_known(cls, v):
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"default_level must be one of {', '.join(LOG_LEVELS)}")
        return level


class BrowserConfig(BaseSettings):
    """WebDriver session configuration."""

    preferred: str = Field(default="chrome", description="chrome or firefox")
    headless: bool = False
    window_width: int = Field(default=1280, gt=0)
    window_height: int = Field(default=800, gt=0)
    implicit_wait: float = Field(default=10.0, ge=0.0)
    firefox_binary: Optional[str] = None
    firefox_binary_candidates: List[str] = Field(default_factory=lambda: [
        '/usr/bin/firefox',
        '/usr/bin/firefox-esr',
        '/usr/bin/firefox-bin',
        '/opt/firefox/firefox',
        '/opt/firefox/firefox-bin',
    ])
    base_url: str = "http://localhost:8080"

    model_config = SettingsConfigDict(env_prefix="BROWSER_")

    @field_validator('preferred')
    @classmethod
    def browser_known(cls, v):
        browser = v.lower()
        if browser not in ("chrome", "firefox"):
            raise ValueError("preferred must be 'chrome' or 'firefox'")
        return browser


class GeolocationConfig(BaseSettings):
    """In-page mock geolocation provider configuration."""

    latitude: float = Field(default=MILHO_VERDE_LATITUDE, ge=-90.0, le=90.0)
    longitude: float = Field(default=MILHO_VERDE_LONGITUDE, ge=-180.0, le=180.0)
    accuracy: float = Field(default=10.0, ge=0.0)
    delay_ms: int = Field(default=100, ge=0)
    library_timeout: float = Field(default=10.0, gt=0.0)
    probe_timeout: float = Field(default=5.0, gt=0.0)

    model_config = SettingsConfigDict(env_prefix="GEO_")


class MockServerConfig(BaseSettings):
    """Mock network geolocation server configuration."""

    host: str = "127.0.0.1"
    port: int = Field(default=9876, ge=0, le=65535)
    latitude: float = Field(default=MILHO_VERDE_LATITUDE, ge=-90.0, le=90.0)
    longitude: float = Field(default=MILHO_VERDE_LONGITUDE, ge=-180.0, le=180.0)
    accuracy: float = Field(default=10.0, ge=0.0)
    startup_timeout: float = Field(default=5.0, gt=0.0)

    model_config = SettingsConfigDict(env_prefix="MOCK_SERVER_")


class DocsConfig(BaseSettings):
    """Documentation checks configuration."""

    root: str = "."
    docs_dir: str = "docs"
    exclude_dirs: List[str] = Field(default_factory=lambda: [
        'node_modules', '.git', '.ai_workflow',
        'coverage', '.jest-cache', 'venv', '.husky',
    ])
    reference_extensions: List[str] = Field(default_factory=lambda: [
        'md', 'js', 'json', 'txt', 'html', 'css', 'sh', 'py', 'jsx', 'ts', 'tsx',
    ])
    report_limit: int = Field(default=10, ge=0)
    terminology_rules_file: Optional[str] = None

    model_config = SettingsConfigDict(env_prefix="DOCS_")


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    level: str = "INFO"
    file: Optional[str] = None
    rotation: str = "10 MB"
    retention: str = "7 days"

    model_config = SettingsConfigDict(env_prefix="LOG_")


class Config(BaseModel):
    """Main configuration class."""

    console: ConsoleConfig = Field(default_factory=ConsoleConfig)
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    geolocation: GeolocationConfig = Field(default_factory=GeolocationConfig)
    mock_server: MockServerConfig = Field(default_factory=MockServerConfig)
    docs: DocsConfig = Field(default_factory=DocsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, config_path: str) -> "Config":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            Config object
        """
        load_dotenv()

        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_file, 'r', encoding='utf-8') as f:
            config_dict = yaml.safe_load(f) or {}

        config_dict = cls._replace_env_vars(config_dict)
        return cls.from_dict(config_dict)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "Config":
        """Load configuration from dictionary."""
        return cls(
            console=ConsoleConfig(**(config_dict.get('console') or {})),
            browser=BrowserConfig(**(config_dict.get('browser') or {})),
            geolocation=GeolocationConfig(**(config_dict.get('geolocation') or {})),
            mock_server=MockServerConfig(**(config_dict.get('mock_server') or {})),
            docs=DocsConfig(**(config_dict.get('docs') or {})),
            logging=LoggingConfig(**(config_dict.get('logging') or {})),
        )

    @staticmethod
    def _replace_env_vars(config_dict: Dict[str, Any]) -> Dict[str, Any]:
        """Replace ${VAR} patterns with environment variables."""

        def replace_value(value):
            if isinstance(value, str):
                # Pattern: ${VAR_NAME} or ${VAR_NAME:default_value}
                pattern = r'\$\{([^:}]+)(?::([^}]*))?\}'

                def replacer(match):
                    env_value = os.getenv(match.group(1))
                    if env_value is not None:
                        return env_value
                    if match.group(2) is not None:
                        return match.group(2)
                    return match.group(0)

                return re.sub(pattern, replacer, value)
            elif isinstance(value, dict):
                return {k: replace_value(v) for k, v in value.items()}
            elif isinstance(value, list):
                return [replace_value(item) for item in value]
            return value

        return replace_value(config_dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'console': self.console.model_dump(),
            'browser': self.browser.model_dump(),
            'geolocation': self.geolocation.model_dump(),
            'mock_server': self.mock_server.model_dump(),
            'docs': self.docs.model_dump(),
            'logging': self.logging.model_dump(),
        }

    def save_to_yaml(self, output_path: str):
        """Save configuration to YAML file."""
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)

        with open(output_file, 'w', encoding='utf-8') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, indent=2, allow_unicode=True)


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from file or environment variables.

    Priority:
    1. Provided config_path
    2. Default locations (./config/harness.yaml, ./harness.yaml)
    3. Environment variables only

    Args:
        config_path: Optional path to YAML configuration file

    Returns:
        Config object

    Example:
        >>> config = load_config("config/harness.yaml")
        >>> config = load_config()  # Auto-detect
    """
    load_dotenv()

    if config_path:
        config_file = Path(config_path)
        if config_file.exists():
            return Config.from_yaml(str(config_file))
        raise FileNotFoundError(f"Config file not found: {config_path}")

    default_paths = [
        Path("config/harness.yaml"),
        Path("harness.yaml"),
    ]

    for path in default_paths:
        if path.exists():
            return Config.from_yaml(str(path))

    return Config()


def create_default_config(output_path: str = "config/harness.yaml") -> Path:
    """
    Create a default configuration file.

    Args:
        output_path: Where to save the config file

    Returns:
        Path of the written file
    """
    Config().save_to_yaml(output_path)
    return Path(output_path)
