# ============================================================================
# guia_harness/models/__init__.py
# ============================================================================
"""Data models."""
from guia_harness.models.console_entry import ConsoleLogEntry, LogSummary
from guia_harness.models.position import (
    Coordinates,
    MockPosition,
    MockSetupResult,
    MockVerification,
    ProviderProbeResult
)
from guia_harness.models.findings import (
    BrokenLink,
    ReferenceFinding,
    TerminologyIssue,
    CheckReport
)

__all__ = [
    'ConsoleLogEntry',
    'LogSummary',
    'Coordinates',
    'MockPosition',
    'MockSetupResult',
    'MockVerification',
    'ProviderProbeResult',
    'BrokenLink',
    'ReferenceFinding',
    'TerminologyIssue',
    'CheckReport',
]
