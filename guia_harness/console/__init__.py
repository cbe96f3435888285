# ============================================================================
# guia_harness/console/__init__.py
# ============================================================================
"""Browser console log capture."""
from guia_harness.console.capture import ConsoleCapture, normalize_level
from guia_harness.console.scripts import LISTENER_VERSION

__all__ = [
    'ConsoleCapture',
    'normalize_level',
    'LISTENER_VERSION',
]
