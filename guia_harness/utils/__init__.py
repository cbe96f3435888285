# ============================================================================
# guia_harness/utils/__init__.py
# ============================================================================
"""Utility modules."""
from guia_harness.utils.logger import setup_logger, get_logger, LoggerContext

__all__ = [
    'setup_logger',
    'get_logger',
    'LoggerContext',
]
