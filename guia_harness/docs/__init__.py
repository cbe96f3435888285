# ============================================================================
# guia_harness/docs/__init__.py
# ============================================================================
"""Documentation quality checks."""
from guia_harness.docs.links import LinkChecker
from guia_harness.docs.references import ReferenceChecker, should_exclude
from guia_harness.docs.terminology import (
    TerminologyChecker,
    TerminologyRule,
    DEFAULT_RULES,
    load_rules
)
from guia_harness.docs.scanner import find_markdown_files

__all__ = [
    'LinkChecker',
    'ReferenceChecker',
    'should_exclude',
    'TerminologyChecker',
    'TerminologyRule',
    'DEFAULT_RULES',
    'load_rules',
    'find_markdown_files',
]
