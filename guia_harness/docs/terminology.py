"""
Terminology consistency checker.

Validates documentation against the project's terminology guide: accents in
Portuguese place terms and canonical capitalization of tool names.
"""
import re
from pathlib import Path
from typing import Iterable, List, Optional, Pattern

import yaml
from pydantic import BaseModel, Field, field_validator

from guia_harness.config_manager import DocsConfig
from guia_harness.docs.scanner import find_markdown_files, read_lines
from guia_harness.models.findings import CheckReport, TerminologyIssue
from guia_harness.utils.logger import get_logger

logger = get_logger("terminology")

EXCERPT_LENGTH = 80


class TerminologyRule(BaseModel):
    """A pattern that should not appear in prose, with an optional exception."""

    name: str
    pattern: str
    message: str
    exclude_pattern: Optional[str] = None

    @field_validator('pattern', 'exclude_pattern')
    @classmethod
    def valid_regex(cls, v):
        if v is not None:
            try:
                re.compile(v)
            except re.error as e:
                raise ValueError(f"Invalid regex {v!r}: {e}") from e
        return v

    def compiled(self) -> Pattern[str]:
        return re.compile(self.pattern)

    def compiled_exclude(self) -> Optional[Pattern[str]]:
        return re.compile(self.exclude_pattern) if self.exclude_pattern else None


class TerminologyRuleSet(BaseModel):
    rules: List[TerminologyRule] = Field(default_factory=list)


DEFAULT_RULES = [
    TerminologyRule(
        name="Missing accent in 'município'",
        pattern=r'\bmunicipios?\b(?!s)',
        message="Use 'município' (with accent)",
        exclude_pattern=r'var\s+municipio|const\s+municipio|\.municipio',
    ),
    TerminologyRule(
        name="Incorrect guia.js capitalization",
        pattern=r'\bGuia\.js|GUIA\.js',
        message="Use lowercase 'guia.js'",
        exclude_pattern=r'^Guia\.js is',
    ),
    TerminologyRule(
        name="Incorrect ibira.js capitalization",
        pattern=r'\bIbira\.js|IBIRA\.js',
        message="Use lowercase 'ibira.js'",
        exclude_pattern=r'^Ibira\.js is',
    ),
    TerminologyRule(
        name="'end-to-end tests' instead of 'E2E tests'",
        pattern=r'\bend-to-end tests\b',
        message="Use 'E2E tests' after first definition",
    ),
    TerminologyRule(
        name="Incorrect npm capitalization",
        pattern=r'\bNPM\b|\bNpm\b',
        message="Use lowercase 'npm'",
    ),
    TerminologyRule(
        name="Incorrect Node.js variations",
        pattern=r'\bNodeJS\b|\bnode\.js\b|\bNode\.JS\b',
        message="Use 'Node.js' (capital N, lowercase js)",
    ),
    TerminologyRule(
        name="Incorrect jsdom capitalization",
        pattern=r'\bJSDom\b|\bJsdom\b',
        message="Use lowercase 'jsdom'",
    ),
]


def load_rules(rules_file: str) -> List[TerminologyRule]:
    """
    Load extra rules from a YAML file with a top-level ``rules`` list.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    path = Path(rules_file)
    if not path.exists():
        raise FileNotFoundError(f"Terminology rules file not found: {rules_file}")

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    return TerminologyRuleSet(**data).rules


def is_skipped_line(line: str) -> bool:
    """Fence lines are not checked; indented lines such as nested list items are."""
    return line.strip().startswith('```')


class TerminologyChecker:
    """Check markdown files against terminology rules."""

    def __init__(
        self,
        config: Optional[DocsConfig] = None,
        rules: Optional[List[TerminologyRule]] = None,
    ):
        self.config = config or DocsConfig()
        self.rules = list(DEFAULT_RULES if rules is None else rules)
        if self.config.terminology_rules_file:
            self.rules.extend(load_rules(self.config.terminology_rules_file))

    def check_file(self, file_path: Path) -> List[TerminologyIssue]:
        """Return one issue per rule per offending line."""
        lines = read_lines(file_path)
        issues: List[TerminologyIssue] = []

        for rule in self.rules:
            pattern = rule.compiled()
            exclude = rule.compiled_exclude()

            for line_num, line in enumerate(lines, 1):
                if is_skipped_line(line):
                    continue
                if not pattern.search(line):
                    continue
                if exclude and exclude.search(line):
                    continue

                issues.append(TerminologyIssue(
                    source=str(file_path),
                    line=line_num,
                    rule=rule.name,
                    message=rule.message,
                    excerpt=line.strip()[:EXCERPT_LENGTH],
                ))

        return issues

    def check_files(self, paths: Iterable[Path]) -> CheckReport:
        """Check the given files; paths that are not files are skipped."""
        report = CheckReport(checker="terminology")

        for path in paths:
            path = Path(path)
            if not path.is_file():
                logger.debug(f"Skipping {path}: not a file")
                continue
            report.files_scanned += 1
            issues = self.check_file(path)
            report.findings.extend(issues)
            for issue in issues:
                logger.warning(f"{issue.source} line {issue.line}: {issue.message}")

        return report

    def discover(self) -> List[Path]:
        """Markdown files below the configured docs directory."""
        docs_dir = Path(self.config.root) / self.config.docs_dir
        return find_markdown_files(docs_dir, self.config.exclude_dirs)

    def run(self) -> CheckReport:
        return self.check_files(self.discover())
