"""
File reference checker with false positive filtering.

Finds path-like references (``/src/app.js``, ``./docs/GUIDE.md``,
``../README.md``) in markdown prose and checks the files exist, skipping
patterns that only look like paths (regex literals, JSDoc, descriptions).
"""
import re
from pathlib import Path
from typing import Iterable, List, Optional, Pattern, Sequence

from guia_harness.config_manager import DocsConfig
from guia_harness.docs.scanner import find_markdown_files, iter_prose_lines, read_lines
from guia_harness.models.findings import CheckReport, ReferenceFinding
from guia_harness.utils.logger import get_logger

logger = get_logger("references")


def _compile(patterns: Sequence[str]) -> List[Pattern[str]]:
    return [re.compile(p) for p in patterns]


# Checked against the reference and the whole line
EXCLUDE_REGEX_PATTERNS = _compile([
    r'/.*?/g[im]*',              # JavaScript regex: /pattern/g, /pattern/gi
    r'\.replace\s*\(',
    r'\.match\s*\(',
    r'\.test\s*\(',
])

# Checked against the reference
EXCLUDE_COMMENT_PATTERNS = _compile([
    r'/\*\s*\.\.\.\s*\*/',       # /* ... */
    r'//\s*\.\.\.',              # // ...
    r'/\*\*.*?\*/',              # JSDoc comments
])

# Checked against the line
EXCLUDE_DESCRIPTION_PATTERNS = _compile([
    r'/[a-z]+\s+for\s',          # "/src for library"
    r'/[a-z]+\s+in\s',           # "/docs in repository"
    r'/[a-z]+\s+contains',       # "/tests contains"
])

# Checked against the reference
EXCLUDE_CODE_PATTERNS = _compile([
    r'/@(param|returns?|throws?|type)',
    r'/throw\s+new',
    r'/(async\s+)?function',
    r'/(const|let|var)\s',
])

EXCLUDE_URL_PATTERNS = _compile([
    r'^https?://',
    r'^ftp://',
    r'^file://',
])

EXCLUDE_SPECIAL_PATTERNS = _compile([
    r'^#',
    r'^mailto:',
    r'^tel:',
])


def build_reference_pattern(extensions: Iterable[str]) -> Pattern[str]:
    """Pattern for complete paths, not embedded in code spans or longer paths."""
    ext_group = '|'.join(re.escape(ext) for ext in extensions)
    return re.compile(
        r'(?<![`\w/.])(\./|\.\./|/)([a-zA-Z0-9_][a-zA-Z0-9_/-]*)\.(' + ext_group + r')(?![`\w/])'
    )


def should_exclude(line: str, reference: str) -> bool:
    """Check if a reference is a known false positive."""
    for pattern in EXCLUDE_REGEX_PATTERNS:
        if pattern.search(reference) or pattern.search(line):
            return True

    for pattern in EXCLUDE_DESCRIPTION_PATTERNS:
        if pattern.search(line):
            return True

    reference_only = (
        EXCLUDE_COMMENT_PATTERNS
        + EXCLUDE_CODE_PATTERNS
        + EXCLUDE_URL_PATTERNS
        + EXCLUDE_SPECIAL_PATTERNS
    )
    return any(pattern.search(reference) for pattern in reference_only)


class ReferenceChecker:
    """Check file references across a documentation tree."""

    def __init__(self, config: Optional[DocsConfig] = None):
        self.config = config or DocsConfig()
        self.root = Path(self.config.root)
        self.ref_pattern = build_reference_pattern(self.config.reference_extensions)

    def resolve(self, file_path: Path, reference: str) -> Path:
        if reference.startswith('/'):
            target = self.root / reference.lstrip('/')
        else:
            target = file_path.parent / reference
        return target.resolve()

    def check_file(self, file_path: Path, report: CheckReport) -> None:
        """Scan one file, accumulating counts and findings into ``report``."""
        for line_num, line in iter_prose_lines(read_lines(file_path)):
            for match in self.ref_pattern.finditer(line):
                ref = match.group(1) + match.group(2) + '.' + match.group(3)
                report.total += 1

                if should_exclude(line, ref):
                    report.excluded += 1
                    report.excluded_findings.append(ReferenceFinding(
                        source=str(file_path), line=line_num, reference=ref, excluded=True,
                    ))
                    continue

                target = self.resolve(file_path, ref)
                if target.exists():
                    report.valid += 1
                else:
                    report.findings.append(ReferenceFinding(
                        source=str(file_path), line=line_num, reference=ref, target=str(target),
                    ))

    def check_files(self, md_files: Iterable[Path]) -> CheckReport:
        report = CheckReport(checker="references")
        for file_path in md_files:
            report.files_scanned += 1
            self.check_file(Path(file_path), report)

        for finding in report.findings:
            logger.warning(f"Broken reference {finding.format()}")
        if report.excluded:
            logger.info(f"{report.excluded} pattern(s) excluded as false positives")
        return report

    def run(self) -> CheckReport:
        md_files = find_markdown_files(self.root, self.config.exclude_dirs)
        logger.info(f"Found {len(md_files)} markdown files to scan")
        return self.check_files(md_files)
