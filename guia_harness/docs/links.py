"""
Documentation link checker.

Verifies that internal markdown links (``[text](path.md#anchor)``) point at
existing files.
"""
import os
import re
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from guia_harness.config_manager import DocsConfig
from guia_harness.docs.scanner import find_markdown_files, read_lines
from guia_harness.models.findings import BrokenLink, CheckReport
from guia_harness.utils.logger import get_logger

logger = get_logger("links")

LINK_PATTERN = re.compile(r'\[([^\]]+)\]\(([^\)]+\.md[^\)]*)\)')
EXTERNAL_PREFIXES = ('http://', 'https://', '#')


class LinkChecker:
    """Check internal markdown links across a documentation tree."""

    def __init__(self, config: Optional[DocsConfig] = None):
        self.config = config or DocsConfig()
        self.root = Path(self.config.root)

    def check_file(self, md_file: Path) -> Tuple[int, List[BrokenLink]]:
        """
        Check the links of one file.

        Returns:
            ``(links_considered, broken_links)``
        """
        total = 0
        broken: List[BrokenLink] = []

        for line_num, line in enumerate(read_lines(md_file), 1):
            for _text, link in LINK_PATTERN.findall(line):
                if link.startswith(EXTERNAL_PREFIXES):
                    continue

                total += 1
                link_path = link.split('#')[0]
                target = os.path.normpath(os.path.join(os.path.dirname(md_file), link_path))

                if not os.path.exists(target):
                    broken.append(BrokenLink(
                        source=str(md_file),
                        line=line_num,
                        link=link_path,
                        target=target,
                    ))

        return total, broken

    def check_files(self, md_files: Iterable[Path]) -> CheckReport:
        report = CheckReport(checker="links")

        for md_file in md_files:
            report.files_scanned += 1
            total, broken = self.check_file(md_file)
            report.total += total
            report.findings.extend(broken)

        report.valid = report.total - report.broken
        for item in report.findings:
            logger.warning(f"Broken link {item.source}:{item.line} -> {item.link}")
        return report

    def run(self) -> CheckReport:
        """Scan every markdown file below the configured root."""
        md_files = find_markdown_files(self.root, self.config.exclude_dirs)
        logger.info(f"Scanning {len(md_files)} markdown files for links")
        return self.check_files(md_files)
