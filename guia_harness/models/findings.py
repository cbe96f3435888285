"""
Data models for documentation check findings and reports.
"""
from typing import List, Union
from pydantic import BaseModel, Field


class BrokenLink(BaseModel):
    """Internal markdown link whose target file does not exist."""

    source: str
    line: int
    link: str
    target: str

    def format(self) -> str:
        return f"{self.source}:{self.line}\n    Link: {self.link}\n    Target: {self.target}"


class ReferenceFinding(BaseModel):
    """File reference found in prose, either broken or excluded as a false positive."""

    source: str
    line: int
    reference: str
    target: str = ""
    excluded: bool = False

    def format(self) -> str:
        if self.excluded:
            return f"{self.source}:{self.line}: {self.reference} (excluded pattern)"
        return f"{self.source}:{self.line}: {self.reference} → {self.target} (NOT FOUND)"


class TerminologyIssue(BaseModel):
    """Line that violates a terminology rule."""

    source: str
    line: int
    rule: str
    message: str
    excerpt: str = Field(default="", max_length=80)

    def format(self) -> str:
        return f"{self.source}:{self.line}: {self.message}\n    Found: {self.excerpt}"


Finding = Union[BrokenLink, ReferenceFinding, TerminologyIssue]


class CheckReport(BaseModel):
    """Aggregate result of one documentation check run."""

    checker: str
    files_scanned: int = 0
    total: int = 0
    valid: int = 0
    excluded: int = 0
    findings: List[Finding] = Field(default_factory=list)
    excluded_findings: List[ReferenceFinding] = Field(default_factory=list)

    @property
    def broken(self) -> int:
        return len(self.findings)

    @property
    def passed(self) -> bool:
        return not self.findings

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1

    def get_success_rate(self) -> float:
        """Percentage of considered items that are valid."""
        if self.total == 0:
            return 0.0
        return (self.total - self.broken) / self.total * 100
