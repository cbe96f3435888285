"""
Data models for captured browser console records.
"""
from typing import Dict, Optional
from pydantic import BaseModel, Field, field_validator

from guia_harness.config_manager import LOG_LEVELS


class ConsoleLogEntry(BaseModel):
    """A normalized console log record."""

    timestamp: int = Field(default=0, description="Epoch milliseconds reported by the page")
    level: str = Field(..., description="Normalized level (ERROR, WARNING, INFO, DEBUG)")
    message: str = Field(default="", description="Message text")
    source: str = Field(default="unknown", description="Script URL that produced the record")
    line_number: Optional[int] = None
    column_number: Optional[int] = None

    @field_validator('level')
    @classmethod
    def level_normalized(cls, v):
        if v not in LOG_LEVELS:
            raise ValueError(f"Unnormalized log level: {v}")
        return v

    @field_validator('message', mode='before')
    @classmethod
    def message_as_text(cls, v):
        if v is None:
            return ""
        return v if isinstance(v, str) else str(v)

    def format(self) -> str:
        """Render the entry the way assertion messages list it."""
        return f"[{self.level}] {self.message} ({self.source})"

    model_config = {
        "json_schema_extra": {
            "example": {
                "timestamp": 1767225600000,
                "level": "ERROR",
                "message": "Failed to fetch address",
                "source": "http://localhost:8080/src/guia.js",
                "line_number": 120,
                "column_number": 15
            }
        }
    }


class LogSummary(BaseModel):
    """Count of console records per level."""

    ERROR: int = 0
    WARNING: int = 0
    INFO: int = 0
    DEBUG: int = 0

    @property
    def total(self) -> int:
        return self.ERROR + self.WARNING + self.INFO + self.DEBUG

    def add(self, level: str) -> None:
        if level in LOG_LEVELS:
            setattr(self, level, getattr(self, level) + 1)

    def to_dict(self) -> Dict[str, int]:
        return self.model_dump()
