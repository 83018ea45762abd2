"""
Caesar Toolkit Data Models
===========================

Pydantic v2 models shared by every Caesar toolkit command. A command run
produces one :class:`RunResult`: the transformed text, timing, findings
and structured metadata, serialisable to JSON for reports.

References:
    - SARIF v2.1.0 Specification (OASIS, 2020).
    - Pydantic v2 documentation. https://docs.pydantic.dev/latest/
"""

from __future__ import annotations

import datetime as _dt
import json as _json
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _utcnow() -> _dt.datetime:
    return _dt.datetime.now(_dt.timezone.utc)


# ========================== Enumerations ===================================


class Severity(str, Enum):
    """Finding severity level.

    Attributes:
        CRITICAL: Result cannot be trusted at all.
        HIGH:     Operation failed.
        MEDIUM:   Result is doubtful.
        LOW:      Result may be wrong; worth a second look.
        INFO:     Informational observation.
    """

    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"
    INFO = "INFO"


# ========================== Core Models ====================================


class Finding(BaseModel):
    """A single observation attached to a run result.

    Attributes:
        severity:       Qualitative severity rating.
        title:          Short, descriptive finding title.
        description:    Detailed explanation of the finding.
        evidence:       Raw data supporting the finding.
        recommendation: Suggested next step.
    """

    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        extra="ignore",
    )

    severity: Severity = Field(..., description="Severity level of this finding")
    title: str = Field(..., min_length=1, max_length=256)
    description: str = Field(..., min_length=1)
    evidence: str = Field(default="", description="Supporting evidence or raw data")
    recommendation: str = Field(default="", description="Suggested next step")

    @field_validator("evidence", mode="before")
    @classmethod
    def _coerce_evidence(cls, v: Any) -> str:
        """Auto-convert non-string evidence (dict, list) to JSON string."""
        if isinstance(v, str):
            return v
        if isinstance(v, (dict, list)):
            return _json.dumps(v, ensure_ascii=False, default=str)
        return str(v)


class RunResult(BaseModel):
    """Aggregated result of a single command run.

    Attributes:
        tool_name:  Name of the toolkit tool.
        operation:  Operation performed (encipher, crack, ...).
        target:     Where the input came from (file path or ``<text>``).
        output:     Resulting text handed back to the caller.
        start_time: UTC timestamp when the run started.
        end_time:   UTC timestamp when the run ended.
        findings:   Observations about the result.
        summary:    Human-readable summary text.
        error:      Set when the operation could not produce a result.
        metadata:   Operation-specific structured data.
    """

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    tool_name: str = Field(..., min_length=1)
    operation: str = Field(..., min_length=1)
    target: str = Field(default="<text>")
    output: str = Field(default="")
    start_time: _dt.datetime = Field(default_factory=_utcnow)
    end_time: Optional[_dt.datetime] = None
    findings: list[Finding] = Field(default_factory=list)
    summary: str = ""
    error: Optional[str] = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def duration_seconds(self) -> float | None:
        """Elapsed run time in seconds, or ``None`` if *end_time* is unset."""
        if self.end_time is None:
            return None
        return (self.end_time - self.start_time).total_seconds()

    @property
    def finding_count(self) -> int:
        return len(self.findings)

    @property
    def highest_severity(self) -> Severity | None:
        """The most severe finding, or ``None`` when the list is empty."""
        if not self.findings:
            return None
        order = list(Severity)
        return min((f.severity for f in self.findings), key=order.index)

    @property
    def ok(self) -> bool:
        return self.error is None

    def add_finding(self, finding: Finding) -> None:
        """Append a finding to the run result."""
        self.findings.append(finding)

    def finalize(self, summary: str | None = None) -> RunResult:
        """Mark the run as complete by setting *end_time* and *summary*.

        Returns:
            ``self`` for fluent chaining.
        """
        self.end_time = _utcnow()
        if summary is not None:
            self.summary = summary
        elif not self.summary:
            self.summary = (
                f"{self.operation} complete. Findings: {len(self.findings)}"
            )
        return self
