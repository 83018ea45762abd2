"""
Caesar Report Generator
========================

Writes Caesar run results to disk: the bare result text for shell
pipelines, or a structured JSON report for scripts.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from shared.models import RunResult
from caesar import __version__


class CaesarReportGenerator:
    """Generates text and JSON output from Caesar run results.

    Usage::

        generator = CaesarReportGenerator()
        generator.generate_text(result, Path("plain.txt"))
        generator.generate_json(result, Path("report.json"))
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def build_json(self, result: RunResult) -> dict[str, Any]:
        """Assemble the JSON report structure for *result*."""
        return {
            "report_metadata": {
                "generated_at": datetime.now(timezone.utc).isoformat(),
                "tool": result.tool_name,
                "operation": result.operation,
                "target": result.target,
                "version": __version__,
            },
            "summary": {
                "description": result.summary,
                "total_findings": result.finding_count,
                "duration_seconds": result.duration_seconds,
                "error": result.error,
            },
            "findings": [f.model_dump(mode="json") for f in result.findings],
            "output": result.output,
            "metadata": result.metadata,
        }

    def render_json(self, result: RunResult) -> str:
        """Serialise the JSON report for *result* to a string."""
        return json.dumps(
            self.build_json(result), indent=2, ensure_ascii=False, default=str
        )

    def generate_json(self, result: RunResult, output_path: Path) -> Path:
        """Write the JSON report for *result* to *output_path*.

        Returns:
            Path to the generated JSON file.
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render_json(result), encoding=self.encoding)
        return output_path

    def generate_text(self, result: RunResult, output_path: Path) -> Path:
        """Write the bare result text of *result* to *output_path*."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(result.output, encoding=self.encoding)
        return output_path
