"""Job description tool - split a posting into sections and requirements."""

from __future__ import annotations

from ..domain.jd_parser import format_job_description_report, parse_job_description
from .base import ToolResult, WorkspaceTool


class JobDescriptionTool(WorkspaceTool):
    """Parse a job posting into labeled sections and structured requirements."""

    name = "job_description_parse"
    description = """Parse a job description into required, preferred, responsibilities and
about sections, and extract years of experience, degree level and certifications.
Provide either the text directly or a path to a file holding it."""

    async def execute(self, text: str = "", path: str = "") -> ToolResult:
        try:
            if not text.strip() and not path.strip():
                return ToolResult(success=False, output="", error="Provide either text or path")

            content = text if text.strip() else self._read_text(path, label="Job description")
            parsed = parse_job_description(content)
            return ToolResult(
                success=True,
                output=format_job_description_report(parsed),
                data=parsed.to_dict(),
            )
        except Exception as e:
            return ToolResult(success=False, output="", error=str(e))
