"""ATS (Applicant Tracking System) scoring tool for resumes."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from ..domain.ats_scorer import compute_ats_score, format_ats_report
from ..domain.models import ResumeData, merge_partial_into
from ..domain.resume_parser import parse_resume_text
from .base import ToolResult, WorkspaceTool

logger = logging.getLogger(__name__)


class ATSScorerTool(WorkspaceTool):
    """Score a resume for ATS (Applicant Tracking System) compatibility."""

    name = "ats_score"
    description = """Score a resume for ATS compatibility. Returns a score (0-100) with a
breakdown by keyword match, formatting, content quality, completeness and readability.
Accepts a structured resume (.json) or plain text, and optionally a job description
or an industry for keyword matching."""

    def __init__(self, workspace_dir: Union[str, Path] = ".", default_industry: Optional[str] = None):
        super().__init__(workspace_dir)
        self.default_industry = default_industry

    async def execute(
        self,
        path: str,
        job_description: str = "",
        job_description_path: str = "",
        industry: str = "",
    ) -> ToolResult:
        try:
            resume = self._load_resume(path)

            jd = job_description
            if not jd.strip() and job_description_path.strip():
                jd = self._read_text(job_description_path, label="Job description")

            result = compute_ats_score(resume, jd, industry or self.default_industry)
            logger.info("Scored %s: %d/100", path, result.score)

            return ToolResult(
                success=True,
                output=format_ats_report(result),
                data={"path": str(self._resolve_path(path)), **result.to_dict()},
            )
        except Exception as e:
            return ToolResult(success=False, output="", error=str(e))

    def _load_resume(self, path: str) -> ResumeData:
        content = self._read_text(path)
        if self._resolve_path(path).suffix.lower() == ".json":
            return ResumeData.model_validate_json(content)
        return merge_partial_into(ResumeData(), parse_resume_text(content))
