"""Resume import tool - parse extracted resume text into structured sections."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Tuple, Union

from ..domain.history import DEFAULT_HISTORY_LIMIT
from ..domain.import_review import ImportReviewState
from ..domain.models import Section
from ..domain.resume_parser import format_parse_report, parse_resume_text_with_metadata
from .base import ToolResult, WorkspaceTool

logger = logging.getLogger(__name__)


class ResumeImportTool(WorkspaceTool):
    """Parse a plain-text resume into partial structured data plus unmatched text."""

    name = "resume_import"
    description = """Parse a plain-text resume (text already extracted from PDF/DOCX) into
structured sections: contact, summary, experience, education, skills and more.
Text that could not be assigned to a section is returned as unmatched chunks,
and every found section is rated complete, incomplete or empty for review."""

    def __init__(self, workspace_dir: Union[str, Path] = ".", history_limit: int = DEFAULT_HISTORY_LIMIT):
        super().__init__(workspace_dir)
        self.history_limit = history_limit
        # Cache: path -> (mtime, parsed_result)
        self._cache: Dict[str, Tuple[float, ToolResult]] = {}

    async def execute(self, path: str) -> ToolResult:
        try:
            file_path = self._resolve_path(path)
            content = self._read_text(path)

            current_mtime = file_path.stat().st_mtime
            cache_key = str(file_path)
            if cache_key in self._cache:
                cached_mtime, cached_result = self._cache[cache_key]
                if cached_mtime == current_mtime:
                    return cached_result

            result = parse_resume_text_with_metadata(content)
            logger.info(
                "Imported %s: %d sections, %d unmatched chunks",
                file_path.name,
                len(result.data.present_sections()),
                len(result.unmatched_chunks),
            )

            review = ImportReviewState(result.data, result.unmatched_chunks, history_limit=self.history_limit)
            confidence = {
                name: review.get_section_confidence(name).value for name in result.data.present_sections()
            }

            warnings = {
                str(index): [warning.to_dict() for warning in found]
                for index, found in review.experience_warnings().items()
            }

            output = format_parse_report(result)
            flagged = [name for name, level in confidence.items() if level == "incomplete"]
            if flagged:
                labels = ", ".join(Section(name).value.replace("_", " ") for name in flagged)
                output += f"\n\n### Needs Review\n{labels}"

            tool_result = ToolResult(
                success=True,
                output=output,
                data={
                    "path": str(file_path),
                    **result.to_dict(),
                    "confidence": confidence,
                    "warnings": warnings,
                },
            )
            self._cache[cache_key] = (current_mtime, tool_result)
            return tool_result

        except Exception as e:
            return ToolResult(success=False, output="", error=str(e))
