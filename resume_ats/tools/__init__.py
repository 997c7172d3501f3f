"""Resume ATS Tools - Connect the domain logic to files in a workspace."""

from .base import BaseTool, ToolResult, WorkspaceTool
from .ats_scorer import ATSScorerTool
from .job_description import JobDescriptionTool
from .resume_import import ResumeImportTool

__all__ = [
    "BaseTool",
    "ToolResult",
    "WorkspaceTool",
    "ATSScorerTool",
    "JobDescriptionTool",
    "ResumeImportTool",
]
