"""Resume ATS - rule-based resume import, review and ATS scoring."""

__version__ = "0.1.0"

from .domain import (
    ImportReviewState,
    ParseResult,
    ResumeData,
    compute_ats_score,
    parse_job_description,
    parse_resume_text,
    parse_resume_text_with_metadata,
    resolve_synonyms,
)

__all__ = [
    "ImportReviewState",
    "ParseResult",
    "ResumeData",
    "compute_ats_score",
    "parse_job_description",
    "parse_resume_text",
    "parse_resume_text_with_metadata",
    "resolve_synonyms",
]
