"""Resume ATS Domain - Pure logic for resume ingestion, review and scoring.

This package contains pure functions with no file system dependencies.
All I/O is handled by the tools layer; this package operates on strings and models.
"""

from .ats_scorer import (
    ACTION_VERBS,
    AtsScoreBreakdown,
    AtsScoreResult,
    CategoryScore,
    KeywordAnalysis,
    compute_ats_score,
    extract_keywords,
    format_ats_report,
    score_to_grade,
)
from .entry_warnings import EntryWarning, WarningAction, compute_experience_warnings
from .history import UndoHistory
from .import_review import Confidence, ImportReviewState, ReviewSnapshot
from .industry_keywords import INDUSTRY_KEYWORDS, INDUSTRY_NAMES, get_industry_keywords
from .jd_parser import (
    ExtractedRequirements,
    JobDescriptionSections,
    ParsedJobDescription,
    extract_certifications,
    extract_degree,
    extract_years_of_experience,
    format_job_description_report,
    parse_job_description,
)
from .models import PartialResumeData, ResumeData, Section, UnmatchedChunk, merge_partial_into
from .resume_parser import (
    ParseResult,
    detect_section_heading,
    extract_section_content,
    format_parse_report,
    parse_resume_text,
    parse_resume_text_with_metadata,
)
from .synonyms import classify_skill, get_canonical_form, get_known_phrases, resolve_synonyms

__all__ = [
    # Models
    "ResumeData",
    "PartialResumeData",
    "Section",
    "UnmatchedChunk",
    "merge_partial_into",
    # Synonyms
    "resolve_synonyms",
    "get_canonical_form",
    "get_known_phrases",
    "classify_skill",
    # Job description
    "parse_job_description",
    "extract_years_of_experience",
    "extract_degree",
    "extract_certifications",
    "JobDescriptionSections",
    "ExtractedRequirements",
    "ParsedJobDescription",
    "format_job_description_report",
    # Resume parser
    "parse_resume_text",
    "parse_resume_text_with_metadata",
    "extract_section_content",
    "detect_section_heading",
    "ParseResult",
    "format_parse_report",
    # ATS scorer
    "compute_ats_score",
    "extract_keywords",
    "score_to_grade",
    "format_ats_report",
    "ACTION_VERBS",
    "AtsScoreResult",
    "AtsScoreBreakdown",
    "CategoryScore",
    "KeywordAnalysis",
    "INDUSTRY_KEYWORDS",
    "INDUSTRY_NAMES",
    "get_industry_keywords",
    # Review
    "ImportReviewState",
    "ReviewSnapshot",
    "Confidence",
    "EntryWarning",
    "WarningAction",
    "compute_experience_warnings",
    "UndoHistory",
]
