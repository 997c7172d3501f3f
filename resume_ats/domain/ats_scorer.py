"""Pure domain logic for ATS (Applicant Tracking System) resume scoring.

Scores structured :class:`ResumeData` across five weighted categories:

- keyword match (40) against a job description or an industry keyword list
- formatting (20): reachable contact details
- content quality (20): quantified bullets and action verbs
- section completeness (10)
- readability (10)

All functions are deterministic and operate on in-memory data -- no file I/O.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Pattern, Set, Tuple

from .industry_keywords import INDUSTRY_NAMES, get_industry_keywords
from .jd_parser import parse_job_description
from .models import ResumeData
from .synonyms import classify_skill, get_canonical_form, get_known_phrases

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

CATEGORY_MAX: Dict[str, int] = {
    "keyword_match": 40,
    "formatting": 20,
    "content_quality": 20,
    "section_completeness": 10,
    "readability": 10,
}

CATEGORY_LABELS: Dict[str, str] = {
    "keyword_match": "Keyword Match",
    "formatting": "Formatting",
    "content_quality": "Content Quality",
    "section_completeness": "Completeness",
    "readability": "Readability",
}

NO_JOB_DESCRIPTION_SCORE = 20

FORMATTING_POINTS: Dict[str, int] = {"email": 7, "phone": 7, "location": 6}

ACTION_VERBS = frozenset(
    {
        "accelerated", "achieved", "administered", "analyzed", "architected", "automated",
        "boosted", "built", "championed", "collaborated", "conducted", "consolidated",
        "coordinated", "created", "cut", "debugged", "decreased", "defined", "delivered",
        "deployed", "designed", "developed", "directed", "drove", "eliminated", "enabled",
        "engineered", "enhanced", "established", "executed", "expanded", "facilitated",
        "founded", "generated", "grew", "guided", "headed", "identified", "implemented",
        "improved", "increased", "initiated", "integrated", "introduced", "launched", "led",
        "maintained", "managed", "mentored", "migrated", "modernized", "negotiated",
        "optimized", "orchestrated", "organized", "overhauled", "oversaw", "partnered",
        "pioneered", "planned", "produced", "programmed", "published", "raised", "redesigned",
        "reduced", "refactored", "resolved", "restructured", "revamped", "saved", "scaled",
        "secured", "shipped", "simplified", "spearheaded", "standardized", "streamlined",
        "strengthened", "supervised", "supported", "taught", "tested", "trained",
        "transformed", "tripled", "doubled", "upgraded", "won", "wrote",
    }
)

QUANTIFIED_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"\d+(?:\.\d+)?\s?%"),
    re.compile(r"\b\d+(?:\.\d+)?x\b", re.IGNORECASE),
    re.compile(r"\b\d[\d,]*\+"),
    re.compile(r"[$€£]\s?\d"),
    re.compile(r"\b\d+(?:\.\d+)?\s?(?:k|m|mm|b|bn|million|billion|thousand)\b", re.IGNORECASE),
    re.compile(
        r"\b\d[\d,]*\s+(?:[a-z-]+\s+)?(?:engineers?|developers?|people|users?|customers?|clients?"
        r"|members?|projects?|teams?|employees?|students?|reports?|stakeholders?|countries|markets?"
        r"|products?|applications?|apps?|services?|years?|months?|weeks?|days?|hours?|requests?"
        r"|transactions?|sites?|stores?|locations?|patients?|accounts?|partners?|vendors?|hires?"
        r"|campaigns?|leads?|features?|releases?|servers?|tickets?|issues?|bugs?|courses?)\b",
        re.IGNORECASE,
    ),
    re.compile(r"\bteam of \d+", re.IGNORECASE),
)

STOP_WORDS = frozenset(
    {
        "a", "an", "the", "and", "or", "but", "in", "on", "at", "to",
        "for", "of", "with", "by", "from", "is", "are", "was", "were",
        "be", "been", "being", "have", "has", "had", "do", "does", "did",
        "will", "would", "could", "should", "may", "might", "shall",
        "can", "need", "must", "it", "its", "this", "that", "these",
        "those", "i", "we", "you", "he", "she", "they", "me", "us",
        "him", "her", "them", "my", "our", "your", "his", "their",
        "what", "which", "who", "whom", "where", "when", "how", "why",
        "not", "no", "nor", "so", "if", "then", "than", "too", "very",
        "as", "about", "into", "through", "during", "before", "after",
        "above", "below", "between", "up", "down", "out", "off", "over",
        "under", "each", "every", "all", "both", "few", "more", "most",
        "other", "some", "such", "only", "own", "same", "also", "just",
        "years", "year", "experience", "etc", "including", "within", "across",
    }
)

_KEYWORD_CLEAN = re.compile(r"[^a-z0-9+#./\s-]")
_PURE_NUMBER = re.compile(r"^[\d.,+\-/]+$")

_BONUS_SECTIONS = ("certifications", "projects", "volunteer", "awards", "languages", "publications")


def _phrase_patterns() -> List[Tuple[str, Pattern[str]]]:
    phrases = sorted(get_known_phrases(), key=len, reverse=True)
    return [(phrase, _boundary_pattern(phrase)) for phrase in phrases]


def _boundary_pattern(term: str) -> Pattern[str]:
    return re.compile(r"(?<![a-z0-9])" + re.escape(term) + r"(?![a-z0-9+#])")


_PHRASE_PATTERNS: List[Tuple[str, Pattern[str]]] = _phrase_patterns()


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------


@dataclass
class CategoryScore:
    score: int
    max_score: int
    suggestions: List[str] = field(default_factory=list)


@dataclass
class AtsScoreBreakdown:
    keyword_match: CategoryScore
    formatting: CategoryScore
    content_quality: CategoryScore
    section_completeness: CategoryScore
    readability: CategoryScore

    def categories(self) -> List[Tuple[str, CategoryScore]]:
        return [(name, getattr(self, name)) for name in CATEGORY_MAX]


@dataclass
class KeywordAnalysis:
    matched: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)


@dataclass
class AtsScoreResult:
    """Structured result from ATS scoring."""

    score: int
    breakdown: AtsScoreBreakdown
    keywords: KeywordAnalysis = field(default_factory=KeywordAnalysis)

    @property
    def suggestions(self) -> List[str]:
        return [s for _, category in self.breakdown.categories() for s in category.suggestions]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def compute_ats_score(
    data: ResumeData,
    job_description: Optional[str] = None,
    industry: Optional[str] = None,
) -> AtsScoreResult:
    """Score *data* for ATS compatibility.

    With a non-blank *job_description* the keyword category compares against
    the posting; otherwise a known *industry* id selects a keyword list, and
    with neither the category gets a neutral baseline.
    """
    keyword_match, keywords = _score_keyword_match(data, job_description or "", industry)
    breakdown = AtsScoreBreakdown(
        keyword_match=keyword_match,
        formatting=_score_formatting(data),
        content_quality=_score_content_quality(data),
        section_completeness=_score_section_completeness(data),
        readability=_score_readability(data),
    )
    total = sum(category.score for _, category in breakdown.categories())
    return AtsScoreResult(score=max(0, min(total, 100)), breakdown=breakdown, keywords=keywords)


def extract_keywords(text: str) -> List[str]:
    """Lowercased keywords in order of appearance, with known phrases kept whole.

    >>> extract_keywords("Experience with machine learning and Python")
    ['machine learning', 'python']
    """
    if not text:
        return []
    cleaned = _KEYWORD_CLEAN.sub(" ", text.lower())

    found: List[Tuple[int, str]] = []
    for phrase, pattern in _PHRASE_PATTERNS:
        for match in pattern.finditer(cleaned):
            found.append((match.start(), phrase))
            cleaned = cleaned[: match.start()] + " " * len(phrase) + cleaned[match.end():]

    for match in re.finditer(r"\S+", cleaned):
        token = match.group(0).strip(".-/")
        if len(token) <= 2 or token in STOP_WORDS or _PURE_NUMBER.match(token):
            continue
        found.append((match.start(), token))

    found.sort(key=lambda item: item[0])
    return list(dict.fromkeys(token for _, token in found))


def resume_full_text(data: ResumeData) -> str:
    """All scorable resume text joined into one string."""
    parts: List[str] = [data.contact.title, data.summary.text]
    for exp in data.experience:
        parts.extend([exp.company, exp.position, exp.description, *exp.highlights])
    for edu in data.education:
        parts.extend([edu.institution, edu.degree, edu.field, edu.description, *edu.highlights])
    for category in data.skills:
        parts.append(category.category)
        parts.extend(item.name for item in category.items)
    for project in data.projects:
        parts.extend([project.name, project.description, *project.technologies, *project.highlights])
    for cert in data.certifications:
        parts.extend([cert.name, cert.issuer])
    parts.extend(lang.name for lang in data.languages)
    for vol in data.volunteer:
        parts.extend([vol.organization, vol.role, vol.description, *vol.highlights])
    for award in data.awards:
        parts.extend([award.title, award.description])
    for pub in data.publications:
        parts.extend([pub.title, pub.description])
    for course in data.courses:
        parts.extend([course.name, course.description])
    for section in data.custom_sections:
        for entry in section.entries:
            parts.extend([entry.title, entry.description, *entry.highlights])
    return " ".join(part for part in parts if part)


def all_highlights(data: ResumeData) -> List[str]:
    highlights: List[str] = []
    for entries in (data.experience, data.education, data.projects, data.volunteer):
        for entry in entries:
            highlights.extend(entry.highlights)
    return highlights


def score_to_grade(score: int) -> str:
    if score >= 90:
        return "Excellent"
    elif score >= 75:
        return "Good"
    elif score >= 60:
        return "Fair"
    else:
        return "Needs Work"


# ---------------------------------------------------------------------------
# Formatting report (pure string output)
# ---------------------------------------------------------------------------


def format_ats_report(result: AtsScoreResult) -> str:
    """Render an :class:`AtsScoreResult` as a human-readable report."""
    grade = score_to_grade(result.score)
    bar = _score_bar(result.score)

    lines = [
        f"## ATS Score: {result.score}/100 {grade}",
        bar,
        "",
        "| Category        | Score | Max |",
        "|-----------------|-------|-----|",
    ]
    for name, category in result.breakdown.categories():
        lines.append(f"| {CATEGORY_LABELS[name]:<15} | {category.score:3d}   | {category.max_score:3d} |")

    if result.keywords.matched:
        lines.append("")
        lines.append(f"### Matching Keywords ({len(result.keywords.matched)})")
        lines.append(", ".join(result.keywords.matched[:20]))

    if result.keywords.missing:
        lines.append("")
        lines.append(f"### Missing Keywords ({len(result.keywords.missing)})")
        lines.append(", ".join(result.keywords.missing[:20]))

    numbered = [
        (CATEGORY_LABELS[name], s) for name, category in result.breakdown.categories() for s in category.suggestions
    ]
    if numbered:
        lines.append("")
        lines.append("### Suggestions")
        for i, (label, s) in enumerate(numbered, 1):
            lines.append(f"{i}. [{label}] {s}")

    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Private scoring helpers
# ---------------------------------------------------------------------------


def _score_keyword_match(
    data: ResumeData, job_description: str, industry: Optional[str]
) -> Tuple[CategoryScore, KeywordAnalysis]:
    max_score = CATEGORY_MAX["keyword_match"]

    if not job_description.strip():
        industry_keywords = get_industry_keywords(industry)
        if not industry_keywords:
            return (
                CategoryScore(
                    NO_JOB_DESCRIPTION_SCORE,
                    max_score,
                    ["Provide a job description to get a detailed keyword match analysis."],
                ),
                KeywordAnalysis(),
            )
        return _score_industry_keywords(data, industry or "", industry_keywords)

    parsed = parse_job_description(job_description)
    sections = parsed.sections
    structured = [parsed.title, sections.required, sections.preferred, sections.responsibilities]
    if any([sections.required, sections.preferred, sections.responsibilities]):
        source = "\n".join(part for part in structured if part)
    else:
        source = sections.full_text
    job_keywords = extract_keywords(source)

    if not job_keywords:
        return (
            CategoryScore(0, max_score, ["The job description has no usable keywords. Paste the full posting."]),
            KeywordAnalysis(),
        )

    resume_text = _KEYWORD_CLEAN.sub(" ", resume_full_text(data).lower())
    resume_tokens = set(extract_keywords(resume_text))
    resume_canonicals = {get_canonical_form(token) for token in resume_tokens}

    matched: List[str] = []
    missing: List[str] = []
    for keyword in job_keywords:
        if _keyword_present(keyword, resume_tokens, resume_canonicals, resume_text):
            matched.append(keyword)
        else:
            missing.append(keyword)

    ratio = min(len(matched) / len(job_keywords), 1.0)
    score = round(ratio * max_score)

    suggestions: List[str] = []
    if ratio < 0.5:
        suggestions.append(
            f"Your resume matches only {round(ratio * 100)}% of job description keywords. "
            "Consider adding more relevant terms."
        )
    hard = [kw for kw in missing if classify_skill(kw) == "hard"]
    soft = [kw for kw in missing if classify_skill(kw) == "soft"]
    if hard and len(hard) <= 10:
        suggestions.append(f"Consider incorporating these keywords: {', '.join(hard)}.")
    elif hard:
        suggestions.append(
            f"{len(hard)} keywords from the job description are missing. "
            f"Start with: {', '.join(hard[:10])}."
        )
    if soft:
        suggestions.append(f"Show these soft skills through your bullet points: {', '.join(soft[:5])}.")

    return CategoryScore(score, max_score, suggestions), KeywordAnalysis(matched=matched, missing=missing)


def _score_industry_keywords(
    data: ResumeData, industry: str, keywords: List[str]
) -> Tuple[CategoryScore, KeywordAnalysis]:
    max_score = CATEGORY_MAX["keyword_match"]
    resume_text = _KEYWORD_CLEAN.sub(" ", resume_full_text(data).lower())

    matched = [kw for kw in keywords if _boundary_pattern(_KEYWORD_CLEAN.sub(" ", kw.lower())).search(resume_text)]
    missing = [kw for kw in keywords if kw not in matched]
    ratio = len(matched) / len(keywords)
    score = round(min(ratio, 1.0) * max_score)

    name = INDUSTRY_NAMES.get(industry.strip().lower().replace("-", "_").replace(" ", "_"), industry)
    suggestions: List[str] = []
    if ratio < 0.3:
        suggestions.append(
            f"Your resume matches only {round(ratio * 100)}% of {name} keywords. Consider adding more relevant terms."
        )
    if missing:
        suggestions.append(f"Top industry keywords to add: {', '.join(missing[:8])}.")
    return CategoryScore(score, max_score, suggestions), KeywordAnalysis(matched=matched, missing=missing)


def _keyword_present(keyword: str, tokens: Set[str], canonicals: Set[str], resume_text: str) -> bool:
    if keyword in tokens:
        return True
    if get_canonical_form(keyword) in canonicals:
        return True
    return bool(_boundary_pattern(keyword).search(resume_text))


def _score_formatting(data: ResumeData) -> CategoryScore:
    score = 0
    suggestions: List[str] = []
    contact = data.contact

    if contact.email.strip():
        score += FORMATTING_POINTS["email"]
    else:
        suggestions.append("Add your email address.")
    if contact.phone.strip():
        score += FORMATTING_POINTS["phone"]
    else:
        suggestions.append("Add your phone number.")
    if contact.location.strip():
        score += FORMATTING_POINTS["location"]
    else:
        suggestions.append("Add your location (city and state or country).")

    return CategoryScore(score, CATEGORY_MAX["formatting"], suggestions)


def _is_quantified(text: str) -> bool:
    return any(pattern.search(text) for pattern in QUANTIFIED_PATTERNS)


def _starts_with_action_verb(text: str) -> bool:
    words = re.findall(r"[A-Za-z][A-Za-z'-]*", text)
    return bool(words) and words[0].lower() in ACTION_VERBS


def _score_content_quality(data: ResumeData) -> CategoryScore:
    max_score = CATEGORY_MAX["content_quality"]
    highlights = all_highlights(data)
    if not highlights:
        return CategoryScore(
            0, max_score, ["Add bullet points to your experience entries with quantified achievements."]
        )

    quantified = sum(1 for h in highlights if _is_quantified(h)) / len(highlights)
    verbs = sum(1 for h in highlights if _starts_with_action_verb(h)) / len(highlights)
    score = round(10 * quantified + 10 * verbs)

    suggestions: List[str] = []
    if quantified < 1:
        suggestions.append(
            f"Only {round(quantified * 100)}% of your bullet points include metrics. "
            'Add numbers, percentages, or dollar amounts (e.g., "Increased sales by 25%").'
        )
    if verbs < 1:
        suggestions.append(
            'Start each bullet point with a strong action verb (e.g., "Developed", "Managed", "Implemented").'
        )
    return CategoryScore(min(score, max_score), max_score, suggestions)


def _score_section_completeness(data: ResumeData) -> CategoryScore:
    suggestions: List[str] = []
    checks = [
        (bool(data.contact.first_name or data.contact.last_name), "Add your name to the contact section."),
        (bool(data.summary.text.strip()), "Add a professional summary to make a strong first impression."),
        (bool(data.experience), "Add at least one work experience entry."),
        (bool(data.education), "Add your education background."),
        (bool(data.skills), "Add a skills section to highlight your competencies."),
    ]
    core = 0
    for present, suggestion in checks:
        if present:
            core += 1
        else:
            suggestions.append(suggestion)

    bonus_sections = sum(1 for name in _BONUS_SECTIONS if getattr(data, name))
    if bonus_sections >= 2:
        bonus = 2
    elif bonus_sections == 1:
        bonus = 1
        suggestions.append(
            "Consider adding more sections (projects, certifications, volunteer work) to strengthen your resume."
        )
    else:
        bonus = 0
        suggestions.append("Add supplementary sections like projects, certifications, or volunteer experience.")

    score = round(8 * core / len(checks) + bonus)
    return CategoryScore(score, CATEGORY_MAX["section_completeness"], suggestions)


def _score_readability(data: ResumeData) -> CategoryScore:
    score = 0
    suggestions: List[str] = []
    highlights = all_highlights(data)

    if len(highlights) >= 6:
        score += 4
    elif len(highlights) >= 3:
        score += 2
        suggestions.append("Add more bullet points to your experience entries (3-5 per role).")
    else:
        suggestions.append("Use bullet points to describe your experience. Aim for 3-5 bullets per role.")

    if highlights:
        average = sum(len(h) for h in highlights) / len(highlights)
        if 40 <= average <= 150:
            score += 3
        elif average < 40:
            score += 1
            suggestions.append("Your bullet points are quite short. Provide more detail about your accomplishments.")
        else:
            score += 1
            suggestions.append("Some bullet points are too long. Keep each to 1-2 lines for easy scanning.")

    count = len(data.experience)
    if 2 <= count <= 6:
        score += 3
    elif count == 1:
        score += 2
        suggestions.append("Consider adding more work experience if available.")
    elif count > 6:
        score += 2
        suggestions.append(
            "You have many experience entries. Consider focusing on the most recent and relevant roles."
        )
    else:
        suggestions.append("Add work experience to your resume.")

    return CategoryScore(score, CATEGORY_MAX["readability"], suggestions)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _score_bar(score: int, width: int = 20) -> str:
    filled = round(score / 100 * width)
    return f"[{'=' * filled}{' ' * (width - filled)}]"
