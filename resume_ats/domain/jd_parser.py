"""Pure domain logic for parsing pasted job descriptions.

Splits a posting into required / preferred / responsibilities / about sections
and pulls out structured requirements (years of experience, degree,
certifications). All functions operate on content strings -- no file I/O.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Pattern, Set, Tuple

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

SECTION_KEYS: Tuple[str, ...] = ("required", "preferred", "responsibilities", "about")

SECTION_HEADERS: Dict[str, Tuple[str, ...]] = {
    "required": (
        "requirements",
        "requirement",
        "required",
        "required skills",
        "required qualifications",
        "required experience",
        "qualifications",
        "minimum qualifications",
        "basic qualifications",
        "must have",
        "must haves",
        "must-have",
        "must-haves",
        "what we're looking for",
        "what we are looking for",
        "what you bring",
        "what you'll bring",
        "who you are",
        "essential",
        "essential skills",
        "skills and experience",
        "your profile",
    ),
    "preferred": (
        "preferred",
        "preferred qualifications",
        "preferred skills",
        "preferred experience",
        "nice to have",
        "nice to haves",
        "nice-to-have",
        "nice-to-haves",
        "bonus",
        "bonus points",
        "desired",
        "desired skills",
        "desired qualifications",
        "plus",
        "pluses",
        "additional qualifications",
    ),
    "responsibilities": (
        "responsibilities",
        "key responsibilities",
        "job responsibilities",
        "main responsibilities",
        "what you'll do",
        "what you will do",
        "what you'll be doing",
        "duties",
        "job duties",
        "your role",
        "the role",
        "about the role",
        "role description",
        "day to day",
        "day-to-day",
    ),
    "about": (
        "about us",
        "about the company",
        "about the team",
        "company",
        "company overview",
        "company description",
        "who we are",
        "our company",
        "our mission",
        "why join us",
    ),
}

KNOWN_CERTIFICATIONS: Tuple[str, ...] = (
    "PMP",
    "CSM",
    "CISSP",
    "CISM",
    "CISA",
    "CEH",
    "CPA",
    "CFA",
    "AWS Certified",
    "Azure Certified",
    "Google Cloud Certified",
    "GCP Certified",
    "CompTIA Security+",
    "CompTIA Network+",
    "CompTIA A+",
    "Security+",
    "CCNA",
    "CCNP",
    "CCIE",
    "ITIL",
    "TOGAF",
    "CKA",
    "CKAD",
    "Six Sigma Green Belt",
    "Six Sigma Black Belt",
    "Lean Six Sigma",
    "PHR",
    "SPHR",
    "SHRM-CP",
    "SHRM-SCP",
    "Series 7",
    "Series 63",
    "Series 66",
    "PE",
    "EIT",
    "FE",
    "RN",
    "BSN",
    "NP",
    "APRN",
    "BLS",
    "ACLS",
    "GMP",
    "GLP",
    "LEED AP",
    "OSHA 30",
    "OSHA 10",
)

DEGREE_LEVELS: List[Tuple[str, Pattern[str]]] = [
    (
        "phd",
        re.compile(r"\b(?:ph\.?\s?d\b\.?|doctorate|doctoral\s+degree|doctor\s+of\s+philosophy)", re.IGNORECASE),
    ),
    (
        "master",
        re.compile(
            r"\b(?:master'?s?|m\.s\.|m\.sc\.?|msc|mba|m\.b\.a\.|ms(?=\s+(?:in|degree)\b))(?![a-z])",
            re.IGNORECASE,
        ),
    ),
    (
        "bachelor",
        re.compile(
            r"\b(?:bachelor'?s?|b\.s\.|b\.a\.|b\.sc\.?|bsc|undergraduate\s+degree|bs(?=\s+(?:in|degree)\b))(?![a-z])",
            re.IGNORECASE,
        ),
    ),
]

_YEARS_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"(?<!\d)(\d{1,2})\s*(?:-|–|—|to)\s*\d{1,2}\s*\+?\s*(?:years?|yrs?)\b", re.IGNORECASE),
    re.compile(r"(?:minimum|at\s+least|min\.?)\s*(?:of\s+)?(?<!\d)(\d{1,2})\s*\+?\s*(?:years?|yrs?)\b", re.IGNORECASE),
    re.compile(r"(?<!\d)(\d{1,2})\s*\+?\s*(?:years?|yrs?)\b", re.IGNORECASE),
)

_TITLE_LINE = re.compile(r"^\s*(?:job\s+title|title|position|role)\s*:\s*(\S.*?)\s*$", re.IGNORECASE | re.MULTILINE)
_INLINE_HEADER = re.compile(r"^([A-Za-z][A-Za-z' \-]{1,40}?)\s*:\s*(\S.*)$")
_FIELD_AFTER_DEGREE = re.compile(r"^[\s'.]*(?:degree\s+)?(?:in|of)\s+([A-Za-z&/\- ]+)", re.IGNORECASE)
_DEGREE_NAME_PREFIX = re.compile(
    r"^(?:science|arts|applied science|engineering|business administration|fine arts)\s+in\s+"
)
_FIELD_TAIL = re.compile(
    r"\s+(?:or|and/or)\s+.*$"
    r"|\s+(?:is\s+|are\s+)?(?:required|preferred|desired|a plus|or equivalent)\b.*$"
    r"|\s+(?:with|from|and)\s+.*$"
)

_MAX_TITLE_LENGTH = 100


def _build_header_lookup() -> Dict[str, str]:
    lookup: Dict[str, str] = {}
    for key, phrases in SECTION_HEADERS.items():
        for phrase in phrases:
            lookup[phrase] = key
    return lookup


_HEADER_LOOKUP: Dict[str, str] = _build_header_lookup()


def _cert_pattern(name: str) -> Pattern[str]:
    # Short acronyms like "PE" or "RN" would otherwise match ordinary words.
    flags = 0 if name.isupper() and len(name) <= 8 else re.IGNORECASE
    return re.compile(r"(?<![A-Za-z0-9])" + re.escape(name) + r"(?![A-Za-z0-9+])", flags)


_CERT_PATTERNS: List[Tuple[str, Pattern[str]]] = [(name, _cert_pattern(name)) for name in KNOWN_CERTIFICATIONS]


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------


@dataclass
class JobDescriptionSections:
    required: str = ""
    preferred: str = ""
    responsibilities: str = ""
    about: str = ""
    full_text: str = ""


@dataclass
class ExtractedRequirements:
    years_of_experience: Optional[int] = None
    degree_level: Optional[str] = None
    degree_field: Optional[str] = None
    certifications: List[str] = field(default_factory=list)


@dataclass
class ParsedJobDescription:
    """Structured view of a job posting."""

    title: str = ""
    sections: JobDescriptionSections = field(default_factory=JobDescriptionSections)
    extracted_requirements: ExtractedRequirements = field(default_factory=ExtractedRequirements)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_job_description(text: str) -> ParsedJobDescription:
    """Parse a pasted job posting into sections and requirements.

    Never raises: empty or unstructured input yields empty sections with the
    whole trimmed text in ``sections.full_text``.
    """
    if not text or not text.strip():
        return ParsedJobDescription()

    normalized = _normalize(text)
    full_text = normalized.strip()
    lines = full_text.split("\n")

    buckets: Dict[str, List[str]] = {key: [] for key in SECTION_KEYS}
    current: Optional[str] = None
    for line in lines:
        kind, inline = _match_header(line)
        if kind is not None:
            current = kind
            if inline:
                buckets[kind].append(inline)
            continue
        if current is not None:
            buckets[current].append(line)

    sections = JobDescriptionSections(
        required="\n".join(buckets["required"]).strip(),
        preferred="\n".join(buckets["preferred"]).strip(),
        responsibilities="\n".join(buckets["responsibilities"]).strip(),
        about="\n".join(buckets["about"]).strip(),
        full_text=full_text,
    )

    requirement_text = "\n".join([sections.required, sections.preferred, full_text])
    degree_level, degree_field = extract_degree(requirement_text)

    return ParsedJobDescription(
        title=_extract_title(full_text, lines),
        sections=sections,
        extracted_requirements=ExtractedRequirements(
            years_of_experience=extract_years_of_experience(requirement_text),
            degree_level=degree_level,
            degree_field=degree_field,
            certifications=extract_certifications(requirement_text),
        ),
    )


def extract_years_of_experience(text: str) -> Optional[int]:
    """Return the first years-of-experience figure found; a range gives its lower bound."""
    for pattern in _YEARS_PATTERNS:
        match = pattern.search(text)
        if match:
            return int(match.group(1))
    return None


def extract_degree(text: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(degree_level, degree_field)`` with the highest level winning."""
    for level, pattern in DEGREE_LEVELS:
        matches = list(pattern.finditer(text))
        if not matches:
            continue
        for match in matches:
            degree_field = _field_after(text[match.end():])
            if degree_field:
                return level, degree_field
        return level, None
    return None, None


def extract_certifications(text: str) -> List[str]:
    """Known certification names in order of first appearance, without duplicates."""
    found: List[Tuple[int, str]] = []
    for name, pattern in _CERT_PATTERNS:
        match = pattern.search(text)
        if match:
            found.append((match.start(), name))
    found.sort(key=lambda item: item[0])

    seen: Set[str] = set()
    result: List[str] = []
    for _, name in found:
        if name.lower() not in seen:
            seen.add(name.lower())
            result.append(name)
    return result


def format_job_description_report(parsed: ParsedJobDescription) -> str:
    """Render a :class:`ParsedJobDescription` as a markdown summary."""
    reqs = parsed.extracted_requirements
    lines = [f"## Job Description: {parsed.title or '(untitled)'}", ""]

    lines.append("### Requirements")
    years = f"{reqs.years_of_experience}+ years" if reqs.years_of_experience is not None else "not stated"
    lines.append(f"- **Experience:** {years}")
    if reqs.degree_level:
        degree = reqs.degree_level.capitalize()
        if reqs.degree_field:
            degree += f" in {reqs.degree_field}"
        lines.append(f"- **Degree:** {degree}")
    else:
        lines.append("- **Degree:** not stated")
    if reqs.certifications:
        lines.append(f"- **Certifications:** {', '.join(reqs.certifications)}")

    for key in SECTION_KEYS:
        body = getattr(parsed.sections, key)
        if body:
            lines.append("")
            lines.append(f"### {key.capitalize()}")
            lines.append(body)

    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _normalize(text: str) -> str:
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = text.replace("\t", " ").replace("\u00a0", " ")
    return text.replace("\u2019", "'").replace("\u2018", "'")


def _header_key(raw: str) -> str:
    key = raw.strip().strip("#*_•-").strip()
    key = key.rstrip(":").strip().strip("*_").strip()
    return re.sub(r"\s+", " ", key).lower()


def _match_header(line: str) -> Tuple[Optional[str], str]:
    """Return ``(section_kind, inline_content)`` for a header line, else ``(None, "")``."""
    stripped = line.strip()
    if not stripped or (len(stripped) > 80 and ":" not in stripped):
        return None, ""

    kind = _HEADER_LOOKUP.get(_header_key(stripped))
    if kind is not None:
        return kind, ""

    inline = _INLINE_HEADER.match(stripped.lstrip("#*_•- "))
    if inline:
        kind = _HEADER_LOOKUP.get(_header_key(inline.group(1)))
        if kind is not None:
            return kind, inline.group(2).strip()
    return None, ""


def _extract_title(full_text: str, lines: List[str]) -> str:
    explicit = _TITLE_LINE.search(full_text)
    if explicit:
        return explicit.group(1).strip()

    for line in lines:
        stripped = line.strip()
        if not stripped:
            continue
        kind, _ = _match_header(stripped)
        if kind is None and len(stripped) <= _MAX_TITLE_LENGTH:
            return stripped
        return ""
    return ""


def _field_after(rest: str) -> Optional[str]:
    match = _FIELD_AFTER_DEGREE.match(rest)
    if not match:
        return None
    degree_field = match.group(1).strip().lower()
    degree_field = _DEGREE_NAME_PREFIX.sub("", degree_field)
    degree_field = _FIELD_TAIL.sub("", degree_field)
    degree_field = degree_field.strip(" -/&")
    return degree_field if len(degree_field) >= 3 else None
