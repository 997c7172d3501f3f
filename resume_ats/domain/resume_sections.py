"""Per-section entry extraction for the resume text parser.

Every extractor takes the cleaned body lines of one section, with blank lines
kept as ``""``, and returns a list of entries. ``None`` means the body could not
be turned into entries; an empty list means the section was found and is
legitimately empty (only references do that). All functions operate on
content strings -- no file I/O.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .models import (
    AffiliationEntry,
    AwardEntry,
    CertificationEntry,
    CourseEntry,
    CustomSection,
    CustomSectionEntry,
    EducationEntry,
    ExperienceEntry,
    LanguageEntry,
    ProjectEntry,
    PublicationEntry,
    ReferenceEntry,
    Section,
    SkillCategory,
    SkillItem,
    VolunteerEntry,
)

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

EMAIL_PATTERN = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
PHONE_PATTERN = re.compile(
    r"(?<![\d/])(?:\+\d{1,3}[\s.-]?)?(?:\(\d{3}\)|\d{3})[\s.-]?\d{3}[\s.-]?\d{4}(?!\d)"
    r"|(?<![\d/])\+\d{1,3}(?:[\s.-]\d{2,4}){2,4}(?!\d)"
)
LINKEDIN_PATTERN = re.compile(
    r"(?:https?://)?(?:[a-z]{2,3}\.)?linkedin\.com/(?:in|pub)/[A-Za-z0-9_%-]+/?", re.IGNORECASE
)
GITHUB_PATTERN = re.compile(r"(?:https?://)?(?:www\.)?github\.com/[A-Za-z0-9][A-Za-z0-9-]*", re.IGNORECASE)
URL_PATTERN = re.compile(
    r"(?<![@\w.])(?:https?://[^\s|,;()<>]+"
    r"|www\.[^\s|,;()<>]+"
    r"|[A-Za-z0-9-]+(?:\.[A-Za-z0-9-]+)*\.(?:com|io|dev|me|net|org|co|app|site|tech|ai|xyz|info|page)"
    r"(?:/[^\s|,;()<>]*)?)(?![\w@])",
    re.IGNORECASE,
)

_MONTH = (
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?"
    r"|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)"
)
_YEAR = r"(?:19|20)\d{2}"
_DATE_TOKEN = (
    rf"(?:{_MONTH}\.?\s*,?\s*{_YEAR}"
    rf"|(?:spring|summer|fall|autumn|winter)\s+{_YEAR}"
    rf"|\d{{1,2}}/{_YEAR}"
    rf"|{_YEAR}[-/](?:1[0-2]|0?[1-9])(?!\d)"
    rf"|{_YEAR})"
)
_PRESENT = r"(?:present|current|now|ongoing|today)"

DATE_RANGE_PATTERN = re.compile(
    rf"\b(?P<start>{_DATE_TOKEN})(?!\d)\s*(?:-|–|—|to|until|through)\s*(?P<end>{_DATE_TOKEN}(?!\d)|{_PRESENT}\b)",
    re.IGNORECASE,
)
SINGLE_DATE_PATTERN = re.compile(rf"\b{_DATE_TOKEN}(?!\d)", re.IGNORECASE)
_PRESENT_WORDS = frozenset({"present", "current", "now", "ongoing", "today"})

_BULLET_MARKER = r"[-*•●▪◦‣■►▸➢➤✓]"
BULLET_PATTERN = re.compile(rf"^\s*(?:{_BULLET_MARKER}(?:\s+|(?=[A-Za-z0-9\"']))|\d{{1,2}}[.)]\s+)")
_MARKER_RUN = re.compile(rf"^\s*(?:{_BULLET_MARKER}(?:\s+|(?=[A-Za-z0-9\"'])))+")
GPA_PATTERN = re.compile(r"\bGPA\s*[:\-]?\s*(\d+(?:\.\d+)?)", re.IGNORECASE)
CREDENTIAL_PATTERN = re.compile(
    r"\b(?:credential|certificate|license|cert)(?:\s+(?:id|no\.?|number|#))?\s*[:#]\s*(\S+)", re.IGNORECASE
)
_TECH_LINE = re.compile(r"^(?:technologies|tech stack|stack|tools|built with|tech)\s*[:\-]\s*(.+)$", re.IGNORECASE)
_AT_PATTERN = re.compile(r"^(?P<position>.+?)\s+(?:at|@)\s+(?P<company>.+)$", re.IGNORECASE)
_SEPARATOR_SPLIT = re.compile(r"\s*\|\s*|\s+[•·–—-]\s+")
_ITEM_SPLIT = re.compile(r"\s*[,;|•](?![^()]*\))\s*")
LOCATION_PATTERN = re.compile(
    r"^[A-Z][A-Za-z.'\- ]{1,30},\s*(?:[A-Z]{2}|[A-Z][a-z]+(?:\s[A-Z][a-z]+){0,2})(?:,\s*[A-Z][A-Za-z]+)?$"
)

COMPANY_INDICATORS = re.compile(
    r"\b(?:inc|llc|ltd|corp|corporation|company|group|gmbh|plc|technologies|solutions|labs|systems"
    r"|partners|consulting|agency|bank|hospital|foundation|enterprises|holdings|studios?|ventures)\b\.?",
    re.IGNORECASE,
)

JOB_TITLE_WORDS = frozenset(
    {
        "engineer", "developer", "manager", "director", "analyst", "designer", "consultant",
        "specialist", "lead", "architect", "intern", "associate", "coordinator", "administrator",
        "assistant", "officer", "president", "vp", "head", "scientist", "technician",
        "representative", "executive", "supervisor", "programmer", "receptionist", "nurse",
        "teacher", "accountant", "advisor", "strategist", "researcher", "editor", "writer",
        "founder", "co-founder", "owner", "cto", "ceo", "cfo", "coo", "principal", "senior",
        "junior", "sr", "jr", "fellow", "instructor", "professor", "agent", "clerk", "operator",
        "therapist", "physician", "attorney", "paralegal", "recruiter", "marketer", "producer",
        "planner", "trainer", "tester", "sre", "devops", "contractor", "freelancer", "volunteer",
        "tutor", "mentor", "organizer", "chair", "treasurer", "secretary", "member",
    }
)

_MINOR_WORDS = frozenset({"and", "of", "the", "for", "in", "at", "to", "a", "an", "&", "with", "on", "de"})

DEGREE_WORDS = re.compile(
    r"\b(?:bachelor'?s?|master'?s?|associate'?s?\s+(?:of|in|degree)|doctor(?:ate)?|diploma|ph\.?\s?d"
    r"|high school|certificate\s+(?:of|in))\b",
    re.IGNORECASE,
)
DEGREE_ABBREVIATIONS = re.compile(
    r"(?<![A-Za-z])(?:B\.?S\.?c?|B\.?A\.?|M\.?S\.?c?|M\.?A\.?|MBA|M\.B\.A\.|B\.?Eng|M\.?Eng|B\.?Tech|M\.?Tech"
    r"|BBA|J\.D\.|JD|M\.D\.|MD|Ph\.?D\.?|A\.?A\.?S?|BFA|MFA|LLB|LLM|MPH|MSW|EdD|BSN|MSN)(?![A-Za-z])"
)
INSTITUTION_WORDS = re.compile(
    r"\b(?:university|college|institute|school|academy|polytechnic|conservatory|universidad|seminary)\b",
    re.IGNORECASE,
)
_TRAILING_STATE = re.compile(r",\s*[A-Z]{2}\s*$")

KNOWN_ISSUERS = frozenset(
    {
        "amazon", "aws", "amazon web services", "google", "google cloud", "microsoft", "oracle",
        "cisco", "comptia", "pmi", "scrum alliance", "scrum.org", "isc2", "(isc)²", "isaca",
        "linux foundation", "cncf", "red hat", "salesforce", "hashicorp", "coursera", "udemy",
        "edx", "hubspot", "meta", "ibm", "vmware", "axelos", "ec-council", "sans", "giac",
        "american heart association", "red cross", "american red cross",
    }
)
_ORG_WORDS = re.compile(
    r"\b(?:institute|association|academy|foundation|council|society|university|board|alliance|inc|llc|corp)\b",
    re.IGNORECASE,
)
PLACEHOLDER_IDS = frozenset({"abc123", "xyz789", "123456", "placeholder", "n/a", "tbd", "na", "none"})
PLACEHOLDER_URL = re.compile(r"example\.(?:com|org|net)|placeholder|your-?url|yourname", re.IGNORECASE)

PROFICIENCY_MAP: Dict[str, str] = {
    "native": "native",
    "mother tongue": "native",
    "bilingual": "native",
    "first language": "native",
    "fluent": "fluent",
    "full professional": "fluent",
    "full professional proficiency": "fluent",
    "advanced": "advanced",
    "proficient": "advanced",
    "professional working": "advanced",
    "professional working proficiency": "advanced",
    "upper intermediate": "advanced",
    "c1": "advanced",
    "c2": "fluent",
    "intermediate": "intermediate",
    "conversational": "intermediate",
    "limited working": "intermediate",
    "limited working proficiency": "intermediate",
    "b1": "intermediate",
    "b2": "intermediate",
    "basic": "beginner",
    "beginner": "beginner",
    "elementary": "beginner",
    "elementary proficiency": "beginner",
    "a1": "beginner",
    "a2": "beginner",
}
_LANGUAGE_FORMS = (
    re.compile(r"^(?P<name>[A-Za-z][A-Za-z ]*?)\s*\((?P<level>[^)]+)\)$"),
    re.compile(r"^(?P<name>[A-Za-z][A-Za-z ]*?)\s*[:\-–—]\s*(?P<level>.+)$"),
)

PUBLISHER_WORDS = re.compile(
    r"\b(?:journal|press|proceedings|conference|review|magazine|ieee|acm|springer|elsevier|arxiv"
    r"|nature|symposium|workshop|publishing|times|post|blog)\b",
    re.IGNORECASE,
)
ROLE_WORDS = re.compile(
    r"\b(?:member|president|chair|treasurer|secretary|board|volunteer|fellow|officer|director"
    r"|organizer|founder|lead|mentor|delegate|associate)\b",
    re.IGNORECASE,
)
_REQUEST_ONLY = re.compile(r"(?:available|provided|furnished)\s+(?:up)?on\s+request", re.IGNORECASE)
_COURSEWORK_LINE = re.compile(r"^(?:relevant\s+)?(?:coursework|courses)\s*:\s*(.+)$", re.IGNORECASE)

_MAX_HEADER_LINE = 100
_MAX_SKILL_CATEGORY = 40


# ---------------------------------------------------------------------------
# Line helpers
# ---------------------------------------------------------------------------


@dataclass
class DateInfo:
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    is_range: bool = False
    span: Tuple[int, int] = (0, 0)


def find_dates(text: str) -> Optional[DateInfo]:
    """Locate a date range, or failing that a single date, in *text*.

    A single date comes back in ``start_date``; callers decide what it means.
    """
    match = DATE_RANGE_PATTERN.search(text)
    if match:
        end = _tidy_date(match.group("end"))
        current = end.lower() in _PRESENT_WORDS
        return DateInfo(
            start_date=_tidy_date(match.group("start")),
            end_date="" if current else end,
            current=current,
            is_range=True,
            span=match.span(),
        )
    match = SINGLE_DATE_PATTERN.search(text)
    if match:
        return DateInfo(start_date=_tidy_date(match.group(0)), span=match.span())
    return None


def strip_span(text: str, span: Tuple[int, int]) -> str:
    """Remove *span* from *text* and tidy the separators left behind."""
    remainder = (text[: span[0]] + " " + text[span[1]:]).strip()
    remainder = re.sub(r"\s*[|,]\s*$|^\s*[|,]\s*", "", remainder)
    remainder = re.sub(r"\(\s*\)", "", remainder)
    return re.sub(r"\s{2,}", " ", remainder).strip(" ,|-–—:()")


def is_bullet(line: str) -> bool:
    return bool(BULLET_PATTERN.match(line))


def strip_bullet(line: str) -> str:
    return _MARKER_RUN.sub("", BULLET_PATTERN.sub("", line, count=1)).strip()


def has_title_word(text: str) -> bool:
    return any(word in JOB_TITLE_WORDS for word in re.findall(r"[a-z][a-z-]*", text.lower()))


def is_header_like(text: str) -> bool:
    """Short, mostly capitalized text without a closing full stop."""
    if not text or len(text) > _MAX_HEADER_LINE or text.endswith(".") or is_bullet(text):
        return False
    words = re.findall(r"[A-Za-z][A-Za-z'&.\-]*", text)
    if not words or len(words) > 10:
        return False
    if "|" in text:
        return True
    significant = [word for word in words if word.lower() not in _MINOR_WORDS]
    if not significant:
        return False
    capitalized = sum(1 for word in significant if word[0].isupper())
    return capitalized / len(significant) >= 0.6


def looks_like_location(text: str) -> bool:
    text = text.strip()
    if text.lower() in {"remote", "hybrid", "on-site", "onsite"}:
        return True
    return bool(LOCATION_PATTERN.match(text))


def split_items(text: str) -> List[str]:
    return [item.strip() for item in _ITEM_SPLIT.split(text) if item.strip()]


def paragraphs(lines: Sequence[str]) -> List[List[str]]:
    """Group non-blank lines into blank-separated blocks."""
    blocks: List[List[str]] = []
    current: List[str] = []
    for line in lines:
        if line:
            current.append(line)
        elif current:
            blocks.append(current)
            current = []
    if current:
        blocks.append(current)
    return blocks


def has_degree(text: str) -> bool:
    text = _TRAILING_STATE.sub("", text)
    return bool(DEGREE_WORDS.search(text) or DEGREE_ABBREVIATIONS.search(text))


def _tidy_date(value: str) -> str:
    value = re.sub(r"\s+", " ", value.strip()).strip(",")
    if value.lower() in _PRESENT_WORDS:
        return value.capitalize()
    return value


def _nonblank(lines: Sequence[str]) -> List[str]:
    return [line for line in lines if line]


# ---------------------------------------------------------------------------
# Experience and volunteer
# ---------------------------------------------------------------------------


@dataclass
class _Draft:
    headers: List[str] = field(default_factory=list)
    dates: Optional[DateInfo] = None
    location: str = ""
    body: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def has_body(self) -> bool:
        return bool(self.body)

    @property
    def last_is_bullet(self) -> bool:
        return bool(self.body) and self.body[-1][0] == "bullet"

    def pop_trailing_headers(self) -> List[str]:
        carried: List[str] = []
        while self.body and len(carried) < 2:
            kind, text = self.body[-1]
            if kind != "text" or not is_header_like(text):
                break
            carried.insert(0, text)
            self.body.pop()
        return carried


def _date_only_remainder(remainder: str) -> bool:
    return not remainder or looks_like_location(remainder)


def _group_drafts(lines: Sequence[str]) -> List[_Draft]:
    drafts: List[_Draft] = []
    current: Optional[_Draft] = None
    blank_before = False

    def start(headers: Optional[List[str]] = None) -> _Draft:
        draft = _Draft(headers=list(headers or []))
        drafts.append(draft)
        return draft

    for line in lines:
        if not line:
            blank_before = True
            continue

        if is_bullet(line):
            if current is None:
                current = start()
            text = strip_bullet(line)
            if text:
                current.body.append(("bullet", text))
            blank_before = False
            continue

        dates = find_dates(line)
        remainder = strip_span(line, dates.span) if dates else line

        if dates and _date_only_remainder(remainder):
            if current is None:
                current = start()
            elif current.dates is not None:
                current = start(current.pop_trailing_headers())
            current.dates = dates
            if remainder:
                current.location = remainder
        elif dates and dates.is_range and is_header_like(remainder):
            if current is not None and current.dates is None and not current.has_body:
                current.headers.append(remainder)
            else:
                current = start([remainder])
            current.dates = dates
        elif current is None:
            current = start([line])
        elif _starts_entry(line) and current.has_body:
            current = start([line])
        elif not current.has_body and current.dates is None and len(current.headers) < 3 and is_header_like(line):
            current.headers.append(line)
        elif not current.has_body and len(current.headers) < 2 and is_header_like(line):
            current.headers.append(line)
        elif current.last_is_bullet and not blank_before and line[0].islower():
            kind, text = current.body[-1]
            current.body[-1] = (kind, f"{text} {line}")
        elif blank_before and current.has_body and is_header_like(line):
            current = start([line])
        else:
            current.body.append(("text", line))
        blank_before = False

    return drafts


def _starts_entry(line: str) -> bool:
    if not is_header_like(line):
        return False
    return bool(_AT_PATTERN.match(line)) or len(_SEPARATOR_SPLIT.split(line)) >= 2


def _split_company_location(text: str) -> Tuple[str, str]:
    parts = [part for part in _SEPARATOR_SPLIT.split(text) if part]
    if len(parts) >= 2:
        return parts[0], ", ".join(parts[1:]) if looks_like_location(", ".join(parts[1:])) else parts[1]
    if "," in text:
        company, rest = [part.strip() for part in text.split(",", 1)]
        if rest and len(rest) <= 40 and not re.search(r"\d", rest) and len(rest.split()) <= 4:
            return company, rest
    return text.strip(), ""


def _split_title_company(text: str) -> Tuple[str, str, str]:
    match = _AT_PATTERN.match(text)
    if match:
        company, location = _split_company_location(match.group("company"))
        return match.group("position").strip(), company, location

    parts = [part.strip() for part in _SEPARATOR_SPLIT.split(text) if part.strip()]
    if len(parts) >= 2:
        location = ""
        if len(parts) > 2 and looks_like_location(parts[2]):
            location = parts[2]
        company, inner_location = _split_company_location(parts[1]) if "," in parts[1] else (parts[1], "")
        return parts[0], company, location or inner_location

    if "," in text:
        left, right = [part.strip() for part in text.split(",", 1)]
        if has_title_word(left) and not has_title_word(right):
            company, location = _split_company_location(right)
            return left, company, location
    return text.strip(), "", ""


def _maybe_swap(position: str, company: str) -> Tuple[str, str]:
    if not position or not company:
        return position, company
    if COMPANY_INDICATORS.search(position) and not COMPANY_INDICATORS.search(company):
        return company, position
    if has_title_word(company) and not has_title_word(position):
        return company, position
    return position, company


def _resolve_headers(draft: _Draft) -> Tuple[str, str, str]:
    position = company = location = ""
    unused: List[str] = []
    if draft.headers:
        position, company, location = _split_title_company(draft.headers[0])
        for extra in draft.headers[1:]:
            if not company:
                company, extra_location = _split_company_location(extra)
                location = location or extra_location
            elif not location and looks_like_location(extra):
                location = extra
            else:
                unused.append(extra)
    draft.body[:0] = [("text", text) for text in unused]

    if not company and not unused:
        for index, (kind, text) in enumerate(draft.body):
            if kind == "text" and is_header_like(text) and len(text) <= 60:
                company, extra_location = _split_company_location(text)
                location = location or extra_location
                del draft.body[index]
            break

    position, company = _maybe_swap(position, company)
    return position, company, location or draft.location


def _draft_fields(draft: _Draft) -> Dict[str, object]:
    position, company, location = _resolve_headers(draft)
    dates = draft.dates or DateInfo()
    return {
        "position": position,
        "company": company,
        "location": location,
        "start_date": dates.start_date,
        "end_date": dates.end_date,
        "current": dates.current,
        "description": "\n".join(text for kind, text in draft.body if kind == "text"),
        "highlights": [text for kind, text in draft.body if kind == "bullet"],
    }


def _meaningful(draft: _Draft) -> bool:
    return bool(draft.headers or draft.dates or draft.body)


def extract_experience(lines: Sequence[str]) -> Optional[List[ExperienceEntry]]:
    entries = []
    for draft in _group_drafts(lines):
        if not _meaningful(draft):
            continue
        entry = ExperienceEntry(**_draft_fields(draft))
        if entry.position or entry.company or entry.highlights:
            entries.append(entry)
    return entries or None


def extract_volunteer(lines: Sequence[str]) -> Optional[List[VolunteerEntry]]:
    entries = []
    for draft in _group_drafts(lines):
        if not _meaningful(draft):
            continue
        fields = _draft_fields(draft)
        entry = VolunteerEntry(
            role=fields["position"],
            organization=fields["company"],
            start_date=fields["start_date"],
            end_date=fields["end_date"] or ("Present" if fields["current"] else ""),
            description=fields["description"],
            highlights=fields["highlights"],
        )
        if entry.role or entry.organization or entry.highlights:
            entries.append(entry)
    return entries or None


# ---------------------------------------------------------------------------
# Education
# ---------------------------------------------------------------------------


def _education_blocks(lines: Sequence[str]) -> List[List[str]]:
    blocks: List[List[str]] = []
    current: List[str] = []
    dated = False
    for line in lines:
        if not line:
            if current:
                blocks.append(current)
            current, dated = [], False
            continue
        starts_new = (
            current
            and dated
            and not is_bullet(line)
            and ":" not in line
            and not GPA_PATTERN.search(line)
            and find_dates(line) is None
            and is_header_like(line)
        )
        if starts_new:
            blocks.append(current)
            current, dated = [], False
        current.append(line)
        if not is_bullet(line) and find_dates(line) is not None:
            dated = True
    if current:
        blocks.append(current)
    return blocks


def _split_degree(text: str) -> Tuple[str, str]:
    match = re.match(r"^(?P<degree>.+?)\s+in\s+(?P<field>.+)$", text, re.IGNORECASE)
    if match:
        return match.group("degree").strip(), match.group("field").strip(" ,")
    abbreviation = DEGREE_ABBREVIATIONS.match(text)
    if abbreviation and abbreviation.end() < len(text):
        rest = text[abbreviation.end():].strip(" ,-–:")
        return abbreviation.group(0), rest
    if "," in text:
        degree, rest = [part.strip() for part in text.split(",", 1)]
        return degree, rest
    return text.strip(), ""


def _build_education(block: List[str]) -> Optional[EducationEntry]:
    highlights: List[str] = []
    remaining: List[str] = []
    gpa = start_date = end_date = ""

    for line in block:
        if is_bullet(line):
            text = strip_bullet(line)
            if text:
                highlights.append(text)
            continue
        gpa_match = GPA_PATTERN.search(line)
        if gpa_match and not gpa:
            gpa = gpa_match.group(1)
            line = (line[: gpa_match.start()] + line[gpa_match.end():]).strip()
            line = re.sub(r"^/\d+(?:\.\d+)?", "", line).strip(" ,|-–/")
            line = re.sub(r"\s*/\s*\d+(?:\.\d+)?\s*$", "", line).strip(" ,|-–")
            if not line:
                continue
        dates = find_dates(line)
        if dates and not (start_date or end_date):
            if dates.is_range:
                start_date = dates.start_date
                end_date = dates.end_date or ("Present" if dates.current else "")
            else:
                end_date = dates.start_date
            line = strip_span(line, dates.span)
            if not line:
                continue
        remaining.append(line)

    degree = field_of_study = institution = ""
    description: List[str] = []
    for line in remaining:
        parts = [part.strip() for part in _SEPARATOR_SPLIT.split(line) if part.strip()]
        for part in parts if len(parts) > 1 else [line]:
            if not degree and has_degree(part) and not INSTITUTION_WORDS.search(part):
                degree, field_of_study = _split_degree(part)
            elif not institution and INSTITUTION_WORDS.search(part):
                institution = part
            else:
                description.append(part)

    if not institution:
        for index, line in enumerate(description):
            if len(line) <= 80 and is_header_like(line) and not has_degree(line):
                institution = description.pop(index)
                break
    if not degree:
        for index, line in enumerate(description):
            if has_degree(line):
                degree, field_of_study = _split_degree(description.pop(index))
                break

    if not (institution or degree or highlights):
        return None
    return EducationEntry(
        institution=institution,
        degree=degree,
        field=field_of_study,
        start_date=start_date,
        end_date=end_date,
        gpa=gpa,
        description="\n".join(description),
        highlights=highlights,
    )


def extract_education(lines: Sequence[str]) -> Optional[List[EducationEntry]]:
    entries = [entry for entry in map(_build_education, _education_blocks(lines)) if entry is not None]
    return entries or None


# ---------------------------------------------------------------------------
# Skills
# ---------------------------------------------------------------------------


def _clean_skill(item: str) -> str:
    item = strip_bullet(item) if is_bullet(item) else item
    item = re.sub(r"^(?:and|&)\s+", "", item.strip(), flags=re.IGNORECASE)
    return item.strip(" .")


def extract_skills(lines: Sequence[str]) -> Optional[List[SkillCategory]]:
    categories: List[Tuple[str, List[str]]] = []
    general: List[str] = []
    general_position: Optional[int] = None
    pending: Optional[List[str]] = None

    for line in lines:
        if not line:
            pending = None
            continue
        text = strip_bullet(line) if is_bullet(line) else line
        label, sep, rest = text.partition(":")
        label = label.strip()
        if sep and len(label) <= _MAX_SKILL_CATEGORY and len(label.split()) <= 4:
            items = split_items(rest)
            categories.append((label, items))
            # A bare "Label:" line collects the lines that follow it.
            pending = items if not rest.strip() else None
            continue
        if pending is not None:
            pending.extend(split_items(text))
            continue
        if general_position is None:
            general_position = len(categories)
        general.extend(split_items(text))

    if general:
        categories.insert(general_position or 0, ("General", general))

    result = []
    for label, raw_items in categories:
        seen = set()
        items = []
        for raw in raw_items:
            name = _clean_skill(raw)
            if len(name) < 2 or name.lower() in seen:
                continue
            seen.add(name.lower())
            items.append(SkillItem(name=name))
        if items:
            result.append(SkillCategory(category=label, items=items))
    return result or None


# ---------------------------------------------------------------------------
# Certifications
# ---------------------------------------------------------------------------


def _is_issuer(text: str, following: Optional[str]) -> bool:
    if text.lower() in KNOWN_ISSUERS or _ORG_WORDS.search(text):
        return True
    if following is not None and (find_dates(following) or CREDENTIAL_PATTERN.search(following)):
        return len(text) <= 60 and not find_dates(text)
    return False


def _clear_placeholders(entry: CertificationEntry) -> CertificationEntry:
    if entry.credential_id.strip().lower() in PLACEHOLDER_IDS:
        entry.credential_id = ""
    if entry.url and PLACEHOLDER_URL.search(entry.url):
        entry.url = ""
    return entry


def _certification_blocks(lines: Sequence[str]) -> List[List[str]]:
    blocks: List[List[str]] = []
    for block in paragraphs(lines):
        current: List[str] = []
        for line in block:
            dates = find_dates(line)
            remainder = strip_span(line, dates.span) if dates else line
            single = " | " in remainder or " - " in remainder or ", " in remainder
            if is_bullet(line):
                if current:
                    blocks.append(current)
                current = [strip_bullet(line)]
            elif single and current and len(current) >= 2 and not CREDENTIAL_PATTERN.search(line):
                blocks.append(current)
                current = [line]
            else:
                current.append(line)
        if current:
            blocks.append(current)
    return blocks


def _build_certification(block: List[str]) -> Optional[CertificationEntry]:
    entry = CertificationEntry()
    lines = list(block)

    for index, line in enumerate(lines):
        credential = CREDENTIAL_PATTERN.search(line)
        if credential:
            entry.credential_id = credential.group(1).strip(" ,;")
            lines[index] = line[: credential.start()].strip(" ,|-")
        url = URL_PATTERN.search(lines[index])
        if url and not entry.url:
            entry.url = url.group(0).rstrip(".")
            lines[index] = (lines[index][: url.start()] + lines[index][url.end():]).strip(" ,|-")
    lines = [line for line in lines if line]
    if not lines:
        return None

    first = lines[0]
    dates = find_dates(first)
    if dates:
        entry.date = dates.start_date
        if dates.is_range:
            entry.expiry_date = dates.end_date
        first = strip_span(first, dates.span)
    parts = [part.strip() for part in _SEPARATOR_SPLIT.split(first) if part.strip()]
    if len(parts) >= 2:
        entry.name, entry.issuer = parts[0], parts[1]
    elif ", " in first and _is_issuer(first.rsplit(", ", 1)[1], None):
        entry.name, entry.issuer = [part.strip() for part in first.rsplit(", ", 1)]
    else:
        entry.name = first

    rest = lines[1:]
    for index, line in enumerate(rest):
        line_dates = find_dates(line)
        remainder = strip_span(line, line_dates.span) if line_dates else line
        if re.match(r"^(?:expires?|expiry|valid until)\b", line, re.IGNORECASE) and line_dates:
            entry.expiry_date = line_dates.start_date
            continue
        if line_dates and not entry.date:
            entry.date = line_dates.start_date
            if line_dates.is_range:
                entry.expiry_date = line_dates.end_date
        if not remainder or re.fullmatch(r"(?:issued|expires?|expiry|valid until)", remainder, re.IGNORECASE):
            continue
        following = rest[index + 1] if index + 1 < len(rest) else None
        if not entry.issuer and _is_issuer(remainder, following if index == 0 else None):
            entry.issuer = remainder
        elif not entry.issuer and index == 0 and following is None and len(remainder) <= 60:
            entry.issuer = remainder

    if not entry.name:
        return None
    return _clear_placeholders(entry)


def extract_certifications(lines: Sequence[str]) -> Optional[List[CertificationEntry]]:
    entries = [entry for entry in map(_build_certification, _certification_blocks(lines)) if entry is not None]
    return entries or None


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


def _build_project(block: List[str]) -> Optional[ProjectEntry]:
    entry = ProjectEntry()
    description: List[str] = []

    for line in block:
        if is_bullet(line):
            text = strip_bullet(line)
            tech = _TECH_LINE.match(text)
            if tech:
                entry.technologies.extend(split_items(tech.group(1)))
            elif text:
                entry.highlights.append(text)
            continue
        tech = _TECH_LINE.match(line)
        if tech:
            entry.technologies.extend(split_items(tech.group(1)))
            continue
        url = URL_PATTERN.search(line)
        if url and not entry.url:
            entry.url = url.group(0).rstrip(".")
            line = (line[: url.start()] + line[url.end():]).strip(" ,|-–:")
            line = re.sub(r"^(?:url|link|demo|github|repo)\s*:?\s*$", "", line, flags=re.IGNORECASE)
            if not line:
                continue
        dates = find_dates(line)
        if dates and not (entry.start_date or entry.end_date):
            if dates.is_range:
                entry.start_date = dates.start_date
                entry.end_date = dates.end_date or ("Present" if dates.current else "")
            else:
                entry.start_date = dates.start_date
            line = strip_span(line, dates.span)
            if not line:
                continue
        if not entry.name:
            parts = [part.strip() for part in _SEPARATOR_SPLIT.split(line) if part.strip()]
            entry.name = parts[0] if parts else line
            if len(parts) >= 2:
                tail = " ".join(parts[1:])
                if "," in tail or len(parts) > 2 or len(tail.split()) <= 3:
                    entry.technologies.extend(split_items(", ".join(parts[1:])))
                else:
                    description.append(tail)
            continue
        description.append(line)

    entry.description = "\n".join(description)
    entry.technologies = list(dict.fromkeys(entry.technologies))
    if not entry.name:
        return None
    return entry


def _project_blocks(lines: Sequence[str]) -> List[List[str]]:
    blocks: List[List[str]] = []
    for block in paragraphs(lines):
        current: List[str] = []
        for line in block:
            new_name = (
                current
                and not is_bullet(line)
                and any(is_bullet(previous) for previous in current)
                and is_header_like(line)
                and not _TECH_LINE.match(line)
            )
            if new_name:
                blocks.append(current)
                current = []
            current.append(line)
        if current:
            blocks.append(current)
    return blocks


def extract_projects(lines: Sequence[str]) -> Optional[List[ProjectEntry]]:
    entries = [entry for entry in map(_build_project, _project_blocks(lines)) if entry is not None]
    return entries or None


# ---------------------------------------------------------------------------
# Languages
# ---------------------------------------------------------------------------


def _proficiency(level: str) -> str:
    key = re.sub(r"\s+", " ", level.strip().lower())
    key = re.sub(r"\s*(?:proficiency|speaker|level)$", "", key).strip()
    if key in PROFICIENCY_MAP:
        return PROFICIENCY_MAP[key]
    for phrase, value in PROFICIENCY_MAP.items():
        if len(phrase) > 2 and phrase in key:
            return value
    return "intermediate"


def extract_languages(lines: Sequence[str]) -> Optional[List[LanguageEntry]]:
    entries: List[LanguageEntry] = []
    seen = set()
    for line in _nonblank(lines):
        text = strip_bullet(line) if is_bullet(line) else line
        for item in split_items(text):
            name, level = item, ""
            for pattern in _LANGUAGE_FORMS:
                match = pattern.match(item)
                if match:
                    name, level = match.group("name"), match.group("level")
                    break
            name = name.strip()
            if len(name) < 2 or name.lower() in seen or re.search(r"\d", name):
                continue
            seen.add(name.lower())
            entries.append(LanguageEntry(name=name, proficiency=_proficiency(level) if level else "intermediate"))
    return entries or None


# ---------------------------------------------------------------------------
# Per-line sections
# ---------------------------------------------------------------------------


def _line_parts(line: str) -> Tuple[List[str], str]:
    """Split a per-line entry into separator parts plus its trailing date."""
    text = strip_bullet(line) if is_bullet(line) else line
    date = ""
    dates = find_dates(text)
    if dates:
        date = dates.start_date if not dates.is_range else f"{dates.start_date} - {dates.end_date or 'Present'}"
        text = strip_span(text, dates.span)
    parts = [part.strip() for part in _SEPARATOR_SPLIT.split(text) if part.strip()]
    if len(parts) == 1 and ", " in parts[0]:
        head, tail = parts[0].split(", ", 1)
        parts = [head.strip(), tail.strip()]
    return parts, date


def _per_line(lines: Sequence[str]) -> List[Tuple[List[str], str, List[str]]]:
    """Each entry line with its parts, date and any indented continuation lines."""
    rows: List[Tuple[List[str], str, List[str]]] = []
    for line in _nonblank(lines):
        parts, date = _line_parts(line)
        if not parts and date and rows:
            previous_parts, previous_date, extra = rows[-1]
            if not previous_date:
                rows[-1] = (previous_parts, date, extra)
            continue
        if rows and not is_bullet(line) and line[0].islower():
            rows[-1][2].append(line)
            continue
        if parts:
            rows.append((parts, date, []))
    return rows


def extract_awards(lines: Sequence[str]) -> Optional[List[AwardEntry]]:
    entries = []
    for parts, date, extra in _per_line(lines):
        entries.append(
            AwardEntry(
                title=parts[0],
                issuer=parts[1] if len(parts) > 1 else "",
                date=date,
                description=" ".join(parts[2:] + extra),
            )
        )
    return entries or None


def extract_publications(lines: Sequence[str]) -> Optional[List[PublicationEntry]]:
    entries = []
    for parts, date, extra in _per_line(lines):
        url = ""
        kept = []
        for part in parts:
            match = URL_PATTERN.search(part)
            if match and not url:
                url = match.group(0).rstrip(".")
                part = (part[: match.start()] + part[match.end():]).strip(" ,")
            if part:
                kept.append(part)
        if not kept:
            continue
        title, publisher, rest = kept[0].strip('"“”'), "", kept[1:]
        for index, part in enumerate(rest):
            if PUBLISHER_WORDS.search(part):
                publisher = rest.pop(index)
                break
        else:
            if rest:
                publisher = rest.pop(0)
        entries.append(
            PublicationEntry(title=title, publisher=publisher, date=date, url=url, description=" ".join(rest + extra))
        )
    return entries or None


def extract_affiliations(lines: Sequence[str]) -> Optional[List[AffiliationEntry]]:
    entries = []
    for parts, date, _ in _per_line(lines):
        organization, role = parts[0], parts[1] if len(parts) > 1 else ""
        if role and ROLE_WORDS.search(organization) and not ROLE_WORDS.search(role):
            organization, role = role, organization
        start_date, _, end_date = date.partition(" - ")
        entries.append(AffiliationEntry(organization=organization, role=role, start_date=start_date, end_date=end_date))
    return entries or None


def extract_courses(lines: Sequence[str]) -> Optional[List[CourseEntry]]:
    entries = []
    for line in _nonblank(lines):
        coursework = _COURSEWORK_LINE.match(strip_bullet(line) if is_bullet(line) else line)
        if coursework:
            entries.extend(CourseEntry(name=name) for name in split_items(coursework.group(1)))
            continue
        parts, date = _line_parts(line)
        if not parts:
            continue
        entries.append(
            CourseEntry(
                name=parts[0],
                institution=parts[1] if len(parts) > 1 else "",
                completion_date=date,
                description=" ".join(parts[2:]),
            )
        )
    return entries or None


def extract_references(lines: Sequence[str]) -> Optional[List[ReferenceEntry]]:
    body = _nonblank(lines)
    if not body:
        return None
    if any(_REQUEST_ONLY.search(line) for line in body):
        return []

    entries = []
    for block in paragraphs(lines):
        entry = ReferenceEntry()
        leftovers: List[str] = []
        for line in block:
            text = strip_bullet(line) if is_bullet(line) else line
            email = EMAIL_PATTERN.search(text)
            phone = PHONE_PATTERN.search(text)
            if email:
                entry.email = email.group(0)
                text = text.replace(email.group(0), "")
            if phone:
                entry.phone = phone.group(0)
                text = text.replace(phone.group(0), "")
            text = re.sub(r"(?i)\b(?:email|e-mail|phone|tel|mobile)\s*:?", "", text).strip(" ,|-:")
            if text:
                leftovers.extend(part.strip() for part in _SEPARATOR_SPLIT.split(text) if part.strip())
        if not leftovers:
            continue
        entry.name = leftovers.pop(0)
        for part in leftovers:
            relationship = re.match(r"^(?:relationship\s*:\s*)?(.*\b(?:former|current)\b.*)$", part, re.IGNORECASE)
            if relationship and not entry.relationship:
                entry.relationship = relationship.group(1)
            elif not entry.title and (has_title_word(part) or not entry.company) and "," in part:
                title, company = [piece.strip() for piece in part.split(",", 1)]
                entry.title, entry.company = title, company
            elif not entry.title and has_title_word(part):
                entry.title = part
            elif not entry.company:
                entry.company = part
            elif not entry.relationship:
                entry.relationship = part
        entries.append(entry)
    return entries or None


# ---------------------------------------------------------------------------
# Custom sections
# ---------------------------------------------------------------------------


def extract_custom_sections(lines: Sequence[str], title: str = "") -> Optional[List[CustomSection]]:
    """Turn an unrecognized block into one custom section with an entry per paragraph."""
    entries: List[CustomSectionEntry] = []
    for block in paragraphs(lines):
        entry = CustomSectionEntry()
        text_lines: List[str] = []
        for line in block:
            if is_bullet(line):
                text = strip_bullet(line)
                if text:
                    entry.highlights.append(text)
            elif not entry.title:
                dates = find_dates(line)
                if dates:
                    entry.date = dates.start_date if not dates.is_range else f"{dates.start_date} - {dates.end_date or 'Present'}"
                    line = strip_span(line, dates.span)
                parts = [part.strip() for part in _SEPARATOR_SPLIT.split(line) if part.strip()]
                entry.title = parts[0] if parts else ""
                entry.subtitle = " | ".join(parts[1:])
            else:
                text_lines.append(line)
        entry.description = "\n".join(text_lines)
        if entry.title or entry.highlights or entry.description:
            entries.append(entry)
    if not entries:
        return None
    return [CustomSection(title=title or "Additional Information", entries=entries)]


# ---------------------------------------------------------------------------
# Scalar sections
# ---------------------------------------------------------------------------


def extract_summary(lines: Sequence[str]) -> Optional[str]:
    text = "\n".join(_nonblank(lines)).strip()
    return text or None


def extract_hobbies(lines: Sequence[str]) -> Optional[List[str]]:
    items: List[str] = []
    for line in _nonblank(lines):
        text = strip_bullet(line) if is_bullet(line) else line
        for item in split_items(text):
            item = _clean_skill(item)
            if len(item) >= 2 and item not in items:
                items.append(item)
    return items or None


ARRAY_EXTRACTORS: Dict[Section, Callable[[Sequence[str]], Optional[list]]] = {
    Section.EXPERIENCE: extract_experience,
    Section.EDUCATION: extract_education,
    Section.SKILLS: extract_skills,
    Section.PROJECTS: extract_projects,
    Section.CERTIFICATIONS: extract_certifications,
    Section.LANGUAGES: extract_languages,
    Section.VOLUNTEER: extract_volunteer,
    Section.AWARDS: extract_awards,
    Section.PUBLICATIONS: extract_publications,
    Section.REFERENCES: extract_references,
    Section.AFFILIATIONS: extract_affiliations,
    Section.COURSES: extract_courses,
    Section.CUSTOM_SECTIONS: extract_custom_sections,
}
