"""Pure domain logic for turning extracted resume text into structured data.

The parser is rule-based and total: it never raises. Text it cannot place in a
section comes back as :class:`UnmatchedChunk` objects whose offsets point into
the original input. All functions operate on content strings -- no file I/O.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple, Union

from .models import (
    ContactData,
    HobbiesData,
    PartialResumeData,
    Section,
    SummaryData,
    UnmatchedChunk,
)
from .resume_sections import (
    ARRAY_EXTRACTORS,
    COMPANY_INDICATORS,
    EMAIL_PATTERN,
    GITHUB_PATTERN,
    LINKEDIN_PATTERN,
    PHONE_PATTERN,
    URL_PATTERN,
    extract_custom_sections,
    extract_hobbies,
    extract_summary,
    find_dates,
    has_title_word,
    is_bullet,
    looks_like_location,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

SECTION_HEADINGS: Dict[Section, Tuple[str, ...]] = {
    Section.CONTACT: (
        "contact",
        "contact information",
        "contact info",
        "contact details",
        "personal information",
        "personal details",
    ),
    Section.SUMMARY: (
        "summary",
        "professional summary",
        "executive summary",
        "career summary",
        "summary of qualifications",
        "qualifications summary",
        "profile",
        "professional profile",
        "career profile",
        "about me",
        "about",
        "objective",
        "career objective",
        "professional objective",
        "overview",
        "career overview",
        "personal statement",
    ),
    Section.EXPERIENCE: (
        "experience",
        "work experience",
        "professional experience",
        "relevant experience",
        "employment",
        "employment history",
        "work history",
        "career history",
        "career experience",
        "professional background",
        "positions held",
        "work",
    ),
    Section.EDUCATION: (
        "education",
        "academic background",
        "educational background",
        "academic qualifications",
        "academic history",
        "academics",
        "education and training",
        "education and certifications",
    ),
    Section.SKILLS: (
        "skills",
        "technical skills",
        "core skills",
        "key skills",
        "professional skills",
        "skills summary",
        "skill set",
        "skillset",
        "skills and abilities",
        "core competencies",
        "competencies",
        "areas of expertise",
        "expertise",
        "technologies",
        "technical proficiencies",
        "tools and technologies",
        "soft skills",
        "hard skills",
    ),
    Section.PROJECTS: (
        "projects",
        "personal projects",
        "key projects",
        "academic projects",
        "side projects",
        "selected projects",
        "relevant projects",
        "portfolio",
        "open source",
        "open source contributions",
    ),
    Section.CERTIFICATIONS: (
        "certifications",
        "certification",
        "certificates",
        "licenses",
        "licenses and certifications",
        "certifications and licenses",
        "professional certifications",
        "credentials",
        "accreditations",
    ),
    Section.LANGUAGES: (
        "languages",
        "language skills",
        "spoken languages",
        "language proficiency",
    ),
    Section.VOLUNTEER: (
        "volunteer",
        "volunteering",
        "volunteer experience",
        "volunteer work",
        "community service",
        "community involvement",
    ),
    Section.AWARDS: (
        "awards",
        "honors",
        "honours",
        "awards and honors",
        "honors and awards",
        "awards and achievements",
        "achievements",
        "accomplishments",
        "recognition",
    ),
    Section.PUBLICATIONS: (
        "publications",
        "selected publications",
        "research publications",
        "papers",
        "research",
        "presentations",
        "publications and presentations",
    ),
    Section.REFERENCES: (
        "references",
        "professional references",
        "referees",
    ),
    Section.HOBBIES: (
        "hobbies",
        "interests",
        "hobbies and interests",
        "personal interests",
        "activities",
        "extracurricular activities",
    ),
    Section.AFFILIATIONS: (
        "affiliations",
        "professional affiliations",
        "memberships",
        "professional memberships",
        "organizations",
        "associations",
    ),
    Section.COURSES: (
        "courses",
        "coursework",
        "relevant coursework",
        "training",
        "professional development",
        "continuing education",
        "courses and training",
    ),
}

SECTION_KEYWORDS: Dict[Section, frozenset] = {
    Section.SUMMARY: frozenset({"summary", "profile", "objective", "overview"}),
    Section.EXPERIENCE: frozenset({"experience", "employment", "work", "career"}),
    Section.EDUCATION: frozenset({"education", "academic", "academics", "educational", "degrees"}),
    Section.SKILLS: frozenset({"skills", "competencies", "expertise", "proficiencies", "technologies", "abilities"}),
    Section.PROJECTS: frozenset({"projects", "portfolio"}),
    Section.CERTIFICATIONS: frozenset({"certifications", "certificates", "licenses", "licensure", "credentials"}),
    Section.LANGUAGES: frozenset({"languages"}),
    Section.VOLUNTEER: frozenset({"volunteer", "volunteering", "community"}),
    Section.AWARDS: frozenset({"awards", "honors", "honours", "achievements", "accomplishments"}),
    Section.PUBLICATIONS: frozenset({"publications", "papers", "presentations"}),
    Section.REFERENCES: frozenset({"references", "referees"}),
    Section.HOBBIES: frozenset({"hobbies", "interests", "activities"}),
    Section.AFFILIATIONS: frozenset({"affiliations", "memberships", "organizations"}),
    Section.COURSES: frozenset({"courses", "coursework", "training"}),
}

_NEUTRAL_HEADING_WORDS = frozenset(
    {
        "and", "of", "the", "my", "relevant", "selected", "key", "personal", "professional",
        "technical", "core", "additional", "other", "recent", "notable", "history", "information",
    }
)

# Inline "Heading: content" forms accepted once a section is already open.
_INLINE_AFTER_OPEN = frozenset({Section.SUMMARY, Section.REFERENCES, Section.HOBBIES})

_ENTRY_SECTIONS = frozenset({Section.EXPERIENCE, Section.VOLUNTEER, Section.EDUCATION, Section.PROJECTS})

_UNICODE_BULLET = re.compile(r"^\s*[•●▪◦‣■►▸➢➤–—]\s*")
_INLINE_BULLETS = re.compile(r"\s+[•●▪◦‣]\s+")
_GLUED_URL = re.compile(r"(?<=[A-Za-z0-9])(?=(?:https?://|github\.com/|linkedin\.com/))")
_INLINE_HEADING = re.compile(r"^([A-Za-z][A-Za-z &/]{1,40}?)\s*:\s*(\S.*)$")
_CONTACT_SEGMENT_SPLIT = re.compile(r"\s*[|•·]\s*|\s+[-–—]\s+")
_NAME_TOKEN = re.compile(r"^[A-Za-z][A-Za-z.'\-]*$")
_ZIP_SUFFIX = re.compile(r"\s+\d{5}(?:-\d{4})?$")
_PORTFOLIO_HOSTS = re.compile(r"behance\.net|dribbble\.com|portfolio", re.IGNORECASE)
_NOT_NAME_WORDS = frozenset({"resume", "curriculum", "vitae", "cv", "page"})

_MAX_HEADING_LENGTH = 60
_CONTACT_SCAN_LINES = 10
_MIN_IMPLICIT_SUMMARY = 20


def _build_heading_lookup() -> Dict[str, Section]:
    lookup: Dict[str, Section] = {}
    for section, phrases in SECTION_HEADINGS.items():
        for phrase in phrases:
            lookup[phrase] = section
    return lookup


_HEADING_LOOKUP: Dict[str, Section] = _build_heading_lookup()


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------


@dataclass
class SectionSpan:
    section: str
    start_offset: int
    end_offset: int


@dataclass
class ParseResult:
    """Parser output plus what it could not place."""

    data: PartialResumeData
    unmatched_chunks: List[UnmatchedChunk] = field(default_factory=list)
    sections: List[SectionSpan] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "data": self.data.to_dict(),
            "unmatched_chunks": [
                {"text": c.text, "start_offset": c.start_offset, "end_offset": c.end_offset}
                for c in self.unmatched_chunks
            ],
            "sections": [
                {"section": s.section, "start_offset": s.start_offset, "end_offset": s.end_offset}
                for s in self.sections
            ],
        }


@dataclass
class _Line:
    text: str
    start: int
    end: int


@dataclass
class _Block:
    section: Optional[Section]
    heading: _Line
    lines: List[_Line] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_resume_text(text: str) -> PartialResumeData:
    """Parse raw resume text into a :class:`PartialResumeData`.

    Sections that were not found are ``None``; contact is always present.
    """
    return parse_resume_text_with_metadata(text).data


def parse_resume_text_with_metadata(text: str) -> ParseResult:
    """Parse *text* and also report unmatched chunks and detected section spans."""
    if not text or not text.strip():
        return ParseResult(data=PartialResumeData(contact=ContactData()))

    lines = _split_lines(text)
    preamble, blocks = _segment(lines)
    logger.debug("Detected sections: %s", [b.section.value if b.section else "?" for b in blocks])

    contact_area = preamble + [line for b in blocks if b.section is Section.CONTACT for line in b.lines]
    contact, consumed = _extract_contact(contact_area, lines)

    found: Dict[Section, Any] = {}
    chunks: List[UnmatchedChunk] = []
    spans: List[SectionSpan] = []

    for block in blocks:
        if block.section is Section.CONTACT:
            _add_span(spans, block)
            continue
        if block.section is None:
            chunks.append(_chunk(text, [block.heading] + block.lines))
            continue

        value = _extract_block(block)
        if value is None:
            if any(line.text for line in block.lines):
                logger.debug("Section %s yielded no entries; keeping it as unmatched text", block.section.value)
                chunks.append(_chunk(text, [block.heading] + block.lines))
            continue
        _accumulate(found, block.section, value)
        _add_span(spans, block)

    leftovers = _leftover_groups(contact_area, consumed)
    if leftovers and blocks and Section.SUMMARY not in found:
        implicit = "\n".join(line.text for line in leftovers[0])
        if len(implicit) >= _MIN_IMPLICIT_SUMMARY and not any(is_bullet(line.text) for line in leftovers[0]):
            found[Section.SUMMARY] = implicit
            leftovers = leftovers[1:]
    for group in leftovers:
        chunks.append(_chunk(text, group))

    chunks.sort(key=lambda chunk: chunk.start_offset)
    return ParseResult(data=_to_partial(contact, found), unmatched_chunks=chunks, sections=spans)


def extract_section_content(
    section: Union[Section, str], text: str
) -> Optional[Union[List[Any], str, List[str]]]:
    """Parse *text* as the body of *section*.

    Returns entries for array sections, a string for summary, an item list for
    hobbies, or ``None`` when nothing usable comes out.
    """
    target = Section.lookup(section)
    if target is None or target is Section.CONTACT or not text or not text.strip():
        return None

    body = [line.text for line in _split_lines(text)]
    while body and not body[0]:
        body.pop(0)
    title = ""
    if body and (_match_heading(body[0], None)[0] is not None or _is_caps_heading(body[0])):
        title = body.pop(0).strip(" :")

    try:
        if target is Section.SUMMARY:
            return extract_summary(body)
        if target is Section.HOBBIES:
            return extract_hobbies(body)
        if target is Section.CUSTOM_SECTIONS:
            return extract_custom_sections(body, title=title)
        return ARRAY_EXTRACTORS[target](body)
    except Exception:
        logger.warning("Could not extract %s content", target.value, exc_info=True)
        return None


def detect_section_heading(line: str) -> Optional[Section]:
    """Return the section a standalone heading line names, if any."""
    section, inline = _match_heading(line.strip(), None)
    return section if not inline else None


def format_parse_report(result: ParseResult) -> str:
    """Render a :class:`ParseResult` as a human-readable report."""
    data = result.data
    contact = data.contact or ContactData()
    name = " ".join(part for part in (contact.first_name, contact.last_name) if part) or "(no name found)"

    lines = [f"## Resume Import: {name}", ""]
    details = [
        ("Email", contact.email),
        ("Phone", contact.phone),
        ("Location", contact.location),
        ("LinkedIn", contact.linkedin),
        ("GitHub", contact.github),
        ("Website", contact.website),
    ]
    for label, value in details:
        if value:
            lines.append(f"- **{label}:** {value}")

    lines.append("")
    lines.append("| Section        | Found | Entries |")
    lines.append("|----------------|-------|---------|")
    for section in Section:
        if section is Section.CONTACT:
            continue
        value = getattr(data, section.value)
        if value is None:
            continue
        if section is Section.SUMMARY:
            count = 1 if value.text else 0
        elif section is Section.HOBBIES:
            count = len(value.items)
        else:
            count = len(value)
        lines.append(f"| {section.value:<14} | yes   | {count:7d} |")

    if result.unmatched_chunks:
        lines.append("")
        lines.append(f"### Unmatched Text ({len(result.unmatched_chunks)})")
        for i, chunk in enumerate(result.unmatched_chunks, 1):
            preview = chunk.text.strip().replace("\n", " / ")
            if len(preview) > 80:
                preview = preview[:77] + "..."
            lines.append(f"{i}. [{chunk.start_offset}:{chunk.end_offset}] {preview}")

    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Lines and segmentation
# ---------------------------------------------------------------------------


def _clean(raw: str) -> str:
    text = raw.replace("\t", " ").replace("\u00a0", " ").replace("\u200b", "")
    text = text.replace("\u2019", "'").replace("\u2018", "'")
    text = _UNICODE_BULLET.sub("- ", text) if _UNICODE_BULLET.match(text) else text
    text = _GLUED_URL.sub(" ", text)
    return re.sub(r" {2,}", " ", text).strip()


def _split_lines(text: str) -> List[_Line]:
    lines: List[_Line] = []
    offset = 0
    for part in text.split("\n"):
        body = part[:-1] if part.endswith("\r") else part
        start, end = offset, offset + len(body)
        offset += len(part) + 1
        pieces = _INLINE_BULLETS.split(body)
        if len(pieces) > 1 and _UNICODE_BULLET.match(body):
            # "• one • two" packed on a single line.
            for piece in pieces:
                cleaned = _clean(piece)
                if cleaned:
                    lines.append(_Line(cleaned if is_bullet(cleaned) else f"- {cleaned}", start, end))
            continue
        lines.append(_Line(_clean(body), start, end))
    return lines


def _heading_key(text: str) -> str:
    key = text.strip().strip("-=_*#~|:•· ").strip()
    key = key.replace("&", " and ")
    key = re.sub(r"\s+", " ", key).lower().strip(" :")
    if re.fullmatch(r"(?:[a-z] )+[a-z]", key):
        key = key.replace(" ", "")
    return key


def _match_heading(text: str, current: Optional[Section]) -> Tuple[Optional[Section], str]:
    """Return ``(section, inline_content)`` for a heading line, else ``(None, "")``."""
    if not text or is_bullet(text):
        return None, ""

    inline = _INLINE_HEADING.match(text)
    if inline:
        content = inline.group(2)
        if EMAIL_PATTERN.search(content) or URL_PATTERN.search(content) or PHONE_PATTERN.search(content):
            return None, ""
        section = _HEADING_LOOKUP.get(_heading_key(inline.group(1)))
        allowed = current is None or (
            section in _INLINE_AFTER_OPEN and section is not current and current is not Section.SKILLS
        )
        if section is not None and section is not Section.CONTACT and allowed:
            return section, inline.group(2).strip()
        return None, ""

    if len(text) > _MAX_HEADING_LENGTH:
        return None, ""
    key = _heading_key(text)
    section = _HEADING_LOOKUP.get(key)
    if section is not None:
        return section, ""
    return _fuzzy_heading(text, key), ""


def _fuzzy_heading(text: str, key: str) -> Optional[Section]:
    if re.search(r"[\d@]", text) or len(key.split()) > 4:
        return None
    original = re.findall(r"[A-Za-z]+", text)
    significant = [word for word in original if word.lower() not in _NEUTRAL_HEADING_WORDS]
    if not significant:
        return None
    if not (text.isupper() or text.rstrip().endswith(":") or all(word[0].isupper() for word in significant)):
        return None

    words = [word.lower() for word in significant]
    best: Optional[Section] = None
    best_ratio = 0.0
    for section, keywords in SECTION_KEYWORDS.items():
        ratio = sum(1 for word in words if word in keywords) / len(words)
        if ratio > best_ratio:
            best, best_ratio = section, ratio
    return best if best_ratio >= 0.6 else None


def _is_caps_heading(text: str) -> bool:
    letters = [c for c in text if c.isalpha()]
    if len(letters) < 4 or is_bullet(text) or re.search(r"[\d@,]", text):
        return False
    if len(text.split()) > 5 or text.upper() != text:
        return False
    return not COMPANY_INDICATORS.search(text)


def _is_unknown_heading(lines: Sequence[_Line], index: int, current: Optional[Section]) -> bool:
    if not _is_caps_heading(lines[index].text):
        return False
    following = [line.text for line in lines[index + 1:] if line.text][:3]
    if not following:
        return False
    # Skills lists often group items under their own capitalised labels.
    if current is Section.SKILLS and _looks_like_item_list(following[0]):
        return False
    if current in _ENTRY_SECTIONS and any(find_dates(line) for line in following):
        return False
    return True


def _looks_like_item_list(text: str) -> bool:
    return bool(re.search(r"[,:|;•]", text))


def _segment(lines: List[_Line]) -> Tuple[List[_Line], List[_Block]]:
    preamble: List[_Line] = []
    blocks: List[_Block] = []
    current: Optional[_Block] = None
    previous_blank = True

    for index, line in enumerate(lines):
        if not line.text:
            (current.lines if current else preamble).append(line)
            previous_blank = True
            continue

        section, inline = _match_heading(line.text, current.section if current else None)
        if section is not None:
            current = _Block(section=section, heading=line)
            blocks.append(current)
            if inline:
                current.lines.append(_Line(inline, line.start, line.end))
        elif current is not None and previous_blank and _is_unknown_heading(lines, index, current.section):
            current = _Block(section=None, heading=line)
            blocks.append(current)
        elif current is None:
            preamble.append(line)
        else:
            current.lines.append(line)
        previous_blank = False

    return preamble, blocks


def _extract_block(block: _Block) -> Any:
    body = [line.text for line in block.lines]
    try:
        if block.section is Section.SUMMARY:
            return extract_summary(body)
        if block.section is Section.HOBBIES:
            return extract_hobbies(body)
        return ARRAY_EXTRACTORS[block.section](body)
    except Exception:
        logger.warning("Failed to parse %s section", block.section.value, exc_info=True)
        return None


def _accumulate(found: Dict[Section, Any], section: Section, value: Any) -> None:
    if section not in found:
        found[section] = value
    elif section is Section.SUMMARY:
        found[section] = f"{found[section]}\n{value}"
    else:
        found[section] = found[section] + value


def _chunk(text: str, lines: Sequence[_Line]) -> UnmatchedChunk:
    filled = [line for line in lines if line.text]
    start, end = filled[0].start, filled[-1].end
    return UnmatchedChunk(text=text[start:end], start_offset=start, end_offset=end)


def _add_span(spans: List[SectionSpan], block: _Block) -> None:
    filled = [line for line in block.lines if line.text] or [block.heading]
    spans.append(SectionSpan(block.section.value, block.heading.start, filled[-1].end))


def _leftover_groups(area: Sequence[_Line], consumed: Set[int]) -> List[List[_Line]]:
    groups: List[List[_Line]] = []
    current: List[_Line] = []
    for line in area:
        if not line.text or id(line) in consumed:
            if current:
                groups.append(current)
                current = []
            continue
        current.append(line)
    if current:
        groups.append(current)
    return groups


def _to_partial(contact: ContactData, found: Dict[Section, Any]) -> PartialResumeData:
    values: Dict[str, Any] = {"contact": contact}
    for section, value in found.items():
        if section is Section.SUMMARY:
            values["summary"] = SummaryData(text=value)
        elif section is Section.HOBBIES:
            values["hobbies"] = HobbiesData(items=value)
        else:
            values[section.value] = value
    return PartialResumeData(**values)


# ---------------------------------------------------------------------------
# Contact
# ---------------------------------------------------------------------------


def _extract_contact(area: Sequence[_Line], all_lines: Sequence[_Line]) -> Tuple[ContactData, Set[int]]:
    """Pull contact fields from the header area; returns the ids of lines used."""
    contact = ContactData()
    consumed: Set[int] = set()
    header = [line for line in area if line.text][:_CONTACT_SCAN_LINES]
    whole = "\n".join(line.text for line in all_lines)

    email = EMAIL_PATTERN.search(whole)
    if email:
        contact.email = email.group(0)

    phone = _first_match(PHONE_PATTERN, header) or PHONE_PATTERN.search(whole)
    if phone:
        contact.phone = phone.group(0).strip()

    linkedin = LINKEDIN_PATTERN.search(whole)
    if linkedin:
        contact.linkedin = linkedin.group(0).rstrip("/")
    github = GITHUB_PATTERN.search(whole)
    if github:
        contact.github = github.group(0)

    for line in header:
        if EMAIL_PATTERN.search(line.text) or PHONE_PATTERN.search(line.text):
            consumed.add(id(line))
        if LINKEDIN_PATTERN.search(line.text) or GITHUB_PATTERN.search(line.text):
            consumed.add(id(line))
        for url in URL_PATTERN.finditer(line.text):
            value = url.group(0).rstrip(".")
            if re.search(r"linkedin\.com|github\.com", value, re.IGNORECASE):
                continue
            consumed.add(id(line))
            if _PORTFOLIO_HOSTS.search(value):
                contact.portfolio = contact.portfolio or value
            elif not contact.website:
                contact.website = value

    name_index = _extract_name(header, contact)
    if name_index is not None:
        consumed.add(id(header[name_index]))
        title_line = header[name_index + 1] if name_index + 1 < len(header) else None
        if title_line is not None and not contact.title and _is_title_line(title_line.text):
            contact.title = title_line.text
            consumed.add(id(title_line))

    for line in header:
        for segment in _CONTACT_SEGMENT_SPLIT.split(line.text):
            candidate = _ZIP_SUFFIX.sub("", segment.strip())
            if not candidate or EMAIL_PATTERN.search(candidate):
                continue
            full_name = f"{contact.first_name} {contact.last_name}".strip()
            if candidate == full_name:
                continue
            if looks_like_location(candidate) and candidate.lower() not in {"remote", "hybrid"}:
                contact.location = candidate
                consumed.add(id(line))
                break
        if contact.location:
            break

    return contact, consumed


def _first_match(pattern: re.Pattern, lines: Sequence[_Line]) -> Optional[re.Match]:
    for line in lines:
        match = pattern.search(line.text)
        if match:
            return match
    return None


def _is_name_like(segment: str) -> bool:
    tokens = segment.split()
    if not 1 <= len(tokens) <= 4 or len(segment) > 40:
        return False
    if any(not _NAME_TOKEN.match(token) for token in tokens):
        return False
    if any(token.lower() in _NOT_NAME_WORDS for token in tokens):
        return False
    if has_title_word(segment) or _match_heading(segment, None)[0] is not None:
        return False
    return all(token[0].isupper() for token in tokens)


def _extract_name(header: Sequence[_Line], contact: ContactData) -> Optional[int]:
    for index, line in enumerate(header[:3]):
        segments = [seg.strip() for seg in _CONTACT_SEGMENT_SPLIT.split(line.text) if seg.strip()]
        if not segments:
            continue
        candidate = segments[0].split(",")[0].strip()
        if _is_name_like(candidate):
            if candidate.isupper():
                candidate = candidate.title()
            tokens = candidate.split()
            contact.first_name = tokens[0]
            contact.last_name = " ".join(tokens[1:])
            for segment in segments[1:]:
                if _is_title_line(segment):
                    contact.title = segment
                    break
            return index
        if EMAIL_PATTERN.search(line.text) or PHONE_PATTERN.search(line.text):
            return None
    return None


def _is_title_line(text: str) -> bool:
    if not text or len(text) > 80 or text.endswith(".") or is_bullet(text):
        return False
    if EMAIL_PATTERN.search(text) or PHONE_PATTERN.search(text) or URL_PATTERN.search(text):
        return False
    if _match_heading(text, None)[0] is not None:
        return False
    return has_title_word(text) and len(text.split()) <= 8
