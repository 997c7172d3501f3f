"""Resume data model shared by the parser, the scorer and the review state.

``ResumeData`` is the full record with defaults everywhere. ``PartialResumeData``
is what the text parser produces: a section is ``None`` when it was not found,
which is different from a section that was found but came out empty.
"""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Type

from pydantic import BaseModel, Field, field_validator

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MAX_HIGHLIGHT_LENGTH = 500
MAX_SUMMARY_LENGTH = 2000

LanguageProficiency = Literal["native", "fluent", "advanced", "intermediate", "beginner"]


def generate_id() -> str:
    """Return a fresh entry id."""
    return uuid.uuid4().hex


def clip_highlight(text: str) -> str:
    return text[:MAX_HIGHLIGHT_LENGTH]


def clip_summary(text: str) -> str:
    return text[:MAX_SUMMARY_LENGTH]


# ---------------------------------------------------------------------------
# Scalar sections
# ---------------------------------------------------------------------------


class ContactData(BaseModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    website: str = ""
    linkedin: str = ""
    github: str = ""
    portfolio: str = ""
    title: str = ""


class SummaryData(BaseModel):
    text: str = ""

    @field_validator("text")
    @classmethod
    def _clip_text(cls, value: str) -> str:
        return clip_summary(value)


class HobbiesData(BaseModel):
    items: List[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Repeated entries
# ---------------------------------------------------------------------------


class _Entry(BaseModel):
    id: str = Field(default_factory=generate_id)


class _HighlightedEntry(_Entry):
    description: str = ""
    highlights: List[str] = Field(default_factory=list)

    @field_validator("highlights")
    @classmethod
    def _clip_highlights(cls, value: List[str]) -> List[str]:
        return [clip_highlight(item) for item in value]


class ExperienceEntry(_HighlightedEntry):
    company: str = ""
    position: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False


class EducationEntry(_HighlightedEntry):
    institution: str = ""
    degree: str = ""
    field: str = ""
    start_date: str = ""
    end_date: str = ""
    gpa: str = ""


class ProjectEntry(_HighlightedEntry):
    name: str = ""
    technologies: List[str] = Field(default_factory=list)
    url: str = ""
    start_date: str = ""
    end_date: str = ""


class VolunteerEntry(_HighlightedEntry):
    organization: str = ""
    role: str = ""
    start_date: str = ""
    end_date: str = ""


class CertificationEntry(_Entry):
    name: str = ""
    issuer: str = ""
    date: str = ""
    expiry_date: str = ""
    credential_id: str = ""
    url: str = ""


class LanguageEntry(_Entry):
    name: str = ""
    proficiency: LanguageProficiency = "intermediate"


class AwardEntry(_Entry):
    title: str = ""
    issuer: str = ""
    date: str = ""
    description: str = ""


class PublicationEntry(_Entry):
    title: str = ""
    publisher: str = ""
    date: str = ""
    url: str = ""
    description: str = ""


class ReferenceEntry(_Entry):
    name: str = ""
    title: str = ""
    company: str = ""
    email: str = ""
    phone: str = ""
    relationship: str = ""


class AffiliationEntry(_Entry):
    organization: str = ""
    role: str = ""
    start_date: str = ""
    end_date: str = ""


class CourseEntry(_Entry):
    name: str = ""
    institution: str = ""
    completion_date: str = ""
    description: str = ""


class SkillItem(BaseModel):
    name: str
    proficiency: int = Field(default=3, ge=1, le=5)


class SkillCategory(_Entry):
    category: str = ""
    items: List[SkillItem] = Field(default_factory=list)


class CustomSectionEntry(_HighlightedEntry):
    title: str = ""
    subtitle: str = ""
    date: str = ""


class CustomSection(_Entry):
    title: str = ""
    entries: List[CustomSectionEntry] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------


class ResumeData(BaseModel):
    contact: ContactData = Field(default_factory=ContactData)
    summary: SummaryData = Field(default_factory=SummaryData)
    experience: List[ExperienceEntry] = Field(default_factory=list)
    education: List[EducationEntry] = Field(default_factory=list)
    skills: List[SkillCategory] = Field(default_factory=list)
    projects: List[ProjectEntry] = Field(default_factory=list)
    certifications: List[CertificationEntry] = Field(default_factory=list)
    languages: List[LanguageEntry] = Field(default_factory=list)
    volunteer: List[VolunteerEntry] = Field(default_factory=list)
    awards: List[AwardEntry] = Field(default_factory=list)
    publications: List[PublicationEntry] = Field(default_factory=list)
    references: List[ReferenceEntry] = Field(default_factory=list)
    hobbies: HobbiesData = Field(default_factory=HobbiesData)
    affiliations: List[AffiliationEntry] = Field(default_factory=list)
    courses: List[CourseEntry] = Field(default_factory=list)
    custom_sections: List[CustomSection] = Field(default_factory=list)


class PartialResumeData(BaseModel):
    """Parser output. ``None`` means the section was not found."""

    contact: Optional[ContactData] = None
    summary: Optional[SummaryData] = None
    experience: Optional[List[ExperienceEntry]] = None
    education: Optional[List[EducationEntry]] = None
    skills: Optional[List[SkillCategory]] = None
    projects: Optional[List[ProjectEntry]] = None
    certifications: Optional[List[CertificationEntry]] = None
    languages: Optional[List[LanguageEntry]] = None
    volunteer: Optional[List[VolunteerEntry]] = None
    awards: Optional[List[AwardEntry]] = None
    publications: Optional[List[PublicationEntry]] = None
    references: Optional[List[ReferenceEntry]] = None
    hobbies: Optional[HobbiesData] = None
    affiliations: Optional[List[AffiliationEntry]] = None
    courses: Optional[List[CourseEntry]] = None
    custom_sections: Optional[List[CustomSection]] = None

    def present_sections(self) -> List[str]:
        return [name for name in type(self).model_fields if getattr(self, name) is not None]

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


def empty_resume_data() -> ResumeData:
    return ResumeData()


@dataclass(frozen=True)
class UnmatchedChunk:
    """Text the parser could not assign to a section.

    Offsets index the original input, so ``source[start_offset:end_offset] == text``.
    """

    text: str
    start_offset: int
    end_offset: int


# ---------------------------------------------------------------------------
# Section registry
# ---------------------------------------------------------------------------


class Section(str, Enum):
    CONTACT = "contact"
    SUMMARY = "summary"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"
    PROJECTS = "projects"
    CERTIFICATIONS = "certifications"
    LANGUAGES = "languages"
    VOLUNTEER = "volunteer"
    AWARDS = "awards"
    PUBLICATIONS = "publications"
    REFERENCES = "references"
    HOBBIES = "hobbies"
    AFFILIATIONS = "affiliations"
    COURSES = "courses"
    CUSTOM_SECTIONS = "custom_sections"

    @property
    def is_array(self) -> bool:
        return self not in (Section.CONTACT, Section.SUMMARY, Section.HOBBIES)

    @classmethod
    def lookup(cls, name: Any) -> Optional["Section"]:
        """Resolve *name* to a section, or ``None`` if it names nothing known.

        Accepts members, snake_case and camelCase names, and ``interests``
        as an alias for hobbies.
        """
        if isinstance(name, Section):
            return name
        if not isinstance(name, str):
            return None
        key = re.sub(r"(?<=[a-z])(?=[A-Z])", "_", name.strip()).lower().replace("-", "_")
        key = _SECTION_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            return None


_SECTION_ALIASES: Dict[str, str] = {
    "interests": "hobbies",
    "customsections": "custom_sections",
    "work": "experience",
    "certs": "certifications",
}

ARRAY_SECTIONS: List[Section] = [s for s in Section if s.is_array]

ENTRY_MODELS: Dict[Section, Type[BaseModel]] = {
    Section.EXPERIENCE: ExperienceEntry,
    Section.EDUCATION: EducationEntry,
    Section.SKILLS: SkillCategory,
    Section.PROJECTS: ProjectEntry,
    Section.CERTIFICATIONS: CertificationEntry,
    Section.LANGUAGES: LanguageEntry,
    Section.VOLUNTEER: VolunteerEntry,
    Section.AWARDS: AwardEntry,
    Section.PUBLICATIONS: PublicationEntry,
    Section.REFERENCES: ReferenceEntry,
    Section.AFFILIATIONS: AffiliationEntry,
    Section.COURSES: CourseEntry,
    Section.CUSTOM_SECTIONS: CustomSection,
}


def merge_partial_into(base: ResumeData, partial: PartialResumeData) -> ResumeData:
    """Commit reviewed *partial* data onto *base*, returning a new record.

    Sections present in *partial* replace the ones in *base*; contact fields
    merge individually and only non-empty values win. Merged entries get
    fresh ids.
    """
    merged = base.model_copy(deep=True)

    if partial.contact is not None:
        updates = {key: value for key, value in partial.contact.model_dump().items() if value}
        merged.contact = merged.contact.model_copy(update=updates)
    if partial.summary is not None and partial.summary.text:
        merged.summary = SummaryData(text=partial.summary.text)
    if partial.hobbies is not None:
        merged.hobbies = HobbiesData(items=list(partial.hobbies.items))

    for section in ARRAY_SECTIONS:
        entries = getattr(partial, section.value)
        if entries is None:
            continue
        setattr(
            merged,
            section.value,
            [entry.model_copy(update={"id": generate_id()}, deep=True) for entry in entries],
        )
    return merged
