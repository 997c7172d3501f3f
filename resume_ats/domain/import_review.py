"""Editable staging area for reviewing parsed resume data before it is saved.

``ImportReviewState`` owns a full copy of every section plus the parser's
unmatched chunks. Every mutation validates its references, records an undo
snapshot, then applies. A reference to an unknown section or an out-of-range
index is a no-op: nothing changes and nothing is recorded.

Single-writer, in-memory state -- no file I/O and no locking.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ValidationError

from .entry_warnings import EntryWarning, compute_experience_warnings
from .history import DEFAULT_HISTORY_LIMIT, UndoHistory
from .models import (
    ARRAY_SECTIONS,
    ENTRY_MODELS,
    ContactData,
    ExperienceEntry,
    HobbiesData,
    PartialResumeData,
    Section,
    SummaryData,
    UnmatchedChunk,
    clip_highlight,
    clip_summary,
    generate_id,
)
from .resume_parser import extract_section_content
from .resume_sections import PLACEHOLDER_IDS, PLACEHOLDER_URL, has_degree
from .synonyms import SYNONYM_MAP

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------


class Confidence(str, Enum):
    COMPLETE = "complete"
    INCOMPLETE = "incomplete"
    EMPTY = "empty"


BULLET_SECTIONS = frozenset({Section.EXPERIENCE, Section.EDUCATION, Section.PROJECTS, Section.VOLUNTEER})

_DEGREE_PREFIX = re.compile(
    r"^\s*(?:bachelor|master|associate|doctor|diploma|ph\.?\s?d|b\.?s\.?c?\b|b\.?a\b|m\.?s\.?c?\b|m\.?a\b|mba\b)",
    re.IGNORECASE,
)

_SHORT_SKILLS = frozenset(
    {
        "c", "r", "c#", "c++", "f#", "go", "sql", "aws", "gcp", "css", "git", "php", "vue", "ios",
        "ml", "ai", "ux", "ui", "seo", "sem", "api", "qa", "nlp", "etl", "bi", "crm", "erp", "sap",
        "java", "rust", "perl", "bash", "ruby", "dart", "lua", "html", "jira", "sass", "less", "jest",
        "figma", "excel", "linux", "unix", "scala", "swift", "react", "node", "redis", "kafka",
    }
)

_MIN_SKILLS_FOR_FRAGMENTATION = 4
_SHORT_SKILL_LENGTH = 5

_PLACEHOLDER_VALUES = frozenset({"n/a", "na", "tbd", "tba", "none", "placeholder", "xxx"})


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ReviewSnapshot:
    """Immutable point-in-time copy of the review state, used by undo/redo."""

    contact: ContactData
    summary: str
    hobbies: Tuple[str, ...]
    sections: Tuple[Tuple[str, Tuple[BaseModel, ...]], ...]
    unmatched_chunks: Tuple[UnmatchedChunk, ...]

    def section(self, name: str) -> List[BaseModel]:
        for key, entries in self.sections:
            if key == name:
                return [entry.model_copy(deep=True) for entry in entries]
        return []


# ---------------------------------------------------------------------------
# Review state
# ---------------------------------------------------------------------------


class ImportReviewState:
    """Mutable review model hydrated from parser output.

    Example:
        result = parse_resume_text_with_metadata(text)
        state = ImportReviewState(result.data, result.unmatched_chunks)
        state.swap_position_company(0)
        state.undo()
        partial = state.build_partial_resume_data()
    """

    def __init__(
        self,
        parsed: Optional[PartialResumeData] = None,
        unmatched_chunks: Optional[Sequence[UnmatchedChunk]] = None,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ):
        parsed = parsed or PartialResumeData()
        self._contact = (parsed.contact or ContactData()).model_copy(deep=True)
        self._summary = parsed.summary.text if parsed.summary else ""
        self._hobbies: List[str] = list(parsed.hobbies.items) if parsed.hobbies else []
        self._sections: Dict[Section, List[BaseModel]] = {
            section: [entry.model_copy(deep=True) for entry in (getattr(parsed, section.value) or [])]
            for section in ARRAY_SECTIONS
        }
        self._unmatched: List[UnmatchedChunk] = list(unmatched_chunks or [])
        self._history: UndoHistory[ReviewSnapshot] = UndoHistory(history_limit)

    # -- Read access ---------------------------------------------------------

    @property
    def contact(self) -> ContactData:
        return self._contact.model_copy()

    @property
    def summary(self) -> str:
        return self._summary

    @property
    def hobbies(self) -> List[str]:
        return list(self._hobbies)

    @property
    def unmatched_chunks(self) -> List[UnmatchedChunk]:
        return list(self._unmatched)

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    @property
    def history(self) -> UndoHistory[ReviewSnapshot]:
        return self._history

    def entries(self, section: Union[Section, str]) -> List[Any]:
        """Copies of the entries of an array section; empty for unknown names."""
        target = _array_section(section)
        if target is None:
            return []
        return [entry.model_copy(deep=True) for entry in self._sections[target]]

    def snapshot(self) -> ReviewSnapshot:
        return ReviewSnapshot(
            contact=self._contact.model_copy(deep=True),
            summary=self._summary,
            hobbies=tuple(self._hobbies),
            sections=tuple(
                (section.value, tuple(entry.model_copy(deep=True) for entry in entries))
                for section, entries in self._sections.items()
            ),
            unmatched_chunks=tuple(self._unmatched),
        )

    # -- Scalar sections -----------------------------------------------------

    def update_contact(self, field: str, value: str) -> None:
        if field not in ContactData.model_fields or not isinstance(value, str):
            logger.debug("Ignoring unknown contact field %r", field)
            return
        self._record()
        self._contact = self._contact.model_copy(update={field: value})

    def update_summary(self, text: str) -> None:
        self._record()
        self._summary = clip_summary(text or "")

    def update_hobbies(self, items: Sequence[str]) -> None:
        self._record()
        self._hobbies = [item.strip() for item in items if item and item.strip()]

    # -- Generic entry operations -------------------------------------------

    def add_entry(self, section: Union[Section, str], entry: Union[BaseModel, Mapping[str, Any]]) -> None:
        target = _array_section(section)
        if target is None:
            return
        model = _coerce_entry(target, entry)
        if model is None:
            return
        self._record()
        self._sections[target].append(model)

    def update_entry(self, section: Union[Section, str], index: int, updates: Mapping[str, Any]) -> None:
        target = _array_section(section)
        if target is None or not self._valid_index(target, index):
            return
        current = self._sections[target][index]
        values = {**current.model_dump(), **{k: v for k, v in dict(updates).items() if k != "id"}}
        try:
            updated = ENTRY_MODELS[target].model_validate(values)
        except ValidationError:
            logger.debug("Rejected update to %s[%d]", target.value, index, exc_info=True)
            return
        self._record()
        self._sections[target][index] = updated

    def remove_entry(self, section: Union[Section, str], index: int) -> None:
        target = _array_section(section)
        if target is None or not self._valid_index(target, index):
            return
        self._record()
        del self._sections[target][index]

    def reorder_entries(self, section: Union[Section, str], new_order: Sequence[int]) -> None:
        """Rearrange a section so position ``i`` holds the entry previously at ``new_order[i]``."""
        target = _array_section(section)
        if target is None:
            return
        entries = self._sections[target]
        if sorted(new_order) != list(range(len(entries))):
            return
        self._record()
        self._sections[target] = [entries[i] for i in new_order]

    def move_entry(self, section: Union[Section, str], from_index: int, to_index: int) -> None:
        target = _array_section(section)
        if target is None or not self._valid_index(target, from_index) or not self._valid_index(target, to_index):
            return
        self._record()
        entries = self._sections[target]
        entries.insert(to_index, entries.pop(from_index))

    # -- Bullet operations ---------------------------------------------------

    def update_bullet(
        self, entry_index: int, bullet_index: int, text: str, section: Union[Section, str] = Section.EXPERIENCE
    ) -> None:
        target = _bullet_section(section)
        if target is None or not self._valid_bullet(target, entry_index, bullet_index):
            return
        self._record()
        entry = self._sections[target][entry_index]
        highlights = list(entry.highlights)
        highlights[bullet_index] = clip_highlight(text)
        self._sections[target][entry_index] = entry.model_copy(update={"highlights": highlights})

    def remove_bullet(
        self, entry_index: int, bullet_index: int, section: Union[Section, str] = Section.EXPERIENCE
    ) -> None:
        target = _bullet_section(section)
        if target is None or not self._valid_bullet(target, entry_index, bullet_index):
            return
        self._record()
        entry = self._sections[target][entry_index]
        highlights = [h for i, h in enumerate(entry.highlights) if i != bullet_index]
        self._sections[target][entry_index] = entry.model_copy(update={"highlights": highlights})

    def add_bullet(self, entry_index: int, text: str = "", section: Union[Section, str] = Section.EXPERIENCE) -> None:
        target = _bullet_section(section)
        if target is None or not self._valid_index(target, entry_index):
            return
        self._record()
        entry = self._sections[target][entry_index]
        highlights = [*entry.highlights, clip_highlight(text)]
        self._sections[target][entry_index] = entry.model_copy(update={"highlights": highlights})

    def reorder_bullet(
        self, entry_index: int, from_index: int, to_index: int, section: Union[Section, str] = Section.EXPERIENCE
    ) -> None:
        target = _bullet_section(section)
        if (
            target is None
            or not self._valid_bullet(target, entry_index, from_index)
            or not self._valid_bullet(target, entry_index, to_index)
        ):
            return
        self._record()
        entry = self._sections[target][entry_index]
        highlights = list(entry.highlights)
        highlights.insert(to_index, highlights.pop(from_index))
        self._sections[target][entry_index] = entry.model_copy(update={"highlights": highlights})

    def move_bullet(
        self,
        from_entry: int,
        bullet_index: int,
        to_entry: int,
        section: Union[Section, str] = Section.EXPERIENCE,
    ) -> None:
        """Move one bullet to the end of another entry's highlights."""
        target = _bullet_section(section)
        if (
            target is None
            or from_entry == to_entry
            or not self._valid_bullet(target, from_entry, bullet_index)
            or not self._valid_index(target, to_entry)
        ):
            return
        self._record()
        entries = self._sections[target]
        source, destination = entries[from_entry], entries[to_entry]
        bullet = source.highlights[bullet_index]
        entries[from_entry] = source.model_copy(
            update={"highlights": [h for i, h in enumerate(source.highlights) if i != bullet_index]}
        )
        entries[to_entry] = destination.model_copy(update={"highlights": [*destination.highlights, bullet]})

    # -- Experience surgery --------------------------------------------------

    def split_entry(self, entry_index: int, bullet_index: int) -> None:
        """Split an experience entry at a bullet that is really a job title.

        Bullets before *bullet_index* stay put, the bullet itself becomes the
        new entry's position and the bullets after it move to the new entry,
        which is inserted right after the original.
        """
        if not self._valid_bullet(Section.EXPERIENCE, entry_index, bullet_index):
            return
        self._record()
        entries = self._sections[Section.EXPERIENCE]
        source: ExperienceEntry = entries[entry_index]
        highlights = list(source.highlights)
        new_entry = ExperienceEntry(
            id=generate_id(),
            company=source.company,
            position=highlights[bullet_index],
            location=source.location,
            start_date=source.start_date,
            end_date=source.end_date,
            current=source.current,
            description="",
            highlights=highlights[bullet_index + 1:],
        )
        entries[entry_index] = source.model_copy(update={"highlights": highlights[:bullet_index]})
        entries.insert(entry_index + 1, new_entry)

    def swap_position_company(self, index: int) -> None:
        if not self._valid_index(Section.EXPERIENCE, index):
            return
        self._record()
        entry = self._sections[Section.EXPERIENCE][index]
        self._sections[Section.EXPERIENCE][index] = entry.model_copy(
            update={"position": entry.company, "company": entry.position}
        )

    def promote_bullet_to_company(self, index: int) -> None:
        """Move the first bullet of an experience entry into its empty company field."""
        if not self._valid_bullet(Section.EXPERIENCE, index, 0):
            return
        entry = self._sections[Section.EXPERIENCE][index]
        if entry.company:
            return
        self._record()
        self._sections[Section.EXPERIENCE][index] = entry.model_copy(
            update={"company": entry.highlights[0], "highlights": list(entry.highlights[1:])}
        )

    # -- Entry warnings ------------------------------------------------------

    def get_entry_warnings(self, index: int) -> List[EntryWarning]:
        if not self._valid_index(Section.EXPERIENCE, index):
            return []
        return compute_experience_warnings(self._sections[Section.EXPERIENCE][index], index)

    def experience_warnings(self) -> Dict[int, List[EntryWarning]]:
        """Warnings keyed by experience index; entries without warnings are left out."""
        found: Dict[int, List[EntryWarning]] = {}
        for index, entry in enumerate(self._sections[Section.EXPERIENCE]):
            warnings = compute_experience_warnings(entry, index)
            if warnings:
                found[index] = warnings
        return found

    def apply_warning_action(self, warning: EntryWarning) -> None:
        action = warning.action
        if action is None:
            return
        if action.type == "split" and action.bullet_index is not None:
            self.split_entry(action.entry_index, action.bullet_index)
        elif action.type == "swap":
            self.swap_position_company(action.entry_index)
        elif action.type == "promote_bullet":
            self.promote_bullet_to_company(action.entry_index)

    def merge_entries(self, section: Union[Section, str], index_a: int, index_b: int) -> None:
        """Fold entry *index_b* into *index_a* and remove *index_b*.

        Experience entries keep A's fields and gain B's bullets; in any other
        section B is simply dropped.
        """
        target = _array_section(section)
        if (
            target is None
            or index_a == index_b
            or not self._valid_index(target, index_a)
            or not self._valid_index(target, index_b)
        ):
            return
        self._record()
        entries = self._sections[target]
        if target is Section.EXPERIENCE:
            a, b = entries[index_a], entries[index_b]
            entries[index_a] = a.model_copy(update={"highlights": [*a.highlights, *b.highlights]})
        del entries[index_b]

    # -- Unmatched chunks ----------------------------------------------------

    def skip_unmatched_chunk(self, index: int) -> None:
        if not 0 <= index < len(self._unmatched):
            return
        self._record()
        del self._unmatched[index]

    def add_unmatched_as(self, index: int, section: Union[Section, str]) -> None:
        """Re-parse an unmatched chunk as *section* and file the result there.

        Summary text is appended on a new line and hobby items are
        concatenated. The chunk is removed whether or not anything could be
        extracted from it.
        """
        target = Section.lookup(section)
        if target is None or not 0 <= index < len(self._unmatched):
            return
        chunk = self._unmatched[index]
        extracted = extract_section_content(target, chunk.text)

        self._record()
        del self._unmatched[index]
        if not extracted:
            logger.debug("Nothing extracted from chunk %d as %s; discarded", index, target.value)
            return

        if target is Section.SUMMARY:
            self._summary = clip_summary(f"{self._summary}\n{extracted}" if self._summary else extracted)
        elif target is Section.HOBBIES:
            self._hobbies = [*self._hobbies, *extracted]
        else:
            self._sections[target].extend(extracted)

    # -- Undo / redo ---------------------------------------------------------

    def undo(self) -> bool:
        previous = self._history.undo(self.snapshot())
        if previous is None:
            return False
        self._restore(previous)
        return True

    def redo(self) -> bool:
        following = self._history.redo(self.snapshot())
        if following is None:
            return False
        self._restore(following)
        return True

    # -- Confidence ----------------------------------------------------------

    def get_section_confidence(self, section: Union[Section, str]) -> Confidence:
        target = Section.lookup(section)
        if target is None:
            return Confidence.EMPTY

        if target is Section.CONTACT:
            has_name, has_email = bool(self._contact.first_name), bool(self._contact.email)
            if has_name and has_email:
                return Confidence.COMPLETE
            return Confidence.INCOMPLETE if has_name or has_email else Confidence.EMPTY
        if target is Section.SUMMARY:
            return Confidence.COMPLETE if self._summary.strip() else Confidence.EMPTY
        if target is Section.HOBBIES:
            return Confidence.COMPLETE if self._hobbies else Confidence.EMPTY

        entries = self._sections[target]
        if not entries:
            return Confidence.EMPTY

        if target is Section.EXPERIENCE:
            ok = all(e.company and e.position for e in entries)
        elif target is Section.EDUCATION:
            ok = not any(_garbled_institution(e.institution) for e in entries)
        elif target is Section.SKILLS:
            ok = not _is_fragmented([item.name for category in entries for item in category.items])
        elif target is Section.CERTIFICATIONS:
            ok = all(e.name and not _has_placeholder(e) for e in entries)
        elif target in (Section.PROJECTS, Section.LANGUAGES):
            ok = all(e.name for e in entries)
        else:
            ok = True
        return Confidence.COMPLETE if ok else Confidence.INCOMPLETE

    # -- Output --------------------------------------------------------------

    def build_partial_resume_data(self) -> PartialResumeData:
        """Collect the reviewed data, leaving out every empty section."""
        values: Dict[str, Any] = {}
        contact = self._contact
        if contact.first_name or contact.last_name or contact.email:
            values["contact"] = contact.model_copy(deep=True)
        if self._summary:
            values["summary"] = SummaryData(text=self._summary)
        if self._hobbies:
            values["hobbies"] = HobbiesData(items=list(self._hobbies))
        for section, entries in self._sections.items():
            if entries:
                values[section.value] = [entry.model_copy(deep=True) for entry in entries]
        return PartialResumeData(**values)

    # -- Internals -----------------------------------------------------------

    def _record(self) -> None:
        self._history.push(self.snapshot())

    def _restore(self, snap: ReviewSnapshot) -> None:
        self._contact = snap.contact.model_copy(deep=True)
        self._summary = snap.summary
        self._hobbies = list(snap.hobbies)
        self._sections = {section: snap.section(section.value) for section in ARRAY_SECTIONS}
        self._unmatched = list(snap.unmatched_chunks)

    def _valid_index(self, section: Section, index: int) -> bool:
        return isinstance(index, int) and 0 <= index < len(self._sections[section])

    def _valid_bullet(self, section: Section, entry_index: int, bullet_index: int) -> bool:
        if not self._valid_index(section, entry_index):
            return False
        highlights = self._sections[section][entry_index].highlights
        return isinstance(bullet_index, int) and 0 <= bullet_index < len(highlights)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _array_section(section: Union[Section, str]) -> Optional[Section]:
    target = Section.lookup(section)
    if target is None or not target.is_array:
        logger.debug("Ignoring operation on non-array section %r", section)
        return None
    return target


def _bullet_section(section: Union[Section, str]) -> Optional[Section]:
    target = Section.lookup(section)
    return target if target in BULLET_SECTIONS else None


def _coerce_entry(section: Section, entry: Union[BaseModel, Mapping[str, Any]]) -> Optional[BaseModel]:
    model_type = ENTRY_MODELS[section]
    if isinstance(entry, model_type):
        return entry.model_copy(deep=True)
    if isinstance(entry, Mapping):
        try:
            return model_type.model_validate(dict(entry))
        except ValidationError:
            logger.debug("Rejected %s entry", section.value, exc_info=True)
    return None


def _garbled_institution(institution: str) -> bool:
    text = institution.strip()
    return not text or bool(_DEGREE_PREFIX.match(text)) or has_degree(text)


def _is_fragmented(names: List[str]) -> bool:
    """True when skill items look like a sentence chopped into pieces.

    Recognised short skills such as ``Go`` or ``SQL`` are left out, and fewer
    than four remaining items is not enough evidence either way.
    """
    judged = [
        name.strip()
        for name in names
        if name.strip() and name.strip().lower() not in _SHORT_SKILLS and name.strip().lower() not in SYNONYM_MAP
    ]
    if len(judged) < _MIN_SKILLS_FOR_FRAGMENTATION:
        return False
    short = sum(1 for name in judged if len(name) < _SHORT_SKILL_LENGTH)
    average = sum(len(name) for name in judged) / len(judged)
    return short * 2 > len(judged) or average < _SHORT_SKILL_LENGTH


def _has_placeholder(entry: Any) -> bool:
    for value in (entry.name, entry.issuer, entry.date, entry.expiry_date):
        if value.strip().lower() in _PLACEHOLDER_VALUES:
            return True
    if entry.credential_id.strip().lower() in PLACEHOLDER_IDS:
        return True
    return bool(entry.url and PLACEHOLDER_URL.search(entry.url))
