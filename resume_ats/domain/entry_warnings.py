"""Per-entry review warnings for imported experience entries.

Each warning may carry an action that maps onto an ``ImportReviewState``
operation (split, swap or promote_bullet). Pure functions -- no file I/O.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from .models import ExperienceEntry
from .resume_sections import COMPANY_INDICATORS, DATE_RANGE_PATTERN

MAX_BULLETS_PER_ENTRY = 8
_MAX_COMPANY_BULLET = 60
_MAX_DATED_BULLET = 100


@dataclass
class WarningAction:
    label: str
    type: str  # split, swap or promote_bullet
    entry_index: int
    bullet_index: Optional[int] = None


@dataclass
class EntryWarning:
    id: str
    level: str  # info, warning or suggestion
    message: str
    action: Optional[WarningAction] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def compute_experience_warnings(entry: ExperienceEntry, index: int) -> List[EntryWarning]:
    """Return the warnings for the experience entry at *index*."""
    warnings: List[EntryWarning] = []
    highlights = entry.highlights

    if len(highlights) > MAX_BULLETS_PER_ENTRY:
        warnings.append(EntryWarning(
            id=f"{index}-too-many-bullets",
            level="suggestion",
            message=f"{len(highlights)} bullets, consider splitting this entry",
            action=WarningAction("Split at midpoint", "split", index, len(highlights) // 2),
        ))

    if (
        entry.position
        and COMPANY_INDICATORS.search(entry.position)
        and entry.company
        and not COMPANY_INDICATORS.search(entry.company)
    ):
        warnings.append(EntryWarning(
            id=f"{index}-swap-position",
            level="warning",
            message="Position looks like a company name",
            action=WarningAction("Swap", "swap", index),
        ))

    if not entry.start_date and not entry.end_date:
        warnings.append(EntryWarning(id=f"{index}-no-dates", level="info", message="No dates detected"))

    if not entry.company:
        if highlights and _looks_like_company(highlights[0]):
            warnings.append(EntryWarning(
                id=f"{index}-promote-bullet",
                level="warning",
                message="First bullet looks like a company name",
                action=WarningAction("Move to Company", "promote_bullet", index),
            ))
        else:
            warnings.append(EntryWarning(
                id=f"{index}-no-company", level="warning", message="Company field is empty"
            ))

    if not entry.position:
        warnings.append(EntryWarning(
            id=f"{index}-no-position", level="warning", message="Position field is empty"
        ))

    for bullet_index, bullet in enumerate(highlights):
        if len(bullet) < _MAX_DATED_BULLET and DATE_RANGE_PATTERN.search(bullet):
            warnings.append(EntryWarning(
                id=f"{index}-suspicious-split-{bullet_index}",
                level="warning",
                message=f"Bullet {bullet_index + 1} looks like a new job entry",
                action=WarningAction("Split here", "split", index, bullet_index),
            ))

    return warnings


def _looks_like_company(text: str) -> bool:
    words = text.split()
    if not words or len(words) > 6 or len(text) >= _MAX_COMPANY_BULLET or text.endswith("."):
        return False
    capitalized = sum(1 for word in words if re.match(r"[A-Z]", word))
    return capitalized / len(words) >= 0.6
