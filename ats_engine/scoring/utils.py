from __future__ import annotations

import math
from typing import Iterable

from .patterns import (
    DATE_ONLY_RE,
    EMAIL_RE,
    PHONE_RE,
    SECTION_SYNONYMS,
    SOCIAL_PREFIX_RE,
    URL_RE,
    WHITESPACE_RE,
)


def normalize_line(line: str) -> str:
    return WHITESPACE_RE.sub(" ", line or "").strip()


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp_score(value: float) -> int:
    return max(0, min(100, round_half_up(value)))


def canonical_section_name(line: str) -> str | None:
    lowered = normalize_line(line).lower().rstrip(":").strip()
    return SECTION_SYNONYMS.get(lowered)


def is_section_heading(line: str) -> bool:
    stripped = normalize_line(line)
    if not stripped:
        return False
    if canonical_section_name(stripped):
        return True
    return bool(stripped.isupper() and len(stripped.split()) <= 5 and 3 <= len(stripped) <= 40)


def is_contact_or_url(line: str) -> bool:
    stripped = normalize_line(line)
    if not stripped:
        return False
    return bool(
        EMAIL_RE.search(stripped)
        or URL_RE.search(stripped)
        or SOCIAL_PREFIX_RE.match(stripped)
        or PHONE_RE.match(stripped)
    )


def is_date_only(line: str) -> bool:
    return bool(DATE_ONLY_RE.match(normalize_line(line)))


def unique_keywords(keywords: Iterable[str]) -> list[str]:
    """Trimmed keywords with case-insensitive duplicates removed, order kept."""
    seen: set[str] = set()
    unique: list[str] = []
    for keyword in keywords:
        clean = (keyword or "").strip()
        key = clean.lower()
        if not clean or key in seen:
            continue
        seen.add(key)
        unique.append(clean)
    return unique
