from __future__ import annotations

import logging
from typing import Iterable, Sequence

from ats_engine.core.config.scoring import get_scoring_value
from ats_engine.schemas.resume import ParsedResume
from ats_engine.schemas.scoring import Bullet, BulletExtractionResult, BulletSources

from .patterns import BULLET_MARKERS
from .quantification import has_metric
from .utils import (
    is_contact_or_url,
    is_date_only,
    is_section_heading,
    normalize_line,
    round_half_up,
    unique_keywords,
)
from .verbs import DEFAULT_LEXICON, VerbLexicon, classify_leading_verb, first_word

logger = logging.getLogger(__name__)


def _strip_marker(line: str) -> str | None:
    for marker in BULLET_MARKERS:
        match = marker.regex.match(line)
        if match:
            return match.group("body")
    return None


def _retain(candidates: Iterable[str], min_length: int) -> list[str]:
    seen: set[str] = set()
    kept: list[str] = []
    for candidate in candidates:
        text = normalize_line(candidate)
        if not text:
            continue
        if len(text) < min_length:
            continue
        if text in seen:
            continue
        seen.add(text)
        kept.append(text)
    return kept


def build_bullet(text: str, jd_keywords: Sequence[str] = (), lexicon: VerbLexicon = DEFAULT_LEXICON) -> Bullet:
    lowered = text.lower()
    return Bullet(
        text=text,
        has_metric=has_metric(text),
        has_strong_verb=classify_leading_verb(text, lexicon) == "strong",
        first_word=first_word(text),
        keywords=tuple(keyword for keyword in unique_keywords(jd_keywords) if keyword.lower() in lowered),
    )


def _pattern_candidates(lines: list[str]) -> list[str]:
    candidates: list[str] = []
    for line in lines:
        body = _strip_marker(line)
        if body is not None:
            candidates.append(body)
    return candidates


def _newline_candidates(lines: list[str]) -> list[str]:
    candidates: list[str] = []
    for line in lines:
        stripped = normalize_line(line)
        if not stripped:
            continue
        body = _strip_marker(stripped)
        if body is not None:
            candidates.append(body)
            continue
        if is_section_heading(stripped) or is_contact_or_url(stripped) or is_date_only(stripped):
            continue
        candidates.append(stripped)
    return candidates


def extract_bullets(
    text: str,
    jd_keywords: Sequence[str] = (),
    lexicon: VerbLexicon = DEFAULT_LEXICON,
) -> BulletExtractionResult:
    """Split raw resume text into annotated achievement statements.

    Marker-prefixed lines are preferred; when fewer than
    ``bullets.min_pattern_bullets`` survive filtering, every non-trivial line
    is treated as a bullet instead.
    """
    min_length = int(get_scoring_value("bullets.min_length", 10))
    min_pattern_bullets = int(get_scoring_value("bullets.min_pattern_bullets", 2))
    lines = (text or "").splitlines()

    source = "pattern"
    retained = _retain(_pattern_candidates(lines), min_length)
    if len(retained) < min_pattern_bullets:
        source = "newline"
        retained = _retain(_newline_candidates(lines), min_length)

    bullets = tuple(build_bullet(item, jd_keywords, lexicon) for item in retained)
    logger.debug("bullets_extracted source=%s count=%s", source, len(bullets))
    return BulletExtractionResult(bullets=bullets, source=source)  # type: ignore[arg-type]


def extract_bullets_from_resume(parsed: ParsedResume) -> tuple[list[str], BulletSources]:
    """Collect bullet text from structured sections, tracking where each came from."""
    min_length = int(get_scoring_value("bullets.min_length", 10))
    seen: set[str] = set()
    bullets: list[str] = []
    counts = {"experience": 0, "projects": 0, "education": 0}

    def add(items: Iterable[str], source: str) -> None:
        for item in _retain(items, min_length):
            if item in seen:
                continue
            seen.add(item)
            bullets.append(item)
            counts[source] += 1

    for job in parsed.experience:
        add(job.bullet_points, "experience")
    if parsed.projects.strip():
        add((bullet.text for bullet in extract_bullets(parsed.projects).bullets), "projects")
    for entry in parsed.education:
        add(entry.bullet_points, "education")

    return bullets, BulletSources(**counts)


def calculate_quantification_density(resume_text: str) -> int:
    """Percentage (0-100) of extracted bullets that carry at least one metric."""
    bullets = extract_bullets(resume_text).bullets
    if not bullets:
        return 0
    with_metrics = sum(1 for bullet in bullets if bullet.has_metric)
    return round_half_up(with_metrics / len(bullets) * 100)
