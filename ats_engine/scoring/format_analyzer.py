"""Rule-based ATS format checks on a parsed resume.

None of these checks look at the job description; they only judge whether
the resume is structured in a way ATS parsers handle well.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Iterable

from ats_engine.core.config.scoring import get_scoring_value
from ats_engine.schemas.resume import ParsedResume
from ats_engine.schemas.scoring import FormatIssue

from .patterns import CITY_REGION_RE, CITY_STATE_RE, DATE_FORMAT_PATTERNS, PHONE_RE

logger = logging.getLogger(__name__)

_SEVERITY_RANK: dict[str, int] = {"critical": 0, "warning": 1, "suggestion": 2}


def _int(path: str, default: int) -> int:
    return int(get_scoring_value(path, default))


def _check_section_headers(resume: ParsedResume, experience_level: str) -> FormatIssue | None:
    if resume.experience or resume.education or resume.skills:
        return None
    return FormatIssue(
        type="critical",
        message="No clear section headers detected",
        detail=(
            "ATS systems rely on standard section headers (Experience, Education, Skills) to parse "
            "your resume correctly. Add clear headers to improve compatibility and ensure your "
            "information is properly categorized."
        ),
    )


def estimate_page_count(resume: ParsedResume) -> int:
    """Rough page estimate from content density: 2 when the density score exceeds the threshold, else 1."""
    score = 0
    score += sum(len(job.bullet_points) for job in resume.experience) * _int("format.points_per_bullet", 2)
    score += len(resume.experience) * _int("format.points_per_experience_entry", 3)
    score += len(resume.education) * _int("format.points_per_education_entry", 2)
    score += math.ceil(len(resume.skills) / _int("format.skills_per_line", 5))

    prose_min = _int("format.prose_min_length", 100)
    chars_per_point = _int("format.prose_chars_per_point", 200)
    for prose in (resume.summary, resume.projects, resume.other):
        if prose and len(prose) > prose_min:
            score += math.ceil(len(prose) / chars_per_point)

    return 2 if score > _int("format.page_density_threshold", 15) else 1


def _check_length(resume: ParsedResume, experience_level: str) -> FormatIssue | None:
    if experience_level != "student":
        return None
    pages = estimate_page_count(resume)
    if pages <= 1:
        return None
    return FormatIssue(
        type="warning",
        message=f"Resume is approximately {pages} pages",
        detail=(
            "Entry-level resumes are typically 1 page. Consider condensing to 1 page to improve ATS "
            "parsing and recruiter experience. Focus on most relevant experiences and achievements."
        ),
    )


def _check_contact(resume: ParsedResume, experience_level: str) -> FormatIssue | None:
    contact = (resume.contact or "").strip()
    if not contact:
        return FormatIssue(
            type="warning",
            message="Missing contact information",
            detail=(
                "Your resume should include contact information (email, phone, or location) so "
                "recruiters can reach you. Add at least an email address or phone number."
            ),
        )

    has_email = "@" in contact
    has_phone = bool(PHONE_RE.search(contact))
    has_location = bool(CITY_STATE_RE.search(contact) or CITY_REGION_RE.search(contact))
    if has_email or has_phone or has_location or len(contact) >= _int("format.contact_min_length", 10):
        return None
    return FormatIssue(
        type="warning",
        message="Contact information may be incomplete",
        detail="Include complete contact details (email, phone number) to ensure recruiters can reach you easily.",
    )


def detect_date_format(value: str) -> str:
    trimmed = (value or "").strip()
    for pattern in DATE_FORMAT_PATTERNS:
        if pattern.regex.search(trimmed):
            return pattern.name
    return "other"


def _check_dates(resume: ParsedResume, experience_level: str) -> FormatIssue | None:
    dates = [entry.dates for entry in resume.experience if entry.dates]
    dates.extend(entry.dates for entry in resume.education if entry.dates)
    if len(dates) < _int("format.date_min_count", 2):
        return None

    formats = {detect_date_format(value) for value in dates}
    if len(formats) <= _int("format.max_date_formats", 2):
        return None
    return FormatIssue(
        type="suggestion",
        message="Inconsistent date formats detected",
        detail=(
            'Use consistent date formatting throughout your resume (e.g., "MM/YYYY - MM/YYYY" or '
            '"Month YYYY - Month YYYY"). Consistency improves ATS parsing and professional appearance.'
        ),
    )


_CHECKS: tuple[Callable[[ParsedResume, str], FormatIssue | None], ...] = (
    _check_section_headers,
    _check_length,
    _check_contact,
    _check_dates,
)


def sort_issues_by_severity(issues: Iterable[FormatIssue]) -> list[FormatIssue]:
    """Critical first, then warnings, then suggestions; ties keep their input order."""
    return sorted(issues, key=lambda issue: _SEVERITY_RANK[issue.type])


def analyze_resume_format(parsed: ParsedResume, experience_level: str = "student") -> list[FormatIssue]:
    issues: list[FormatIssue] = []
    for check in _CHECKS:
        issue = check(parsed, experience_level)
        if issue is not None:
            issues.append(issue)
    logger.debug("format_analyzed experience_level=%s issues=%s", experience_level, len(issues))
    return sort_issues_by_severity(issues)
