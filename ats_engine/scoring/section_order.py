"""Section ordering and layout checks per candidate type."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from ats_engine.schemas.resume import ParsedResume
from ats_engine.schemas.scoring import SectionOrderValidation, SectionOrderViolation, StructuralSuggestion

from .utils import canonical_section_name, is_section_heading, normalize_line, round_half_up

logger = logging.getLogger(__name__)

RECOMMENDED_ORDER: dict[str, tuple[str, ...]] = {
    "coop": ("skills", "education", "projects", "experience", "certifications"),
    "fulltime": ("summary", "skills", "experience", "projects", "education", "certifications"),
    "career_changer": ("summary", "skills", "education", "projects", "experience", "certifications"),
}

REQUIRED_SECTIONS: dict[str, tuple[str, ...]] = {
    "coop": ("skills", "education", "projects"),
    "fulltime": ("summary", "skills", "experience", "education"),
    "career_changer": ("summary", "skills", "experience", "education", "projects"),
}


def _resolve_candidate_type(candidate_type: str) -> str:
    key = (candidate_type or "").strip().lower()
    if key in RECOMMENDED_ORDER:
        return key
    logger.warning("section_order_unknown_candidate_type candidate_type=%r fallback=fulltime", candidate_type)
    return "fulltime"


def _dedupe(sections: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    ordered: list[str] = []
    for section in sections:
        name = (section or "").strip().lower()
        if not name or name in seen:
            continue
        seen.add(name)
        ordered.append(name)
    return ordered


def validate_section_order(present_sections: Sequence[str], candidate_type: str) -> SectionOrderValidation:
    """Compare detected section order against the recommended one.

    Only sections from the recommended order take part; custom headings are
    dropped before positions are computed. A section is reported once when
    it sits on the wrong side of any other known section.
    """
    resolved = _resolve_candidate_type(candidate_type)
    recommended = RECOMMENDED_ORDER[resolved]

    present = _dedupe(present_sections)
    known = [section for section in present if section in recommended]
    if len(known) < 2:
        return SectionOrderValidation(is_correct_order=True, recommended_order=recommended)

    expected_order = [section for section in recommended if section in known]
    expected = {section: index for index, section in enumerate(expected_order)}

    violations: list[SectionOrderViolation] = []
    for actual_index, section in enumerate(known):
        out_of_place = any(
            (other_index < actual_index) != (expected[other] < expected[section])
            for other_index, other in enumerate(known)
            if other != section
        )
        if not out_of_place:
            continue
        expected_index = expected[section]
        violations.append(
            SectionOrderViolation(
                section=section,
                expected_position=expected_index,
                actual_position=actual_index,
                description=(
                    f'"{section}" appears at position {actual_index + 1} but should be at '
                    f"position {expected_index + 1} for {resolved} candidates"
                ),
            )
        )

    return SectionOrderValidation(
        is_correct_order=not violations,
        violations=tuple(violations),
        recommended_order=recommended,
    )


def detect_section_order(resume_text: str) -> list[str]:
    """Section headings in the order they appear, mapped to canonical names.

    Unrecognised all-caps headings are kept (lowercased) so callers can see
    them; ``validate_section_order`` ignores them.
    """
    sections: list[str] = []
    for line in (resume_text or "").splitlines():
        stripped = normalize_line(line)
        if not is_section_heading(stripped):
            continue
        sections.append(canonical_section_name(stripped) or stripped.rstrip(":").strip().lower())
    return _dedupe(sections)


def _has_content(parsed: ParsedResume, section: str) -> bool:
    if section == "summary":
        return bool(parsed.summary.strip())
    if section == "skills":
        return bool([skill for skill in parsed.skills if skill.strip()])
    if section == "experience":
        return bool(parsed.experience)
    if section == "education":
        return bool(parsed.education)
    if section == "projects":
        return bool(parsed.projects.strip())
    return False


def calculate_section_coverage(parsed: ParsedResume, candidate_type: str) -> int:
    """Share (0-100) of the sections required for this candidate type that have content."""
    required = REQUIRED_SECTIONS[_resolve_candidate_type(candidate_type)]
    present = sum(1 for section in required if _has_content(parsed, section))
    return round_half_up(present / len(required) * 100)


# Informal headings ATS parsers tend to misfile, with the standard heading to use instead.
UNSAFE_HEADERS: dict[str, str] = {
    "my journey": "Professional Experience",
    "track record": "Professional Experience",
    "career path": "Professional Experience",
    "what i've done": "Professional Experience",
    "what i know": "Technical Skills",
    "my toolkit": "Technical Skills",
    "tech stack": "Technical Skills",
    "learning": "Education",
    "where i studied": "Education",
    "things i've built": "Projects",
    "my work": "Projects",
    "about me": "Professional Summary",
    "who i am": "Professional Summary",
}

# Whole-line matches only, so "Machine Learning" in a bullet is not a heading.
_UNSAFE_HEADER_PATTERNS: tuple[tuple[str, str, re.Pattern[str]], ...] = tuple(
    (header, standard, re.compile(rf"^\s*{re.escape(header)}\s*$", re.IGNORECASE | re.MULTILINE))
    for header, standard in UNSAFE_HEADERS.items()
)


@dataclass(frozen=True)
class _StructureInput:
    candidate_type: str
    parsed: ParsedResume
    order: list[str]
    resume_text: str


def _position(order: list[str], section: str) -> int | None:
    return order.index(section) if section in order else None


def _coop_experience_before_education(data: _StructureInput) -> StructuralSuggestion | None:
    if data.candidate_type != "coop":
        return None
    experience = _position(data.order, "experience")
    education = _position(data.order, "education")
    if experience is None or education is None or experience > education:
        return None
    return StructuralSuggestion(
        id="rule-coop-exp-before-edu",
        priority="high",
        category="section_order",
        message="For co-op/internship resumes, Education should come before Experience",
        current_state="Experience section appears before Education section",
        recommended_action=(
            "Move Education section above Experience. Co-op candidates benefit from showcasing "
            "their academic credentials before work history."
        ),
    )


def _coop_skills_not_first(data: _StructureInput) -> StructuralSuggestion | None:
    if data.candidate_type != "coop":
        return None
    missing = not _has_content(data.parsed, "skills")
    not_first = bool(data.order) and data.order[0] != "skills"
    if not (missing or not_first):
        return None
    return StructuralSuggestion(
        id="rule-coop-no-skills-at-top",
        priority="critical",
        category="section_presence",
        message="Co-op resumes must lead with Skills section",
        current_state="Skills section is missing" if missing else "Skills section is not positioned first",
        recommended_action=(
            "Add or move Skills section to the top of your resume (right after header). This maximizes "
            "keyword density for ATS systems and immediately demonstrates your technical capabilities."
        ),
    )


def _coop_summary_present(data: _StructureInput) -> StructuralSuggestion | None:
    if data.candidate_type != "coop" or not _has_content(data.parsed, "summary"):
        return None
    return StructuralSuggestion(
        id="rule-coop-generic-summary",
        priority="high",
        category="section_presence",
        message="Co-op resumes typically should not include a Professional Summary",
        current_state="Professional Summary section is present",
        recommended_action=(
            "Consider removing the summary to save space; co-op/internship resumes benefit from leading "
            "with Skills instead. Use the extra space for Projects or relevant coursework."
        ),
    )


def _coop_projects_heading(data: _StructureInput) -> StructuralSuggestion | None:
    if data.candidate_type != "coop" or not _has_content(data.parsed, "projects"):
        return None
    return StructuralSuggestion(
        id="rule-coop-projects-heading",
        priority="moderate",
        category="section_heading",
        message='Use "Project Experience" heading instead of "Projects"',
        current_state='Section is likely titled "Projects"',
        recommended_action=(
            'Rename the section heading to "Project Experience" for better ATS recognition '
            "and professional presentation."
        ),
    )


def _fulltime_education_before_experience(data: _StructureInput) -> StructuralSuggestion | None:
    if data.candidate_type != "fulltime":
        return None
    experience = _position(data.order, "experience")
    education = _position(data.order, "education")
    if experience is None or education is None or education > experience:
        return None
    return StructuralSuggestion(
        id="rule-fulltime-edu-before-exp",
        priority="high",
        category="section_order",
        message="For full-time positions, Experience should come before Education",
        current_state="Education section appears before Experience section",
        recommended_action=(
            "Move Experience section above Education. Full-time candidates should emphasize "
            "professional experience over academic credentials."
        ),
    )


def _career_changer_without_summary(data: _StructureInput) -> StructuralSuggestion | None:
    if data.candidate_type != "career_changer" or _has_content(data.parsed, "summary"):
        return None
    return StructuralSuggestion(
        id="rule-career-changer-no-summary",
        priority="critical",
        category="section_presence",
        message="Career changers must include a Professional Summary",
        current_state="Professional Summary section is missing",
        recommended_action=(
            "Add a Professional Summary at the top of your resume to explain your career transition "
            "and highlight transferable skills."
        ),
    )


def _career_changer_education_below_experience(data: _StructureInput) -> StructuralSuggestion | None:
    if data.candidate_type != "career_changer":
        return None
    experience = _position(data.order, "experience")
    education = _position(data.order, "education")
    if experience is None or education is None or education < experience:
        return None
    return StructuralSuggestion(
        id="rule-career-changer-edu-below-exp",
        priority="high",
        category="section_order",
        message="For career changers, Education should come before Experience",
        current_state="Education section appears after Experience section",
        recommended_action=(
            "Move Education section above Experience. Your degree is the pivot credential for your "
            "career change and should be prominently positioned."
        ),
    )


def _non_standard_headers(data: _StructureInput) -> StructuralSuggestion | None:
    if not data.resume_text:
        return None
    detected = [
        f'"{header}" → "{standard}"'
        for header, standard, pattern in _UNSAFE_HEADER_PATTERNS
        if pattern.search(data.resume_text)
    ]
    if not detected:
        return None
    return StructuralSuggestion(
        id="rule-non-standard-headers",
        priority="moderate",
        category="section_heading",
        message="Non-standard section headings detected",
        current_state=f"Detected: {', '.join(detected)}",
        recommended_action=(
            "Replace creative or informal section headings with standard ATS-friendly headers. "
            "This ensures proper categorization by applicant tracking systems."
        ),
    )


_STRUCTURE_RULES: tuple[Callable[[_StructureInput], StructuralSuggestion | None], ...] = (
    _coop_experience_before_education,
    _coop_skills_not_first,
    _coop_summary_present,
    _coop_projects_heading,
    _fulltime_education_before_experience,
    _career_changer_without_summary,
    _career_changer_education_below_experience,
    _non_standard_headers,
)


def generate_structural_suggestions(
    candidate_type: str,
    parsed: ParsedResume,
    section_order: Sequence[str],
    resume_text: str = "",
) -> list[StructuralSuggestion]:
    """Rule-based layout advice for the candidate type, in rule order.

    ``section_order`` is the detected heading order (canonical names);
    ``resume_text`` is only used to spot informal headings and may be empty.
    """
    data = _StructureInput(
        candidate_type=_resolve_candidate_type(candidate_type),
        parsed=parsed,
        order=_dedupe(section_order),
        resume_text=resume_text or "",
    )
    suggestions: list[StructuralSuggestion] = []
    for rule in _STRUCTURE_RULES:
        suggestion = rule(data)
        if suggestion is not None:
            suggestions.append(suggestion)
    return suggestions
