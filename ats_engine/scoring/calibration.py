"""Suggestion calibration.

Maps the overall score and a few profile signals to how much feedback a
downstream suggestion generator should produce and where it should focus.
Everything here is a pure lookup; ``validate_calibration_signals`` is the
caller's contract check and calibration itself never raises.
"""

from __future__ import annotations

from ats_engine.core.config.scoring import get_scoring_value
from ats_engine.schemas.scoring import CalibrationResult, CalibrationSignals, PriorityBoosts, SuggestionMode

EXPERIENCE_LEVELS: tuple[str, ...] = ("student", "career_changer", "experienced")

SUGGESTION_COUNT_RANGES: dict[str, tuple[int, int]] = {
    "Transformation": (8, 12),
    "Improvement": (5, 8),
    "Optimization": (3, 5),
    "Validation": (1, 2),
}

FOCUS_AREAS: dict[str, tuple[str, ...]] = {
    "student": ("quantification_projects", "academic_framing", "gpa_guidance", "skill_expansion"),
    "career_changer": ("skill_mapping", "transferable_language", "bridge_statements", "section_reordering"),
    "experienced": ("leadership_language", "scope_amplification", "metric_enhancement", "format_polish"),
}

MODE_DESCRIPTIONS: dict[str, str] = {
    "Transformation": "Your resume needs significant improvements to be competitive. Focus on major changes.",
    "Improvement": "Your resume has a solid foundation. Let's address the key gaps.",
    "Optimization": "Your resume is strong. Let's refine it for maximum impact.",
    "Validation": "Your resume is excellent. Here are a few refinements to consider.",
}

FOCUS_AREA_DESCRIPTIONS: dict[str, str] = {
    "quantification_projects": "Adding metrics to project work",
    "academic_framing": "Framing academic work professionally",
    "gpa_guidance": "Strategically using GPA",
    "skill_expansion": "Expanding technical skills",
    "skill_mapping": "Mapping skills to target role",
    "transferable_language": "Using transferable skill language",
    "bridge_statements": "Creating career transition bridges",
    "section_reordering": "Reorganizing resume sections",
    "leadership_language": "Emphasizing leadership and scope",
    "scope_amplification": "Highlighting impact and scope",
    "metric_enhancement": "Strengthening metrics and numbers",
    "format_polish": "Refining presentation and conciseness",
}


def _cutoff(path: str, default: float) -> float:
    return float(get_scoring_value(path, default))


def get_suggestion_mode(ats_score: float) -> SuggestionMode:
    if ats_score < _cutoff("calibration.modes.transformation_below", 30):
        return "Transformation"
    if ats_score < _cutoff("calibration.modes.improvement_below", 50):
        return "Improvement"
    if ats_score < _cutoff("calibration.modes.optimization_below", 70):
        return "Optimization"
    return "Validation"


def get_target_suggestion_count(mode: str) -> tuple[int, int]:
    """(min, max) suggestions to aim for in ``mode``."""
    return SUGGESTION_COUNT_RANGES[mode]


def get_focus_areas_by_experience(level: str) -> tuple[str, ...]:
    return FOCUS_AREAS.get(level, ())


def get_keyword_urgency_boost(missing_keywords_count: int) -> int:
    if missing_keywords_count >= _cutoff("calibration.keyword_boost.high_at", 5):
        return 2
    if missing_keywords_count >= _cutoff("calibration.keyword_boost.medium_at", 2):
        return 1
    return 0


def get_quantification_urgency_boost(density: float) -> int:
    if density < _cutoff("calibration.quantification_boost.critical_below", 30):
        return 2
    if density < _cutoff("calibration.quantification_boost.high_below", 50):
        return 1
    if density < _cutoff("calibration.quantification_boost.normal_below", 80):
        return 0
    return -1


def _experience_boost(mode: str) -> int:
    if mode == "Transformation":
        return 1
    if mode == "Improvement":
        return 0
    return -1


def _number(value: float) -> str:
    return f"{value:g}"


def calibrate_suggestions(signals: CalibrationSignals) -> CalibrationResult:
    mode = get_suggestion_mode(signals.ats_score)
    low, high = get_target_suggestion_count(mode)
    keyword_boost = get_keyword_urgency_boost(signals.missing_keywords_count)
    quant_boost = get_quantification_urgency_boost(signals.quantification_density)

    keyword_note = f"(+{keyword_boost} urgency)" if keyword_boost > 0 else "(focus shift)"
    if quant_boost > 0:
        quant_note = f"(+{quant_boost} urgency)"
    elif quant_boost < 0:
        quant_note = "(deprioritize)"
    else:
        quant_note = "(balanced)"

    reasoning = " | ".join(
        (
            f"ATS Score {_number(signals.ats_score)} → {mode} mode",
            f"{signals.missing_keywords_count} missing keywords {keyword_note}",
            f"{_number(signals.quantification_density)}% quantification {quant_note}",
        )
    )

    return CalibrationResult(
        mode=mode,
        suggestions_target_count=(low + high) // 2,
        priority_boosts=PriorityBoosts(
            keyword=keyword_boost,
            quantification=quant_boost,
            experience=_experience_boost(mode),
        ),
        focus_areas=get_focus_areas_by_experience(signals.experience_level),
        reasoning=reasoning,
    )


def get_suggestion_mode_description(mode: str) -> str:
    return MODE_DESCRIPTIONS[mode]


def get_focus_areas_description(areas: list[str] | tuple[str, ...]) -> str:
    return ", ".join(FOCUS_AREA_DESCRIPTIONS.get(area, area) for area in areas)


def validate_calibration_signals(signals: CalibrationSignals) -> list[str]:
    """Human-readable contract violations; empty when the signals are usable."""
    errors: list[str] = []
    if not 0 <= signals.ats_score <= 100:
        errors.append("ATS score must be between 0-100")
    if signals.experience_level not in EXPERIENCE_LEVELS:
        errors.append(
            f"Invalid experience level: {signals.experience_level}. "
            "Must be student, career_changer, or experienced"
        )
    if signals.missing_keywords_count < 0:
        errors.append("Missing keywords count cannot be negative")
    if not 0 <= signals.quantification_density <= 100:
        errors.append("Quantification density must be between 0-100")
    if signals.total_bullets <= 0:
        errors.append("Total bullets must be greater than 0")
    return errors
