from .aggregator import (
    aggregate_ats_score,
    calculate_format_score,
    calculate_overall_score,
    expected_weights,
    get_score_tier,
    match_rate_from_keywords,
    normalize_breakdown,
)
from .bullets import calculate_quantification_density, extract_bullets, extract_bullets_from_resume
from .calibration import (
    calibrate_suggestions,
    get_focus_areas_by_experience,
    get_focus_areas_description,
    get_keyword_urgency_boost,
    get_quantification_urgency_boost,
    get_suggestion_mode,
    get_suggestion_mode_description,
    get_target_suggestion_count,
    validate_calibration_signals,
)
from .content_quality import calculate_content_quality, generate_content_quality_action_items
from .format_analyzer import analyze_resume_format, estimate_page_count, sort_issues_by_severity
from .quantification import detect_quantifications, has_metric
from .section_order import (
    RECOMMENDED_ORDER,
    calculate_section_coverage,
    detect_section_order,
    generate_structural_suggestions,
    validate_section_order,
)
from .verbs import DEFAULT_LEXICON, VerbLexicon, classify_leading_verb, classify_verb

__all__ = [
    "aggregate_ats_score",
    "calculate_format_score",
    "calculate_overall_score",
    "expected_weights",
    "get_score_tier",
    "match_rate_from_keywords",
    "normalize_breakdown",
    "calculate_quantification_density",
    "extract_bullets",
    "extract_bullets_from_resume",
    "calibrate_suggestions",
    "get_focus_areas_by_experience",
    "get_focus_areas_description",
    "get_keyword_urgency_boost",
    "get_quantification_urgency_boost",
    "get_suggestion_mode",
    "get_suggestion_mode_description",
    "get_target_suggestion_count",
    "validate_calibration_signals",
    "calculate_content_quality",
    "generate_content_quality_action_items",
    "analyze_resume_format",
    "estimate_page_count",
    "sort_issues_by_severity",
    "detect_quantifications",
    "has_metric",
    "RECOMMENDED_ORDER",
    "calculate_section_coverage",
    "detect_section_order",
    "generate_structural_suggestions",
    "validate_section_order",
    "DEFAULT_LEXICON",
    "VerbLexicon",
    "classify_leading_verb",
    "classify_verb",
]
