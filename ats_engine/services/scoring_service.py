from __future__ import annotations

import logging
import time

from ats_engine.schemas.api import (
    CalibrationRequest,
    ContentQualityRequest,
    FormatIssuesRequest,
    ScoreRequest,
    ScoreResponse,
    SectionOrderRequest,
)
from ats_engine.schemas.scoring import (
    CalibrationResult,
    CalibrationSignals,
    ContentQualityResult,
    FormatIssue,
    SectionOrderValidation,
)
from ats_engine.scoring import (
    aggregate_ats_score,
    analyze_resume_format,
    calculate_content_quality,
    calculate_section_coverage,
    calibrate_suggestions,
    detect_section_order,
    extract_bullets,
    extract_bullets_from_resume,
    generate_structural_suggestions,
    match_rate_from_keywords,
    validate_calibration_signals,
    validate_section_order,
)
from ats_engine.scoring.utils import round_half_up

logger = logging.getLogger(__name__)


class CalibrationSignalsError(ValueError):
    """Raised at the service edge when calibration signals break the caller contract."""

    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


def score_content_quality(payload: ContentQualityRequest) -> ContentQualityResult:
    return calculate_content_quality(payload.bullets, payload.jd_keywords, job_type=payload.job_type)


def score_section_order(payload: SectionOrderRequest) -> SectionOrderValidation:
    sections = payload.present_sections
    if sections is None:
        sections = detect_section_order(payload.resume_text)
    return validate_section_order(sections, payload.candidate_type)


def score_format_issues(payload: FormatIssuesRequest) -> list[FormatIssue]:
    return analyze_resume_format(payload.parsed_resume, payload.experience_level)


def run_calibration(payload: CalibrationRequest) -> CalibrationResult:
    signals = CalibrationSignals(**payload.model_dump())
    errors = validate_calibration_signals(signals)
    if errors:
        raise CalibrationSignalsError(errors)
    return calibrate_suggestions(signals)


def run_resume_scoring(payload: ScoreRequest) -> ScoreResponse:
    """Run every analyzer over one resume and fold the results into a single response."""
    started = time.perf_counter()
    parsed = payload.parsed_resume

    jd_keywords = [item.keyword for item in payload.keywords]
    missing_keywords = [item.keyword for item in payload.keywords if not item.matched]
    if payload.match_rate is not None:
        match_rate = payload.match_rate
    else:
        match_rate = match_rate_from_keywords(len(jd_keywords) - len(missing_keywords), len(jd_keywords))

    bullets, sources = extract_bullets_from_resume(parsed)
    bullet_source = "structured"
    if not bullets:
        extraction = extract_bullets(payload.resume_text, jd_keywords)
        bullets = [bullet.text for bullet in extraction.bullets]
        bullet_source = extraction.source

    job_type = "coop" if payload.candidate_type == "coop" else "fulltime"
    content_quality = calculate_content_quality(
        bullets,
        jd_keywords,
        job_type=job_type,
        bullet_sources=sources,
    )

    sections = payload.detected_sections
    if sections is None:
        sections = detect_section_order(payload.resume_text)
    section_order = validate_section_order(sections, payload.candidate_type)
    format_issues = analyze_resume_format(parsed, payload.experience_level)
    structural_suggestions = generate_structural_suggestions(
        payload.candidate_type, parsed, sections, payload.resume_text
    )

    ats_score = aggregate_ats_score(
        keyword_match_rate=match_rate,
        content_quality=content_quality,
        section_coverage=calculate_section_coverage(parsed, payload.candidate_type),
        format_issues=format_issues,
        section_order=section_order,
        missing_keywords=missing_keywords,
        weights=payload.category_weights,
    )

    # Density comes from the same bullets content quality scored.
    details = content_quality.details
    density = 0
    if details.total_bullets:
        density = round_half_up(details.bullets_with_metrics / details.total_bullets * 100)

    signals = CalibrationSignals(
        ats_score=ats_score.overall,
        experience_level=payload.experience_level,
        missing_keywords_count=len(missing_keywords),
        quantification_density=density,
        total_bullets=details.total_bullets,
    )
    calibration_errors = validate_calibration_signals(signals)
    calibration = None if calibration_errors else calibrate_suggestions(signals)

    logger.info(
        "resume_scored overall=%s tier=%s bullets=%s source=%s calibrated=%s elapsed_ms=%.2f",
        ats_score.overall,
        ats_score.tier,
        content_quality.details.total_bullets,
        bullet_source,
        calibration is not None,
        (time.perf_counter() - started) * 1000,
    )

    return ScoreResponse(
        ats_score=ats_score,
        content_quality=content_quality,
        section_order=section_order,
        format_issues=format_issues,
        structural_suggestions=structural_suggestions,
        calibration=calibration,
        calibration_errors=calibration_errors,
        bullet_source=bullet_source,
        quantification_density=density,
    )
