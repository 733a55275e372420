"""Combine component signals into the overall ATS score."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Sequence

from ats_engine.core.config.scoring import get_scoring_config, get_scoring_value
from ats_engine.schemas.scoring import (
    ActionItem,
    ATSScore,
    CategoryScore,
    ContentQualityResult,
    FormatIssue,
    ScoreBreakdown,
    ScoreTier,
    SectionOrderValidation,
)

from .content_quality import generate_content_quality_action_items, metrics_coverage_message
from .utils import clamp_score, round_half_up, unique_keywords

logger = logging.getLogger(__name__)

CATEGORIES: tuple[str, ...] = (
    "keyword_alignment",
    "content_relevance",
    "quantification_impact",
    "format_structure",
    "skills_coverage",
)

_DEFAULT_WEIGHTS: dict[str, float] = {
    "keyword_alignment": 0.25,
    "content_relevance": 0.25,
    "quantification_impact": 0.20,
    "format_structure": 0.15,
    "skills_coverage": 0.15,
}

_PRIORITY_RANK: dict[str, int] = {"critical": 0, "high": 1, "medium": 2, "low": 3}


def get_score_tier(score: float) -> ScoreTier:
    if score >= float(get_scoring_value("aggregate.tiers.excellent", 85)):
        return "excellent"
    if score >= float(get_scoring_value("aggregate.tiers.strong", 70)):
        return "strong"
    if score >= float(get_scoring_value("aggregate.tiers.moderate", 55)):
        return "moderate"
    return "weak"


def expected_weights() -> dict[str, float]:
    configured: Any = get_scoring_value("aggregate.weights", None)
    weights = dict(_DEFAULT_WEIGHTS)
    if isinstance(configured, dict):
        weights.update({name: float(configured[name]) for name in CATEGORIES if name in configured})
    return weights


def _weights_valid(weights: Mapping[str, float]) -> bool:
    if set(weights) != set(CATEGORIES):
        return False
    if any(not 0.0 <= float(value) <= 1.0 for value in weights.values()):
        return False
    tolerance = float(get_scoring_value("aggregate.weight_tolerance", 0.01))
    return abs(sum(float(value) for value in weights.values()) - 1.0) <= tolerance


def normalize_breakdown(breakdown: ScoreBreakdown) -> ScoreBreakdown:
    """Return ``breakdown`` unchanged when its weights are sound, else a copy on the expected weights.

    Categories missing from the breakdown are added with a zero score.
    """
    weights = {name: category.weight for name, category in breakdown.categories.items()}
    if _weights_valid(weights):
        return breakdown

    logger.warning(
        "score_weights_normalized weight_sum=%.4f categories=%s",
        breakdown.weight_sum(),
        ",".join(sorted(breakdown.categories)),
    )
    expected = expected_weights()
    categories: dict[str, CategoryScore] = {}
    for name in CATEGORIES:
        current = breakdown.categories.get(name)
        if current is None:
            categories[name] = CategoryScore(score=0, weight=expected[name], reason="Not provided")
        else:
            categories[name] = current.model_copy(update={"weight": expected[name]})
    return ScoreBreakdown(categories=categories)


def calculate_overall_score(breakdown: ScoreBreakdown) -> int:
    total = sum(category.score * category.weight for category in breakdown.categories.values())
    return clamp_score(total)


def calculate_format_score(
    format_issues: Iterable[FormatIssue],
    section_order: SectionOrderValidation | None = None,
) -> int:
    """100 minus a penalty per format issue severity and per section order violation."""
    penalties = {
        "critical": float(get_scoring_value("aggregate.format_penalties.critical", 30)),
        "warning": float(get_scoring_value("aggregate.format_penalties.warning", 10)),
        "suggestion": float(get_scoring_value("aggregate.format_penalties.suggestion", 3)),
    }
    score = 100.0 - sum(penalties[issue.type] for issue in format_issues)
    if section_order is not None:
        per_violation = float(get_scoring_value("aggregate.section_order_violation_penalty", 5))
        score -= per_violation * len(section_order.violations)
    return clamp_score(score)


def _keyword_items(score: int, missing_keywords: Sequence[str]) -> list[ActionItem]:
    missing = unique_keywords(missing_keywords)
    limit = int(get_scoring_value("action_items.max_missing_keywords_listed", 5))
    if missing:
        message = f"Add missing keywords from the job description: {', '.join(missing[:limit])}"
    else:
        message = "Mirror the job description's terminology in your skills and experience"
    critical = score < 40
    return [
        ActionItem(
            priority="critical" if critical else "high",
            category="keyword_alignment",
            message=message,
            potential_impact=15 if critical else 10,
        )
    ]


# Content-quality signals and the breakdown category their hints land in.
_CONTENT_ITEM_CATEGORIES: dict[str, str] = {
    "quantification": "quantification_impact",
    "verbs": "content_relevance",
    "keywords": "content_relevance",
}


def _content_items(content_score: int, quant_score: int, content_quality: ContentQualityResult) -> list[ActionItem]:
    """Content-quality hints filed under the breakdown categories that are below the good threshold.

    A low category the content-quality generator has nothing specific for
    still gets one general item.
    """
    good = int(get_scoring_value("action_items.good_threshold", 70))
    scores = {"content_relevance": content_score, "quantification_impact": quant_score}
    items = [
        item
        for item in generate_content_quality_action_items(content_quality, categories=_CONTENT_ITEM_CATEGORIES)
        if scores[item.category] < good
    ]
    covered = {item.category for item in items}

    if content_score < good and "content_relevance" not in covered:
        if content_quality.details.total_bullets == 0:
            message = "Add achievement bullets to your experience and projects"
        else:
            message = "Work more job description keywords into your experience bullets"
        high = content_score < 50
        items.append(
            ActionItem(
                priority="high" if high else "medium",
                category="content_relevance",
                message=message,
                potential_impact=10 if high else 5,
            )
        )
    if quant_score < good and "quantification_impact" not in covered:
        high = quant_score < 40
        items.append(
            ActionItem(
                priority="high" if high else "medium",
                category="quantification_impact",
                message=metrics_coverage_message(content_quality.details),
                potential_impact=10 if high else 5,
            )
        )
    return items


def _format_items(
    format_issues: Sequence[FormatIssue],
    section_order: SectionOrderValidation | None,
) -> list[ActionItem]:
    priority_for = {"critical": "high", "warning": "medium", "suggestion": "low"}
    items = [
        ActionItem(
            priority=priority_for[issue.type],  # type: ignore[arg-type]
            category="format_structure",
            message=issue.message,
            potential_impact=5 if issue.type == "critical" else 2,
        )
        for issue in format_issues
    ]
    if section_order is not None and not section_order.is_correct_order:
        items.append(
            ActionItem(
                priority="medium",
                category="format_structure",
                message=f"Reorder sections to: {', '.join(section_order.recommended_order)}",
                potential_impact=4,
            )
        )
    return items


def _coverage_items(score: int) -> list[ActionItem]:
    high = score < 50
    return [
        ActionItem(
            priority="high" if high else "medium",
            category="skills_coverage",
            message="Fill in the sections recruiters expect for your profile (summary, skills, experience, education)",
            potential_impact=8 if high else 4,
        )
    ]


def rank_action_items(items: Iterable[ActionItem]) -> list[ActionItem]:
    ranked = sorted(items, key=lambda item: (_PRIORITY_RANK[item.priority], -item.potential_impact))
    return ranked[: int(get_scoring_value("action_items.max_items", 8))]


def aggregate_ats_score(
    *,
    keyword_match_rate: float,
    content_quality: ContentQualityResult,
    section_coverage: float,
    format_issues: Sequence[FormatIssue] = (),
    section_order: SectionOrderValidation | None = None,
    missing_keywords: Sequence[str] = (),
    weights: Mapping[str, float] | None = None,
) -> ATSScore:
    """Build the scored breakdown, overall score, tier and ranked action items."""
    if weights is None:
        resolved = expected_weights()
    elif _weights_valid(weights):
        resolved = {name: float(weights[name]) for name in CATEGORIES}
    else:
        logger.warning(
            "score_weights_rejected weight_sum=%.4f categories=%s",
            sum(float(value) for value in weights.values()),
            ",".join(sorted(weights)),
        )
        resolved = expected_weights()

    keyword_score = clamp_score(keyword_match_rate)
    content_score = content_quality.score
    quant_score = content_quality.breakdown.quantification_score
    format_score = calculate_format_score(format_issues, section_order)
    coverage_score = clamp_score(section_coverage)
    violations = len(section_order.violations) if section_order is not None else 0

    breakdown = normalize_breakdown(
        ScoreBreakdown(
            categories={
                "keyword_alignment": CategoryScore(
                    score=keyword_score,
                    weight=resolved["keyword_alignment"],
                    reason=f"{keyword_score}% of job description keywords matched",
                ),
                "content_relevance": CategoryScore(
                    score=content_score,
                    weight=resolved["content_relevance"],
                    reason=f"Content quality {content_score}/100 across {content_quality.details.total_bullets} bullets",
                ),
                "quantification_impact": CategoryScore(
                    score=quant_score,
                    weight=resolved["quantification_impact"],
                    reason=(
                        f"{content_quality.details.bullets_with_metrics}/"
                        f"{content_quality.details.total_bullets} bullets quantified"
                    ),
                ),
                "format_structure": CategoryScore(
                    score=format_score,
                    weight=resolved["format_structure"],
                    reason=f"{len(format_issues)} format issue(s), {violations} section order violation(s)",
                ),
                "skills_coverage": CategoryScore(
                    score=coverage_score,
                    weight=resolved["skills_coverage"],
                    reason=f"{coverage_score}% of expected sections present",
                ),
            }
        )
    )

    good = int(get_scoring_value("action_items.good_threshold", 70))
    items: list[ActionItem] = []
    if keyword_score < good:
        items.extend(_keyword_items(keyword_score, missing_keywords))
    items.extend(_content_items(content_score, quant_score, content_quality))
    if format_score < good:
        items.extend(_format_items(format_issues, section_order))
    if coverage_score < good:
        items.extend(_coverage_items(coverage_score))

    overall = calculate_overall_score(breakdown)
    logger.info("ats_score_calculated overall=%s tier=%s action_items=%s", overall, get_score_tier(overall), len(items))
    return ATSScore(
        overall=overall,
        tier=get_score_tier(overall),
        breakdown=breakdown,
        action_items=tuple(rank_action_items(items)),
        calculated_at=datetime.now(timezone.utc),
        algorithm_version=str(get_scoring_config().get("algorithm_version", "")),
    )


def match_rate_from_keywords(matched: int, total: int) -> int:
    """Keyword alignment percentage; zero keywords count as no alignment."""
    if total <= 0:
        return 0
    return round_half_up(matched / total * 100)
