"""Content quality scoring over all bullet-point content.

Three sub-scores feed one composite:

* quantification: coverage of bullets carrying a metric, weighted by the
  best metric tier per bullet
* action verbs: strong leading verbs rewarded, weak ones penalised; co-op
  resumes treat moderate verbs as fully acceptable
* keyword density: share of JD keywords that appear anywhere in the bullets
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from ats_engine.core.config.scoring import get_scoring_value
from ats_engine.schemas.scoring import (
    ActionItem,
    BulletSources,
    ContentQualityBreakdown,
    ContentQualityDetails,
    ContentQualityResult,
    JobType,
)

from .quantification import best_tier, detect_quantifications
from .utils import clamp_score, unique_keywords
from .verbs import DEFAULT_LEXICON, VerbLexicon, classify_leading_verb


def _float(path: str, default: float) -> float:
    return float(get_scoring_value(path, default))


def _quantification(bullets: Sequence[str]) -> dict[str, int]:
    counts = {"score": 0, "bullets_with_metrics": 0, "high": 0, "medium": 0, "low": 0}
    if not bullets:
        return counts

    points = 0.0
    for bullet in bullets:
        tier = best_tier(detect_quantifications(bullet))
        if tier is None:
            continue
        counts["bullets_with_metrics"] += 1
        counts[tier] += 1
        points += _float(f"content_quality.tier_points.{tier}", {"high": 1.0, "medium": 0.7, "low": 0.4}[tier])

    with_metrics = counts["bullets_with_metrics"]
    coverage = with_metrics / len(bullets)
    quality = points / with_metrics if with_metrics else 0.0
    score = coverage * _float("content_quality.coverage_weight", 0.6) + quality * _float(
        "content_quality.quality_weight", 0.4
    )
    counts["score"] = clamp_score(score * 100)
    return counts


def _verb_points(job_type: str) -> dict[str, float]:
    defaults: dict[str, dict[str, float]] = {
        "fulltime": {"strong": 1.0, "moderate": 0.6, "weak": -0.2},
        "coop": {"strong": 1.0, "moderate": 1.0, "weak": -0.1},
    }
    profile = "coop" if job_type == "coop" else "fulltime"
    configured: Any = get_scoring_value(f"content_quality.verb_points.{profile}", None)
    points = dict(defaults[profile])
    if isinstance(configured, dict):
        points.update({key: float(value) for key, value in configured.items() if key in points})
    if profile == "coop":
        # Co-op leniency must never score below the full-time profile.
        fulltime = _verb_points("fulltime")
        points = {key: max(points[key], fulltime[key]) for key in points}
    return points


def _action_verbs(bullets: Sequence[str], job_type: str, lexicon: VerbLexicon) -> dict[str, int]:
    counts = {"score": 0, "strong": 0, "moderate": 0, "weak": 0}
    if not bullets:
        return counts

    for bullet in bullets:
        strength = classify_leading_verb(bullet, lexicon)
        if strength in counts:
            counts[strength] += 1

    points = _verb_points(job_type)
    raw = (
        counts["strong"] * points["strong"]
        + counts["moderate"] * points["moderate"]
        + counts["weak"] * points["weak"]
    ) / len(bullets)
    counts["score"] = clamp_score(max(0.0, min(1.0, raw)) * 100)
    return counts


def _keyword_density(bullets: Sequence[str], jd_keywords: Sequence[str]) -> tuple[int, list[str], list[str]]:
    keywords = unique_keywords(jd_keywords)
    if not keywords:
        return int(get_scoring_value("content_quality.no_keywords_score", 50)), [], []
    if not bullets:
        return 0, [], keywords

    combined = " ".join(bullets).lower()
    found = [keyword for keyword in keywords if keyword.lower() in combined]
    missing = [keyword for keyword in keywords if keyword.lower() not in combined]

    target = _float("content_quality.keyword_target_coverage", 0.5) or 1.0
    ratio = min(1.0, len(found) / len(keywords) / target)
    return clamp_score(ratio * 100), found, missing


def calculate_content_quality(
    bullets: Sequence[str],
    jd_keywords: Sequence[str] = (),
    *,
    job_type: JobType = "fulltime",
    bullet_sources: BulletSources | None = None,
    lexicon: VerbLexicon = DEFAULT_LEXICON,
) -> ContentQualityResult:
    # bullet_sources is carried for callers that report per-section counts;
    # scoring treats every bullet equally.
    _ = bullet_sources
    clean = [bullet.strip() for bullet in bullets if bullet and bullet.strip()]

    if not clean:
        return ContentQualityResult(
            score=0,
            breakdown=ContentQualityBreakdown(
                quantification_score=0,
                action_verb_score=0,
                keyword_density_score=0,
            ),
            details=ContentQualityDetails(keywords_missing=tuple(unique_keywords(jd_keywords))),
        )

    quant = _quantification(clean)
    verbs = _action_verbs(clean, job_type, lexicon)
    keyword_score, found, missing = _keyword_density(clean, jd_keywords)

    overall = (
        quant["score"] * _float("content_quality.weights.quantification", 0.35)
        + verbs["score"] * _float("content_quality.weights.action_verbs", 0.30)
        + keyword_score * _float("content_quality.weights.keyword_density", 0.35)
    )

    return ContentQualityResult(
        score=clamp_score(overall),
        breakdown=ContentQualityBreakdown(
            quantification_score=quant["score"],
            action_verb_score=verbs["score"],
            keyword_density_score=keyword_score,
        ),
        details=ContentQualityDetails(
            total_bullets=len(clean),
            bullets_with_metrics=quant["bullets_with_metrics"],
            high_tier_metrics=quant["high"],
            medium_tier_metrics=quant["medium"],
            low_tier_metrics=quant["low"],
            strong_verb_count=verbs["strong"],
            moderate_verb_count=verbs["moderate"],
            weak_verb_count=verbs["weak"],
            keywords_found=tuple(found),
            keywords_missing=tuple(missing),
        ),
    )


def metrics_coverage_message(details: ContentQualityDetails) -> str:
    return f"Add metrics to bullets (only {details.bullets_with_metrics}/{details.total_bullets} have quantification)"


def generate_content_quality_action_items(
    result: ContentQualityResult,
    *,
    categories: Mapping[str, str] | None = None,
) -> list[ActionItem]:
    """Remediation hints, empty when the composite score is already good.

    Each hint belongs to one signal (``quantification``, ``verbs`` or
    ``keywords``); ``categories`` maps a signal to the category reported on
    its items, defaulting to ``content_quality``.
    """
    if result.score >= int(get_scoring_value("action_items.good_threshold", 70)):
        return []

    def category(signal: str) -> str:
        return (categories or {}).get(signal, "content_quality")

    details = result.details
    items: list[ActionItem] = []
    if result.breakdown.quantification_score < int(
        get_scoring_value("content_quality.low_quantification_threshold", 40)
    ):
        items.append(
            ActionItem(
                priority="high",
                category=category("quantification"),
                message=metrics_coverage_message(details),
                potential_impact=8,
            )
        )
    if details.weak_verb_count > details.strong_verb_count:
        items.append(
            ActionItem(
                priority="high",
                category=category("verbs"),
                message='Replace weak verbs ("Helped", "Worked on") with strong verbs ("Led", "Developed", "Built")',
                potential_impact=8,
            )
        )
    if details.bullets_with_metrics > 0 and details.low_tier_metrics > details.high_tier_metrics:
        items.append(
            ActionItem(
                priority="medium",
                category=category("quantification"),
                message="Upgrade metrics to higher-impact numbers ($, %, large scale)",
                potential_impact=4,
            )
        )
    if result.breakdown.keyword_density_score < int(
        get_scoring_value("content_quality.low_keyword_density_threshold", 50)
    ):
        items.append(
            ActionItem(
                priority="low",
                category=category("keywords"),
                message="Incorporate more JD keywords into your experience bullets",
                potential_impact=4,
            )
        )
    return items
