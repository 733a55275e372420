from __future__ import annotations

import re
from typing import Iterable

from ats_engine.core.config.scoring import get_scoring_value
from ats_engine.schemas.scoring import QuantificationMatch, QuantificationTier

from .patterns import MAGNITUDE_MULTIPLIERS, QUANTIFICATION_PATTERNS

_TIER_RANK: dict[str, int] = {"high": 3, "medium": 2, "low": 1}


def _amount(match: re.Match[str]) -> float:
    groups = match.groupdict()
    raw = groups.get("amount") or groups.get("ordinal") or "0"
    try:
        value = float(raw.replace(",", ""))
    except ValueError:
        return 0.0
    suffix = (groups.get("suffix") or "").strip().lower()
    return value * MAGNITUDE_MULTIPLIERS.get(suffix, 1.0)


def _threshold(path: str, default: float) -> float:
    return float(get_scoring_value(path, default))


def _tier_for(family: str, pattern_name: str, value: float) -> QuantificationTier:
    if family == "currency":
        if value >= _threshold("quantification.currency.high", 1_000_000):
            return "high"
        if value >= _threshold("quantification.currency.medium", 100_000):
            return "medium"
        return "low"
    if family == "percentage":
        if value >= _threshold("quantification.percentage.high", 95):
            return "high"
        if value >= _threshold("quantification.percentage.medium", 30):
            return "medium"
        return "low"
    if family == "multiplier":
        return "high"
    if family == "count":
        if value >= _threshold("quantification.count.high", 1_000_000):
            return "high"
        if value >= _threshold("quantification.count.medium", 1_000):
            return "medium"
        return "low"
    if pattern_name == "team":
        return "high" if value >= _threshold("quantification.team.high", 10) else "medium"
    if pattern_name == "scale":
        return "high"
    return "low"


def detect_quantifications(text: str) -> list[QuantificationMatch]:
    """Find every metric in ``text`` ordered by position.

    Families are evaluated in priority order (currency, percentage,
    multiplier, count, other); a match overlapping an already accepted span
    is dropped so "$50,000" is one currency match, not also a count.
    """
    if not text or not text.strip():
        return []

    accepted: list[tuple[int, int, QuantificationMatch]] = []
    for family, patterns in QUANTIFICATION_PATTERNS.items():
        for pattern in patterns:
            for match in pattern.regex.finditer(text):
                start, end = match.span()
                if start == end:
                    continue
                if any(start < other_end and other_start < end for other_start, other_end, _ in accepted):
                    continue
                tier = _tier_for(family, pattern.name, _amount(match))
                accepted.append(
                    (
                        start,
                        end,
                        QuantificationMatch(type=family, tier=tier, raw_text=match.group(0).strip()),  # type: ignore[arg-type]
                    )
                )

    accepted.sort(key=lambda item: item[0])
    return [item[2] for item in accepted]


def has_metric(text: str) -> bool:
    return bool(detect_quantifications(text))


def best_tier(matches: Iterable[QuantificationMatch]) -> QuantificationTier | None:
    best: QuantificationTier | None = None
    for match in matches:
        if best is None or _TIER_RANK[match.tier] > _TIER_RANK[best]:
            best = match.tier
    return best
