from __future__ import annotations

from datetime import datetime
from types import MappingProxyType
from typing import Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

VerbStrength = Literal["strong", "moderate", "weak", "unknown"]
QuantificationType = Literal["currency", "percentage", "multiplier", "count", "other"]
QuantificationTier = Literal["high", "medium", "low"]
ExtractionSource = Literal["pattern", "newline"]
BulletSource = Literal["pattern", "newline", "structured"]
JobType = Literal["coop", "fulltime"]
CandidateType = Literal["coop", "fulltime", "career_changer"]
ExperienceLevel = Literal["student", "career_changer", "experienced"]
FormatIssueSeverity = Literal["critical", "warning", "suggestion"]
FormatIssueSource = Literal["rule-based", "ai-detected"]
ActionPriority = Literal["critical", "high", "medium", "low"]
ScoreTier = Literal["excellent", "strong", "moderate", "weak"]
SuggestionMode = Literal["Transformation", "Improvement", "Optimization", "Validation"]
StructuralPriority = Literal["critical", "high", "moderate"]
StructuralCategory = Literal["section_order", "section_presence", "section_heading"]
CategoryName = Literal[
    "keyword_alignment",
    "content_relevance",
    "quantification_impact",
    "format_structure",
    "skills_coverage",
]


class Bullet(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    has_metric: bool
    has_strong_verb: bool
    first_word: str
    keywords: tuple[str, ...] = ()


class BulletExtractionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    bullets: tuple[Bullet, ...] = ()
    source: ExtractionSource


class BulletSources(BaseModel):
    model_config = ConfigDict(frozen=True)

    experience: int = Field(default=0, ge=0)
    projects: int = Field(default=0, ge=0)
    education: int = Field(default=0, ge=0)


class QuantificationMatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: QuantificationType
    tier: QuantificationTier
    raw_text: str


class ContentQualityBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    quantification_score: int = Field(ge=0, le=100)
    action_verb_score: int = Field(ge=0, le=100)
    keyword_density_score: int = Field(ge=0, le=100)


class ContentQualityDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_bullets: int = 0
    bullets_with_metrics: int = 0
    high_tier_metrics: int = 0
    medium_tier_metrics: int = 0
    low_tier_metrics: int = 0
    strong_verb_count: int = 0
    moderate_verb_count: int = 0
    weak_verb_count: int = 0
    keywords_found: tuple[str, ...] = ()
    keywords_missing: tuple[str, ...] = ()


class ContentQualityResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100)
    breakdown: ContentQualityBreakdown
    details: ContentQualityDetails


class SectionOrderViolation(BaseModel):
    model_config = ConfigDict(frozen=True)

    section: str
    expected_position: int
    actual_position: int
    description: str


class SectionOrderValidation(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_correct_order: bool
    violations: tuple[SectionOrderViolation, ...] = ()
    recommended_order: tuple[str, ...] = ()


class FormatIssue(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: FormatIssueSeverity
    message: str
    detail: str
    source: FormatIssueSource = "rule-based"


class StructuralSuggestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    priority: StructuralPriority
    category: StructuralCategory
    message: str
    current_state: str
    recommended_action: str


class CategoryScore(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100)
    weight: float = Field(ge=0.0, le=1.0)
    reason: str = ""


class ScoreBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    categories: Mapping[str, CategoryScore]

    @field_validator("categories", mode="after")
    @classmethod
    def _read_only(cls, value: Mapping[str, CategoryScore]) -> Mapping[str, CategoryScore]:
        return MappingProxyType(dict(value))

    @field_serializer("categories")
    def _serialize_categories(self, value: Mapping[str, CategoryScore]) -> dict[str, CategoryScore]:
        return dict(value)

    def weight_sum(self) -> float:
        return sum(category.weight for category in self.categories.values())


class ActionItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    priority: ActionPriority
    category: str
    message: str
    potential_impact: int = Field(default=0, ge=0, le=100)


class ATSScore(BaseModel):
    model_config = ConfigDict(frozen=True)

    overall: int = Field(ge=0, le=100)
    tier: ScoreTier
    breakdown: ScoreBreakdown
    action_items: tuple[ActionItem, ...] = ()
    calculated_at: datetime
    algorithm_version: str = ""


class CalibrationSignals(BaseModel):
    """Inputs to suggestion calibration.

    Deliberately unconstrained: contract checks live in
    ``validate_calibration_signals`` so they can be reported, not raised.
    """

    model_config = ConfigDict(frozen=True)

    ats_score: float
    experience_level: str
    missing_keywords_count: int
    quantification_density: float
    total_bullets: int


class PriorityBoosts(BaseModel):
    model_config = ConfigDict(frozen=True)

    keyword: int
    quantification: int
    experience: int


class CalibrationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: SuggestionMode
    suggestions_target_count: int
    priority_boosts: PriorityBoosts
    focus_areas: tuple[str, ...]
    reasoning: str
