from .resume import EducationEntry, ExperienceEntry, ParsedResume
from .scoring import (
    ActionItem,
    ATSScore,
    Bullet,
    BulletExtractionResult,
    BulletSources,
    CalibrationResult,
    CalibrationSignals,
    CategoryScore,
    ContentQualityBreakdown,
    ContentQualityDetails,
    ContentQualityResult,
    FormatIssue,
    PriorityBoosts,
    QuantificationMatch,
    ScoreBreakdown,
    SectionOrderValidation,
    SectionOrderViolation,
    StructuralSuggestion,
)

__all__ = [
    "ActionItem",
    "ATSScore",
    "Bullet",
    "BulletExtractionResult",
    "BulletSources",
    "CalibrationResult",
    "CalibrationSignals",
    "CategoryScore",
    "ContentQualityBreakdown",
    "ContentQualityDetails",
    "ContentQualityResult",
    "EducationEntry",
    "ExperienceEntry",
    "FormatIssue",
    "ParsedResume",
    "PriorityBoosts",
    "QuantificationMatch",
    "ScoreBreakdown",
    "SectionOrderValidation",
    "SectionOrderViolation",
    "StructuralSuggestion",
]
