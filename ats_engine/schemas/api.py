from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from .resume import ParsedResume
from .scoring import (
    ATSScore,
    BulletSource,
    CalibrationResult,
    CandidateType,
    ContentQualityResult,
    ExperienceLevel,
    FormatIssue,
    JobType,
    SectionOrderValidation,
    StructuralSuggestion,
)

KeywordImportance = Literal["high", "medium", "low"]


class KeywordSignal(BaseModel):
    keyword: str = Field(min_length=1, max_length=200)
    importance: KeywordImportance = "medium"
    matched: bool = False


class ScoreRequest(BaseModel):
    resume_text: str = Field(default="", max_length=100000)
    parsed_resume: ParsedResume = Field(default_factory=ParsedResume)
    keywords: list[KeywordSignal] = Field(default_factory=list, max_length=500)
    match_rate: float | None = Field(default=None, ge=0.0, le=100.0)
    candidate_type: CandidateType = "fulltime"
    experience_level: ExperienceLevel = "student"
    detected_sections: list[str] | None = None
    category_weights: dict[str, float] | None = None


class ScoreResponse(BaseModel):
    ats_score: ATSScore
    content_quality: ContentQualityResult
    section_order: SectionOrderValidation
    format_issues: list[FormatIssue]
    structural_suggestions: list[StructuralSuggestion] = Field(default_factory=list)
    calibration: CalibrationResult | None = None
    calibration_errors: list[str] = Field(default_factory=list)
    bullet_source: BulletSource
    quantification_density: int = Field(ge=0, le=100)


class ContentQualityRequest(BaseModel):
    bullets: list[str] = Field(default_factory=list, max_length=500)
    jd_keywords: list[str] = Field(default_factory=list, max_length=500)
    job_type: JobType = "fulltime"


class SectionOrderRequest(BaseModel):
    present_sections: list[str] | None = None
    resume_text: str = Field(default="", max_length=100000)
    candidate_type: CandidateType = "fulltime"


class FormatIssuesRequest(BaseModel):
    parsed_resume: ParsedResume = Field(default_factory=ParsedResume)
    experience_level: ExperienceLevel = "student"


class CalibrationRequest(BaseModel):
    ats_score: float
    experience_level: str
    missing_keywords_count: int
    quantification_density: float
    total_bullets: int
