from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ExperienceEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    company: str = ""
    title: str = ""
    dates: str = ""
    bullet_points: list[str] = Field(default_factory=list)


class EducationEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    institution: str = ""
    degree: str = ""
    dates: str = ""
    gpa: str | None = None
    bullet_points: list[str] = Field(default_factory=list)


class ParsedResume(BaseModel):
    """Sections produced by the upstream resume parser.

    List fields may be empty but are never null; prose fields default to "".
    """

    model_config = ConfigDict(frozen=True)

    contact: str = ""
    summary: str = ""
    experience: list[ExperienceEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    projects: str = ""
    other: str = ""
