from fastapi import APIRouter, Depends, Header, HTTPException, Request

from ats_engine.core.rate_limit import rate_limit
from ats_engine.core.security import check_api_key
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
    ContentQualityResult,
    FormatIssue,
    SectionOrderValidation,
)
from ats_engine.services.scoring_service import (
    CalibrationSignalsError,
    run_calibration,
    run_resume_scoring,
    score_content_quality,
    score_format_issues,
    score_section_order,
)

router = APIRouter()


def _auth(x_api_key: str | None = Header(default=None, alias="X-API-Key")):
    check_api_key(x_api_key)


@router.post("/score", response_model=ScoreResponse)
@rate_limit()
async def score_resume(request: Request, payload: ScoreRequest, _: None = Depends(_auth)):
    return run_resume_scoring(payload)


@router.post("/content-quality", response_model=ContentQualityResult)
@rate_limit()
async def content_quality(request: Request, payload: ContentQualityRequest, _: None = Depends(_auth)):
    return score_content_quality(payload)


@router.post("/section-order", response_model=SectionOrderValidation)
@rate_limit()
async def section_order(request: Request, payload: SectionOrderRequest, _: None = Depends(_auth)):
    return score_section_order(payload)


@router.post("/format-issues", response_model=list[FormatIssue])
@rate_limit()
async def format_issues(request: Request, payload: FormatIssuesRequest, _: None = Depends(_auth)):
    return score_format_issues(payload)


@router.post("/calibrate", response_model=CalibrationResult)
@rate_limit()
async def calibrate(request: Request, payload: CalibrationRequest, _: None = Depends(_auth)):
    try:
        return run_calibration(payload)
    except CalibrationSignalsError as exc:
        raise HTTPException(
            status_code=422,
            detail=exc.errors,
        ) from exc
