import logging
from functools import lru_cache
from typing import List, Optional

import pydantic
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from app.agents.content_analyzer import ReportRequester, RequestError, request_analysis
from app.models.analysis import (
    GENDER_LABELS,
    AnalysisReport,
    AnalysisRequest,
    FieldChange,
    GenderOption,
    InstagramContent,
    PurchaseLikelihood,
    TargetAudience,
)
from app.services.controller import AnalysisController, compose_failure_message
from app.services.validator import InputValidationError, validate_inputs

logger = logging.getLogger(__name__)
router = APIRouter()


class AnalysisOptions(BaseModel):
    genders: List[GenderOption]
    likelihoods: List[PurchaseLikelihood]
    defaultAudience: TargetAudience
    defaultContent: InstagramContent


class SessionView(BaseModel):
    audience: TargetAudience
    content: InstagramContent
    report: Optional[AnalysisReport] = None
    isLoading: bool
    error: Optional[str] = None


def get_requester() -> ReportRequester:
    return request_analysis


@lru_cache
def get_controller() -> AnalysisController:
    return AnalysisController()


def _session_view(controller: AnalysisController) -> SessionView:
    return SessionView(
        audience=controller.audience,
        content=controller.content,
        report=controller.report,
        isLoading=controller.is_loading,
        error=controller.error,
    )


def _validation_detail(exc: InputValidationError) -> dict:
    return {"kind": exc.kind.value, "message": exc.message}


@router.get("/options", response_model=AnalysisOptions)
async def analysis_options():
    return AnalysisOptions(
        genders=[GenderOption(value=g, label=label) for g, label in GENDER_LABELS.items()],
        likelihoods=list(PurchaseLikelihood),
        defaultAudience=TargetAudience(),
        defaultContent=InstagramContent(),
    )


@router.post("", response_model=AnalysisReport)
async def analyze_content(
    request: AnalysisRequest,
    requester: ReportRequester = Depends(get_requester),
):
    try:
        validate_inputs(request.audience, request.content)
    except InputValidationError as e:
        raise HTTPException(status_code=422, detail=_validation_detail(e))

    try:
        report = await requester(request.audience, request.content)
    except RequestError as e:
        logger.error(f"Analysis failed: {e}")
        raise HTTPException(status_code=502, detail=compose_failure_message(e))

    return report


@router.get("/session", response_model=SessionView)
async def get_session(controller: AnalysisController = Depends(get_controller)):
    return _session_view(controller)


@router.patch("/session/audience", response_model=SessionView)
async def change_audience_field(
    change: FieldChange,
    controller: AnalysisController = Depends(get_controller),
):
    try:
        controller.on_audience_field_change(change.field, change.value)
    except (KeyError, pydantic.ValidationError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _session_view(controller)


@router.patch("/session/content", response_model=SessionView)
async def change_content_field(
    change: FieldChange,
    controller: AnalysisController = Depends(get_controller),
):
    try:
        controller.on_content_field_change(change.field, change.value)
    except (KeyError, pydantic.ValidationError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _session_view(controller)


@router.post("/session/submit", response_model=SessionView)
async def submit_session(controller: AnalysisController = Depends(get_controller)):
    logger.info("Session submit requested")
    await controller.submit()
    return _session_view(controller)


@router.post("/session/dismiss-error", response_model=SessionView)
async def dismiss_session_error(controller: AnalysisController = Depends(get_controller)):
    controller.dismiss_error()
    return _session_view(controller)
