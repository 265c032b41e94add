"""HTTP routes exposing the offer pipeline as an internal service.

The holder identity comes from the ``X-Creator-Id`` header; authenticating
that header is the job of whatever sits in front of this service.

Routes read their collaborators from ``request.app.state.services``:
``parser`` (``OfferParser``), ``extractor`` (``TextExtractor``), and
``tracker`` (``OfferTracker``).

Parser and tracker calls block on network or SQLite I/O, so every route runs
them in a worker thread via ``asyncio.to_thread``.
"""

from __future__ import annotations

import asyncio
from typing import Annotated, Any

import structlog
from fastapi import APIRouter, FastAPI, Header, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

from offerdesk.domain.errors import (
    ExtractionFailedError,
    InvalidTransitionError,
    OfferValidationError,
    ParsingUnavailableError,
    RecordForbiddenError,
    RecordNotFoundError,
    UnsupportedFormatError,
)
from offerdesk.domain.models import GiftOfferInput, HolderProfile, StructuredOffer
from offerdesk.domain.types import OfferStatus, Recommendation, ScriptStage
from offerdesk.evaluation import OfferEvaluation, evaluate_offer
from offerdesk.llm import DMAnalysis
from offerdesk.responses import (
    GeneratedResponse,
    ResponseContext,
    ResponseTypeDescription,
    describe_response_type,
    generate_response,
)
from offerdesk.tracking import (
    ContentInput,
    ConvertInput,
    FollowUpInput,
    FollowUpSuggestion,
    OfferAnalytics,
    OfferRecord,
    OfferRecordCreate,
    OfferRecordUpdate,
    OfferTracker,
    PerformanceInput,
    RejectInput,
)

logger = structlog.get_logger()

router = APIRouter()

CreatorId = Annotated[str, Header(alias="X-Creator-Id", min_length=1)]


# ---------------------------------------------------------------------------
# Request / response bodies
# ---------------------------------------------------------------------------


class ParseBriefRequest(BaseModel):
    text: str


class ParseDMRequest(BaseModel):
    text: str
    profile: HolderProfile = Field(default_factory=HolderProfile)


class EvaluateRequest(BaseModel):
    offer: GiftOfferInput
    profile: HolderProfile = Field(default_factory=HolderProfile)
    context: ResponseContext = Field(default_factory=ResponseContext)


class EvaluateResponse(BaseModel):
    evaluation: OfferEvaluation
    response: GeneratedResponse


class ScriptResponse(BaseModel):
    stage: ScriptStage
    script: str


def _tracker(request: Request) -> OfferTracker:
    return request.app.state.services["tracker"]


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


@router.post("/parse/brief", response_model=StructuredOffer)
async def parse_brief(body: ParseBriefRequest, request: Request) -> StructuredOffer:
    parser = request.app.state.services["parser"]
    return await asyncio.to_thread(parser.parse_offer, body.text)


@router.post("/parse/brief/file", response_model=StructuredOffer)
async def parse_brief_file(
    request: Request,
    filename: Annotated[str, Query(min_length=1)],
) -> StructuredOffer:
    """Parse an uploaded brief sent as the raw request body."""
    services = request.app.state.services
    data = await request.body()
    return await asyncio.to_thread(
        services["parser"].parse_offer_file, data, filename, services["extractor"]
    )


@router.post("/parse/dm", response_model=DMAnalysis)
async def parse_dm(body: ParseDMRequest, request: Request) -> DMAnalysis:
    parser = request.app.state.services["parser"]
    return await asyncio.to_thread(parser.parse_dm, body.text, body.profile)


# ---------------------------------------------------------------------------
# Evaluation and replies
# ---------------------------------------------------------------------------


@router.post("/evaluate", response_model=EvaluateResponse)
async def evaluate(body: EvaluateRequest) -> EvaluateResponse:
    evaluation = evaluate_offer(body.offer, body.profile)
    return EvaluateResponse(
        evaluation=evaluation,
        response=generate_response(evaluation, body.context),
    )


@router.get("/responses/types", response_model=dict[str, ResponseTypeDescription])
async def response_types() -> dict[str, ResponseTypeDescription]:
    return {str(kind): describe_response_type(kind) for kind in Recommendation}


# ---------------------------------------------------------------------------
# Tracked records
# ---------------------------------------------------------------------------


@router.post("/records", response_model=OfferRecord, status_code=201)
async def create_record(
    body: OfferRecordCreate, creator_id: CreatorId, request: Request
) -> OfferRecord:
    return await asyncio.to_thread(_tracker(request).create, creator_id, body)


@router.get("/records", response_model=list[OfferRecord])
async def list_records(
    creator_id: CreatorId, request: Request, status: OfferStatus | None = None
) -> list[OfferRecord]:
    return await asyncio.to_thread(_tracker(request).list_records, creator_id, status)


@router.get("/records/ready-to-convert", response_model=list[OfferRecord])
async def ready_to_convert(creator_id: CreatorId, request: Request) -> list[OfferRecord]:
    return await asyncio.to_thread(_tracker(request).ready_to_convert, creator_id)


@router.get("/records/follow-ups-due", response_model=list[OfferRecord])
async def follow_ups_due(creator_id: CreatorId, request: Request) -> list[OfferRecord]:
    return await asyncio.to_thread(_tracker(request).follow_ups_due, creator_id)


@router.get("/analytics", response_model=OfferAnalytics)
async def analytics(creator_id: CreatorId, request: Request) -> OfferAnalytics:
    return await asyncio.to_thread(_tracker(request).analytics, creator_id)


@router.get("/records/{record_id}", response_model=OfferRecord)
async def get_record(record_id: str, creator_id: CreatorId, request: Request) -> OfferRecord:
    return await asyncio.to_thread(_tracker(request).get, creator_id, record_id)


@router.patch("/records/{record_id}", response_model=OfferRecord)
async def update_record(
    record_id: str, body: OfferRecordUpdate, creator_id: CreatorId, request: Request
) -> OfferRecord:
    return await asyncio.to_thread(_tracker(request).update, creator_id, record_id, body)


@router.delete("/records/{record_id}", status_code=204)
async def delete_record(record_id: str, creator_id: CreatorId, request: Request) -> None:
    await asyncio.to_thread(_tracker(request).delete, creator_id, record_id)


@router.post("/records/{record_id}/content", response_model=OfferRecord)
async def add_content(
    record_id: str, body: ContentInput, creator_id: CreatorId, request: Request
) -> OfferRecord:
    return await asyncio.to_thread(_tracker(request).add_content, creator_id, record_id, body)


@router.post("/records/{record_id}/performance", response_model=OfferRecord)
async def add_performance(
    record_id: str, body: PerformanceInput, creator_id: CreatorId, request: Request
) -> OfferRecord:
    return await asyncio.to_thread(_tracker(request).add_performance, creator_id, record_id, body)


@router.post("/records/{record_id}/follow-up", response_model=OfferRecord)
async def log_follow_up(
    record_id: str, body: FollowUpInput, creator_id: CreatorId, request: Request
) -> OfferRecord:
    return await asyncio.to_thread(_tracker(request).log_follow_up, creator_id, record_id, body)


@router.post("/records/{record_id}/convert", response_model=OfferRecord)
async def mark_converted(
    record_id: str, body: ConvertInput, creator_id: CreatorId, request: Request
) -> OfferRecord:
    return await asyncio.to_thread(_tracker(request).mark_converted, creator_id, record_id, body)


@router.post("/records/{record_id}/reject", response_model=OfferRecord)
async def mark_rejected(
    record_id: str, body: RejectInput, creator_id: CreatorId, request: Request
) -> OfferRecord:
    return await asyncio.to_thread(_tracker(request).mark_rejected, creator_id, record_id, body)


@router.post("/records/{record_id}/archive", response_model=OfferRecord)
async def archive_record(record_id: str, creator_id: CreatorId, request: Request) -> OfferRecord:
    return await asyncio.to_thread(_tracker(request).archive, creator_id, record_id)


@router.get("/records/{record_id}/script", response_model=ScriptResponse)
async def record_script(
    record_id: str,
    creator_id: CreatorId,
    request: Request,
    stage: ScriptStage | None = None,
) -> ScriptResponse:
    """Conversion script for a record; the stage is suggested when omitted."""
    tracker = _tracker(request)
    if stage is None:
        suggestion = await asyncio.to_thread(tracker.suggest_follow_up, creator_id, record_id)
        stage = suggestion.stage
    script = await asyncio.to_thread(tracker.conversion_script, creator_id, record_id, stage)
    return ScriptResponse(stage=stage, script=script)


@router.get("/records/{record_id}/suggested-script", response_model=FollowUpSuggestion)
async def suggested_script(
    record_id: str, creator_id: CreatorId, request: Request
) -> FollowUpSuggestion:
    return await asyncio.to_thread(_tracker(request).suggest_follow_up, creator_id, record_id)


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------


def _error(status_code: int, exc: Exception, **extra: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": str(exc), **extra})


def register_error_handlers(app: FastAPI) -> None:
    """Map domain errors onto HTTP status codes.

    Parsing failures carry ``retryable: true`` so callers can offer a retry.
    """

    @app.exception_handler(OfferValidationError)
    async def validation_failed(request: Request, exc: OfferValidationError) -> JSONResponse:
        return _error(422, exc)

    @app.exception_handler(ValidationError)
    async def model_validation_failed(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "detail": exc.errors(
                    include_url=False, include_context=False, include_input=False
                )
            },
        )

    @app.exception_handler(UnsupportedFormatError)
    async def unsupported_format(request: Request, exc: UnsupportedFormatError) -> JSONResponse:
        return _error(415, exc)

    @app.exception_handler(ExtractionFailedError)
    async def extraction_failed(request: Request, exc: ExtractionFailedError) -> JSONResponse:
        return _error(422, exc)

    @app.exception_handler(RecordNotFoundError)
    async def not_found(request: Request, exc: RecordNotFoundError) -> JSONResponse:
        return _error(404, exc)

    @app.exception_handler(RecordForbiddenError)
    async def forbidden(request: Request, exc: RecordForbiddenError) -> JSONResponse:
        return _error(403, exc)

    @app.exception_handler(InvalidTransitionError)
    async def invalid_transition(request: Request, exc: InvalidTransitionError) -> JSONResponse:
        return _error(409, exc, state=str(exc.current_state), event=str(exc.event))

    @app.exception_handler(ParsingUnavailableError)
    async def parsing_unavailable(
        request: Request, exc: ParsingUnavailableError
    ) -> JSONResponse:
        return _error(503, exc, retryable=True)
