"""Stateless proxy endpoints in front of the AI gateway.

Each accepts a CORS preflight and a JSON POST, and answers with the tool
arguments verbatim, or ``{"error": ...}`` with 429, 402 or 500.
"""

import logging
from typing import Awaitable, Callable

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from medassist.models.clinical import (
    AnalyzeSymptomsRequest,
    SuggestTreatmentRequest,
    SummarizeRecordsRequest,
)
from medassist.services.ai_gateway import GatewayError
from medassist.services.clinical import analyze_symptoms, suggest_treatment, summarize_record

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions", tags=["functions"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


def _preflight() -> Response:
    return Response(status_code=200, headers=CORS_HEADERS)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code, headers=CORS_HEADERS)


async def _proxy(
    name: str,
    request: Request,
    body_model: type[BaseModel],
    handler: Callable[[BaseModel], Awaitable[object]],
) -> JSONResponse:
    try:
        body = body_model.model_validate(await request.json())
        result = await handler(body)
    except GatewayError as e:
        if e.status_code == 500:
            logger.error("Error in %s: %s", name, e.message)
        return _error(e.status_code, e.message)
    except Exception as e:
        logger.exception("Error in %s", name)
        return _error(500, str(e) or "Internal server error")
    return JSONResponse(result, headers=CORS_HEADERS)


@router.options("/analyze-symptoms")
async def analyze_symptoms_preflight():
    return _preflight()


@router.post("/analyze-symptoms")
async def analyze_symptoms_endpoint(request: Request):
    """Suggest a primary diagnosis with differentials for reported symptoms."""

    async def handle(body: AnalyzeSymptomsRequest) -> object:
        return await analyze_symptoms(
            body.symptoms, body.severity, body.duration, body.patient_history
        )

    return await _proxy("analyze-symptoms", request, AnalyzeSymptomsRequest, handle)


@router.options("/suggest-treatment")
async def suggest_treatment_preflight():
    return _preflight()


@router.post("/suggest-treatment")
async def suggest_treatment_endpoint(request: Request):
    """Suggest a treatment plan for a diagnosis."""

    async def handle(body: SuggestTreatmentRequest) -> object:
        return await suggest_treatment(
            body.diagnosis, body.patient_info, body.allergies, body.current_medications
        )

    return await _proxy("suggest-treatment", request, SuggestTreatmentRequest, handle)


@router.options("/summarize-records")
async def summarize_records_preflight():
    return _preflight()


@router.post("/summarize-records")
async def summarize_records_endpoint(request: Request):
    """Summarize free-text medical records."""

    async def handle(body: SummarizeRecordsRequest) -> object:
        return await summarize_record(body.medical_record_text)

    return await _proxy("summarize-records", request, SummarizeRecordsRequest, handle)
