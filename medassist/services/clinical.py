"""Symptom analysis, treatment suggestion and record summarization.

Each operation renders its fixed prompt pair and makes a single gateway
call. Inputs are not validated: a missing value is rendered as-is.
"""

import logging

from pydantic import BaseModel, ValidationError

from medassist.services.ai_gateway import GatewayError, get_gateway_client
from medassist.services.prompts import (
    DIAGNOSIS_SYSTEM_PROMPT,
    DIAGNOSIS_TOOL,
    DIAGNOSIS_USER_TEMPLATE,
    SUMMARY_SYSTEM_PROMPT,
    SUMMARY_TOOL,
    SUMMARY_USER_TEMPLATE,
    TREATMENT_SYSTEM_PROMPT,
    TREATMENT_TOOL,
    TREATMENT_USER_TEMPLATE,
)

logger = logging.getLogger(__name__)


def validate_result(model: type[BaseModel], data: object, message: str):
    """Parse a tool result for storage, reporting a mismatch as a gateway error."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.error("%s: %s", message, e)
        raise GatewayError(message) from e


def build_diagnosis_prompt(
    symptoms: object,
    severity: object,
    duration: object,
    patient_history: object = None,
) -> str:
    return DIAGNOSIS_USER_TEMPLATE.format(
        symptoms=symptoms,
        severity=severity,
        duration=duration,
        history_line=f"Patient History: {patient_history}" if patient_history else "",
    )


def build_treatment_prompt(
    diagnosis: object,
    patient_info: object = None,
    allergies: object = None,
    current_medications: object = None,
) -> str:
    return TREATMENT_USER_TEMPLATE.format(
        diagnosis=diagnosis,
        patient_info_line=f"Patient Info: {patient_info}" if patient_info else "",
        allergies_line=f"Allergies: {allergies}" if allergies else "No known allergies",
        medications_line=(
            f"Current Medications: {current_medications}"
            if current_medications
            else "No current medications"
        ),
    )


def build_summary_prompt(medical_record_text: object) -> str:
    return SUMMARY_USER_TEMPLATE.format(medical_record_text=medical_record_text)


async def analyze_symptoms(
    symptoms: object,
    severity: object,
    duration: object,
    patient_history: object = None,
) -> object:
    logger.info("Analyzing symptoms: severity=%s duration=%s", severity, duration)
    return await get_gateway_client().call_tool(
        system=DIAGNOSIS_SYSTEM_PROMPT,
        user=build_diagnosis_prompt(symptoms, severity, duration, patient_history),
        tool=DIAGNOSIS_TOOL,
        empty_message="No valid analysis returned from AI",
    )


async def suggest_treatment(
    diagnosis: object,
    patient_info: object = None,
    allergies: object = None,
    current_medications: object = None,
) -> object:
    logger.info("Suggesting treatment for diagnosis: %s", diagnosis)
    return await get_gateway_client().call_tool(
        system=TREATMENT_SYSTEM_PROMPT,
        user=build_treatment_prompt(diagnosis, patient_info, allergies, current_medications),
        tool=TREATMENT_TOOL,
        empty_message="No valid treatment plan returned from AI",
    )


async def summarize_record(medical_record_text: object) -> object:
    logger.info(
        "Summarizing medical record, length: %s",
        len(medical_record_text) if isinstance(medical_record_text, str) else None,
    )
    return await get_gateway_client().call_tool(
        system=SUMMARY_SYSTEM_PROMPT,
        user=build_summary_prompt(medical_record_text),
        tool=SUMMARY_TOOL,
        empty_message="No valid summary returned from AI",
    )
