"""The symptom analysis chain.

symptom record -> diagnosis call -> diagnosis row -> treatment call ->
treatment row, strictly in that order. The chain is not transactional: a
failure at any step stops the remaining steps and leaves the rows already
written in place.
"""

import logging

from medassist.models.clinical import DiagnosisAnalysis, TreatmentSuggestion
from medassist.models.patient import PatientResponse
from medassist.models.records import AnalysisResponse
from medassist.services import records
from medassist.services.clinical import analyze_symptoms, suggest_treatment, validate_result

logger = logging.getLogger(__name__)


def describe_patient(patient: PatientResponse) -> str:
    parts = [f"Gender: {patient.gender or 'Unknown'}"]
    if patient.date_of_birth:
        parts.append(f"Date of birth: {patient.date_of_birth}")
    return ", ".join(parts)


async def run_analysis(
    *,
    doctor_id: str,
    patient: PatientResponse,
    symptoms: str,
    severity: str,
    duration: str | None = None,
    additional_notes: str | None = None,
) -> AnalysisResponse:
    symptom_record = await records.create_symptom_record(
        patient_id=patient.id,
        doctor_id=doctor_id,
        symptoms=symptoms,
        severity=severity,
        duration=duration,
        additional_notes=additional_notes,
    )
    logger.info("Symptom record %s created for patient %s", symptom_record.id, patient.id)

    analysis_data = await analyze_symptoms(
        symptoms,
        severity,
        duration,
        patient_history=patient.medical_history,
    )
    diagnosis = await records.create_diagnosis(
        symptom_record_id=symptom_record.id,
        doctor_id=doctor_id,
        analysis=validate_result(DiagnosisAnalysis, analysis_data, "AI returned an invalid analysis"),
    )

    treatment_data = await suggest_treatment(
        diagnosis.diagnosis,
        patient_info=describe_patient(patient),
        allergies=patient.allergies,
        current_medications=patient.current_medications,
    )
    treatment = await records.create_treatment(
        diagnosis_id=diagnosis.id,
        doctor_id=doctor_id,
        suggestion=validate_result(TreatmentSuggestion, treatment_data, "AI returned an invalid treatment plan"),
    )
    logger.info("Analysis complete for symptom record %s", symptom_record.id)

    return AnalysisResponse(
        symptom_record=symptom_record,
        diagnosis=diagnosis,
        treatment=treatment,
        analysis=analysis_data,
        treatment_suggestion=treatment_data,
    )
