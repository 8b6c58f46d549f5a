import logging

from fastapi import APIRouter, Depends, HTTPException

from medassist.dependencies import get_doctor_id
from medassist.models.clinical import RecordSummary
from medassist.models.patient import PatientCreate, PatientResponse
from medassist.models.records import HistoryEntry, MedicalSummary, SummaryCreate
from medassist.services import records
from medassist.services.clinical import summarize_record, validate_result

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/patients", tags=["patients"])


async def _require_patient(doctor_id: str, patient_id: str) -> PatientResponse:
    patient = await records.get_patient(doctor_id, patient_id)
    if patient is None:
        raise HTTPException(status_code=404, detail="Patient not found")
    return patient


@router.get("", response_model=list[PatientResponse])
async def list_patients(doctor_id: str = Depends(get_doctor_id)):
    """List the doctor's patients, newest first."""
    return await records.list_patients(doctor_id)


@router.post("", response_model=PatientResponse)
async def create_patient(body: PatientCreate, doctor_id: str = Depends(get_doctor_id)):
    """Add a patient. Only the full name is required."""
    patient = await records.create_patient(doctor_id, body)
    logger.info("Patient %s added for doctor %s", patient.id, doctor_id)
    return patient


@router.get("/{patient_id}", response_model=PatientResponse)
async def get_patient(patient_id: str, doctor_id: str = Depends(get_doctor_id)):
    return await _require_patient(doctor_id, patient_id)


@router.get("/{patient_id}/history", response_model=list[HistoryEntry])
async def get_patient_history(patient_id: str, doctor_id: str = Depends(get_doctor_id)):
    """Symptom records with their diagnoses and treatments."""
    await _require_patient(doctor_id, patient_id)
    return await records.get_patient_history(doctor_id, patient_id)


@router.get("/{patient_id}/summaries", response_model=list[MedicalSummary])
async def list_summaries(patient_id: str, doctor_id: str = Depends(get_doctor_id)):
    await _require_patient(doctor_id, patient_id)
    return await records.list_summaries(doctor_id, patient_id)


@router.post("/{patient_id}/summaries", response_model=MedicalSummary)
async def create_summary(
    patient_id: str,
    body: SummaryCreate,
    doctor_id: str = Depends(get_doctor_id),
):
    """Summarize a medical record with the AI gateway and store the result."""
    await _require_patient(doctor_id, patient_id)
    data = await summarize_record(body.medical_record_text)
    result = validate_result(RecordSummary, data, "AI returned an invalid summary")
    return await records.create_summary(
        patient_id=patient_id,
        doctor_id=doctor_id,
        original_text=body.medical_record_text,
        result=result,
    )
