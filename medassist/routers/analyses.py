import logging

from fastapi import APIRouter, Depends, HTTPException

from medassist.dependencies import get_doctor_id
from medassist.models.records import AnalysisCreate, AnalysisResponse
from medassist.services import records
from medassist.services.analysis import run_analysis

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analyses", tags=["analyses"])


@router.post("", response_model=AnalysisResponse)
async def create_analysis(body: AnalysisCreate, doctor_id: str = Depends(get_doctor_id)):
    """Record symptoms for a patient and run the diagnosis and treatment chain.

    Rows written before a failing step are kept; the error is returned as
    ``{"error": ...}`` with the gateway's status.
    """
    if not body.patient_id or not body.symptoms:
        raise HTTPException(status_code=400, detail="Please select a patient and enter symptoms")

    patient = await records.get_patient(doctor_id, body.patient_id)
    if patient is None:
        raise HTTPException(status_code=404, detail="Patient not found")

    return await run_analysis(
        doctor_id=doctor_id,
        patient=patient,
        symptoms=body.symptoms,
        severity=body.severity,
        duration=body.duration,
        additional_notes=body.additional_notes,
    )
