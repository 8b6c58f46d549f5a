"""Row inserts and reads for patients and their dependent records.

Each insert commits on its own. Callers chaining several inserts get no
rollback if a later step fails.
"""

import json
import logging
import uuid
from datetime import datetime, timezone

from medassist.database import get_db
from medassist.models.clinical import DiagnosisAnalysis, RecordSummary, TreatmentSuggestion
from medassist.models.patient import PatientCreate, PatientResponse, ProfileResponse, ProfileUpdate
from medassist.models.records import (
    Diagnosis,
    DiagnosisWithTreatments,
    HistoryEntry,
    MedicalSummary,
    SymptomRecord,
    Treatment,
)

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _dump_list(values: list[str] | None) -> str | None:
    return json.dumps(values) if values is not None else None


def _load_list(raw: str | None) -> list[str] | None:
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Failed to parse list column: %r", raw[:100])
        return None


def _diagnosis_from_row(row) -> Diagnosis:
    data = dict(row)
    data["differential_diagnoses"] = _load_list(data["differential_diagnoses"])
    return Diagnosis(**data)


def _treatment_from_row(row) -> Treatment:
    data = dict(row)
    data["medications"] = _load_list(data["medications"])
    return Treatment(**data)


def _summary_from_row(row) -> MedicalSummary:
    data = dict(row)
    data["key_findings"] = _load_list(data["key_findings"])
    return MedicalSummary(**data)


# --- Patients ---


async def create_patient(doctor_id: str, body: PatientCreate) -> PatientResponse:
    db = await get_db()
    now = _now()
    patient = PatientResponse(
        id=str(uuid.uuid4()),
        doctor_id=doctor_id,
        created_at=now,
        updated_at=now,
        **body.model_dump(),
    )
    await db.execute(
        """INSERT INTO patients (
            id, doctor_id, full_name, date_of_birth, gender, medical_history,
            allergies, current_medications, created_at, updated_at
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
        (
            patient.id,
            patient.doctor_id,
            patient.full_name,
            patient.date_of_birth,
            patient.gender,
            patient.medical_history,
            patient.allergies,
            patient.current_medications,
            patient.created_at,
            patient.updated_at,
        ),
    )
    await db.commit()
    return patient


async def list_patients(doctor_id: str) -> list[PatientResponse]:
    db = await get_db()
    rows = await db.fetch_all(
        "SELECT * FROM patients WHERE doctor_id = ? ORDER BY created_at DESC",
        (doctor_id,),
    )
    return [PatientResponse(**dict(row)) for row in rows]


async def get_patient(doctor_id: str, patient_id: str) -> PatientResponse | None:
    db = await get_db()
    row = await db.fetch_one(
        "SELECT * FROM patients WHERE id = ? AND doctor_id = ?",
        (patient_id, doctor_id),
    )
    return PatientResponse(**dict(row)) if row else None


# --- Analysis chain ---


async def create_symptom_record(
    *,
    patient_id: str,
    doctor_id: str,
    symptoms: str,
    severity: str,
    duration: str | None = None,
    additional_notes: str | None = None,
) -> SymptomRecord:
    db = await get_db()
    record = SymptomRecord(
        id=str(uuid.uuid4()),
        patient_id=patient_id,
        doctor_id=doctor_id,
        symptoms=symptoms,
        severity=severity,
        duration=duration,
        additional_notes=additional_notes,
        created_at=_now(),
    )
    await db.execute(
        """INSERT INTO symptom_records (
            id, patient_id, doctor_id, symptoms, severity, duration, additional_notes, created_at
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
        (
            record.id,
            record.patient_id,
            record.doctor_id,
            record.symptoms,
            record.severity,
            record.duration,
            record.additional_notes,
            record.created_at,
        ),
    )
    await db.commit()
    return record


async def create_diagnosis(
    *, symptom_record_id: str, doctor_id: str, analysis: DiagnosisAnalysis
) -> Diagnosis:
    db = await get_db()
    diagnosis = Diagnosis(
        id=str(uuid.uuid4()),
        symptom_record_id=symptom_record_id,
        doctor_id=doctor_id,
        diagnosis=analysis.primary_diagnosis,
        confidence=analysis.confidence,
        reasoning=analysis.reasoning,
        differential_diagnoses=analysis.differential_diagnoses,
        created_at=_now(),
    )
    await db.execute(
        """INSERT INTO diagnoses (
            id, symptom_record_id, doctor_id, diagnosis, confidence, reasoning,
            differential_diagnoses, created_at
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
        (
            diagnosis.id,
            diagnosis.symptom_record_id,
            diagnosis.doctor_id,
            diagnosis.diagnosis,
            diagnosis.confidence,
            diagnosis.reasoning,
            _dump_list(diagnosis.differential_diagnoses),
            diagnosis.created_at,
        ),
    )
    await db.commit()
    return diagnosis


async def create_treatment(
    *, diagnosis_id: str, doctor_id: str, suggestion: TreatmentSuggestion
) -> Treatment:
    db = await get_db()
    treatment = Treatment(
        id=str(uuid.uuid4()),
        diagnosis_id=diagnosis_id,
        doctor_id=doctor_id,
        treatment_plan=suggestion.treatment_plan,
        medications=suggestion.medications,
        priority=suggestion.priority,
        precautions=suggestion.precautions,
        follow_up_instructions=suggestion.follow_up,
        created_at=_now(),
    )
    await db.execute(
        """INSERT INTO treatments (
            id, diagnosis_id, doctor_id, treatment_plan, medications, priority,
            precautions, follow_up_instructions, created_at
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
        (
            treatment.id,
            treatment.diagnosis_id,
            treatment.doctor_id,
            treatment.treatment_plan,
            _dump_list(treatment.medications),
            treatment.priority,
            treatment.precautions,
            treatment.follow_up_instructions,
            treatment.created_at,
        ),
    )
    await db.commit()
    return treatment


async def get_patient_history(doctor_id: str, patient_id: str) -> list[HistoryEntry]:
    """Symptom records for a patient, newest first, with diagnoses and treatments nested."""
    db = await get_db()
    record_rows = await db.fetch_all(
        "SELECT * FROM symptom_records WHERE patient_id = ? AND doctor_id = ? ORDER BY created_at DESC",
        (patient_id, doctor_id),
    )

    history = []
    for record_row in record_rows:
        entry = HistoryEntry(**dict(record_row))
        diagnosis_rows = await db.fetch_all(
            "SELECT * FROM diagnoses WHERE symptom_record_id = ? ORDER BY created_at ASC",
            (entry.id,),
        )
        for diagnosis_row in diagnosis_rows:
            diagnosis = DiagnosisWithTreatments(**_diagnosis_from_row(diagnosis_row).model_dump())
            treatment_rows = await db.fetch_all(
                "SELECT * FROM treatments WHERE diagnosis_id = ? ORDER BY created_at ASC",
                (diagnosis.id,),
            )
            diagnosis.treatments = [_treatment_from_row(row) for row in treatment_rows]
            entry.diagnoses.append(diagnosis)
        history.append(entry)
    return history


# --- Summaries ---


async def create_summary(
    *, patient_id: str, doctor_id: str, original_text: str, result: RecordSummary
) -> MedicalSummary:
    db = await get_db()
    summary = MedicalSummary(
        id=str(uuid.uuid4()),
        patient_id=patient_id,
        doctor_id=doctor_id,
        original_text=original_text,
        summary=result.summary,
        key_findings=result.key_findings,
        created_at=_now(),
    )
    await db.execute(
        """INSERT INTO medical_summaries (
            id, patient_id, doctor_id, original_text, summary, key_findings, created_at
        ) VALUES (?, ?, ?, ?, ?, ?, ?)""",
        (
            summary.id,
            summary.patient_id,
            summary.doctor_id,
            summary.original_text,
            summary.summary,
            _dump_list(summary.key_findings),
            summary.created_at,
        ),
    )
    await db.commit()
    return summary


async def list_summaries(doctor_id: str, patient_id: str) -> list[MedicalSummary]:
    db = await get_db()
    rows = await db.fetch_all(
        "SELECT * FROM medical_summaries WHERE patient_id = ? AND doctor_id = ? ORDER BY created_at DESC",
        (patient_id, doctor_id),
    )
    return [_summary_from_row(row) for row in rows]


# --- Profiles ---


async def get_profile(doctor_id: str) -> ProfileResponse | None:
    db = await get_db()
    row = await db.fetch_one("SELECT * FROM profiles WHERE id = ?", (doctor_id,))
    return ProfileResponse(**dict(row)) if row else None


async def upsert_profile(doctor_id: str, body: ProfileUpdate) -> ProfileResponse:
    db = await get_db()
    now = _now()
    await db.execute(
        """INSERT INTO profiles (id, full_name, license_number, specialty, created_at, updated_at)
        VALUES (?, ?, ?, ?, ?, ?)
        ON CONFLICT (id) DO UPDATE SET
            full_name = excluded.full_name,
            license_number = excluded.license_number,
            specialty = excluded.specialty,
            updated_at = excluded.updated_at""",
        (doctor_id, body.full_name, body.license_number, body.specialty, now, now),
    )
    await db.commit()
    return await get_profile(doctor_id)
