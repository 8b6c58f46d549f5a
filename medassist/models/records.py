from pydantic import BaseModel

from medassist.models.clinical import Confidence, Priority, Severity


class SymptomRecord(BaseModel):
    id: str
    patient_id: str
    doctor_id: str
    symptoms: str
    severity: Severity
    duration: str | None = None
    additional_notes: str | None = None
    created_at: str | None = None


class Diagnosis(BaseModel):
    id: str
    symptom_record_id: str
    doctor_id: str
    diagnosis: str
    confidence: Confidence
    reasoning: str
    differential_diagnoses: list[str] | None = None
    created_at: str | None = None


class Treatment(BaseModel):
    id: str
    diagnosis_id: str
    doctor_id: str
    treatment_plan: str
    medications: list[str] | None = None
    priority: Priority
    precautions: str | None = None
    follow_up_instructions: str | None = None
    created_at: str | None = None


class MedicalSummary(BaseModel):
    id: str
    patient_id: str
    doctor_id: str
    original_text: str
    summary: str
    key_findings: list[str] | None = None
    created_at: str | None = None


class AnalysisCreate(BaseModel):
    patient_id: str | None = None
    symptoms: str | None = None
    severity: Severity = "moderate"
    duration: str | None = None
    additional_notes: str | None = None


class AnalysisResponse(BaseModel):
    symptom_record: SymptomRecord
    diagnosis: Diagnosis
    treatment: Treatment
    analysis: dict
    treatment_suggestion: dict


class SummaryCreate(BaseModel):
    medical_record_text: str


class DiagnosisWithTreatments(Diagnosis):
    treatments: list[Treatment] = []


class HistoryEntry(SymptomRecord):
    diagnoses: list[DiagnosisWithTreatments] = []
