from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

Severity = Literal["mild", "moderate", "severe", "critical"]
Confidence = Literal["low", "medium", "high", "very_high"]
Priority = Literal["routine", "urgent", "emergency"]


# Request bodies for the gateway proxy endpoints. Keys arrive camelCased from
# the browser. Nothing is required or type-checked: values of any JSON type are
# rendered into the prompt as they arrive.


class AnalyzeSymptomsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    symptoms: Any = None
    severity: Any = None
    duration: Any = None
    patient_history: Any = Field(None, alias="patientHistory")


class SuggestTreatmentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    diagnosis: Any = None
    patient_info: Any = Field(None, alias="patientInfo")
    allergies: Any = None
    current_medications: Any = Field(None, alias="currentMedications")


class SummarizeRecordsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    medical_record_text: Any = Field(None, alias="medicalRecordText")


# Tool-call results. The proxies pass the raw arguments through untouched;
# these are only used where the results are written to the database.


class DiagnosisAnalysis(BaseModel):
    primary_diagnosis: str
    confidence: Confidence
    reasoning: str
    differential_diagnoses: list[str]
    red_flags: list[str] = []
    recommended_tests: list[str] = []


class TreatmentSuggestion(BaseModel):
    treatment_plan: str
    medications: list[str]
    priority: Priority
    follow_up: str
    precautions: str | None = None
    lifestyle_recommendations: list[str] = []


class RecordSummary(BaseModel):
    summary: str
    key_findings: list[str]
    diagnoses: list[str] = []
    medications: list[str] = []
    allergies: list[str] = []
    urgent_flags: list[str] = []
