"""Tests for pydantic request and result models."""

import pytest
from pydantic import ValidationError

from conftest import DIAGNOSIS_ARGS, SUMMARY_ARGS, TREATMENT_ARGS
from medassist.models.clinical import (
    AnalyzeSymptomsRequest,
    DiagnosisAnalysis,
    RecordSummary,
    SuggestTreatmentRequest,
    SummarizeRecordsRequest,
    TreatmentSuggestion,
)
from medassist.models.patient import PatientCreate
from medassist.models.records import AnalysisCreate


class TestProxyRequests:
    def test_camel_case_keys(self):
        body = AnalyzeSymptomsRequest.model_validate(
            {"symptoms": "Headache", "severity": "mild", "duration": "2h", "patientHistory": "Migraine"}
        )
        assert body.patient_history == "Migraine"

    def test_all_fields_optional(self):
        body = SuggestTreatmentRequest.model_validate({})
        assert body.diagnosis is None
        assert body.current_medications is None

    def test_snake_case_accepted(self):
        body = SummarizeRecordsRequest(medical_record_text="text")
        assert body.medical_record_text == "text"

    def test_unknown_keys_ignored(self):
        body = SuggestTreatmentRequest.model_validate({"diagnosis": "Flu", "unexpected": 1})
        assert body.diagnosis == "Flu"


class TestToolResults:
    def test_diagnosis(self):
        result = DiagnosisAnalysis.model_validate(DIAGNOSIS_ARGS)
        assert result.confidence == "high"
        assert result.differential_diagnoses == ["Acute bronchitis", "Pulmonary embolism"]

    def test_diagnosis_optional_lists_default_empty(self):
        data = {k: DIAGNOSIS_ARGS[k] for k in ("primary_diagnosis", "confidence", "reasoning", "differential_diagnoses")}
        result = DiagnosisAnalysis.model_validate(data)
        assert result.red_flags == []
        assert result.recommended_tests == []

    def test_diagnosis_confidence_enum(self):
        with pytest.raises(ValidationError):
            DiagnosisAnalysis.model_validate(dict(DIAGNOSIS_ARGS, confidence="certain"))

    def test_treatment_priority_enum(self):
        assert TreatmentSuggestion.model_validate(TREATMENT_ARGS).priority == "urgent"
        with pytest.raises(ValidationError):
            TreatmentSuggestion.model_validate(dict(TREATMENT_ARGS, priority="asap"))

    def test_treatment_precautions_optional(self):
        data = dict(TREATMENT_ARGS)
        del data["precautions"]
        assert TreatmentSuggestion.model_validate(data).precautions is None

    def test_summary_requires_key_findings(self):
        assert RecordSummary.model_validate(SUMMARY_ARGS).urgent_flags == []
        with pytest.raises(ValidationError):
            RecordSummary.model_validate({"summary": "text"})


class TestPatientCreate:
    def test_name_required(self):
        with pytest.raises(ValidationError):
            PatientCreate.model_validate({})

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            PatientCreate(full_name="")

    def test_blank_optionals_become_none(self):
        patient = PatientCreate(full_name="Jane", date_of_birth="", medical_history=" ")
        assert patient.date_of_birth is None
        assert patient.medical_history is None


class TestAnalysisCreate:
    def test_default_severity(self):
        assert AnalysisCreate(patient_id="p", symptoms="Fever").severity == "moderate"

    def test_severity_enum(self):
        for severity in ("mild", "moderate", "severe", "critical"):
            assert AnalysisCreate(severity=severity).severity == severity
        with pytest.raises(ValidationError):
            AnalysisCreate(severity="extreme")
