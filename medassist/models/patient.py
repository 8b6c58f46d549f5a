from pydantic import BaseModel, Field, field_validator


class PatientCreate(BaseModel):
    full_name: str = Field(..., min_length=1)
    date_of_birth: str | None = None
    gender: str | None = None
    medical_history: str | None = None
    allergies: str | None = None
    current_medications: str | None = None

    @field_validator("date_of_birth", "gender", "medical_history", "allergies", "current_medications")
    @classmethod
    def _blank_as_none(cls, value: str | None) -> str | None:
        # Form inputs post "" for untouched fields
        if value is not None and not value.strip():
            return None
        return value


class PatientResponse(BaseModel):
    id: str
    doctor_id: str
    full_name: str
    date_of_birth: str | None = None
    gender: str | None = None
    medical_history: str | None = None
    allergies: str | None = None
    current_medications: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class ProfileUpdate(BaseModel):
    full_name: str = Field(..., min_length=1)
    license_number: str | None = None
    specialty: str | None = None


class ProfileResponse(BaseModel):
    id: str
    full_name: str
    license_number: str | None = None
    specialty: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
