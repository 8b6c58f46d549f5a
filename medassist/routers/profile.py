from fastapi import APIRouter, Depends, HTTPException

from medassist.dependencies import get_doctor_id
from medassist.models.patient import ProfileResponse, ProfileUpdate
from medassist.services import records

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=ProfileResponse)
async def get_profile(doctor_id: str = Depends(get_doctor_id)):
    profile = await records.get_profile(doctor_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@router.put("", response_model=ProfileResponse)
async def update_profile(body: ProfileUpdate, doctor_id: str = Depends(get_doctor_id)):
    """Create or update the doctor's profile."""
    return await records.upsert_profile(doctor_id, body)
