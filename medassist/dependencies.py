from fastapi import Header, HTTPException


async def get_doctor_id(x_doctor_id: str | None = Header(None)) -> str:
    """Return the authenticated doctor's id.

    Sign-in is handled by the external auth provider, which forwards the
    user id in ``X-Doctor-Id``.
    """
    if not x_doctor_id or not x_doctor_id.strip():
        raise HTTPException(
            status_code=401,
            detail="Missing doctor identity",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return x_doctor_id.strip()
