# bloodlink/routers/donors.py
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from bloodlink.db import get_db, insert_donor, list_donors
from bloodlink.errors import bad_request, is_missing, server_error

router = APIRouter(prefix="/api/donors", tags=["donors"])


@router.get("")
async def get_donors(db=Depends(get_db)):
    try:
        return await list_donors(db)
    except Exception as exc:
        raise server_error(exc, "Listing donors")


@router.post("", status_code=201)
async def create_donor(payload: Dict[str, Any] = Body(default={}), db=Depends(get_db)):
    """Register a donor.

    Only name, bloodGroup and phone are checked here, plus consent being
    exactly ``true``. Age bounds and gender values are left to the stored
    schema, so a bad age fails as a server error rather than a 400.
    """
    required = (payload.get("name"), payload.get("bloodGroup"), payload.get("phone"))
    if any(is_missing(v) for v in required) or payload.get("consent") is not True:
        raise bad_request("Required fields missing or consent not given")

    try:
        await insert_donor(db, payload)
    except Exception as exc:
        raise server_error(exc, "Registering donor")
    return {"message": "Donor registered successfully"}
