# bloodlink/routers/requests.py
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from bloodlink.db import get_db, insert_request, list_requests
from bloodlink.errors import bad_request, is_missing, server_error

router = APIRouter(prefix="/api/requests", tags=["requests"])

REQUIRED = ("patientName", "bloodGroup", "units", "hospital", "contactPhone")


@router.get("")
async def get_requests(db=Depends(get_db)):
    try:
        return await list_requests(db)
    except Exception as exc:
        raise server_error(exc, "Listing blood requests")


@router.post("", status_code=201)
async def create_request(payload: Dict[str, Any] = Body(default={}), db=Depends(get_db)):
    # units == 0 counts as missing
    if any(is_missing(payload.get(field)) for field in REQUIRED):
        raise bad_request("Please fill all required fields")

    try:
        await insert_request(db, payload)
    except Exception as exc:
        raise server_error(exc, "Saving blood request")
    return {"message": "Blood request saved successfully"}
