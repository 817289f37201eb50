# bloodlink/routers/contact.py
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from bloodlink.db import get_db, insert_message, list_messages
from bloodlink.errors import bad_request, is_missing, server_error

router = APIRouter(prefix="/api/contact", tags=["contact"])


@router.get("")
async def get_messages(db=Depends(get_db)):
    try:
        return await list_messages(db)
    except Exception as exc:
        raise server_error(exc, "Listing contact messages")


@router.post("", status_code=201)
async def create_message(payload: Dict[str, Any] = Body(default={}), db=Depends(get_db)):
    doc = {
        "name": payload.get("name"),
        "email": payload.get("email"),
        "message": payload.get("message"),
    }
    if any(is_missing(v) for v in doc.values()):
        raise bad_request("Please fill all required fields")

    # only the three form fields are kept
    try:
        await insert_message(db, doc)
    except Exception as exc:
        raise server_error(exc, "Saving contact message")
    return {"message": "Contact message received successfully"}
