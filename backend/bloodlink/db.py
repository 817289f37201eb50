# bloodlink/db.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List, Type

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import BaseModel
from pymongo import DESCENDING

from bloodlink.core.db import DONORS, REQUESTS, CONTACT_MESSAGES
from bloodlink.schemas import DonorDoc, BloodRequestDoc, ContactMessageDoc

# newest first; _id breaks ties between inserts landing on the same millisecond
NEWEST_FIRST = [("createdAt", DESCENDING), ("_id", DESCENDING)]


def get_db(request: Request) -> AsyncIOMotorDatabase:
    """FastAPI dependency: the database opened by the application lifespan."""
    return request.app.state.db


# --------------------------------------------------
# Serialization
# --------------------------------------------------
def _iso(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def serialize(doc: Dict) -> Dict:
    out = {"id": str(doc.pop("_id"))} if "_id" in doc else {}
    for key, value in doc.items():
        out[key] = _iso(value) if isinstance(value, datetime) else value
    return out


# --------------------------------------------------
# Generic insert-one / find-all-sorted
# --------------------------------------------------
async def _insert(db: AsyncIOMotorDatabase, name: str, schema: Type[BaseModel], payload: Dict) -> str:
    """Validate ``payload`` against the stored shape, stamp createdAt, insert.

    Raises pydantic.ValidationError when the document does not fit the schema.
    """
    doc = schema.model_validate(payload).model_dump(exclude_unset=True)
    doc["createdAt"] = datetime.now(timezone.utc)
    res = await db[name].insert_one(doc)
    return str(res.inserted_id)


async def _list(db: AsyncIOMotorDatabase, name: str) -> List[Dict]:
    items: List[Dict] = []
    cur = db[name].find().sort(NEWEST_FIRST)
    async for d in cur:
        items.append(serialize(d))
    return items


# --------------------------------------------------
# Donors
# --------------------------------------------------
async def insert_donor(db: AsyncIOMotorDatabase, payload: Dict) -> str:
    return await _insert(db, DONORS, DonorDoc, payload)


async def list_donors(db: AsyncIOMotorDatabase) -> List[Dict]:
    """All donors, most recent first."""
    return await _list(db, DONORS)


# --------------------------------------------------
# Blood requests
# --------------------------------------------------
async def insert_request(db: AsyncIOMotorDatabase, payload: Dict) -> str:
    return await _insert(db, REQUESTS, BloodRequestDoc, payload)


async def list_requests(db: AsyncIOMotorDatabase) -> List[Dict]:
    """All blood requests, most recent first."""
    return await _list(db, REQUESTS)


# --------------------------------------------------
# Contact messages
# --------------------------------------------------
async def insert_message(db: AsyncIOMotorDatabase, payload: Dict) -> str:
    return await _insert(db, CONTACT_MESSAGES, ContactMessageDoc, payload)


async def list_messages(db: AsyncIOMotorDatabase) -> List[Dict]:
    """All contact messages, most recent first."""
    return await _list(db, CONTACT_MESSAGES)


__all__ = [
    "get_db",
    "serialize",
    "insert_donor",
    "list_donors",
    "insert_request",
    "list_requests",
    "insert_message",
    "list_messages",
]
