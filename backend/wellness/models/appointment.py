# wellness/models/appointment.py
from __future__ import annotations
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Literal

from anyio import to_thread
from bson import ObjectId
from bson.errors import InvalidId
from pydantic import BaseModel, Field, field_validator
from pymongo import ReturnDocument

Status = Literal["pending", "approved", "rejected", "completed", "cancelled"]

DEFAULT_DURATION_MIN = 60


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class AppointmentCreate(BaseModel):
    health_professional_id: str
    appointment_date: datetime
    assessment_id: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("appointment_date")
    @classmethod
    def _future_only(cls, v: datetime) -> datetime:
        v = _as_utc(v)
        if v <= datetime.now(timezone.utc):
            raise ValueError("Please select a future date and time")
        return v


class AppointmentUpdate(BaseModel):
    status: Status
    professional_notes: Optional[str] = None


class AppointmentPublic(BaseModel):
    id: str = Field(..., alias="_id")
    student_id: str
    health_professional_id: str
    assessment_id: Optional[str] = None
    appointment_date: datetime
    duration_minutes: int
    status: Status
    student_notes: Optional[str] = None
    professional_notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        populate_by_name = True


def _to_public(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Convierte un doc de Mongo en dict serializable por AppointmentPublic (id como alias)."""
    out = dict(doc)
    if "_id" in out and not isinstance(out["_id"], str):
        out["_id"] = str(out["_id"])
    return out


class AppointmentRepo:
    def __init__(self, db):
        self.col = db["appointments"]

    async def create(self, *, student_id: str, payload: AppointmentCreate) -> Dict[str, Any]:
        now = datetime.now(timezone.utc)
        doc: Dict[str, Any] = {
            "student_id": student_id,
            "health_professional_id": payload.health_professional_id,
            "assessment_id": payload.assessment_id,
            "appointment_date": payload.appointment_date,
            "duration_minutes": DEFAULT_DURATION_MIN,
            "status": "pending",  # estado inicial
            "student_notes": payload.notes,
            "professional_notes": None,
            "created_at": now,
            "updated_at": now,
        }

        def _insert():
            res = self.col.insert_one(doc)  # PyMongo muta doc["_id"] con ObjectId
            return str(res.inserted_id)

        inserted_id = await to_thread.run_sync(_insert)
        return {**doc, "_id": inserted_id}

    async def list_for(self, field: str, owner_id: str) -> List[Dict[str, Any]]:
        """field: 'student_id' o 'health_professional_id'."""
        def _fetch():
            cur = self.col.find({field: owner_id}).sort("appointment_date", 1)
            return [_to_public(d) for d in cur]

        return await to_thread.run_sync(_fetch)

    async def get(self, appointment_id: str) -> Optional[Dict[str, Any]]:
        def _find():
            try:
                oid = ObjectId(appointment_id)
            except (InvalidId, TypeError):
                return None
            d = self.col.find_one({"_id": oid})
            return _to_public(d) if d else None

        return await to_thread.run_sync(_find)

    async def update(self, appointment_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        def _update():
            doc = self.col.find_one_and_update(
                {"_id": ObjectId(appointment_id)},
                {"$set": {**changes, "updated_at": datetime.now(timezone.utc)}},
                return_document=ReturnDocument.AFTER,
            )
            return _to_public(doc) if doc else None

        return await to_thread.run_sync(_update)
