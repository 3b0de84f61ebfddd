# wellness/models/professional.py
"""
Perfil de profesional de salud. Se crea al registrarse con ese rol
(is_approved=False) y un admin lo aprueba; solo los aprobados aparecen
en el directorio y pueden recibir citas.
"""
from __future__ import annotations
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import re

from anyio import to_thread
from pydantic import BaseModel, Field
from pymongo import ReturnDocument


# ---------- Pydantic ----------
class ProfessionalProfileIn(BaseModel):
    license_number: Optional[str] = None
    specialization: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None


class ProfessionalPublic(ProfessionalProfileIn):
    id: str = Field(..., alias="_id")
    user_id: str
    full_name: str
    email: str
    is_approved: bool = False

    class Config:
        populate_by_name = True


class ApprovalIn(BaseModel):
    is_approved: bool


def _to_public(doc: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(doc)
    out["_id"] = str(out["_id"])
    return out


# ---------- Repository ----------
class ProfessionalRepo:
    def __init__(self, db):
        self.col = db["health_professionals"]

    async def create_for_user(
        self, *, user_id: str, full_name: str, email: str, profile: ProfessionalProfileIn
    ) -> Dict[str, Any]:
        doc: Dict[str, Any] = {
            **profile.model_dump(),
            "user_id": user_id,
            "full_name": full_name,
            "email": email,
            "is_approved": False,
            "created_at": datetime.now(timezone.utc),
        }

        def _insert():
            res = self.col.insert_one(doc)
            return str(res.inserted_id)

        doc["_id"] = await to_thread.run_sync(_insert)
        return doc

    async def search(
        self,
        *,
        approved: bool = True,
        specialization: Optional[str] = None,
        limit: int = 20,
    ) -> List[Dict[str, Any]]:
        """Directorio; specialization filtra por regex sin distinguir mayúsculas."""
        query: Dict[str, Any] = {"is_approved": approved}
        if specialization:
            query["specialization"] = {"$regex": re.escape(specialization), "$options": "i"}

        def _fetch():
            cur = self.col.find(query).sort("full_name", 1).limit(limit)
            return [_to_public(d) for d in cur]

        return await to_thread.run_sync(_fetch)

    async def get_approved(self, user_id: str) -> Optional[Dict[str, Any]]:
        def _find():
            d = self.col.find_one({"user_id": user_id, "is_approved": True})
            return _to_public(d) if d else None

        return await to_thread.run_sync(_find)

    async def set_approved(self, user_id: str, approved: bool) -> Optional[Dict[str, Any]]:
        def _update():
            d = self.col.find_one_and_update(
                {"user_id": user_id},
                {"$set": {"is_approved": approved, "updated_at": datetime.now(timezone.utc)}},
                return_document=ReturnDocument.AFTER,
            )
            return _to_public(d) if d else None

        return await to_thread.run_sync(_update)
