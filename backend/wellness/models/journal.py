# wellness/models/journal.py
"""
Diario personal del estudiante.
"""
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from anyio import to_thread
from bson import ObjectId
from bson.errors import InvalidId
from pydantic import BaseModel, Field


class JournalCreate(BaseModel):
    title: Optional[str] = None
    content: str = Field(min_length=1)
    mood: Optional[str] = None
    tags: List[str] = []
    is_private: bool = True


class JournalPublic(JournalCreate):
    id: str = Field(..., alias="_id")
    student_id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        populate_by_name = True


def _oid(entry_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(entry_id)
    except (InvalidId, TypeError):
        return None


class JournalRepo:
    def __init__(self, db) -> None:
        self.col = db["journal_entries"]

    async def create(self, student_id: str, data: JournalCreate) -> Dict[str, Any]:
        now = datetime.now(timezone.utc)
        doc: Dict[str, Any] = {
            **data.model_dump(),
            "student_id": student_id,
            "created_at": now,
            "updated_at": now,
        }

        def _insert():
            res = self.col.insert_one(doc)
            return str(res.inserted_id)

        doc["_id"] = await to_thread.run_sync(_insert)
        return doc

    async def list(
        self,
        student_id: str,
        q: Optional[str] = None,
        mood: Optional[str] = None,
        limit: int = 50,
    ) -> List[Dict[str, Any]]:
        """Entradas propias, más recientes primero; q busca en título/contenido."""
        query: Dict[str, Any] = {"student_id": student_id}
        if mood:
            query["mood"] = mood
        if q:
            rx = {"$regex": re.escape(q), "$options": "i"}
            query["$or"] = [{"title": rx}, {"content": rx}]

        def _fetch():
            cur = self.col.find(query).sort("created_at", -1).limit(limit)
            return [{**d, "_id": str(d["_id"])} for d in cur]

        return await to_thread.run_sync(_fetch)

    async def get(self, student_id: str, entry_id: str) -> Optional[Dict[str, Any]]:
        def _find():
            oid = _oid(entry_id)
            if oid is None:
                return None
            d = self.col.find_one({"_id": oid, "student_id": student_id})
            return {**d, "_id": str(d["_id"])} if d else None

        return await to_thread.run_sync(_find)

    async def delete(self, student_id: str, entry_id: str) -> bool:
        def _delete():
            oid = _oid(entry_id)
            if oid is None:
                return False
            return self.col.delete_one({"_id": oid, "student_id": student_id}).deleted_count == 1

        return await to_thread.run_sync(_delete)
