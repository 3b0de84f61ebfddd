# wellness/models/resource.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional

from anyio import to_thread
from pydantic import BaseModel, Field
from pymongo import DESCENDING

ResourceType = Literal["article", "video", "audio", "pdf", "external_link"]


class ResourceCreate(BaseModel):
    title: str
    description: Optional[str] = None
    content: Optional[str] = None
    resource_type: ResourceType = "article"
    url: Optional[str] = None
    category: Optional[str] = None
    tags: List[str] = []
    is_featured: bool = False


class ResourcePublic(ResourceCreate):
    id: str = Field(..., alias="_id")
    created_by: Optional[str] = None
    created_at: datetime

    class Config:
        populate_by_name = True


def _normalize_tags(tags: List[str]) -> List[str]:
    return [t.strip().lower() for t in tags if t and t.strip()]


class ResourceRepo:
    def __init__(self, db):
        self.col = db["resources"]

    async def create(self, data: ResourceCreate, created_by: Optional[str] = None) -> Dict[str, Any]:
        doc: Dict[str, Any] = {
            **data.model_dump(),
            "tags": _normalize_tags(data.tags),
            "created_by": created_by,
            "created_at": datetime.now(timezone.utc),
        }

        def _insert() -> str:
            res = self.col.insert_one(doc)
            return str(res.inserted_id)

        inserted_id = await to_thread.run_sync(_insert)
        doc["_id"] = inserted_id
        return doc

    async def find_by_tags(self, tags: List[str], limit: int = 10) -> List[Dict[str, Any]]:
        """Recursos con al menos un tag en común; destacados primero."""
        wanted = _normalize_tags(tags)
        if not wanted:
            return []

        def _fetch():
            cur = (
                self.col.find({"tags": {"$in": wanted}})
                .sort([("is_featured", DESCENDING), ("created_at", DESCENDING)])
                .limit(limit)
            )
            return [{**d, "_id": str(d["_id"])} for d in cur]

        return await to_thread.run_sync(_fetch)

    async def list_featured(self, limit: int = 10) -> List[Dict[str, Any]]:
        def _fetch():
            cur = self.col.find({"is_featured": True}).sort("created_at", DESCENDING).limit(limit)
            return [{**d, "_id": str(d["_id"])} for d in cur]

        return await to_thread.run_sync(_fetch)
