# wellness/models/student.py
"""
Perfil de estudiante: dueño de evaluaciones, diario y citas.
Se crea la primera vez que se necesita (get-or-create por user_id).
"""
from datetime import datetime, timezone

from anyio import to_thread
from pymongo import ReturnDocument


class StudentRepo:
    def __init__(self, db) -> None:
        self.col = db["students"]

    async def get_or_create(self, user_id: str) -> str:
        def _upsert() -> str:
            doc = self.col.find_one_and_update(
                {"user_id": user_id},
                {"$setOnInsert": {"user_id": user_id, "created_at": datetime.now(timezone.utc)}},
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
            return str(doc["_id"])

        return await to_thread.run_sync(_upsert)
