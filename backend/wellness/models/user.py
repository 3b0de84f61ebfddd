# wellness/models/user.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Literal, Optional

from anyio import to_thread
from pydantic import BaseModel, EmailStr, Field
from pymongo.errors import DuplicateKeyError

from ..core.security import hash_password

Role = Literal["student", "health_professional", "admin"]
# admin no se auto-registra (ver ensure_admin)
SelfServiceRole = Literal["student", "health_professional"]


# ---------- Pydantic ----------
class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8)
    full_name: str
    role: SelfServiceRole = "student"
    # solo para health_professional
    license_number: Optional[str] = None
    specialization: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None


class UserPublic(BaseModel):
    id: str = Field(..., alias="_id")
    email: EmailStr
    full_name: str
    role: Role

    class Config:
        populate_by_name = True


class EmailTaken(ValueError):
    pass


# ---------- Repo ----------
class UserRepo:
    def __init__(self, db):
        self.col = db["users"]

    async def create(self, data: UserCreate, role: Optional[Role] = None) -> UserPublic:
        doc: Dict[str, Any] = {
            "email": str(data.email).lower(),
            "full_name": data.full_name,
            "role": role or data.role,
            "password_hash": hash_password(data.password),
            "created_at": datetime.now(timezone.utc),
        }

        def _insert() -> str:
            try:
                res = self.col.insert_one(doc)
            except DuplicateKeyError:
                raise EmailTaken(doc["email"])
            return str(res.inserted_id)

        inserted_id = await to_thread.run_sync(_insert)
        doc["_id"] = inserted_id
        return UserPublic.model_validate(doc)

    async def get_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        """
        Retorna el documento completo (incluye password_hash).
        Ideal para login.
        """
        def _find() -> Optional[Dict[str, Any]]:
            d = self.col.find_one({"email": email.lower()})
            if not d:
                return None
            d["_id"] = str(d["_id"])
            return d

        return await to_thread.run_sync(_find)

    async def ensure_admin(self, email: str, password: str) -> None:
        """Crea la cuenta admin inicial si no existe (no cambia una existente)."""
        if await self.get_by_email(email):
            return
        try:
            await self.create(UserCreate(email=email, password=password, full_name="Administrator"), role="admin")
        except EmailTaken:
            # otro worker la creó entre la consulta y el insert
            pass
