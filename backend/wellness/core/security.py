"""
Utilidades de seguridad: hash de contraseñas y JWT.
- Usa bcrypt (passlib) para hashear.
- Usa JWT con expiración corta.
"""
from datetime import datetime, timedelta, timezone
from typing import Any
from jose import jwt
from passlib.context import CryptContext
from ..core.config import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
ALGO = "HS256"

def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)

def create_jwt(subject: dict[str, Any], expires_minutes: int | None = None) -> str:
    exp_min = expires_minutes if expires_minutes is not None else settings.JWT_EXPIRES_MIN
    now = datetime.now(tz=timezone.utc)
    to_encode = {
        "sub": subject.get("sub"),
        "uid": subject.get("uid"),
        "role": subject.get("role"),
        "exp": now + timedelta(minutes=exp_min),
        "iat": now,
    }
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=ALGO)

def decode_jwt(token: str) -> dict[str, Any]:
    return jwt.decode(token, settings.JWT_SECRET, algorithms=[ALGO])
