"""
Dependencias comunes para FastAPI:
- current_db
- current_user (via Authorization: Bearer <token>)
- current_student_id (perfil de estudiante del usuario)
- require_roles(...)
- analysis_client (servicio LLM; se sobreescribe en tests)
"""
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from ..db.mongo import get_db
from ..core.security import decode_jwt
from ..models.student import StudentRepo
from ..services.analysis_client import AnalysisClient

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")

def current_db():
    return get_db()

async def current_user(token: str = Depends(oauth2_scheme)) -> dict:
    try:
        payload = decode_jwt(token)
        return {"sub": payload["sub"], "uid": payload.get("uid"), "role": payload.get("role")}
    except (JWTError, KeyError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token inválido")

async def current_student_id(user=Depends(current_user), db=Depends(current_db)) -> str:
    if user.get("role") != "student":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Solo estudiantes")
    return await StudentRepo(db).get_or_create(user["uid"] or user["sub"])

def require_roles(*roles: str):
    async def _check(user=Depends(current_user)) -> dict:
        if user.get("role") not in roles:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="No autorizado")
        return user
    return _check

def analysis_client() -> AnalysisClient:
    return AnalysisClient()
