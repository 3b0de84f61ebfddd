# wellness/routes/auth.py
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, EmailStr
from ..core.deps import current_db
from ..models.professional import ProfessionalProfileIn, ProfessionalRepo
from ..models.user import EmailTaken, UserCreate, UserRepo, UserPublic
from ..services.auth_service import AuthService

router = APIRouter()


class LoginIn(BaseModel):
    email: EmailStr
    password: str


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"


@router.post("/register", response_model=UserPublic, response_model_by_alias=False, summary="Registrar usuario")
async def register(payload: UserCreate, db=Depends(current_db)):
    """
    Crea un usuario con rol por defecto 'student'. Un health_professional
    queda con perfil pendiente de aprobación.
    """
    repo = UserRepo(db)
    try:
        user = await repo.create(payload)
    except EmailTaken:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="email_taken")

    if user.role == "health_professional":
        await ProfessionalRepo(db).create_for_user(
            user_id=user.id,
            full_name=user.full_name,
            email=str(user.email),
            profile=ProfessionalProfileIn.model_validate(payload.model_dump()),
        )
    return user


@router.post("/login", response_model=TokenOut, summary="Login y obtención de JWT")
async def login(payload: LoginIn, db=Depends(current_db)):
    repo = UserRepo(db)
    svc = AuthService(repo)
    token = await svc.authenticate(payload.email, payload.password)
    return TokenOut(access_token=token)
