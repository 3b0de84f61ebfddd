# wellness/routes/appointments.py

from fastapi import APIRouter, Depends, HTTPException, status

from ..core.deps import current_db, current_user
from ..models.appointment import (
    AppointmentCreate,
    AppointmentUpdate,
    AppointmentPublic,
    AppointmentRepo,
)
from ..models.professional import ProfessionalRepo
from ..models.student import StudentRepo

router = APIRouter()


async def _student_id(db, user: dict) -> str:
    return await StudentRepo(db).get_or_create(user["uid"] or user["sub"])


@router.post(
    "",
    response_model=AppointmentPublic,
    response_model_by_alias=False,   # fuerza "id" (no "_id")
    summary="Solicitar cita con un profesional",
)
async def create_appointment(
    payload: AppointmentCreate,
    db=Depends(current_db),
    user=Depends(current_user),
):
    if user.get("role") != "student":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Solo estudiantes")
    # solo profesionales aprobados reciben citas
    if not await ProfessionalRepo(db).get_approved(payload.health_professional_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="professional_not_found")
    student_id = await _student_id(db, user)
    return await AppointmentRepo(db).create(student_id=student_id, payload=payload)


@router.get(
    "/mine",
    response_model=list[AppointmentPublic],
    response_model_by_alias=False,
    summary="Mis citas (estudiante) o citas asignadas (profesional)",
)
async def list_mine(db=Depends(current_db), user=Depends(current_user)):
    repo = AppointmentRepo(db)
    if user.get("role") == "health_professional":
        return await repo.list_for("health_professional_id", user["uid"])
    return await repo.list_for("student_id", await _student_id(db, user))


@router.patch(
    "/{appointment_id}",
    response_model=AppointmentPublic,
    response_model_by_alias=False,   # devuelve "id"
    summary="Actualizar estado de una cita",
)
async def update_appointment(
    appointment_id: str,
    payload: AppointmentUpdate,
    db=Depends(current_db),
    user=Depends(current_user),
):
    repo = AppointmentRepo(db)
    appt = await repo.get(appointment_id)
    if not appt:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="appointment_not_found")

    # Autorización: profesional asignado o admin -> cualquier estado;
    # estudiante dueño -> solo cancelar
    role = user.get("role")
    if role == "admin" or (role == "health_professional" and appt["health_professional_id"] == user["uid"]):
        pass
    elif role == "student" and appt["student_id"] == await _student_id(db, user):
        if payload.status != "cancelled" or payload.professional_notes is not None:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Solo puedes cancelar")
    else:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="No autorizado")

    changes = payload.model_dump(exclude_none=True)
    return await repo.update(appointment_id, changes)
