from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from ..core.deps import current_db, current_user, require_roles
from ..models.professional import ApprovalIn, ProfessionalPublic, ProfessionalRepo

router = APIRouter()

@router.get("", response_model=list[ProfessionalPublic], response_model_by_alias=False,
            summary="Directorio de profesionales aprobados")
async def directory(
    specialization: Optional[str] = Query(default=None),
    limit: int = Query(20, ge=1, le=100),
    db=Depends(current_db),
    user=Depends(current_user),
):
    return await ProfessionalRepo(db).search(specialization=specialization, limit=limit)

@router.get("/pending", response_model=list[ProfessionalPublic], response_model_by_alias=False,
            summary="Profesionales pendientes de aprobación (admin)")
async def pending(
    limit: int = Query(20, ge=1, le=100),
    db=Depends(current_db),
    user=Depends(require_roles("admin")),
):
    return await ProfessionalRepo(db).search(approved=False, limit=limit)

@router.patch("/{user_id}/approval", response_model=ProfessionalPublic, response_model_by_alias=False,
              summary="Aprobar o revocar un profesional (admin)")
async def set_approval(
    user_id: str,
    payload: ApprovalIn,
    db=Depends(current_db),
    user=Depends(require_roles("admin")),
):
    doc = await ProfessionalRepo(db).set_approved(user_id, payload.is_approved)
    if not doc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="professional_not_found")
    return doc
