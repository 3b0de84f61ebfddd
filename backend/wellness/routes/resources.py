# wellness/routes/resources.py
"""
Recursos educativos / de autoayuda etiquetados por condición.
"""
from typing import List
from fastapi import APIRouter, Depends, Query
from ..core.deps import current_db, require_roles
from ..models.resource import ResourceCreate, ResourcePublic, ResourceRepo
from ..services.resource_matcher import match_resources
from ..services.labels import RiskLevel

router = APIRouter()


@router.post(
    "",
    response_model=ResourcePublic,
    response_model_by_alias=False,
    summary="Crear recurso (admin / profesional)",
)
async def create_resource(
    payload: ResourceCreate,
    db=Depends(current_db),
    user=Depends(require_roles("admin", "health_professional")),
):
    return await ResourceRepo(db).create(payload, created_by=user["uid"])


@router.get("/match", summary="Recursos por condiciones y nivel de riesgo")
async def match(
    conditions: List[str] = Query(default=[]),
    risk_level: RiskLevel = "low",
    limit: int = Query(10, ge=1, le=100),
    db=Depends(current_db),
):
    return await match_resources(conditions, risk_level, ResourceRepo(db), limit=limit)


@router.get("/featured", summary="Recursos destacados")
async def featured(limit: int = Query(10, ge=1, le=100), db=Depends(current_db)):
    return await ResourceRepo(db).list_featured(limit=limit)
