# wellness/routes/assessments.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from ..core.deps import analysis_client, current_db, current_student_id, current_user
from ..core.errors import AnalysisConfigError, PersistenceError
from ..models.assessment import AssessmentRepo, AssessmentSubmit, SubmitOut
from ..models.resource import ResourceRepo
from ..services import orchestrator
from ..services.analysis_parser import AnalysisResult
from ..services.resource_matcher import match_resources
from ..services.scoring import compute_subscores

router = APIRouter()

TREND_POINTS = 50


@router.post("/analyze", response_model=AnalysisResult, summary="Analizar respuestas (sin guardar)")
async def analyze(payload: AssessmentSubmit, user=Depends(current_user), client=Depends(analysis_client)):
    """
    Devuelve siempre el resultado completo (10 campos). Solo falla si el
    servicio de análisis no tiene credenciales.
    """
    try:
        outcome = await orchestrator.analyze(payload.answers, client, payload.risk_level)
    except AnalysisConfigError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    return outcome.result


@router.post("", response_model=SubmitOut, summary="Enviar evaluación, analizar y guardar")
async def submit(
    payload: AssessmentSubmit,
    db=Depends(current_db),
    student_id: str = Depends(current_student_id),
    client=Depends(analysis_client),
):
    repo = AssessmentRepo(db)
    try:
        res = await orchestrator.submit(student_id, payload.answers, client, repo, payload.risk_level)
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"persistence_error: {e}")

    return SubmitOut(
        assessment_id=res.assessment_id,
        risk_level=res.record["risk_level"],
        scores=compute_subscores(payload.answers),
        analysis=res.outcome.result,
        analysis_source=res.outcome.source,
        warnings=res.warnings,
    )


@router.get("/history", summary="Historial de evaluaciones (más recientes primero)")
async def history(limit: int = Query(10, ge=1, le=100), db=Depends(current_db), student_id: str = Depends(current_student_id)):
    return await AssessmentRepo(db).history(student_id, limit=limit)


@router.get("/summary", summary="Resumen para el dashboard (conteo, riesgo actual, tendencia)")
async def summary(db=Depends(current_db), student_id: str = Depends(current_student_id)):
    repo = AssessmentRepo(db)
    total = await repo.count(student_id)
    # las TREND_POINTS más recientes, en orden cronológico
    rows = list(reversed(await repo.history(student_id, limit=TREND_POINTS)))

    latest = rows[-1] if rows else None
    current_risk = (latest or {}).get("predicted_risk_level") or (latest or {}).get("risk_level") or "moderate"
    trend = [
        {
            "date": r["created_at"].date().isoformat(),
            "assessment": f"Assessment {i + 1}",
            "wellness": r.get("overall_wellbeing_score") or 0,
        }
        for i, r in enumerate(rows)
    ]
    return {
        "total_assessments": total,
        "current_risk_level": current_risk,
        "last_assessment_date": latest["created_at"] if latest else None,
        "wellness_trend": trend,
    }


@router.get("/{assessment_id}", summary="Detalle de una evaluación propia")
async def get_one(assessment_id: str, db=Depends(current_db), student_id: str = Depends(current_student_id)):
    doc = await AssessmentRepo(db).get(assessment_id, student_id)
    if not doc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="assessment_not_found")
    return doc


@router.get("/{assessment_id}/resources", summary="Recursos sugeridos para una evaluación")
async def resources_for(
    assessment_id: str,
    limit: int = Query(10, ge=1, le=100),
    db=Depends(current_db),
    student_id: str = Depends(current_student_id),
):
    doc = await AssessmentRepo(db).get(assessment_id, student_id)
    if not doc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="assessment_not_found")
    level = doc.get("predicted_risk_level") or doc.get("risk_level") or "low"
    return await match_resources(doc.get("predicted_conditions") or [], level, ResourceRepo(db), limit=limit)
