# wellness/services/orchestrator.py
"""
Orquestador de la evaluación:
1. Nivel de riesgo local (scoring) si el cliente no lo envía.
2. Una llamada al servicio de análisis (LLM) en un hilo.
3. Parseo/validación -> ParsedAnalysis | FallbackAnalysis.
4. Registro completo para persistir; si la escritura completa falla
   (p. ej. columna desconocida) se reintenta UNA vez con el registro mínimo.

Los errores del servicio de análisis nunca llegan al usuario; los de
persistencia solo después de agotar el reintento mínimo.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Final, List, Mapping, NamedTuple, Optional

from anyio import to_thread
from pymongo.errors import PyMongoError

from ..core.errors import AnalysisConfigError, AnalysisUnavailable, PersistenceError
from ..models.assessment import AssessmentRepo
from .analysis_client import AnalysisClient
from .analysis_parser import AnalysisOutcome, fallback_analysis, parse_analysis
from .scoring import compute_subscores, extract_written_text, score_answers
from .labels import RiskLevel

log = logging.getLogger(__name__)

MINIMAL_ANALYSIS_NOTICE: Final[str] = (
    "Assessment completed. Please run the database migration script to enable "
    "full AI analysis features."
)

WARN_DEGRADED_WRITE: Final[str] = "degraded_write"
WARN_ANALYSIS_UNAVAILABLE: Final[str] = "analysis_unavailable"

MINIMAL_FIELDS: Final[tuple[str, ...]] = (
    "student_id", "responses", "risk_level",
    "anxiety_score", "depression_score", "stress_score", "overall_wellbeing_score",
    "created_at",
)


class SubmitResult(NamedTuple):
    assessment_id: str
    record: Dict[str, Any]
    outcome: AnalysisOutcome
    warnings: List[str]


async def analyze(
    answers: Mapping[str, Any],
    client: AnalysisClient,
    risk_level: Optional[RiskLevel] = None,
) -> AnalysisOutcome:
    """
    Pasos 1-5. Solo AnalysisConfigError se propaga (credencial faltante).
    """
    local_level = risk_level or score_answers(answers).level
    written = extract_written_text(answers)

    try:
        text = await to_thread.run_sync(lambda: client.complete(answers, local_level, written))
    except AnalysisUnavailable as e:
        log.warning("Servicio de análisis no disponible, usando respaldo: %s", e)
        return fallback_analysis(local_level)

    outcome = parse_analysis(text, local_level)
    if outcome.source == "fallback":
        log.warning("Respuesta del análisis no es JSON válido (%d chars), usando respaldo", len(text or ""))

    r = outcome.result
    log.info(
        "Análisis completado: source=%s risk=%s conditions=%s sentiment=%s",
        outcome.source, r.predicted_risk_level, r.predicted_conditions, r.sentiment_score,
    )
    return outcome


def build_record(student_id: str, answers: Mapping[str, Any], outcome: AnalysisOutcome) -> Dict[str, Any]:
    r = outcome.result
    return {
        "student_id": student_id,
        "responses": dict(answers),
        "risk_level": r.predicted_risk_level,
        **compute_subscores(answers),
        "predicted_conditions": r.predicted_conditions,
        "predicted_risk_level": r.predicted_risk_level,
        "predicted_sentiment": r.predicted_sentiment,
        "sentiment_score": r.sentiment_score,
        "sentiment_label": r.sentiment_label,
        "ai_analysis": r.analysis,
        "recommendations": r.recommendations,
        "immediate_actions": r.immediate_actions,
        "professional_help_needed": r.professional_help_needed,
        "crisis_indicators": r.crisis_indicators,
        "analysis_source": outcome.source,
        "created_at": datetime.now(timezone.utc),
    }


def minimal_record(full: Mapping[str, Any]) -> Dict[str, Any]:
    out = {k: full[k] for k in MINIMAL_FIELDS if k in full}
    out["ai_analysis"] = MINIMAL_ANALYSIS_NOTICE
    return out


async def persist(repo: AssessmentRepo, record: Dict[str, Any]) -> tuple[str, Dict[str, Any], List[str]]:
    """
    Escritura completa; si falla, una escritura mínima (acción compensatoria,
    no rollback). Devuelve (id, registro guardado, warnings).
    """
    try:
        return await repo.insert(record), record, []
    except PyMongoError as e:
        log.warning("Escritura completa falló, reintentando con registro mínimo: %s", e)

    reduced = minimal_record(record)
    try:
        return await repo.insert(reduced), reduced, [WARN_DEGRADED_WRITE]
    except PyMongoError as e:
        log.error("Escritura mínima falló: %s", e)
        raise PersistenceError(str(e)) from e


async def submit(
    student_id: str,
    answers: Mapping[str, Any],
    client: AnalysisClient,
    repo: AssessmentRepo,
    risk_level: Optional[RiskLevel] = None,
) -> SubmitResult:
    warnings: List[str] = []
    try:
        outcome = await analyze(answers, client, risk_level)
    except AnalysisConfigError as e:
        # Sin credencial la evaluación igual se guarda con el respaldo local
        log.error("Servicio de análisis sin configurar: %s", e)
        outcome = fallback_analysis(risk_level or score_answers(answers).level)
        warnings.append(WARN_ANALYSIS_UNAVAILABLE)

    record = build_record(student_id, answers, outcome)
    assessment_id, stored, write_warnings = await persist(repo, record)
    return SubmitResult(assessment_id, stored, outcome, warnings + write_warnings)
