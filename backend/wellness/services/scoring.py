"""
Puntuación local y determinista de la evaluación (respaldo del análisis IA).

Dos cálculos independientes:
- score_answers: suma de pesos por palabra clave -> nivel de riesgo.
- compute_subscores: promedio por categoría (0..100) para las gráficas.

Umbrales (política canónica, suma ponderada):
    >=15 critical | >=10 high | >=5 moderate | resto low
"""
import math
from typing import Final, Mapping, NamedTuple

from .labels import AnswerValue, RiskLevel

# (peso, palabras clave) en orden descendente de severidad
SEVERITY_TIERS: Final[tuple[tuple[int, tuple[str, ...]], ...]] = (
    (3, ("nearly_every_day", "extremely_stressed", "overwhelming")),
    (2, ("more_than_half_days", "very_stressed", "high")),
    (1, ("several_days", "moderately_stressed", "moderate")),
)

# (umbral mínimo, nivel) evaluados en orden
RISK_THRESHOLDS: Final[tuple[tuple[int, RiskLevel], ...]] = (
    (15, "critical"),
    (10, "high"),
    (5, "moderate"),
)

# Preguntas del cuestionario por categoría
QUESTIONS: Final[dict[str, str]] = {
    "mood": "general",
    "anxiety": "anxiety",
    "worry": "anxiety",
    "interest": "depression",
    "hopeless": "depression",
    "sleep": "general",
    "stress": "stress",
    "concentration": "general",
    "academic_pressure": "academic",
    "social_connections": "social",
    "additional_thoughts": "free_text",
}

SUBSCORE_GROUPS: Final[dict[str, tuple[str, ...]]] = {
    "anxiety_score": ("anxiety", "worry"),
    "depression_score": ("interest", "hopeless"),
    "stress_score": ("stress",),
    "overall_wellbeing_score": ("mood", "sleep", "concentration", "social_connections"),
}

POINTS: Final[dict[str, int]] = {
    # ansiedad / depresión (más alto = peor)
    "nearly_every_day": 75,
    "more_than_half_days": 50,
    "several_days": 25,
    "not_at_all": 0,
    # estrés
    "extremely_stressed": 100,
    "very_stressed": 75,
    "moderately_stressed": 50,
    "slightly_stressed": 25,
    "not_stressed": 0,
    # bienestar general (más alto = mejor)
    "excellent": 100,
    "good": 75,
    "fair": 50,
    "poor": 25,
    "very_poor": 0,
    # conexiones sociales
    "very_satisfied": 100,
    "satisfied": 75,
    "neutral": 50,
    "dissatisfied": 25,
    "very_dissatisfied": 0,
    # presión académica (más alto = peor)
    "overwhelming": 100,
    "high": 75,
    "moderate": 50,
    "low": 25,
    "none": 0,
}

WRITTEN_MIN_LEN: Final[int] = 10


class RiskScore(NamedTuple):
    score: int
    level: RiskLevel


def answer_weight(value: AnswerValue) -> int:
    """Peso del primer nivel cuya palabra clave aparece en la respuesta; 0 si ninguna."""
    if not isinstance(value, str):
        return 0
    for weight, keywords in SEVERITY_TIERS:
        if any(k in value for k in keywords):
            return weight
    return 0


def risk_level_for(score: int) -> RiskLevel:
    for minimum, level in RISK_THRESHOLDS:
        if score >= minimum:
            return level
    return "low"


def score_answers(responses: Mapping[str, AnswerValue]) -> RiskScore:
    score = sum(answer_weight(v) for v in responses.values())
    return RiskScore(score=score, level=risk_level_for(score))


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def compute_subscores(responses: Mapping[str, AnswerValue]) -> dict[str, int]:
    """
    Promedio (redondeo hacia arriba en .5) de los puntos de cada grupo.
    Preguntas sin responder no cuentan; tokens desconocidos valen 0.
    """
    out: dict[str, int] = {}
    for name, questions in SUBSCORE_GROUPS.items():
        values = [responses.get(q) for q in questions]
        points = [POINTS.get(v, 0) if isinstance(v, str) else 0 for v in values if v]
        out[name] = _round_half_up(sum(points) / len(points)) if points else 0
    return out


def extract_written_text(responses: Mapping[str, AnswerValue]) -> str:
    """Respuestas de texto libre (más de 10 caracteres) unidas por espacios."""
    return " ".join(
        v for v in responses.values()
        if isinstance(v, str) and len(v) > WRITTEN_MIN_LEN
    )
