# wellness/services/analysis_parser.py
"""
Parseo y validación de la salida del LLM.

El modelo devuelve algo "con forma de JSON": puede venir dentro de un bloque
```json ...```, con campos faltantes o de tipo incorrecto, o ser ilegible.
El resultado siempre es un AnalysisResult completo:
- ParsedAnalysis: se pudo leer un objeto JSON; cada campo se valida y,
  si falta o es inválido, se rellena con su valor por defecto.
- FallbackAnalysis: no hubo objeto JSON; respuesta fija basada en el
  nivel de riesgo calculado localmente.
"""
import json
import math
import re
from typing import Any, Final, Literal, Union

from pydantic import BaseModel, Field

from .labels import RISK_ORDER, RiskLevel, Sentiment, SentimentLabel, is_elevated

# ------------------- Constantes de respaldo -------------------
DEFAULT_CONDITIONS: Final[tuple[str, ...]] = ("academic_stress",)
DEFAULT_SENTIMENT: Final[str] = "neutral"
DEFAULT_SENTIMENT_SCORE: Final[int] = 50
DEFAULT_SENTIMENT_LABEL: Final[str] = "neutral"

DEFAULT_ANALYSIS: Final[str] = (
    "Thank you for completing this assessment. Your responses indicate areas where "
    "focused attention and support could be beneficial for your mental wellness."
)

FALLBACK_ANALYSIS_TEMPLATE: Final[str] = (
    "Based on your assessment responses, you appear to be experiencing {level} levels of "
    "stress and mental health concerns. Your responses indicate areas where focused "
    "attention and support could be beneficial. It's important to remember that seeking "
    "help is a sign of strength, and there are many effective strategies and resources "
    "available to support your mental wellness."
)

DEFAULT_RECOMMENDATIONS: Final[tuple[str, ...]] = (
    "Practice deep breathing exercises for 5-10 minutes daily",
    "Maintain a consistent sleep schedule of 7-9 hours per night",
    "Engage in regular physical activity, even light walking",
    "Connect with friends, family, or support groups regularly",
    "Consider speaking with a counselor or mental health professional",
    "Practice mindfulness or meditation techniques",
    "Limit caffeine intake, especially in the afternoon and evening",
)

FALLBACK_RECOMMENDATIONS: Final[tuple[str, ...]] = (
    "Practice stress-reduction techniques like deep breathing or progressive muscle relaxation",
    "Maintain a regular sleep schedule and aim for 7-9 hours of sleep per night",
    "Engage in regular physical activity, which can significantly improve mood and reduce stress",
    "Stay connected with supportive friends, family members, or peer groups",
    "Consider speaking with a mental health professional for personalized guidance",
    "Practice mindfulness or meditation to help manage overwhelming thoughts",
    "Create a balanced daily routine that includes time for both work and relaxation",
)

DEFAULT_IMMEDIATE_ACTIONS: Final[tuple[str, ...]] = (
    "Take 5 deep breaths right now to help center yourself",
    "Write down one thing you're grateful for today",
)

SENTIMENTS: Final[tuple[str, ...]] = ("positive", "negative", "neutral")
SENTIMENT_LABELS: Final[tuple[str, ...]] = (
    "very_negative", "negative", "neutral", "positive", "very_positive",
)

_FENCE_RE = re.compile(r"```(?:json|JSON)?\s*(.*?)```", re.DOTALL)


# ------------------- Tipos -------------------
class AnalysisResult(BaseModel):
    predicted_conditions: list[str]
    predicted_risk_level: RiskLevel
    predicted_sentiment: Sentiment
    sentiment_score: int = Field(ge=0, le=100)
    sentiment_label: SentimentLabel
    analysis: str
    recommendations: list[str]
    immediate_actions: list[str]
    professional_help_needed: bool
    crisis_indicators: bool


class ParsedAnalysis(BaseModel):
    source: Literal["parsed"] = "parsed"
    result: AnalysisResult


class FallbackAnalysis(BaseModel):
    source: Literal["fallback"] = "fallback"
    result: AnalysisResult


AnalysisOutcome = Union[ParsedAnalysis, FallbackAnalysis]


# ------------------- Respaldo completo -------------------
def fallback_analysis(level: RiskLevel) -> FallbackAnalysis:
    return FallbackAnalysis(result=AnalysisResult(
        predicted_conditions=list(DEFAULT_CONDITIONS),
        predicted_risk_level=level,
        predicted_sentiment=DEFAULT_SENTIMENT,
        sentiment_score=DEFAULT_SENTIMENT_SCORE,
        sentiment_label=DEFAULT_SENTIMENT_LABEL,
        analysis=FALLBACK_ANALYSIS_TEMPLATE.format(level=level),
        recommendations=list(FALLBACK_RECOMMENDATIONS),
        immediate_actions=list(DEFAULT_IMMEDIATE_ACTIONS),
        professional_help_needed=is_elevated(level),
        crisis_indicators=level == "critical",
    ))


# ------------------- Extracción del objeto JSON -------------------
def extract_json_object(text: str | None) -> dict[str, Any] | None:
    """
    Devuelve el objeto JSON contenido en el texto o None.
    Intenta: bloque ```json```, texto completo y el tramo entre la
    primera '{' y la última '}'.
    """
    if not text:
        return None
    candidates = []
    m = _FENCE_RE.search(text)
    if m:
        candidates.append(m.group(1))
    candidates.append(text)
    start, end = text.find("{"), text.rfind("}")
    if start != -1 and end > start:
        candidates.append(text[start:end + 1])

    for raw in candidates:
        try:
            data = json.loads(raw.strip())
        except ValueError:
            continue
        if isinstance(data, dict):
            return data
    return None


# ------------------- Validación campo a campo -------------------
def _str_list(value: Any) -> list[str] | None:
    if not isinstance(value, list):
        return None
    items = [v.strip() for v in value if isinstance(v, str) and v.strip()]
    return items or None


def _choice(value: Any, options: tuple[str, ...]) -> str | None:
    if isinstance(value, str) and value.strip().lower() in options:
        return value.strip().lower()
    return None


def _score(value: Any) -> int | None:
    # bool es subclase de int: no cuenta como número
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return max(0, min(100, int(round(value))))


def _flag(value: Any) -> bool | None:
    return value if isinstance(value, bool) else None


def coerce_analysis(data: dict[str, Any], local_level: RiskLevel) -> AnalysisResult:
    level = _choice(data.get("predicted_risk_level"), RISK_ORDER) or local_level
    analysis = data.get("analysis")

    professional = _flag(data.get("professional_help_needed"))
    crisis = _flag(data.get("crisis_indicators"))

    score = _score(data.get("sentiment_score"))

    return AnalysisResult(
        predicted_conditions=_str_list(data.get("predicted_conditions")) or list(DEFAULT_CONDITIONS),
        predicted_risk_level=level,
        predicted_sentiment=_choice(data.get("predicted_sentiment"), SENTIMENTS) or DEFAULT_SENTIMENT,
        sentiment_score=DEFAULT_SENTIMENT_SCORE if score is None else score,
        sentiment_label=_choice(data.get("sentiment_label"), SENTIMENT_LABELS) or DEFAULT_SENTIMENT_LABEL,
        analysis=analysis.strip() if isinstance(analysis, str) and analysis.strip() else DEFAULT_ANALYSIS,
        recommendations=_str_list(data.get("recommendations")) or list(DEFAULT_RECOMMENDATIONS),
        immediate_actions=_str_list(data.get("immediate_actions")) or list(DEFAULT_IMMEDIATE_ACTIONS),
        professional_help_needed=is_elevated(level) if professional is None else professional,
        crisis_indicators=(level == "critical") if crisis is None else crisis,
    )


def parse_analysis(text: str | None, local_level: RiskLevel) -> AnalysisOutcome:
    data = extract_json_object(text)
    if data is None:
        return fallback_analysis(local_level)
    return ParsedAnalysis(result=coerce_analysis(data, local_level))
