"""
Tipos compartidos entre servicios, modelos y rutas.
"""
from typing import Literal, Union

RiskLevel = Literal["low", "moderate", "high", "critical"]
Sentiment = Literal["positive", "negative", "neutral"]
SentimentLabel = Literal["very_negative", "negative", "neutral", "positive", "very_positive"]

# Orden de severidad: low < moderate < high < critical
RISK_ORDER: tuple[str, ...] = ("low", "moderate", "high", "critical")

# Respuesta a una pregunta: token categórico o texto libre
AnswerValue = Union[str, int, float, bool, None]


def risk_rank(level: str) -> int:
    return RISK_ORDER.index(level) if level in RISK_ORDER else 0


def is_elevated(level: str) -> bool:
    """high o critical."""
    return risk_rank(level) >= risk_rank("high")
