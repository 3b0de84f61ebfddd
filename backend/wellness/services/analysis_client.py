# wellness/services/analysis_client.py
"""
Cliente del servicio de análisis (LLM hospedado, API compatible con OpenAI).
Por defecto apunta a Groq (llama-3.1-8b-instant).

Contrato: (respuestas, nivel de riesgo local, texto libre) -> texto crudo.
No interpreta la respuesta; eso lo hace analysis_parser.
"""
import json
import logging
from typing import Any, Final, Mapping

from openai import OpenAI, OpenAIError

from ..core.config import settings
from ..core.errors import AnalysisConfigError, AnalysisUnavailable

log = logging.getLogger(__name__)

SYSTEM_PROMPT: Final[str] = (
    "You are a compassionate mental health AI assistant with expertise in student wellness. "
    "Always respond with valid JSON format. Be supportive, evidence-based, and provide "
    "actionable guidance while maintaining appropriate clinical boundaries."
)

CONDITIONS: Final[tuple[str, ...]] = (
    "academic_stress", "anxiety", "depression", "social_anxiety", "adjustment_disorder",
    "sleep_disorder", "eating_disorder", "substance_abuse", "relationship_issues",
    "financial_stress", "homesickness", "perfectionism", "imposter_syndrome",
    "mild_anxiety", "severe_anxiety", "panic_disorder", "generalized_anxiety",
)

TEMPLATE_ANALYSIS = """
Analyze this student wellness assessment.

Assessment Responses: {answers}
Written Content: "{written}"
Calculated Risk Level: {risk_level}

Respond ONLY with a JSON object with this structure:
{{
  "predicted_conditions": ["condition1", "condition2"],
  "predicted_risk_level": "low|moderate|high|critical",
  "predicted_sentiment": "positive|negative|neutral",
  "sentiment_score": 0-100,
  "sentiment_label": "very_negative|negative|neutral|positive|very_positive",
  "analysis": "compassionate, specific analysis of the responses",
  "recommendations": ["5 specific, actionable recommendations"],
  "immediate_actions": ["2 steps they can take today"],
  "professional_help_needed": true/false,
  "crisis_indicators": true/false
}}

Conditions to choose from: {conditions}

Risk level guidelines:
- low: minor concerns, manageable with self-care
- moderate: counseling recommended, regular monitoring
- high: professional help strongly recommended
- critical: immediate professional intervention required

sentiment_score: 0=very negative, 25=negative, 50=neutral, 75=positive, 100=very positive
"""


def build_prompt(answers: Mapping[str, Any], risk_level: str | None, written: str) -> str:
    return TEMPLATE_ANALYSIS.format(
        answers=json.dumps(dict(answers), indent=2, ensure_ascii=False),
        written=written,
        risk_level=risk_level or "unknown",
        conditions=", ".join(CONDITIONS),
    )


class AnalysisClient:
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        timeout: float | None = None,
    ) -> None:
        self.api_key = settings.GROQ_API_KEY if api_key is None else api_key
        self.base_url = base_url or settings.ANALYSIS_BASE_URL
        self.model = model or settings.ANALYSIS_MODEL
        self.temperature = settings.ANALYSIS_TEMPERATURE if temperature is None else temperature
        self.max_tokens = max_tokens or settings.ANALYSIS_MAX_TOKENS
        self.timeout = timeout or settings.ANALYSIS_TIMEOUT_S
        self._client: OpenAI | None = None

    def _require_client(self) -> OpenAI:
        if not self.api_key:
            raise AnalysisConfigError("Falta GROQ_API_KEY en variables de entorno.")
        if self._client is None:
            # Un solo intento; el timeout lo maneja el cliente HTTP
            self._client = OpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._client

    def complete(self, answers: Mapping[str, Any], risk_level: str | None = None, written: str = "") -> str:
        """
        Una llamada de chat completion. Devuelve el texto crudo del modelo.
        Lanza AnalysisConfigError (sin credencial) o AnalysisUnavailable.
        """
        client = self._require_client()
        prompt = build_prompt(answers, risk_level, written)
        try:
            chat = client.chat.completions.create(
                model=self.model,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
            )
        except OpenAIError as e:
            raise AnalysisUnavailable(str(e)) from e

        if not chat.choices:
            return ""
        return (chat.choices[0].message.content or "").strip()
