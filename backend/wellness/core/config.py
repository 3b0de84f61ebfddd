"""
Configuración central de la app (fuente única de verdad).
Lee variables de entorno y expone un objeto Settings tipado.
"""
import os
from pydantic import BaseModel, Field


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    MONGO_URI: str = Field(default_factory=lambda: os.getenv("MONGO_URI", "mongodb://localhost:27017"))
    MONGO_DB: str  = Field(default_factory=lambda: os.getenv("MONGO_DB", "student_wellness"))
    JWT_SECRET: str = Field(default_factory=lambda: os.getenv("JWT_SECRET", "changeme"))
    JWT_EXPIRES_MIN: int = Field(default_factory=lambda: int(os.getenv("JWT_EXPIRES_MIN", "60")))
    CORS_ORIGINS: list[str] = Field(default_factory=lambda: ["*"])
    LOG_LEVEL: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    # Servicio de análisis (endpoint compatible con OpenAI; Groq por defecto)
    GROQ_API_KEY: str = Field(default_factory=lambda: os.getenv("GROQ_API_KEY", ""))
    ANALYSIS_BASE_URL: str = Field(default_factory=lambda: os.getenv("ANALYSIS_BASE_URL", "https://api.groq.com/openai/v1"))
    ANALYSIS_MODEL: str = Field(default_factory=lambda: os.getenv("ANALYSIS_MODEL", "llama-3.1-8b-instant"))
    ANALYSIS_TEMPERATURE: float = Field(default_factory=lambda: float(os.getenv("ANALYSIS_TEMPERATURE", "0.7")))
    ANALYSIS_MAX_TOKENS: int = Field(default_factory=lambda: int(os.getenv("ANALYSIS_MAX_TOKENS", "2000")))
    ANALYSIS_TIMEOUT_S: float = Field(default_factory=lambda: float(os.getenv("ANALYSIS_TIMEOUT_S", "30")))

    # Si es true, "assessments" solo admite el esquema mínimo (sin columnas de IA)
    ASSESSMENTS_STRICT_SCHEMA: bool = Field(default_factory=lambda: _env_bool("ASSESSMENTS_STRICT_SCHEMA"))

    # Cuenta admin inicial (se crea en startup si ambas están definidas)
    ADMIN_EMAIL: str = Field(default_factory=lambda: os.getenv("ADMIN_EMAIL", ""))
    ADMIN_PASSWORD: str = Field(default_factory=lambda: os.getenv("ADMIN_PASSWORD", ""))

settings = Settings()
