"""
Excepciones de dominio.
Los routers las traducen a HTTPException; los servicios no conocen HTTP.
"""


class AnalysisConfigError(RuntimeError):
    """Falta la credencial del servicio de análisis (no se reintenta)."""


class AnalysisUnavailable(RuntimeError):
    """Fallo de red, timeout o error del proveedor LLM."""


class PersistenceError(RuntimeError):
    """Falló también la escritura mínima de la evaluación."""
