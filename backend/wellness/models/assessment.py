# wellness/models/assessment.py
"""
Schemas de la evaluación y repo.
El scoring y el análisis viven en services/ (mejor testeable).
"""
from typing import Any, Dict, List, Optional

from anyio import to_thread
from bson import ObjectId
from bson.errors import InvalidId
from pydantic import BaseModel, ConfigDict, Field

from ..services.analysis_parser import AnalysisResult
from ..services.labels import RiskLevel


class AssessmentSubmit(BaseModel):
    """Cuerpo de /assessments y /assessments/analyze."""
    model_config = ConfigDict(populate_by_name=True)

    # pregunta -> token categórico o texto libre
    answers: Dict[str, str]
    risk_level: Optional[RiskLevel] = Field(default=None, alias="riskLevel")


class SubScores(BaseModel):
    anxiety_score: int = Field(ge=0, le=100)
    depression_score: int = Field(ge=0, le=100)
    stress_score: int = Field(ge=0, le=100)
    overall_wellbeing_score: int = Field(ge=0, le=100)


class SubmitOut(BaseModel):
    assessment_id: str
    risk_level: RiskLevel
    scores: SubScores
    analysis: AnalysisResult
    analysis_source: str
    warnings: List[str] = []


def _to_public(doc: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(doc)
    if "_id" in out and not isinstance(out["_id"], str):
        out["_id"] = str(out["_id"])
    return out


class AssessmentRepo:
    def __init__(self, db) -> None:
        self.col = db["assessments"]

    async def insert(self, doc: Dict[str, Any]) -> str:
        """Inserta y devuelve el id. Los errores de pymongo se propagan."""
        def _insert():
            res = self.col.insert_one(dict(doc))
            return str(res.inserted_id)

        return await to_thread.run_sync(_insert)

    async def get(self, assessment_id: str, student_id: str) -> Optional[Dict[str, Any]]:
        def _find():
            try:
                oid = ObjectId(assessment_id)
            except (InvalidId, TypeError):
                return None
            d = self.col.find_one({"_id": oid, "student_id": student_id})
            return _to_public(d) if d else None

        return await to_thread.run_sync(_find)

    async def history(self, student_id: str, limit: int = 10) -> List[Dict[str, Any]]:
        """Más recientes primero."""
        def _fetch():
            cur = (
                self.col.find({"student_id": student_id})
                .sort("created_at", -1)
                .limit(limit)
            )
            return [_to_public(d) for d in cur]

        return await to_thread.run_sync(_fetch)

    async def count(self, student_id: str) -> int:
        return await to_thread.run_sync(lambda: self.col.count_documents({"student_id": student_id}))
