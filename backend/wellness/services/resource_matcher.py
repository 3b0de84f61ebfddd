"""
Selección de recursos educativos por solapamiento de tags.
Con riesgo high/critical los recursos de crisis/emergencia van primero.
"""
from typing import Any, Dict, Final, List

from ..models.resource import ResourceRepo
from .labels import is_elevated

CRISIS_TAGS: Final[tuple[str, ...]] = ("crisis", "emergency")


async def match_resources(
    conditions: List[str],
    risk_level: str,
    repo: ResourceRepo,
    limit: int = 10,
) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    if is_elevated(risk_level):
        out.extend(await repo.find_by_tags(list(CRISIS_TAGS), limit=limit))

    seen = {r["_id"] for r in out}
    for r in await repo.find_by_tags(conditions, limit=limit):
        if r["_id"] not in seen:
            out.append(r)
    return out[:limit]
