# backend/wellness/tests/conftest.py
"""
Fixtures y helpers para pruebas end-to-end con FastAPI + pytest-asyncio.
Mongo se reemplaza por mongomock y el servicio de análisis por clientes falsos
(dependency_overrides), así no se necesita red ni servidor.
"""
import json
import os
import sys
import uuid
from pathlib import Path

import httpx
import mongomock
import openai
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from asgi_lifespan import LifespanManager

# ---- DB de test única por corrida (debe setearse ANTES de importar wellness.main) ----
TEST_DB_NAME = f"student_wellness_test_{uuid.uuid4().hex[:8]}"
os.environ["MONGO_DB"] = TEST_DB_NAME
os.environ["GROQ_API_KEY"] = ""
ADMIN_EMAIL = "admin@uni.edu"
os.environ["ADMIN_EMAIL"] = ADMIN_EMAIL
os.environ["ADMIN_PASSWORD"] = "Secreta123"

# ---- asegurar imports absolutos 'wellness.*' ----
ROOT_DIR = Path(__file__).resolve().parents[1]   # .../backend/wellness
sys.path.insert(0, str(ROOT_DIR.parent))         # .../backend

from wellness.db import mongo  # noqa
from wellness.main import app  # noqa
from wellness.core.deps import analysis_client  # noqa
from wellness.models.professional import ProfessionalRepo  # noqa

mongo.MongoClient = mongomock.MongoClient

VALID_ANALYSIS = {
    "predicted_conditions": ["anxiety", "academic_stress"],
    "predicted_risk_level": "high",
    "predicted_sentiment": "negative",
    "sentiment_score": 30,
    "sentiment_label": "negative",
    "analysis": "You are carrying a lot right now.",
    "recommendations": ["a", "b", "c", "d", "e"],
    "immediate_actions": ["breathe", "drink water"],
    "professional_help_needed": True,
    "crisis_indicators": False,
}


class FakeAnalysisClient:
    """Imita AnalysisClient.complete: devuelve texto fijo o lanza una excepción."""

    def __init__(self, text: str = "", exc: Exception | None = None) -> None:
        self.text = text
        self.exc = exc
        self.calls = []

    def complete(self, answers, risk_level=None, written=""):
        self.calls.append({"answers": dict(answers), "risk_level": risk_level, "written": written})
        if self.exc:
            raise self.exc
        return self.text


def connection_error() -> Exception:
    from wellness.core.errors import AnalysisUnavailable
    err = openai.APIConnectionError(request=httpx.Request("POST", "https://api.groq.com/openai/v1/chat/completions"))
    return AnalysisUnavailable(str(err))


@pytest.fixture
def fake_analysis():
    """Instala un cliente falso; devuelve una función para configurarlo."""
    def _install(text: str | dict = "", exc: Exception | None = None) -> FakeAnalysisClient:
        body = json.dumps(text) if isinstance(text, dict) else text
        client = FakeAnalysisClient(body, exc)
        app.dependency_overrides[analysis_client] = lambda: client
        return client

    _install(VALID_ANALYSIS)
    yield _install
    app.dependency_overrides.pop(analysis_client, None)


@pytest_asyncio.fixture
async def async_client(fake_analysis):
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client

# -------- Helpers --------
async def _register(client: AsyncClient, *, role: str = "student"):
    email = f"test_{uuid.uuid4().hex[:8]}@uni.edu"
    payload = {"email": email, "password": "Secreta123", "full_name": "Test Student", "role": role}
    r = await client.post("/auth/register", json=payload)
    assert r.status_code in (200, 201), r.text
    return r.json()

async def _login(client: AsyncClient, email: str):
    r = await client.post("/auth/login", json={"email": email, "password": "Secreta123"})
    assert r.status_code == 200, r.text
    token = r.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}

async def _auth(client: AsyncClient, role: str):
    user = await _register(client, role=role)
    headers = await _login(client, user["email"])
    return {"id": user["id"], "email": user["email"], "headers": headers}

async def _approve(user_id: str):
    await ProfessionalRepo(mongo.get_db()).set_approved(user_id, True)

@pytest_asyncio.fixture
async def student_auth(async_client: AsyncClient):
    return await _auth(async_client, "student")

@pytest_asyncio.fixture
async def professional_auth(async_client: AsyncClient):
    """Profesional ya aprobado (puede recibir citas)."""
    auth = await _auth(async_client, "health_professional")
    await _approve(auth["id"])
    return auth

@pytest_asyncio.fixture
async def admin_auth(async_client: AsyncClient):
    """Cuenta admin creada en startup desde ADMIN_EMAIL / ADMIN_PASSWORD."""
    headers = await _login(async_client, ADMIN_EMAIL)
    me = await async_client.get("/users/me", headers=headers)
    return {"id": me.json()["uid"], "email": ADMIN_EMAIL, "headers": headers}
