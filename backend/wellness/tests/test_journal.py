# backend/wellness/tests/test_journal.py
import pytest

pytestmark = pytest.mark.asyncio

async def test_journal_crud(student_auth, async_client):
    headers = student_auth["headers"]

    r = await async_client.post("/journal", headers=headers, json={
        "title": "Semana de parciales", "content": "Dormí poco pero terminé el proyecto.", "mood": "tired",
    })
    assert r.status_code == 200, r.text
    entry = r.json()
    assert entry["is_private"] is True

    await async_client.post("/journal", headers=headers, json={"content": "Salí a caminar con amigos", "mood": "happy"})

    # Búsqueda por texto (sin distinguir mayúsculas) y por ánimo
    r2 = await async_client.get("/journal?q=PROYECTO", headers=headers)
    assert [e["id"] for e in r2.json()] == [entry["id"]]
    r3 = await async_client.get("/journal?mood=happy", headers=headers)
    assert len(r3.json()) == 1

    r4 = await async_client.get(f"/journal/{entry['id']}", headers=headers)
    assert r4.status_code == 200

    r5 = await async_client.delete(f"/journal/{entry['id']}", headers=headers)
    assert r5.status_code == 204
    r6 = await async_client.get(f"/journal/{entry['id']}", headers=headers)
    assert r6.status_code == 404

async def test_journal_is_for_students_only(professional_auth, async_client):
    r = await async_client.get("/journal", headers=professional_auth["headers"])
    assert r.status_code == 403

async def test_journal_limit_is_bounded(student_auth, async_client):
    r = await async_client.get("/journal?limit=0", headers=student_auth["headers"])
    assert r.status_code == 422
    r2 = await async_client.get("/journal?limit=-5", headers=student_auth["headers"])
    assert r2.status_code == 422
