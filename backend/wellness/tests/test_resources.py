# backend/wellness/tests/test_resources.py
import pytest

pytestmark = pytest.mark.asyncio

RESOURCES = [
    {"title": "Crisis helpline", "tags": ["crisis"], "resource_type": "external_link"},
    {"title": "Managing exam stress", "tags": ["academic_stress"], "is_featured": True},
    {"title": "Breathing for anxiety", "tags": ["Anxiety", "academic_stress"], "resource_type": "audio"},
    {"title": "Sleep hygiene", "tags": ["sleep_disorder"]},
]

async def _seed(async_client, headers):
    for res in RESOURCES:
        r = await async_client.post("/resources", headers=headers, json=res)
        assert r.status_code == 200, r.text

async def test_only_staff_can_create(student_auth, async_client):
    r = await async_client.post("/resources", headers=student_auth["headers"], json=RESOURCES[0])
    assert r.status_code == 403

async def test_match_by_tag_overlap(admin_auth, async_client):
    await _seed(async_client, admin_auth["headers"])

    r = await async_client.get("/resources/match?conditions=academic_stress&conditions=anxiety&risk_level=low")
    assert r.status_code == 200
    titles = [x["title"] for x in r.json()]
    # destacados primero; sin recursos de crisis en riesgo bajo
    assert titles[0] == "Managing exam stress"
    assert set(titles) == {"Managing exam stress", "Breathing for anxiety"}

async def test_crisis_resources_first_when_risk_is_elevated(professional_auth, async_client):
    await _seed(async_client, professional_auth["headers"])

    r = await async_client.get("/resources/match?conditions=sleep_disorder&risk_level=critical")
    titles = [x["title"] for x in r.json()]
    assert titles == ["Crisis helpline", "Sleep hygiene"]

    r2 = await async_client.get("/resources/featured")
    assert [x["title"] for x in r2.json()] == ["Managing exam stress"]

async def test_resources_for_stored_assessment(student_auth, admin_auth, async_client):
    await _seed(async_client, admin_auth["headers"])
    r = await async_client.post("/assessments", headers=student_auth["headers"],
                                json={"answers": {"anxiety": "nearly_every_day"}})
    assessment_id = r.json()["assessment_id"]

    # el análisis falso predice anxiety + academic_stress con riesgo high
    r2 = await async_client.get(f"/assessments/{assessment_id}/resources", headers=student_auth["headers"])
    assert r2.status_code == 200
    titles = [x["title"] for x in r2.json()]
    assert titles[0] == "Crisis helpline"
    assert set(titles[1:]) == {"Managing exam stress", "Breathing for anxiety"}
