# backend/wellness/tests/test_appointments.py
import pytest
from datetime import datetime, timedelta, timezone

from conftest import _auth

pytestmark = pytest.mark.asyncio

async def test_appointment_flow(student_auth, professional_auth, async_client):
    headers = student_auth["headers"]
    pro_id = professional_auth["id"]

    # Solicitar cita (futuro)
    when = (datetime.now(tz=timezone.utc) + timedelta(days=3)).isoformat()
    payload = {"health_professional_id": pro_id, "appointment_date": when, "notes": "Primera sesión"}
    r = await async_client.post("/appointments", headers=headers, json=payload)
    assert r.status_code == 200, r.text
    appt = r.json()
    assert appt["status"] == "pending"
    assert appt["duration_minutes"] == 60
    assert appt["student_notes"] == "Primera sesión"

    # Mis citas (estudiante)
    r2 = await async_client.get("/appointments/mine", headers=headers)
    assert r2.status_code == 200
    assert any(a["id"] == appt["id"] for a in r2.json())

    # Citas asignadas (profesional)
    r3 = await async_client.get("/appointments/mine", headers=professional_auth["headers"])
    assert r3.status_code == 200
    assert [a["id"] for a in r3.json()] == [appt["id"]]

    # El estudiante no puede aprobar
    r4 = await async_client.patch(f"/appointments/{appt['id']}", headers=headers, json={"status": "approved"})
    assert r4.status_code == 403

    # El profesional asignado sí
    r5 = await async_client.patch(
        f"/appointments/{appt['id']}", headers=professional_auth["headers"],
        json={"status": "approved", "professional_notes": "Nos vemos en consultorio 2"},
    )
    assert r5.status_code == 200
    assert r5.json()["status"] == "approved"

    # El estudiante puede cancelar
    r6 = await async_client.patch(f"/appointments/{appt['id']}", headers=headers, json={"status": "cancelled"})
    assert r6.status_code == 200
    assert r6.json()["status"] == "cancelled"

async def test_past_date_is_rejected(student_auth, async_client):
    when = (datetime.now(tz=timezone.utc) - timedelta(hours=1)).isoformat()
    r = await async_client.post(
        "/appointments", headers=student_auth["headers"],
        json={"health_professional_id": "x", "appointment_date": when},
    )
    assert r.status_code == 422

async def test_unknown_appointment(student_auth, async_client):
    r = await async_client.patch("/appointments/000000000000000000000000", headers=student_auth["headers"],
                                 json={"status": "cancelled"})
    assert r.status_code == 404

async def test_booking_requires_an_approved_professional(student_auth, async_client):
    when = (datetime.now(tz=timezone.utc) + timedelta(days=1)).isoformat()
    headers = student_auth["headers"]

    r = await async_client.post("/appointments", headers=headers,
                                json={"health_professional_id": "does-not-exist", "appointment_date": when})
    assert r.status_code == 404
    assert r.json()["detail"] == "professional_not_found"

    # registrado pero sin aprobar
    pending = await _auth(async_client, "health_professional")
    r2 = await async_client.post("/appointments", headers=headers,
                                 json={"health_professional_id": pending["id"], "appointment_date": when})
    assert r2.status_code == 404

    # un estudiante no es profesional
    r3 = await async_client.post("/appointments", headers=headers,
                                 json={"health_professional_id": student_auth["id"], "appointment_date": when})
    assert r3.status_code == 404

    r4 = await async_client.get("/appointments/mine", headers=headers)
    assert r4.json() == []
