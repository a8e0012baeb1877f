from __future__ import annotations

from datetime import date, timedelta
from uuid import UUID

import pytest
from fastapi.testclient import TestClient

from api.main import app
from api.services.application_store import application_store


client = TestClient(app)

ALICE = {"X-User-Id": "alice"}
BOB = {"X-User-Id": "bob"}


def _create(headers: dict[str, str], **overrides) -> dict:
    payload = {"company": "Acme", "position": "Backend Engineer"}
    payload.update(overrides)
    response = client.post("/api/jobs", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_healthcheck() -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_missing_user_header_is_unauthorized() -> None:
    response = client.get("/api/jobs")
    assert response.status_code == 401
    assert response.json()["detail"] == "Unauthorized"


def test_create_defaults_and_follow_up_reminder() -> None:
    body = _create(ALICE)
    today = date.today()
    assert body["status"] == "APPLIED"
    assert body["priority"] == "MEDIUM"
    assert body["applied_date"] == today.isoformat()
    assert body["events"][0]["title"] == "Application Created"
    assert body["events"][0]["description"] == "Applied to Backend Engineer at Acme"

    reminders = body["reminders"]
    assert len(reminders) == 1
    assert reminders[0]["reminder_type"] == "follow_up"
    assert reminders[0]["title"] == "Backend Engineer application"
    assert reminders[0]["remind_at"] == (today + timedelta(days=7)).isoformat()
    assert reminders[0]["auto_scheduled"] is True


def test_create_with_near_deadline_reminds_day_before() -> None:
    body = _create(ALICE, applied_date="2024-01-01", deadline="2024-01-05")
    assert body["reminders"][0]["remind_at"] == "2024-01-04"


def test_create_with_explicit_follow_up_keeps_it() -> None:
    body = _create(ALICE, applied_date="2024-01-01", follow_up_reminder="2024-01-20")
    reminder = body["reminders"][0]
    assert reminder["remind_at"] == "2024-01-20"
    assert reminder["auto_scheduled"] is False


def test_create_uses_default_status_preference() -> None:
    client.put("/api/user/preferences", json={"default_status": "PHONE_SCREENING"}, headers=ALICE)
    body = _create(ALICE)
    assert body["status"] == "PHONE_SCREENING"


def test_create_validation_errors() -> None:
    response = client.post("/api/jobs", json={"company": "", "position": "Dev"}, headers=ALICE)
    assert response.status_code == 422
    response = client.post(
        "/api/jobs",
        json={"company": "Acme", "position": "Dev", "contact_email": "not-an-email"},
        headers=ALICE,
    )
    assert response.status_code == 422
    response = client.post(
        "/api/jobs",
        json={"company": "Acme", "position": "Dev", "contact_email": "", "job_url": ""},
        headers=ALICE,
    )
    assert response.status_code == 201


def test_applications_are_scoped_to_their_owner() -> None:
    body = _create(ALICE)
    assert client.get(f"/api/jobs/{body['id']}", headers=ALICE).status_code == 200
    assert client.get(f"/api/jobs/{body['id']}", headers=BOB).status_code == 404
    assert client.get("/api/jobs", headers=BOB).json() == []
    assert client.get("/api/jobs/not-a-uuid", headers=ALICE).status_code == 404


def test_list_filters_search_and_sort() -> None:
    _create(ALICE, company="Acme", position="Backend Engineer", applied_date="2024-01-01", priority="HIGH")
    _create(ALICE, company="Globex", position="Data Analyst", location="Berlin", applied_date="2024-02-01")
    _create(ALICE, company="Initech", position="Backend Lead", applied_date="2024-03-01", status="OFFER")

    default_order = [a["company"] for a in client.get("/api/jobs", headers=ALICE).json()]
    assert default_order == ["Initech", "Globex", "Acme"]

    ascending = client.get("/api/jobs", params={"sort_by": "company", "sort_order": "asc"}, headers=ALICE)
    assert [a["company"] for a in ascending.json()] == ["Acme", "Globex", "Initech"]

    by_priority = client.get("/api/jobs", params={"sort_by": "priority", "sort_order": "desc"}, headers=ALICE)
    assert by_priority.json()[0]["company"] == "Acme"

    search = client.get("/api/jobs", params={"search": "backend"}, headers=ALICE).json()
    assert {a["company"] for a in search} == {"Acme", "Initech"}

    located = client.get("/api/jobs", params={"search": "berlin"}, headers=ALICE).json()
    assert [a["company"] for a in located] == ["Globex"]

    offers = client.get("/api/jobs", params={"status": "OFFER"}, headers=ALICE).json()
    assert [a["company"] for a in offers] == ["Initech"]

    high = client.get("/api/jobs", params={"priority": "HIGH"}, headers=ALICE).json()
    assert [a["company"] for a in high] == ["Acme"]

    bad_sort = client.get("/api/jobs", params={"sort_by": "salary_band"}, headers=ALICE)
    assert bad_sort.status_code == 400


def test_sort_by_deadline_puts_missing_last() -> None:
    _create(ALICE, company="NoDeadline", applied_date="2024-01-01")
    _create(ALICE, company="Later", applied_date="2024-01-01", deadline="2024-03-01")
    _create(ALICE, company="Sooner", applied_date="2024-01-01", deadline="2024-02-01")
    for order in ("asc", "desc"):
        body = client.get("/api/jobs", params={"sort_by": "deadline", "sort_order": order}, headers=ALICE).json()
        assert body[-1]["company"] == "NoDeadline"
    asc = client.get("/api/jobs", params={"sort_by": "deadline", "sort_order": "asc"}, headers=ALICE).json()
    assert [a["company"] for a in asc[:2]] == ["Sooner", "Later"]


def test_status_change_records_event() -> None:
    body = _create(ALICE)
    response = client.put(f"/api/jobs/{body['id']}", json={"status": "TECHNICAL_INTERVIEW"}, headers=ALICE)
    assert response.status_code == 200
    titles = [event["title"] for event in response.json()["events"]]
    assert "Status Changed to TECHNICAL_INTERVIEW" in titles
    assert len(titles) == 2
    assert {event["event_type"] for event in response.json()["events"]} == {"status_change"}

    unchanged = client.put(f"/api/jobs/{body['id']}", json={"status": "TECHNICAL_INTERVIEW"}, headers=ALICE)
    assert len(unchanged.json()["events"]) == 2


def test_update_deadline_reschedules_follow_up() -> None:
    body = _create(ALICE, applied_date="2024-01-01")
    assert body["reminders"][0]["remind_at"] == "2024-01-08"

    updated = client.put(f"/api/jobs/{body['id']}", json={"deadline": "2024-01-05"}, headers=ALICE).json()
    assert updated["deadline"] == "2024-01-05"
    assert [r["remind_at"] for r in updated["reminders"]] == ["2024-01-04"]

    moved = client.put(f"/api/jobs/{body['id']}", json={"applied_date": "2023-12-01"}, headers=ALICE).json()
    assert [r["remind_at"] for r in moved["reminders"]] == ["2023-12-08"]


def test_manual_follow_up_survives_date_changes() -> None:
    body = _create(ALICE, applied_date="2024-01-01")
    manual = client.put(
        f"/api/jobs/{body['id']}", json={"follow_up_reminder": "2024-01-15"}, headers=ALICE
    ).json()
    assert manual["reminders"][0]["remind_at"] == "2024-01-15"
    assert manual["reminders"][0]["auto_scheduled"] is False

    after = client.put(f"/api/jobs/{body['id']}", json={"deadline": "2024-01-05"}, headers=ALICE).json()
    assert after["reminders"][0]["remind_at"] == "2024-01-15"


def test_update_and_delete_unknown_application() -> None:
    missing = "00000000-0000-0000-0000-000000000000"
    assert client.put(f"/api/jobs/{missing}", json={"notes": "x"}, headers=ALICE).status_code == 404
    assert client.delete(f"/api/jobs/{missing}", headers=ALICE).status_code == 404


def test_delete_application() -> None:
    body = _create(ALICE)
    assert client.delete(f"/api/jobs/{body['id']}", headers=BOB).status_code == 404
    response = client.delete(f"/api/jobs/{body['id']}", headers=ALICE)
    assert response.status_code == 200
    assert response.json()["message"] == "Job application deleted successfully"
    assert client.get(f"/api/jobs/{body['id']}", headers=ALICE).status_code == 404


def test_add_and_complete_reminder() -> None:
    body = _create(ALICE, applied_date="2024-01-01")
    created = client.post(
        f"/api/jobs/{body['id']}/reminders",
        json={"remind_at": "2024-01-03", "title": "Prep interview", "reminder_type": "interview"},
        headers=ALICE,
    )
    assert created.status_code == 201
    reminder = created.json()
    assert reminder["title"] == "Prep interview"
    assert reminder["is_completed"] is False

    detail = client.get(f"/api/jobs/{body['id']}", headers=ALICE).json()
    assert [r["remind_at"] for r in detail["reminders"]] == ["2024-01-03", "2024-01-08"]

    done = client.post(f"/api/jobs/{body['id']}/reminders/{reminder['id']}/complete", headers=ALICE)
    assert done.status_code == 200
    assert done.json()["is_completed"] is True

    missing = client.post(
        f"/api/jobs/{body['id']}/reminders/00000000-0000-0000-0000-000000000000/complete",
        headers=ALICE,
    )
    assert missing.status_code == 404


def test_preferences_created_with_defaults() -> None:
    response = client.get("/api/user/preferences", headers=ALICE)
    assert response.status_code == 200
    body = response.json()
    assert body["default_status"] == "APPLIED"
    assert body["default_follow_up_days"] == 7


def test_preferences_range_is_validated() -> None:
    for days in (0, 31):
        response = client.put("/api/user/preferences", json={"default_follow_up_days": days}, headers=ALICE)
        assert response.status_code == 422
    response = client.put("/api/user/preferences", json={"default_follow_up_days": 30}, headers=ALICE)
    assert response.status_code == 200
    assert response.json()["default_follow_up_days"] == 30
    assert response.json()["default_status"] == "APPLIED"


def test_preference_change_reschedules_automatic_follow_ups() -> None:
    auto = _create(ALICE, applied_date="2024-01-01")
    near = _create(ALICE, applied_date="2024-01-01", deadline="2024-01-12")
    manual = _create(ALICE, applied_date="2024-01-01", follow_up_reminder="2024-01-20")
    other = _create(BOB, applied_date="2024-01-01")

    client.put("/api/user/preferences", json={"default_follow_up_days": 14}, headers=ALICE)

    def remind_at(app_id: str, headers: dict[str, str]) -> str:
        return client.get(f"/api/jobs/{app_id}", headers=headers).json()["reminders"][0]["remind_at"]

    assert remind_at(auto["id"], ALICE) == "2024-01-15"
    assert remind_at(near["id"], ALICE) == "2024-01-11"
    assert remind_at(manual["id"], ALICE) == "2024-01-20"
    assert remind_at(other["id"], BOB) == "2024-01-08"


def test_follow_up_preview() -> None:
    response = client.post(
        "/api/reminders/preview",
        json={"applied_date": "2024-01-01", "deadline": "2024-01-08"},
        headers=ALICE,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["follow_up_reminder"] == "2024-01-07"
    assert body["days_until_deadline"] == 7
    assert body["default_follow_up_days"] == 7
    assert body["reason"].startswith("Auto-set to day before deadline")

    today = date.today()
    defaulted = client.post("/api/reminders/preview", json={}, headers=ALICE).json()
    assert defaulted["applied_date"] == today.isoformat()
    assert defaulted["follow_up_reminder"] == (today + timedelta(days=7)).isoformat()


def test_contact_email_and_job_url_types() -> None:
    bad_url = client.post(
        "/api/jobs", json={"company": "Acme", "position": "Dev", "job_url": "not a url"}, headers=ALICE
    )
    assert bad_url.status_code == 422

    body = _create(ALICE, job_url="https://jobs.example.com/123", contact_email="hr@example.com")
    assert body["job_url"] == "https://jobs.example.com/123"
    assert body["contact_email"] == "hr@example.com"

    updated = client.put(
        f"/api/jobs/{body['id']}", json={"contact_email": "nobody@"}, headers=ALICE
    )
    assert updated.status_code == 422


def test_read_application_supplies_scheduler_dates() -> None:
    body = _create(ALICE, applied_date="2024-01-01", deadline="2024-03-01")
    application_id = UUID(body["id"])
    assert application_store.read_application(application_id) == (date(2024, 1, 1), date(2024, 3, 1))

    client.put(f"/api/jobs/{body['id']}", json={"deadline": "2024-01-06"}, headers=ALICE)
    assert application_store.read_application(application_id) == (date(2024, 1, 1), date(2024, 1, 6))

    with pytest.raises(KeyError):
        application_store.read_application(UUID("00000000-0000-0000-0000-000000000000"))
