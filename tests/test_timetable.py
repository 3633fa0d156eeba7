from datetime import datetime

import pytest
from sqlalchemy.exc import IntegrityError

from lab_portal.api import admin as admin_api
from lab_portal.api.admin import current_weekday
from lab_portal.models import Lab, Timetable
from lab_portal.services.timetables import count_booked_slots

SCHEDULE = [
    {
        "day": "Wednesday",
        "timeSlots": [
            {"hour": "9:00 - 9:50", "subject": "Optics", "faculty": "Dr. Rao", "class": "II B.Sc"},
        ],
    },
    {
        "day": "Monday",
        "timeSlots": [
            {"hour": "9:00 - 9:50", "subject": "Mechanics", "faculty": "Dr. Iyer", "class": "I B.Sc",
             "isAvailable": False},
            {"hour": "2:10 - 3:00", "subject": "Waves"},
        ],
    },
]


@pytest.fixture
def lab(create_lab):
    return create_lab()


def test_scenario_create_conflict_and_placeholder(client, admin_headers, lab, create_lab):
    body = {"labId": lab["id"], "labName": "Physics Lab A", "schedule": []}
    r = client.post("/api/timetable", json=body, headers=admin_headers)
    assert r.status_code == 201
    assert r.json()["labId"] == lab["id"]
    assert r.json()["schedule"] == []

    again = client.post("/api/timetable", json=body, headers=admin_headers)
    assert again.status_code == 409
    assert again.json() == {"message": "Timetable already exists for this lab. Use PUT to update."}

    other = create_lab(labName="Electronics Lab")
    r = client.get(f"/api/timetable/lab/{other['id']}", headers=admin_headers)
    assert r.status_code == 200
    assert r.json() == {"labId": other["id"], "schedule": []}


def test_placeholder_for_unknown_lab_id(client, user_headers):
    r = client.get("/api/timetable/lab/424242", headers=user_headers)
    assert r.status_code == 200
    assert r.json() == {"labId": 424242, "schedule": []}


def test_schedule_is_stored_verbatim_in_weekday_order(client, admin_headers, user_headers, lab):
    r = client.post(
        "/api/timetable",
        json={"labId": lab["id"], "labName": lab["labName"], "schedule": SCHEDULE},
        headers=admin_headers,
    )
    assert r.status_code == 201

    timetable = client.get(f"/api/timetable/lab/{lab['id']}", headers=user_headers).json()
    assert [day["day"] for day in timetable["schedule"]] == ["Monday", "Wednesday"]
    monday = timetable["schedule"][0]["timeSlots"]
    assert monday[0] == {
        "hour": "9:00 - 9:50",
        "subject": "Mechanics",
        "faculty": "Dr. Iyer",
        "class": "I B.Sc",
        "isAvailable": False,
    }
    assert monday[1]["class"] == ""
    assert monday[1]["isAvailable"] is True
    assert timetable["lab"]["id"] == lab["id"]


@pytest.mark.parametrize("schedule", [
    [{"day": "Saturday", "timeSlots": []}],
    [{"day": "Monday", "timeSlots": []}, {"day": "Monday", "timeSlots": []}],
    [{"day": "Monday", "timeSlots": [{"hour": " "}]}],
    "Monday",
])
def test_create_rejects_bad_schedule(client, admin_headers, lab, schedule):
    r = client.post(
        "/api/timetable",
        json={"labId": lab["id"], "labName": lab["labName"], "schedule": schedule},
        headers=admin_headers,
    )
    assert r.status_code == 400


def test_create_requires_fields_and_existing_lab(client, admin_headers, lab):
    r = client.post("/api/timetable", json={"labId": lab["id"], "schedule": []}, headers=admin_headers)
    assert r.status_code == 400
    assert "labName" in r.json()["message"]

    r = client.post("/api/timetable", json={"labId": 9999, "labName": "Ghost", "schedule": []}, headers=admin_headers)
    assert r.status_code == 404
    assert r.json() == {"message": "Lab not found."}


def test_update_merges(client, admin_headers, lab):
    created = client.post(
        "/api/timetable",
        json={"labId": lab["id"], "labName": lab["labName"], "schedule": SCHEDULE},
        headers=admin_headers,
    ).json()

    r = client.put(f"/api/timetable/{created['id']}", json={"labName": "Physics Lab A (Main)"}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["labName"] == "Physics Lab A (Main)"
    assert len(r.json()["schedule"]) == 2

    friday = [{"day": "Friday", "timeSlots": [{"hour": "3:15 - 4:05", "subject": "Project"}]}]
    r = client.put(f"/api/timetable/{created['id']}", json={"schedule": friday}, headers=admin_headers)
    assert [day["day"] for day in r.json()["schedule"]] == ["Friday"]
    assert r.json()["labName"] == "Physics Lab A (Main)"

    assert client.put("/api/timetable/9999", json={"labName": "X"}, headers=admin_headers).status_code == 404


def test_update_cannot_move_onto_lab_with_timetable(client, admin_headers, lab, create_lab):
    other = create_lab(labName="Electronics Lab")
    first = client.post(
        "/api/timetable", json={"labId": lab["id"], "labName": lab["labName"], "schedule": []}, headers=admin_headers
    ).json()
    client.post(
        "/api/timetable", json={"labId": other["id"], "labName": other["labName"], "schedule": []}, headers=admin_headers
    )
    r = client.put(f"/api/timetable/{first['id']}", json={"labId": other["id"]}, headers=admin_headers)
    assert r.status_code == 409


def test_delete(client, admin_headers, lab):
    created = client.post(
        "/api/timetable", json={"labId": lab["id"], "labName": lab["labName"], "schedule": []}, headers=admin_headers
    ).json()

    assert client.delete(f"/api/timetable/{created['id']}", headers=admin_headers).status_code == 200
    assert client.get(f"/api/timetable/lab/{lab['id']}", headers=admin_headers).json() == {
        "labId": lab["id"], "schedule": []
    }
    assert client.get(f"/api/labs/{lab['id']}", headers=admin_headers).status_code == 200
    r = client.delete(f"/api/timetable/{created['id']}", headers=admin_headers)
    assert r.status_code == 404
    assert r.json() == {"message": "Timetable not found."}


def test_list_embeds_lab(client, admin_headers, user_headers, lab, create_lab):
    other = create_lab(labName="Electronics Lab")
    for target in (lab, other):
        client.post(
            "/api/timetable",
            json={"labId": target["id"], "labName": target["labName"], "schedule": []},
            headers=admin_headers,
        )
    timetables = client.get("/api/timetable", headers=user_headers).json()
    assert [t["labId"] for t in timetables] == [other["id"], lab["id"]]
    assert timetables[0]["lab"]["labName"] == "Electronics Lab"


def test_slot_table(client, user_headers):
    r = client.get("/api/timetable/slots", headers=user_headers)
    assert r.status_code == 200
    body = r.json()
    assert body["days"] == ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]
    assert len(body["timeSlots"]) == 7
    assert body["timeSlots"][0] == {"period": 1, "time": "9:00 - 9:50"}


def test_one_timetable_per_lab_enforced_by_database(db):
    lab = Lab(
        lab_name="L", department="D", location="X", capacity=1, equipments="e",
        available_system=0, working_system=0, incharge="i", technician="t",
        software="s", specifications="p", lab_type="A",
    )
    db.add(lab)
    db.commit()
    db.add(Timetable(lab_id=lab.id, lab_name="L", schedule=[]))
    db.commit()
    db.add(Timetable(lab_id=lab.id, lab_name="L", schedule=[]))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_dashboard_and_booked_slots(client, admin_headers, user_headers, lab, db, monkeypatch):
    client.post(
        "/api/timetable",
        json={"labId": lab["id"], "labName": lab["labName"], "schedule": SCHEDULE},
        headers=admin_headers,
    )
    assert count_booked_slots(db, "Monday") == 1
    assert count_booked_slots(db, "Wednesday") == 0

    # 2024-01-01 was a Monday, 2024-01-06 a Saturday.
    monkeypatch.setattr(admin_api, "current_weekday", lambda: current_weekday(datetime(2024, 1, 1, 10, 0)))
    stats = client.get("/api/admin/dashboard", headers=admin_headers).json()
    assert stats == {"totalUsers": 1, "totalLabs": 1, "totalTimetables": 1, "todayBookings": 1}

    monkeypatch.setattr(admin_api, "current_weekday", lambda: current_weekday(datetime(2024, 1, 6, 10, 0)))
    stats = client.get("/api/admin/dashboard", headers=admin_headers).json()
    assert stats["todayBookings"] == 0


@pytest.mark.parametrize("now,expected", [
    (datetime(2024, 1, 1), "Monday"),
    (datetime(2024, 1, 5, 23, 59), "Friday"),
    (datetime(2024, 1, 6), None),
    (datetime(2024, 1, 7), None),
])
def test_current_weekday(now, expected):
    assert current_weekday(now) == expected
