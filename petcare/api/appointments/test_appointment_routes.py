# petcare/api/appointments/test_appointment_routes.py
"""
Vet appointments: booking, per-role visibility, status review and stats.

Usage: python -m pytest petcare/api/appointments/test_appointment_routes.py -v
"""
from datetime import date

import pytest

from petcare.api.appointments.services import AppointmentService


@pytest.fixture
def book(client):
    def _book(headers, pet_id, **overrides):
        payload = {"petId": pet_id, "date": "2030-05-01", "time": "10:30", "type": "Checkup"}
        payload.update(overrides)
        return client.post("/api/appointments", json=payload, headers=headers)
    return _book


def test_book_appointment_copies_pet_and_user(client, register_user, create_pet, book):
    user, headers = register_user("alice")
    pet = create_pet(name="Buddy")

    response = book(headers, pet["id"], notes="Limping")
    assert response.status_code == 201
    appointment = response.get_json()["appointment"]
    assert appointment["status"] == "Pending"
    assert appointment["petName"] == "Buddy"
    assert appointment["petSpecies"] == "Dog"
    assert appointment["userId"] == user["id"]
    assert appointment["userEmail"] == "alice@example.com"
    assert appointment["userName"] == "alice"
    assert appointment["veterinarian"] == "Dr. Smith"
    assert appointment["date"] == "2030-05-01"


def test_book_requires_login_and_valid_fields(client, user_headers, create_pet, book):
    pet = create_pet()
    assert client.post("/api/appointments", json={"petId": pet["id"]}).status_code == 401

    bad_time = book(user_headers, pet["id"], time="25:99")
    assert bad_time.status_code == 400
    assert "time" in bad_time.get_json()["details"]

    bad_type = book(user_headers, pet["id"], type="Spa day")
    assert bad_type.status_code == 400

    missing_pet = book(user_headers, "no-such-pet")
    assert missing_pet.status_code == 404
    assert missing_pet.get_json()["error_code"] == "PET_NOT_FOUND"


def test_users_see_only_their_own_appointments(client, admin_headers, register_user, create_pet, book):
    _, alice = register_user("alice")
    _, bob = register_user("bob")
    pet = create_pet()
    later = book(alice, pet["id"], date="2030-05-02", time="09:00").get_json()["appointment"]
    earlier = book(alice, pet["id"], date="2030-05-01", time="14:00").get_json()["appointment"]
    earliest = book(alice, pet["id"], date="2030-05-01", time="08:15").get_json()["appointment"]
    bobs = book(bob, pet["id"]).get_json()["appointment"]

    mine = client.get("/api/appointments", headers=alice).get_json()
    assert [a["id"] for a in mine] == [earliest["id"], earlier["id"], later["id"]]

    assert [a["id"] for a in client.get("/api/appointments", headers=bob).get_json()] == [bobs["id"]]
    assert len(client.get("/api/appointments", headers=admin_headers).get_json()) == 4


def test_get_single_appointment_is_owner_or_admin(client, admin_headers, register_user, create_pet, book):
    _, alice = register_user("alice")
    _, bob = register_user("bob")
    appointment = book(alice, create_pet()["id"]).get_json()["appointment"]
    url = f"/api/appointments/{appointment['id']}"

    assert client.get(url, headers=alice).status_code == 200
    assert client.get(url, headers=admin_headers).status_code == 200
    assert client.get(url, headers=bob).status_code == 403
    assert client.get("/api/appointments/nope", headers=alice).status_code == 404


def test_admin_reviews_status(client, admin_user, register_user, create_pet, book):
    admin, admin_headers = admin_user
    _, alice = register_user("alice")
    appointment = book(alice, create_pet()["id"]).get_json()["appointment"]
    url = f"/api/appointments/{appointment['id']}/status"

    response = client.put(url, json={"status": "Confirmed", "adminNotes": "Bring records"}, headers=admin_headers)
    assert response.status_code == 200
    reviewed = response.get_json()["appointment"]
    assert reviewed["status"] == "Confirmed"
    assert reviewed["adminNotes"] == "Bring records"
    assert reviewed["reviewedBy"] == admin.user_id

    invalid = client.put(url, json={"status": "Maybe"}, headers=admin_headers)
    assert invalid.status_code == 400
    assert invalid.get_json()["error_code"] == "INVALID_STATUS"


def test_status_change_by_stranger_is_forbidden(client, register_user, create_pet, book):
    _, alice = register_user("alice")
    _, bob = register_user("bob")
    appointment = book(alice, create_pet()["id"]).get_json()["appointment"]
    url = f"/api/appointments/{appointment['id']}/status"

    assert client.put(url, json={"status": "Cancelled"}, headers=bob).status_code == 403
    # any status may follow any other
    assert client.put(url, json={"status": "Completed"}, headers=alice).status_code == 200
    assert client.put(url, json={"status": "Pending"}, headers=alice).status_code == 200


def test_owner_updates_details(client, register_user, create_pet, book):
    _, alice = register_user("alice")
    _, bob = register_user("bob")
    appointment = book(alice, create_pet()["id"]).get_json()["appointment"]
    url = f"/api/appointments/{appointment['id']}"

    response = client.put(url, json={"date": "2030-06-01", "time": "16:45", "type": "Grooming"}, headers=alice)
    assert response.status_code == 200
    updated = response.get_json()["appointment"]
    assert (updated["date"], updated["time"], updated["type"]) == ("2030-06-01", "16:45", "Grooming")

    assert client.put(url, json={"notes": "x"}, headers=bob).status_code == 403
    assert client.put(url, json={}, headers=alice).status_code == 400


def test_delete_is_owner_or_admin(client, admin_headers, register_user, create_pet, book):
    _, alice = register_user("alice")
    _, bob = register_user("bob")
    pet = create_pet()
    first = book(alice, pet["id"]).get_json()["appointment"]
    second = book(alice, pet["id"]).get_json()["appointment"]

    assert client.delete(f"/api/appointments/{first['id']}", headers=bob).status_code == 403
    assert client.delete(f"/api/appointments/{first['id']}", headers=alice).status_code == 200
    assert client.delete(f"/api/appointments/{second['id']}", headers=admin_headers).status_code == 200
    assert client.get("/api/appointments", headers=alice).get_json() == []


def test_stats_summary(client, admin_headers, user_headers, create_pet, book):
    pet = create_pet()
    first = book(user_headers, pet["id"]).get_json()["appointment"]
    book(user_headers, pet["id"])
    client.put(f"/api/appointments/{first['id']}/status", json={"status": "Confirmed"}, headers=admin_headers)

    assert client.get("/api/appointments/stats/summary", headers=user_headers).status_code == 403

    response = client.get("/api/appointments/stats/summary", headers=admin_headers)
    assert response.status_code == 200
    assert response.get_json() == {
        "total": 2, "pending": 1, "confirmed": 1, "completed": 0, "cancelled": 0, "rejected": 0
    }


def test_configured_veterinarian_is_the_default(db, app, register_user, create_pet):
    service = AppointmentService(default_veterinarian="Dr. Rivera", db=db)
    user, _ = register_user("alice")
    pet = create_pet()
    caller = app.services["auth"].get_user(user["id"])

    booked = service.create_appointment(caller, {
        "pet_id": pet["id"], "date": date(2030, 5, 1), "time": "09:00", "type": "Dental"
    })
    assert booked.veterinarian == "Dr. Rivera"

    chosen = service.create_appointment(caller, {
        "pet_id": pet["id"], "date": date(2030, 5, 2), "time": "09:00", "type": "Dental",
        "veterinarian": "Dr. Okafor"
    })
    assert chosen.veterinarian == "Dr. Okafor"
