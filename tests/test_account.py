from app.core.passwords import verify_password
from app.models.address import SavedAddress

HOME = {
    "label": "Home",
    "name": "Olive Owner",
    "address": "1 Bark St",
    "city": "Sacramento",
    "state": "CA",
    "zip": "95814",
}


def test_profile_lists_paid_dogs_only(user_client, user, make_dog):
    make_dog(user, dog_name="Biscuit")
    make_dog(user, dog_name="Pending Pup", payment_status="pending", paid_at=None)

    body = user_client.get("/api/account/profile").json()

    assert body["success"] is True
    assert body["user"]["first_name"] == "Olive"
    assert [d["dog_name"] for d in body["dogs"]] == ["Biscuit"]
    assert [o["dog_name"] for o in body["orders"]] == ["Biscuit"]
    assert body["saved_addresses"] == []
    assert "password_hash" not in body["user"]


def test_update_profile(user_client, session, user):
    response = user_client.put(
        "/api/account/update",
        json={
            "first_name": "Olivia",
            "last_name": "Owner",
            "address": "2 Woof Ave",
            "city": "Fresno",
            "state": "CA",
            "zip": "93701",
        },
    )

    assert response.status_code == 200
    session.refresh(user)
    assert user.first_name == "Olivia"
    assert user.city == "Fresno"


def test_update_profile_keeps_first_name_when_blank(user_client, session, user):
    user_client.put("/api/account/update", json={"first_name": "  ", "city": "Reno"})

    session.refresh(user)
    assert user.first_name == "Olive"
    assert user.city == "Reno"


def test_update_billing(user_client, session, user):
    response = user_client.put(
        "/api/account/update-billing",
        json={"billing_name": "O. Owner", "billing_zip": "10001"},
    )

    assert response.status_code == 200
    session.refresh(user)
    assert user.billing_name == "O. Owner"
    assert user.billing_zip == "10001"


def test_update_dog_details(user_client, session, user, make_dog):
    dog = make_dog(user)

    response = user_client.put(
        "/api/account/update-dog",
        json={"dog_id": dog.id, "breed": "Beagle", "weight": "22 lbs"},
    )

    assert response.status_code == 200
    session.refresh(dog)
    assert dog.breed == "Beagle"
    assert dog.weight == "22 lbs"


def test_update_dog_requires_ownership(user_client, make_user, make_dog):
    stranger = make_user(email="stranger@mail.com")
    dog = make_dog(stranger)

    response = user_client.put(
        "/api/account/update-dog", json={"dog_id": dog.id, "breed": "Poodle"}
    )
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Dog not found"}


def test_update_dog_requires_id(user_client):
    response = user_client.put("/api/account/update-dog", json={"breed": "Poodle"})
    assert response.status_code == 400
    assert response.json()["error"] == "Missing dog_id"


# -------- Saved addresses --------


def test_saved_address_lifecycle(user_client, session):
    created = user_client.post("/api/account/saved-address", json=HOME)
    assert created.status_code == 200
    address_id = created.json()["id"]

    listed = user_client.get("/api/account/saved-addresses").json()
    assert [a["label"] for a in listed["addresses"]] == ["Home"]

    updated = user_client.put(
        "/api/account/saved-address", json={"id": address_id, "city": "Davis"}
    )
    assert updated.status_code == 200
    address = session.get(SavedAddress, address_id)
    assert address.city == "Davis"
    assert address.address == "1 Bark St"

    deleted = user_client.request(
        "DELETE", "/api/account/saved-address", json={"id": address_id}
    )
    assert deleted.status_code == 200
    assert user_client.get("/api/account/saved-addresses").json()["addresses"] == []


def test_saved_address_requires_all_fields(user_client):
    response = user_client.post(
        "/api/account/saved-address", json={**HOME, "zip": ""}
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Missing required fields"


def test_cannot_touch_someone_elses_address(user_client, session, make_user):
    stranger = make_user(email="stranger@mail.com")
    address = SavedAddress(user_id=stranger.id, **HOME)
    session.add(address)
    session.commit()

    update = user_client.put(
        "/api/account/saved-address", json={"id": address.id, "city": "Elsewhere"}
    )
    delete = user_client.request(
        "DELETE", "/api/account/saved-address", json={"id": address.id}
    )

    assert update.status_code == 404
    assert delete.status_code == 404
    assert update.json()["error"] == "Address not found"


# -------- Change password --------


def test_change_password_keeps_current_session_only(client, session, user, login):
    other_token = login(client, "owner@mail.com", "correct-horse").json()["token"]
    login(client, "owner@mail.com", "correct-horse")

    response = client.put(
        "/api/account/change-password",
        json={"current_password": "correct-horse", "new_password": "even-better-pass"},
    )

    assert response.status_code == 200
    session.refresh(user)
    assert verify_password("even-better-pass", user.password_hash)
    assert client.get("/api/account/profile").status_code == 200

    client.cookies.clear()
    stale = client.get(
        "/api/account/profile", headers={"Authorization": f"Bearer {other_token}"}
    )
    assert stale.status_code == 401


def test_change_password_wrong_current(user_client):
    response = user_client.put(
        "/api/account/change-password",
        json={"current_password": "nope-nope", "new_password": "even-better-pass"},
    )
    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Current password is incorrect"}


def test_change_password_missing_fields(user_client):
    response = user_client.put(
        "/api/account/change-password", json={"current_password": "correct-horse"}
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Missing required fields"


def test_change_password_rejects_unencodable_password(user_client, session, user):
    response = user_client.put(
        "/api/account/change-password",
        content='{"current_password": "correct-horse", "new_password": "\\ud800abcdefgh"}',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Password contains invalid characters"
    session.refresh(user)
    assert verify_password("correct-horse", user.password_hash)
