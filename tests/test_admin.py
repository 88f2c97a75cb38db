from datetime import datetime, timedelta, timezone


def test_dashboard_stats(admin_client, user, make_dog):
    now = datetime.now(timezone.utc)
    make_dog(user)
    make_dog(user, shipped_at=now, delivery_status="shipped")
    make_dog(user, paid_at=now - timedelta(days=800), expires_at=now - timedelta(days=70))
    make_dog(user, payment_status="pending", paid_at=None)

    body = admin_client.get("/api/admin/stats").json()

    assert body == {
        "success": True,
        "total_certifications": 3,
        "active_dogs": 2,
        "pending_shipments": 2,
        "recent_certifications": 2,
    }


def test_recent_dogs(admin_client, user, make_dog):
    now = datetime.now(timezone.utc)
    make_dog(user, dog_name="Older", paid_at=now - timedelta(days=3))
    make_dog(user, dog_name="Newer", paid_at=now)

    body = admin_client.get("/api/admin/recent-dogs").json()
    assert [d["dog_name"] for d in body["dogs"]] == ["Newer", "Older"]


def test_shipments_use_gift_address_for_gifts(admin_client, session, user, make_dog):
    user.address, user.city, user.state, user.zip = "1 Bark St", "Sacramento", "CA", "95814"
    session.add(user)
    session.commit()
    make_dog(user, dog_name="Own")
    make_dog(
        user,
        dog_name="Gift",
        is_gift=True,
        gift_name="Grandma",
        gift_address="3 Paw Ln",
        gift_city="Austin",
        gift_state="TX",
        gift_zip="73301",
    )

    shipments = {
        s["dog_name"]: s for s in admin_client.get("/api/admin/shipments").json()["shipments"]
    }

    assert shipments["Own"]["ship_to_name"] == "Olive Owner"
    assert shipments["Own"]["ship_to_city"] == "Sacramento"
    assert shipments["Gift"]["ship_to_name"] == "Grandma"
    assert shipments["Gift"]["ship_to_city"] == "Austin"
    assert shipments["Gift"]["email"] == "owner@mail.com"


def test_update_tracking(admin_client, session, user, make_dog):
    dog = make_dog(user)

    response = admin_client.post(
        "/api/admin/shipments",
        json={"dog_id": dog.id, "tracking_number": " 9400 1000 ", "carrier": "USPS"},
    )

    assert response.status_code == 200
    session.refresh(dog)
    assert dog.tracking_number == "9400 1000"
    assert dog.carrier == "USPS"
    assert dog.delivery_status == "shipped"
    assert dog.shipped_at is not None


def test_update_tracking_validation(admin_client):
    missing = admin_client.post("/api/admin/shipments", json={"dog_id": 1})
    unknown = admin_client.post(
        "/api/admin/shipments", json={"dog_id": 999, "tracking_number": "1Z"}
    )

    assert missing.status_code == 400
    assert missing.json()["error"] == "Missing dog_id or tracking_number"
    assert unknown.status_code == 404
    assert unknown.json()["error"] == "Dog not found"


def test_regular_user_cannot_update_tracking(user_client, user, make_dog):
    dog = make_dog(user)
    response = user_client.post(
        "/api/admin/shipments", json={"dog_id": dog.id, "tracking_number": "1Z"}
    )
    assert response.status_code == 403
