def test_verify_requires_query(client):
    for path in ("/api/verify", "/api/verify?q=%20"):
        response = client.get(path)
        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Query parameter required"}


def test_verify_matches_license_dog_and_owner(client, user, make_dog):
    dog = make_dog(user, dog_name="Biscuit", license_id="12345678")
    make_dog(user, dog_name="Unpaid", license_id="12349999", payment_status="pending", paid_at=None)

    by_license = client.get("/api/verify", params={"q": "2345"}).json()
    by_dog = client.get("/api/verify", params={"q": "bisc"}).json()
    by_owner = client.get("/api/verify", params={"q": "OLIVE"}).json()

    assert by_license["count"] == 1
    assert by_license["results"][0]["license_id"] == "12345678"
    assert by_dog["results"][0]["id"] == dog.id
    assert by_owner["results"][0]["first_name"] == "Olive"
    assert "email" not in by_owner["results"][0]


def test_verify_no_match(client):
    body = client.get("/api/verify", params={"q": "nothing"}).json()
    assert body == {"success": True, "results": [], "count": 0}


def test_gallery_lists_paid_dogs_with_photos(client, user, make_dog):
    make_dog(user, dog_name="Pictured", photo_url="1-1-aa.png")
    make_dog(user, dog_name="Camera Shy")
    make_dog(user, dog_name="Unpaid", photo_url="1-2-bb.png", payment_status="pending", paid_at=None)

    body = client.get("/api/gallery").json()

    assert body["total"] == 1
    assert body["limit"] == 50
    assert body["offset"] == 0
    assert [d["dog_name"] for d in body["dogs"]] == ["Pictured"]
    assert body["dogs"][0]["photo_url"] == "1-1-aa.png"


def test_gallery_paging_is_clamped(client, user, make_dog):
    for i in range(3):
        make_dog(user, dog_name=f"Dog {i}", photo_url=f"{i}.png")

    body = client.get("/api/gallery", params={"limit": 500, "offset": -4}).json()
    assert body["limit"] == 100
    assert body["offset"] == 0
    assert len(body["dogs"]) == 3

    page = client.get("/api/gallery", params={"limit": 2, "offset": 2}).json()
    assert len(page["dogs"]) == 1
    assert page["total"] == 3
