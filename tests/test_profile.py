def test_profile_absent_until_saved(client, auth_headers):
    response = client.get("/profile/me", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["data"] is None


def test_profile_upsert_creates_then_replaces(client, auth_headers):
    first = client.put(
        "/profile",
        headers=auth_headers,
        json={
            "full_name": "Asha Rao",
            "phone": "+91 98765 43210",
            "date_of_birth": "1990-05-17",
            "health_goals": "Diabetes management, Weight loss",
            "dietary_preferences": "Vegetarian",
        },
    )
    assert first.status_code == 201
    created = first.json()["data"]
    assert created["health_goals"] == ["Diabetes management", "Weight loss"]

    second = client.put(
        "/profile",
        headers=auth_headers,
        json={"full_name": "Asha R", "medical_conditions": "Asthma"},
    )
    assert second.status_code == 200
    updated = second.json()["data"]
    assert updated["id"] == created["id"]
    assert updated["full_name"] == "Asha R"
    assert updated["health_goals"] is None
    assert updated["medical_conditions"] == ["Asthma"]

    fetched = client.get("/profile/me", headers=auth_headers).json()["data"]
    assert fetched["medical_conditions"] == ["Asthma"]


def test_profile_validation_blocks_write(client, auth_headers):
    goals = ", ".join(f"goal {index}" for index in range(12))
    response = client.put("/profile", headers=auth_headers, json={"health_goals": goals})

    assert response.status_code == 400
    assert "maximum 10 items" in response.json()["message"]
    assert client.get("/profile/me", headers=auth_headers).json()["data"] is None


def test_profiles_are_isolated_per_user(client, login):
    asha = login()
    ravi = login(email="ravi@example.com", full_name="Ravi Kumar")
    client.put("/profile", headers=asha, json={"full_name": "Asha Rao"})

    assert client.get("/profile/me", headers=ravi).json()["data"] is None


def test_profile_requires_authentication(client):
    response = client.get("/profile/me")
    assert response.status_code in (401, 403)
    assert response.json()["status"] == "error"
    assert response.json()["message"] == "Not authenticated"
