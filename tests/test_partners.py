import json

from arogyamix.database import SessionLocal
from arogyamix.models.partner import Partner


def test_partner_application_is_stored(client):
    response = client.post(
        "/partners",
        json={
            "email": "priya@nutrition.in",
            "full_name": "Priya Sharma",
            "phone": "9876543210",
            "partner_type": "nutritionist",
            "business_name": "Nourish Clinic",
            "experience_years": 8,
            "specializations": ["Diabetes diets"],
        },
    )

    assert response.status_code == 201
    payload = response.json()["data"]
    assert payload["partner_type"] == "nutritionist"
    assert payload["business_name"] == "Nourish Clinic"


def test_partner_application_validation(client):
    response = client.post(
        "/partners",
        json={"email": "not-an-email", "full_name": "Priya", "phone": "9876543210", "partner_type": "retailer"},
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Please enter a valid email address"


def test_farmer_application_packs_farm_details(client):
    response = client.post(
        "/partners/farmers",
        json={
            "email": "ravi.kumar@gmail.com",
            "full_name": "Ravi Kumar",
            "phone": "9876543210",
            "farm_name": "Green Acres",
            "farm_address": "Village Road, Guntur",
            "farm_size": 3,
            "farm_size_unit": "hectares",
            "experience_years": 10,
            "crop_types": ["Millet"],
            "farming_methods": ["Organic Farming", "Crop Rotation"],
            "current_markets": ["Guntur mandi"],
        },
    )

    assert response.status_code == 201
    partner_id = response.json()["data"]["id"]

    session = SessionLocal()
    try:
        partner = session.get(Partner, partner_id)
        assert partner.partner_type == "farmer"
        assert partner.specializations == ["Millet"]
        assert partner.current_suppliers == ["Guntur mandi"]
        details = json.loads(partner.additional_info)
        assert details["farm_size_unit"] == "hectares"
        assert details["farming_methods"] == ["Organic Farming", "Crop Rotation"]
    finally:
        session.close()


def test_farmer_application_requires_crops(client):
    response = client.post(
        "/partners/farmers",
        json={
            "email": "ravi.kumar@gmail.com",
            "full_name": "Ravi Kumar",
            "phone": "9876543210",
            "farm_name": "Green Acres",
            "farm_address": "Village Road, Guntur",
            "farm_size": 3,
            "farm_size_unit": "acres",
            "experience_years": 10,
            "crop_types": [],
            "farming_methods": ["Organic Farming"],
        },
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Please select at least one crop type"


def test_form_options(client):
    payload = client.get("/partners/options").json()["data"]
    assert "Millet" in payload["crop_types"]
    assert len(payload["farming_methods"]) == 9
