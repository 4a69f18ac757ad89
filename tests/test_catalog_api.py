"""Integration tests for customers, pricelist, portfolio and AI designs."""

from unittest.mock import patch

from tattoo_workshop.core.gemini_client import GeminiError
from tattoo_workshop.repositories.setting_repo import SettingRepository


class TestCustomers:
    def test_crud(self, client, staff_headers):
        created = client.post(
            "/api/customers",
            headers=staff_headers,
            json={"name": "Bob Smith", "email": "Bob@Example.com", "phone": "555-0102"},
        )
        assert created.status_code == 201
        customer = created.json()
        assert customer["email"] == "bob@example.com"

        url = f"/api/customers/{customer['id']}"
        updated = client.put(url, headers=staff_headers, json={"notes": "Interested in sleeve"})
        assert updated.json()["notes"] == "Interested in sleeve"
        assert updated.json()["name"] == "Bob Smith"

        assert [c["id"] for c in client.get("/api/customers", headers=staff_headers).json()] == [
            customer["id"]
        ]

        assert client.delete(url, headers=staff_headers).status_code == 200
        assert client.get(url, headers=staff_headers).status_code == 404

    def test_duplicate_email(self, client, staff_headers):
        payload = {"name": "Carol Martinez", "email": "carol@example.com"}
        client.post("/api/customers", headers=staff_headers, json=payload)

        response = client.post("/api/customers", headers=staff_headers, json=payload)

        assert response.status_code == 400

    def test_invalid_email(self, client, staff_headers):
        response = client.post(
            "/api/customers", headers=staff_headers, json={"name": "X", "email": "not-an-email"}
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Validation failed"


class TestPricelist:
    def test_sorted_by_category_then_name(self, client, staff_headers):
        for name, category, price in [
            ("Touch-up (after 1 year)", "Touch-ups", 50),
            ("Full Sleeve", "Large Tattoos", 2000),
            ("Touch-up (within 1 year)", "Touch-ups", 0),
        ]:
            response = client.post(
                "/api/pricelist",
                headers=staff_headers,
                json={"service_name": name, "category": category, "price": price},
            )
            assert response.status_code == 201

        names = [i["service_name"] for i in client.get("/api/pricelist", headers=staff_headers).json()]
        assert names == ["Full Sleeve", "Touch-up (after 1 year)", "Touch-up (within 1 year)"]

    def test_negative_price_rejected(self, client, staff_headers):
        response = client.post(
            "/api/pricelist", headers=staff_headers, json={"service_name": "Bad", "price": -1}
        )

        assert response.status_code == 400

    def test_update_and_delete(self, client, staff_headers):
        item = client.post(
            "/api/pricelist",
            headers=staff_headers,
            json={"service_name": "Custom Design Session", "price": 100, "duration": 60},
        ).json()
        url = f"/api/pricelist/{item['id']}"

        assert client.put(url, headers=staff_headers, json={"price": 120}).json()["price"] == 120
        assert client.delete(url, headers=staff_headers).status_code == 200
        assert client.get(url, headers=staff_headers).status_code == 404


class TestPortfolio:
    def test_tags_accept_string_or_list(self, client, staff_headers):
        from_string = client.post(
            "/api/portfolio",
            headers=staff_headers,
            json={
                "title": "Geometric Mandala",
                "image_url": "https://example.com/mandala.jpg",
                "tags": "geometric, mandala ,blackwork",
            },
        )
        assert from_string.status_code == 201
        assert from_string.json()["tags"] == ["geometric", "mandala", "blackwork"]

        url = f"/api/portfolio/{from_string.json()['id']}"
        updated = client.put(url, headers=staff_headers, json={"tags": ["rose", "color"]})
        assert updated.json()["tags"] == ["rose", "color"]

    def test_missing_item(self, client, staff_headers):
        assert client.get("/api/portfolio/42", headers=staff_headers).status_code == 404


class TestGenerateTattoo:
    def test_uses_supplied_key_and_persists(self, client, staff_headers):
        with patch(
            "tattoo_workshop.services.catalog_service.generate_text",
            return_value="Neo-traditional fox on the forearm.",
        ) as mock_generate:
            response = client.post(
                "/api/generate-tattoo",
                headers=staff_headers,
                json={"prompt": "a fox in the forest", "apiKey": "key-123"},
            )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["description"] == "Neo-traditional fox on the forearm."

        api_key, prompt = mock_generate.call_args.args
        assert api_key == "key-123"
        assert prompt.startswith("As a professional tattoo artist")
        assert '"a fox in the forest"' in prompt

        stored = client.get(f"/api/generated-tattoos/{body['id']}", headers=staff_headers).json()
        assert stored["prompt"] == "a fox in the forest"
        assert [d["id"] for d in client.get("/api/generated-tattoos", headers=staff_headers).json()] == [
            body["id"]
        ]

    def test_falls_back_to_stored_key(self, client, session, staff_headers):
        SettingRepository().upsert(session, "gemini_api_key", "stored-key")

        with patch(
            "tattoo_workshop.services.catalog_service.generate_text", return_value="A design"
        ) as mock_generate:
            response = client.post(
                "/api/generate-tattoo", headers=staff_headers, json={"prompt": "koi fish"}
            )

        assert response.status_code == 200
        assert mock_generate.call_args.args[0] == "stored-key"

    def test_missing_key_makes_no_call(self, client, staff_headers):
        with patch("tattoo_workshop.services.catalog_service.generate_text") as mock_generate:
            response = client.post(
                "/api/generate-tattoo", headers=staff_headers, json={"prompt": "koi fish"}
            )

        assert response.status_code == 400
        assert response.json()["detail"] == "Gemini API key not configured"
        mock_generate.assert_not_called()

    def test_upstream_error_is_bad_gateway(self, client, staff_headers):
        with patch(
            "tattoo_workshop.services.catalog_service.generate_text",
            side_effect=GeminiError("API key not valid"),
        ):
            response = client.post(
                "/api/generate-tattoo",
                headers=staff_headers,
                json={"prompt": "koi fish", "apiKey": "bad"},
            )

        assert response.status_code == 502
        assert response.json()["detail"] == "API key not valid"
        assert client.get("/api/generated-tattoos", headers=staff_headers).json() == []
