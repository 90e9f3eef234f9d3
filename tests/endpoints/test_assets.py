from tests.helpers.asserts import api_call, assert_error, create_asset


class TestAssetEndpoints:
    def test_create_asset_defaults(self, client, auth_headers):
        asset = create_asset(client, auth_headers, name="Toyota", symbol="7203", currency="jpy")
        assert asset["id"]
        assert asset["currentPrice"] == 100
        assert asset["currency"] == "JPY"
        assert asset["category"]["id"] == "stocks"
        assert asset["currentValue"] == 1000
        assert asset["acquisitionValue"] == 1000
        assert asset["gainLoss"] == 0
        assert asset["gainLossPercent"] == 0
        assert asset["acquisitionDate"].startswith("2024-01-15")

    def test_create_asset_converts_offset_date_to_utc(self, client, auth_headers):
        asset = create_asset(client, auth_headers, acquisitionDate="2024-01-01T00:00:00+09:00")
        assert asset["acquisitionDate"].startswith("2023-12-31T15:00:00")

        fetched = api_call(client, "GET", f"/api/assets/{asset['id']}", headers=auth_headers).json()["data"]
        assert fetched["acquisitionDate"].startswith("2023-12-31T15:00:00")

    def test_update_asset_converts_offset_date_to_utc(self, client, auth_headers):
        asset = create_asset(client, auth_headers)
        updated = api_call(client, "PUT", f"/api/assets/{asset['id']}", headers=auth_headers, json={
            "acquisitionDate": "2024-03-01T12:00:00-05:00"
        }).json()["data"]
        assert updated["acquisitionDate"].startswith("2024-03-01T17:00:00")

    def test_create_asset_default_currency(self, client, auth_headers):
        asset = create_asset(client, auth_headers)
        assert asset["currency"] == "JPY"

    def test_create_asset_with_current_price(self, client, auth_headers):
        asset = create_asset(client, auth_headers, quantity=2, acquisitionPrice=50, currentPrice=75)
        assert asset["currentValue"] == 150
        assert asset["gainLoss"] == 50
        assert asset["gainLossPercent"] == 50

    def test_create_asset_unknown_category(self, client, auth_headers):
        response = client.post("/api/assets", headers=auth_headers, json={
            "categoryId": "does-not-exist",
            "name": "Ghost",
            "quantity": 1,
            "acquisitionPrice": 1,
            "acquisitionDate": "2024-01-01",
        })
        body = assert_error(response, 404, "NOT_FOUND")
        assert body["error"]["message"] == "Category not found"

    def test_create_asset_validation(self, client, auth_headers):
        base = {"categoryId": "stocks", "name": "X", "quantity": 1, "acquisitionPrice": 1, "acquisitionDate": "2024-01-01"}
        for override in [
            {"quantity": 0},
            {"acquisitionPrice": -1},
            {"currentPrice": -5},
            {"name": ""},
            {"name": "n" * 201},
            {"symbol": "s" * 21},
            {"currency": "YEN!"},
            {"notes": "n" * 1001},
            {"acquisitionDate": "not-a-date"},
        ]:
            response = client.post("/api/assets", headers=auth_headers, json={**base, **override})
            assert_error(response, 400, "VALIDATION_ERROR")

    def test_create_asset_requires_auth(self, client):
        response = client.post("/api/assets", json={})
        assert_error(response, 401, "AUTHENTICATION_ERROR")

    def test_get_asset_detail(self, client, auth_headers):
        asset = create_asset(client, auth_headers)
        api_call(client, "PATCH", f"/api/assets/{asset['id']}/price", headers=auth_headers, json={"currentPrice": 120})

        response = api_call(client, "GET", f"/api/assets/{asset['id']}", headers=auth_headers)
        data = response.json()["data"]
        assert data["currentPrice"] == 120
        assert data["category"]["name"] == "Stocks"
        assert len(data["priceHistory"]) == 1
        assert data["priceHistory"][0]["price"] == 120
        assert data["priceHistory"][0]["source"] == "manual"

    def test_asset_detail_keeps_latest_ten_prices(self, client, auth_headers):
        asset = create_asset(client, auth_headers)
        for price in range(1, 13):
            api_call(client, "PATCH", f"/api/assets/{asset['id']}/price", headers=auth_headers, json={"currentPrice": price})

        data = api_call(client, "GET", f"/api/assets/{asset['id']}", headers=auth_headers).json()["data"]
        assert len(data["priceHistory"]) == 10
        assert data["priceHistory"][0]["price"] == 12

        history = api_call(client, "GET", f"/api/assets/{asset['id']}/price-history", headers=auth_headers).json()["data"]
        assert len(history) == 12

    def test_update_price_rejects_negative(self, client, auth_headers):
        asset = create_asset(client, auth_headers)
        response = client.patch(f"/api/assets/{asset['id']}/price", headers=auth_headers, json={"currentPrice": -1})
        assert_error(response, 400, "VALIDATION_ERROR")

    def test_update_asset(self, client, auth_headers):
        asset = create_asset(client, auth_headers)
        response = api_call(client, "PUT", f"/api/assets/{asset['id']}", headers=auth_headers, json={
            "name": "Renamed",
            "categoryId": "crypto",
            "currentPrice": 150,
        })
        data = response.json()["data"]
        assert data["name"] == "Renamed"
        assert data["categoryId"] == "crypto"
        assert data["category"]["id"] == "crypto"
        assert data["gainLoss"] == 500

    def test_update_asset_unknown_category(self, client, auth_headers):
        asset = create_asset(client, auth_headers)
        response = client.put(f"/api/assets/{asset['id']}", headers=auth_headers, json={"categoryId": "nope"})
        assert_error(response, 404, "NOT_FOUND")

    def test_delete_asset(self, client, auth_headers):
        asset = create_asset(client, auth_headers)
        api_call(client, "DELETE", f"/api/assets/{asset['id']}", headers=auth_headers)
        response = client.get(f"/api/assets/{asset['id']}", headers=auth_headers)
        assert_error(response, 404, "NOT_FOUND")

    def test_other_users_asset_is_not_visible(self, client, auth_headers, user_factory):
        asset = create_asset(client, auth_headers)
        other = user_factory()
        other_headers = {"Authorization": f"Bearer {other['token']}"}

        assert_error(client.get(f"/api/assets/{asset['id']}", headers=other_headers), 404, "NOT_FOUND")
        assert_error(client.put(f"/api/assets/{asset['id']}", headers=other_headers, json={"name": "Hijack"}), 404, "NOT_FOUND")
        assert_error(client.delete(f"/api/assets/{asset['id']}", headers=other_headers), 404, "NOT_FOUND")
        assert_error(client.patch(f"/api/assets/{asset['id']}/price", headers=other_headers, json={"currentPrice": 1}), 404, "NOT_FOUND")

        response = api_call(client, "GET", f"/api/assets/{asset['id']}", headers=auth_headers)
        assert response.json()["data"]["name"] == "Test Asset"

    def test_list_assets_pagination(self, client, auth_headers):
        for i in range(5):
            create_asset(client, auth_headers, name=f"Asset {i}")

        response = api_call(client, "GET", "/api/assets", headers=auth_headers, params={"page": 2, "limit": 2})
        data = response.json()["data"]
        assert data["pagination"] == {"page": 2, "limit": 2, "total": 5, "pages": 3}
        assert [a["name"] for a in data["items"]] == ["Asset 2", "Asset 3"]

    def test_list_assets_sorted_by_current_value_across_pages(self, client, auth_headers):
        for name, quantity in [("A", 5), ("B", 1), ("C", 4), ("D", 2), ("E", 3)]:
            create_asset(client, auth_headers, name=name, quantity=quantity, acquisitionPrice=10)

        names = []
        for page in (1, 2, 3):
            response = api_call(client, "GET", "/api/assets", headers=auth_headers, params={
                "sort": "currentValue", "order": "desc", "page": page, "limit": 2
            })
            names.extend(a["name"] for a in response.json()["data"]["items"])
        assert names == ["A", "C", "E", "D", "B"]

    def test_list_assets_sorted_by_gain_loss(self, client, auth_headers):
        create_asset(client, auth_headers, name="Loser", acquisitionPrice=100, currentPrice=50)
        create_asset(client, auth_headers, name="Winner", acquisitionPrice=100, currentPrice=200)
        create_asset(client, auth_headers, name="Flat", acquisitionPrice=100)

        response = api_call(client, "GET", "/api/assets", headers=auth_headers, params={"sort": "gainLoss", "order": "asc"})
        assert [a["name"] for a in response.json()["data"]["items"]] == ["Loser", "Flat", "Winner"]

    def test_list_assets_filters(self, client, auth_headers):
        create_asset(client, auth_headers, name="Bitcoin", symbol="BTC", categoryId="crypto")
        create_asset(client, auth_headers, name="Apple", symbol="AAPL")
        create_asset(client, auth_headers, name="Savings", categoryId="cash")

        response = api_call(client, "GET", "/api/assets", headers=auth_headers, params={"categoryId": "crypto"})
        assert [a["name"] for a in response.json()["data"]["items"]] == ["Bitcoin"]

        response = api_call(client, "GET", "/api/assets", headers=auth_headers, params={"search": "aap"})
        assert [a["name"] for a in response.json()["data"]["items"]] == ["Apple"]

        response = api_call(client, "GET", "/api/assets", headers=auth_headers, params={"search": "SAV"})
        assert [a["name"] for a in response.json()["data"]["items"]] == ["Savings"]

    def test_list_assets_rejects_bad_query(self, client, auth_headers):
        for params in [{"page": 0}, {"limit": 101}, {"sort": "price"}, {"order": "up"}]:
            response = client.get("/api/assets", headers=auth_headers, params=params)
            assert_error(response, 400, "VALIDATION_ERROR")
