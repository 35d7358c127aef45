"""Product routes: validation responses, not-found shapes and CRUD flow."""

MISSING_ID = 2000


class TestCreateProduct:
    def test_empty_body_reports_every_failed_rule(self, client):
        res = client.post("/api/products", json={})

        assert res.status_code == 400
        body = res.json()
        assert len(body["errors"]) == 4
        assert "data" not in body
        assert [e["msg"] for e in body["errors"]] == [
            "El nombre es necesario",
            "El precio es necesario",
            "El precio no es válido",
            "Precio no válido",
        ]

    def test_price_must_be_greater_than_zero(self, client):
        res = client.post("/api/products", json={"name": "Mouse - Testing", "price": 0})

        assert res.status_code == 400
        errors = res.json()["errors"]
        assert len(errors) == 1
        assert errors[0]["msg"] == "Precio no válido"
        assert errors[0]["path"] == "price"
        assert errors[0]["location"] == "body"

    def test_negative_price_is_rejected(self, client):
        res = client.post("/api/products", json={"name": "Mouse", "price": -5})

        assert res.status_code == 400
        assert [e["msg"] for e in res.json()["errors"]] == ["Precio no válido"]

    def test_non_numeric_price_fails_two_rules(self, client):
        res = client.post(
            "/api/products", json={"name": "Mouse - Testing", "price": "hola"}
        )

        assert res.status_code == 400
        body = res.json()
        assert len(body["errors"]) == 2
        assert "data" not in body

    def test_creates_product(self, client):
        res = client.post(
            "/api/products", json={"name": "Mouse - Testing", "price": 70}
        )

        assert res.status_code == 201
        body = res.json()
        assert "errors" not in body
        assert "error" not in body
        assert body["data"]["name"] == "Mouse - Testing"
        assert body["data"]["price"] == 70
        assert body["data"]["availability"] is True
        assert isinstance(body["data"]["id"], int)

    def test_trailing_slash_is_served(self, client):
        res = client.post("/api/products/", json={"name": "Teclado", "price": "322"})

        assert res.status_code == 201
        assert res.json()["data"]["price"] == 322

    def test_malformed_json_is_rejected(self, client):
        res = client.post(
            "/api/products",
            content="{not json",
            headers={"content-type": "application/json"},
        )

        assert res.status_code == 400
        assert res.json()["errors"][0]["msg"] == "JSON no válido"

    def test_non_json_content_type_reads_as_empty_body(self, client):
        res = client.post(
            "/api/products",
            content='{"name": "Mouse", "price": 70}',
            headers={"content-type": "text/plain"},
        )

        assert res.status_code == 400
        assert len(res.json()["errors"]) == 4

    def test_json_content_type_with_charset(self, client):
        res = client.post(
            "/api/products",
            content='{"name": "Mouse", "price": 70}',
            headers={"content-type": "application/json; charset=utf-8"},
        )

        assert res.status_code == 201

    def test_digit_separator_price_fails_two_rules(self, client):
        res = client.post("/api/products", json={"name": "x", "price": "1_000"})

        assert res.status_code == 400
        assert [e["msg"] for e in res.json()["errors"]] == [
            "El precio no es válido",
            "Precio no válido",
        ]


class TestListProducts:
    def test_returns_json_array(self, client, product):
        res = client.get("/api/products")

        assert res.status_code == 200
        assert res.headers["content-type"].startswith("application/json")
        body = res.json()
        assert "errors" not in body
        assert len(body["data"]) == 1

    def test_empty_catalogue(self, client):
        res = client.get("/api/products")

        assert res.status_code == 200
        assert res.json() == {"data": []}

    def test_caps_at_ten_ordered_by_id(self, client):
        for i in range(12):
            client.post("/api/products", json={"name": f"Product {i}", "price": i + 1})

        data = client.get("/api/products").json()["data"]

        assert len(data) == 10
        ids = [p["id"] for p in data]
        assert ids == sorted(ids)
        assert data[0]["name"] == "Product 0"


class TestGetProduct:
    def test_missing_product_uses_errors_key(self, client):
        res = client.get(f"/api/products/{MISSING_ID}")

        assert res.status_code == 404
        assert res.json() == {"errors": "Producto no encontrado"}

    def test_invalid_id(self, client):
        res = client.get("/api/products/invalid-url")

        assert res.status_code == 400
        body = res.json()
        assert len(body["errors"]) == 1
        assert body["errors"][0]["msg"] == "ID no válido"
        assert body["errors"][0]["location"] == "params"
        assert "data" not in body

    def test_returns_product(self, client, product):
        res = client.get(f"/api/products/{product['id']}")

        assert res.status_code == 200
        data = res.json()["data"]
        assert data["name"] == product["name"]
        assert data["price"] == product["price"]


class TestUpdateProduct:
    valid_body = {"name": "Mouse - Testing", "price": 999, "availability": True}

    def test_missing_product_uses_error_key(self, client):
        res = client.put(f"/api/products/{MISSING_ID}", json=self.valid_body)

        assert res.status_code == 404
        assert res.json() == {"error": "Producto no encontrado"}

    def test_invalid_id(self, client):
        res = client.put("/api/products/invalid-id", json=self.valid_body)

        assert res.status_code == 400
        errors = res.json()["errors"]
        assert len(errors) == 1
        assert errors[0]["msg"] == "ID no válido"

    def test_empty_body(self, client, product):
        res = client.put(f"/api/products/{product['id']}", json={})

        assert res.status_code == 400
        assert len(res.json()["errors"]) == 5

    def test_availability_must_be_boolean(self, client, product):
        res = client.put(
            f"/api/products/{product['id']}",
            json={"name": "Mouse - Testing", "price": 999, "availability": "hola"},
        )

        assert res.status_code == 400
        errors = res.json()["errors"]
        assert len(errors) == 1
        assert errors[0]["msg"] == "Valor no válido para disponibilidad"

    def test_non_numeric_price(self, client, product):
        res = client.put(
            f"/api/products/{product['id']}",
            json={"name": "Mouse - Testing", "price": "hola", "availability": True},
        )

        assert res.status_code == 400
        assert len(res.json()["errors"]) == 2

    def test_zero_price(self, client, product):
        res = client.put(
            f"/api/products/{product['id']}",
            json={"name": "Mouse - Testing", "price": 0, "availability": True},
        )

        assert res.status_code == 400
        errors = res.json()["errors"]
        assert len(errors) == 1
        assert errors[0]["msg"] == "Precio no válido"

    def test_updates_every_field(self, client, product):
        res = client.put(
            f"/api/products/{product['id']}",
            json={"name": "Mouse - Updated", "price": 200, "availability": False},
        )

        assert res.status_code == 200
        assert "errors" not in res.json()

        data = client.get(f"/api/products/{product['id']}").json()["data"]
        assert data == {
            "id": product["id"],
            "name": "Mouse - Updated",
            "price": 200,
            "availability": False,
        }

    def test_loose_boolean_string(self, client, product):
        res = client.put(
            f"/api/products/{product['id']}",
            json={"name": "Mouse", "price": 10, "availability": "false"},
        )

        assert res.status_code == 200
        assert res.json()["data"]["availability"] is False


class TestToggleAvailability:
    def test_invalid_id(self, client):
        res = client.patch("/api/products/invalid-id")

        assert res.status_code == 400
        assert res.json()["errors"][0]["msg"] == "ID no válido"

    def test_missing_product(self, client):
        res = client.patch(f"/api/products/{MISSING_ID}")

        assert res.status_code == 404
        assert res.json() == {"error": "Producto no encontrado"}

    def test_flips_availability(self, client, product):
        res = client.patch(f"/api/products/{product['id']}")

        assert res.status_code == 200
        data = res.json()["data"]
        assert data["availability"] is (not product["availability"])
        assert data["name"] == product["name"]
        assert data["price"] == product["price"]

    def test_two_toggles_restore_original(self, client, product):
        client.patch(f"/api/products/{product['id']}")
        res = client.patch(f"/api/products/{product['id']}")

        assert res.json()["data"]["availability"] is product["availability"]


class TestDeleteProduct:
    def test_missing_product(self, client):
        res = client.delete(f"/api/products/{MISSING_ID}")

        assert res.status_code == 404
        assert res.json() == {"error": "Producto no encontrado"}

    def test_invalid_id(self, client):
        res = client.delete("/api/products/abc")

        assert res.status_code == 400
        assert res.json()["errors"][0]["msg"] == "ID no válido"

    def test_deletes_product(self, client, product):
        res = client.delete(f"/api/products/{product['id']}")

        assert res.status_code == 200
        assert res.json() == {"data": "Producto Eliminado"}

        follow_up = client.get(f"/api/products/{product['id']}")
        assert follow_up.status_code == 404
