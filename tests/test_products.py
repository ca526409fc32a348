from storefront.domain.models import Product

PRODUCT = {
    "title": "Oxford Shirt",
    "brand": "Zeynix",
    "images": ["https://cdn.example.com/oxford.jpg"],
    "category": "formal",
    "actualPrice": 1000,
    "discountPrice": 750,
    "sizes": [{"size": "M", "stock": 4}, {"size": "L", "stock": 0}],
}

class TestProductAdmin:
    def test_create_computes_discount(self, client, admin_headers):
        resp = client.post("/api/admin/products", json=PRODUCT, headers=admin_headers)

        assert resp.status_code == 201
        data = resp.json()["data"]
        assert data["discount"] == 25
        assert data["finalPrice"] == 750
        assert {s["size"]: (s["stock"], s["inStock"]) for s in data["sizes"]} == {
            "M": (4, True), "L": (0, False),
        }

    def test_discount_not_below_actual_price_is_zero(self, client, admin_headers):
        payload = dict(PRODUCT, discountPrice=1200)

        resp = client.post("/api/admin/products", json=payload, headers=admin_headers)

        assert resp.json()["data"]["discount"] == 0

    def test_update_recomputes_discount_and_sizes(self, client, admin_headers):
        created = client.post("/api/admin/products", json=PRODUCT, headers=admin_headers).json()["data"]

        resp = client.put(f"/api/admin/products/{created['id']}", headers=admin_headers, json={
            "discountPrice": 500,
            "sizes": [{"size": "L", "stock": 3}, {"size": "XL", "stock": 1}],
        })

        data = resp.json()["data"]
        assert data["discount"] == 50
        assert data["title"] == "Oxford Shirt"
        assert {s["size"]: s["stock"] for s in data["sizes"]} == {"L": 3, "XL": 1}

    def test_invalid_size_rejected(self, client, admin_headers):
        payload = dict(PRODUCT, sizes=[{"size": "S", "stock": 1}])

        resp = client.post("/api/admin/products", json=payload, headers=admin_headers)

        assert resp.status_code == 400

    def test_customer_cannot_create(self, client, customer_headers):
        resp = client.post("/api/admin/products", json=PRODUCT, headers=customer_headers)

        assert resp.status_code == 403

    def test_archive_keeps_row(self, client, admin_headers, session_factory):
        created = client.post("/api/admin/products", json=PRODUCT, headers=admin_headers).json()["data"]

        resp = client.delete(f"/api/admin/products/{created['id']}", headers=admin_headers)

        assert resp.json()["data"]["status"] == "archived"
        with session_factory() as session:
            product = session.get(Product, created["id"])
            assert product is not None
            assert product.is_active is False

class TestPublicProduct:
    def test_fetch_published_product(self, client, make_product):
        product = make_product()

        resp = client.get(f"/api/products/{product.id}")

        assert resp.status_code == 200
        assert resp.json()["data"]["title"] == "Linen Shirt"

    def test_inactive_product_hidden(self, client, make_product):
        product = make_product(is_active=False)

        assert client.get(f"/api/products/{product.id}").status_code == 404

    def test_malformed_id(self, client):
        resp = client.get("/api/products/xyz")

        assert resp.status_code == 400
        assert resp.json()["message"] == "Invalid product id: xyz"
