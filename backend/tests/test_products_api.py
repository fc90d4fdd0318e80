from fastapi.testclient import TestClient

from stockledger.main import app

client = TestClient(app)

DRILL = {
    "name": "Cordless Power Drill",
    "description": "18V cordless drill with 2 batteries and charger",
    "sku": "DRILL-001",
    "price": 89.99,
    "initialStock": 15,
    "reorderLevel": 5,
}


def create(**overrides):
    return client.post("/api/products", json={**DRILL, **overrides})


def test_create_product_returns_view():
    res = create()
    assert res.status_code == 201
    body = res.json()
    assert res.headers["location"] == f"/api/products/{body['id']}"
    assert body["sku"] == "DRILL-001"
    assert body["price"] == "89.99"
    assert body["stockQuantity"] == 15
    assert body["reorderLevel"] == 5
    assert body["isActive"] is True
    assert body["isLowStock"] is False


def test_create_accepts_snake_case_body():
    res = client.post(
        "/api/products",
        json={"name": "Rake", "sku": "RAKE-001", "price": "24.99", "initial_stock": 8, "reorder_level": 3},
    )
    assert res.status_code == 201
    assert res.json()["stockQuantity"] == 8


def test_duplicate_sku_is_400():
    assert create().status_code == 201
    res = create(name="Other")
    assert res.status_code == 400
    assert res.json()["code"] == "DuplicateSku"
    assert len(client.get("/api/products").json()) == 1


def test_validation_failures_are_400():
    for bad in (
        {"name": ""},
        {"name": "x" * 101},
        {"sku": "y" * 51},
        {"description": "z" * 501},
        {"price": -1},
        {"initialStock": -5},
        {"reorderLevel": -1},
    ):
        res = create(**bad)
        assert res.status_code == 400, bad
        assert res.json()["code"] == "ValidationError"

    missing = {k: v for k, v in DRILL.items() if k != "sku"}
    assert client.post("/api/products", json=missing).status_code == 400
    assert client.get("/api/products").json() == []


def test_list_and_get():
    pid = create().json()["id"]
    listed = client.get("/api/products").json()
    assert [p["id"] for p in listed] == [pid]

    res = client.get(f"/api/products/{pid}")
    assert res.status_code == 200
    assert res.json()["name"] == "Cordless Power Drill"

    res = client.get("/api/products/9999")
    assert res.status_code == 404
    assert res.json()["code"] == "NotFound"


def test_update_stock_flow():
    pid = create().json()["id"]

    res = client.put(f"/api/products/{pid}/stock", json={"movementType": 2, "quantity": 12, "notes": "sale"})
    assert res.status_code == 200
    assert res.json()["stockQuantity"] == 3
    assert res.json()["isLowStock"] is True

    res = client.put(f"/api/products/{pid}/stock", json={"movementType": "StockOut", "quantity": 10})
    assert res.status_code == 400
    assert res.json()["code"] == "NegativeStockResult"
    assert client.get(f"/api/products/{pid}").json()["stockQuantity"] == 3

    res = client.put(f"/api/products/{pid}/stock", json={"movementType": "Adjustment", "quantity": 0})
    assert res.status_code == 200
    assert res.json()["stockQuantity"] == 0

    low = client.get("/api/products/low-stock").json()
    assert len(low) == 1
    assert low[0]["id"] == pid
    assert low[0]["shortfall"] == 5


def test_update_stock_errors():
    pid = create().json()["id"]

    res = client.put(f"/api/products/{pid}/stock", json={"movementType": 7, "quantity": 1})
    assert res.status_code == 400
    assert res.json()["code"] == "InvalidMovementType"

    res = client.put(f"/api/products/{pid}/stock", json={"movementType": "StockIn", "quantity": 0})
    assert res.status_code == 400
    assert res.json()["code"] == "InvalidQuantity"

    res = client.put("/api/products/9999/stock", json={"movementType": 7, "quantity": 1})
    assert res.status_code == 404

    res = client.put(f"/api/products/{pid}/stock", json={"movementType": 1, "quantity": 1, "notes": "n" * 501})
    assert res.status_code == 400

    assert len(client.get(f"/api/products/{pid}/movements").json()) == 1


def test_low_stock_excludes_healthy_products():
    create()
    paint = create(name="Interior Paint - White", sku="PAINT-001", initialStock=3, reorderLevel=10).json()
    low = client.get("/api/products/low-stock").json()
    assert [p["sku"] for p in low] == ["PAINT-001"]
    assert low[0]["shortfall"] == 7
    assert low[0]["isLowStock"] is True
    assert paint["isLowStock"] is True


def test_deactivate_hides_product_keeps_history():
    pid = create().json()["id"]
    assert client.delete(f"/api/products/{pid}").status_code == 204
    assert client.get(f"/api/products/{pid}").status_code == 404
    assert client.get("/api/products").json() == []
    assert client.put(f"/api/products/{pid}/stock", json={"movementType": 1, "quantity": 1}).status_code == 404
    assert len(client.get(f"/api/products/{pid}/movements").json()) == 1
    assert client.delete(f"/api/products/{pid}").status_code == 404


def test_movement_type_and_quantity_are_not_coerced():
    pid = create(initialStock=5).json()["id"]

    for bad_type in (True, 1.5, None, [1]):
        res = client.put(f"/api/products/{pid}/stock", json={"movementType": bad_type, "quantity": 1})
        assert res.status_code == 400, bad_type
        assert res.json()["code"] == "InvalidMovementType"

    for bad_qty in (True, 1.5, "2"):
        res = client.put(f"/api/products/{pid}/stock", json={"movementType": "StockIn", "quantity": bad_qty})
        assert res.status_code == 400, bad_qty
        assert res.json()["code"] == "InvalidQuantity"

    assert client.get(f"/api/products/{pid}").json()["stockQuantity"] == 5
    assert len(client.get(f"/api/products/{pid}/movements").json()) == 1


def test_unknown_product_with_long_notes_is_404():
    res = client.put("/api/products/9999/stock", json={"movementType": 1, "quantity": 1, "notes": "n" * 501})
    assert res.status_code == 404
    assert res.json()["code"] == "NotFound"


def test_price_rendered_as_exact_decimal():
    res = create(price="19.90")
    assert res.status_code == 201
    assert res.json()["price"] == "19.90"
    assert client.get(f"/api/products/{res.json()['id']}").json()["price"] == "19.90"
