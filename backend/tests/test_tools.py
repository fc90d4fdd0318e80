import pytest
from fastapi.testclient import TestClient

from stockledger.client.stock_api import StockApiClient, StockApiError
from stockledger.client.tools import TOOLS, call_tool
from stockledger.main import app


@pytest.fixture
def api():
    return StockApiClient(base_url="http://testserver", session=TestClient(app))


def _create(api, **overrides):
    args = {
        "name": "Cordless Power Drill",
        "sku": "DRILL-001",
        "price": "89.99",
        "initial_stock": 15,
        "reorder_level": 5,
        "description": "18V",
    }
    args.update(overrides)
    return call_tool("create_product", args, client=api)


def test_registry_lists_every_operation():
    assert set(TOOLS) == {
        "list_products",
        "get_product",
        "list_low_stock_products",
        "create_product",
        "update_stock",
        "get_stock_movements",
        "check_api_health",
    }
    assert all(t.description for t in TOOLS.values())


def test_create_and_list(api):
    res = _create(api)
    assert res["success"] is True
    assert res["message"] == "Product 'Cordless Power Drill' created successfully"
    assert res["product"]["stock_quantity"] == 15

    listed = call_tool("list_products", client=api)
    assert listed["success"] is True
    assert listed["count"] == 1
    assert listed["products"][0]["sku"] == "DRILL-001"
    assert listed["products"][0]["is_low_stock"] is False


def test_duplicate_sku_is_an_error_envelope(api):
    _create(api)
    res = _create(api)
    assert res["success"] is False
    assert "already exists" in res["error"]
    assert res["error"].startswith("Error creating product")


def test_get_product(api):
    pid = _create(api)["product"]["id"]
    res = call_tool("get_product", {"product_id": pid}, client=api)
    assert res["success"] is True
    assert res["product"]["name"] == "Cordless Power Drill"

    missing = call_tool("get_product", {"product_id": 9999}, client=api)
    assert missing["success"] is False
    assert missing["error"] == "Product with ID 9999 not found"


def test_update_stock_and_low_stock(api):
    pid = _create(api)["product"]["id"]
    res = call_tool(
        "update_stock",
        {"product_id": pid, "movement_type": 2, "quantity": 12, "notes": "sale"},
        client=api,
    )
    assert res["success"] is True
    assert res["movement"] == {"type": "StockOut", "quantity": 12, "notes": "sale"}
    assert res["updated_product"]["new_stock_quantity"] == 3
    assert res["updated_product"]["is_low_stock"] is True

    low = call_tool("list_low_stock_products", client=api)
    assert low["count"] == 1
    assert low["low_stock_products"][0]["shortfall"] == 2


def test_update_stock_rejections(api):
    pid = _create(api)["product"]["id"]

    bad_type = call_tool(
        "update_stock", {"product_id": pid, "movement_type": 9, "quantity": 1}, client=api
    )
    assert bad_type["success"] is False
    assert "Invalid movement type" in bad_type["error"]

    negative = call_tool(
        "update_stock", {"product_id": pid, "movement_type": "StockOut", "quantity": 99}, client=api
    )
    assert negative["success"] is False
    assert "cannot be negative" in negative["error"]

    missing_args = call_tool("update_stock", {"product_id": pid}, client=api)
    assert missing_args["success"] is False

    history = call_tool("get_stock_movements", {"product_id": pid}, client=api)
    assert history["count"] == 1


def test_get_stock_movements(api):
    pid = _create(api)["product"]["id"]
    call_tool("update_stock", {"product_id": pid, "movement_type": 3, "quantity": 4}, client=api)
    res = call_tool("get_stock_movements", {"product_id": pid}, client=api)
    assert res["success"] is True
    assert res["product_id"] == pid
    assert [m["movement_type"] for m in res["movements"]] == ["Adjustment", "StockIn"]
    assert res["movements"][0]["product_name"] == "Cordless Power Drill"


def test_health_tool(api):
    res = call_tool("check_api_health", client=api)
    assert res["success"] is True
    assert res["api_healthy"] is True


def test_unreachable_api_yields_error_envelopes():
    down = StockApiClient(base_url="http://127.0.0.1:9", timeout=0.5)
    health = call_tool("check_api_health", client=down)
    assert health["success"] is True
    assert health["api_healthy"] is False

    res = call_tool("list_products", client=down)
    assert res["success"] is False
    assert res["error"].startswith("Error retrieving products")

    with pytest.raises(StockApiError):
        down.get_products()


def test_unknown_tool():
    res = call_tool("delete_everything", {})
    assert res == {"success": False, "error": "Unknown tool 'delete_everything'"}
