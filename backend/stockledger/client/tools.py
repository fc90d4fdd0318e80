"""
Named operations over the stock API, for tool-calling front ends.

Every tool returns an envelope dict with a ``success`` flag and either its
data fields or an ``error`` message; :func:`call_tool` never raises for
caller mistakes, API errors or an unreachable server.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from stockledger.client.stock_api import StockApiClient, StockApiError
from stockledger.models.stock_movement import MovementType
from stockledger.services.errors import StockException

log = logging.getLogger("stockledger.client")


@dataclass(frozen=True)
class Tool:
    name: str
    description: str
    handler: Callable[..., Dict]
    failure: str


def _product_result(p: Dict) -> Dict:
    return {
        "id": p["id"],
        "name": p["name"],
        "description": p.get("description", ""),
        "sku": p["sku"],
        "price": p["price"],
        "stock_quantity": p["stockQuantity"],
        "reorder_level": p["reorderLevel"],
        "is_low_stock": p.get("isLowStock", p["stockQuantity"] <= p["reorderLevel"]),
    }


def list_products(client: StockApiClient) -> Dict:
    products = [_product_result(p) for p in client.get_products()]
    return {"success": True, "products": products, "count": len(products)}


def get_product(client: StockApiClient, product_id: int) -> Dict:
    p = client.get_product(int(product_id))
    if p is None:
        return {"success": False, "product": None, "error": f"Product with ID {product_id} not found"}
    return {"success": True, "product": _product_result(p)}


def list_low_stock_products(client: StockApiClient) -> Dict:
    low = [
        {
            "id": p["id"],
            "name": p["name"],
            "sku": p["sku"],
            "stock_quantity": p["stockQuantity"],
            "reorder_level": p["reorderLevel"],
            "shortfall": p["reorderLevel"] - p["stockQuantity"],
        }
        for p in client.get_low_stock_products()
    ]
    return {"success": True, "low_stock_products": low, "count": len(low)}


def create_product(
    client: StockApiClient,
    name: str,
    sku: str,
    price,
    initial_stock: int,
    reorder_level: int,
    description: str = "",
) -> Dict:
    p = client.create_product(
        {
            "name": name,
            "description": description,
            "sku": sku,
            "price": str(price),
            "initialStock": int(initial_stock),
            "reorderLevel": int(reorder_level),
        }
    )
    return {
        "success": True,
        "message": f"Product '{name}' created successfully",
        "product": _product_result(p),
    }


def update_stock(
    client: StockApiClient, product_id: int, movement_type, quantity: int, notes: str = ""
) -> Dict:
    mtype = MovementType.parse(movement_type)
    p = client.update_stock(int(product_id), mtype.value, int(quantity), notes)
    return {
        "success": True,
        "message": f"Stock updated successfully for product '{p['name']}'",
        "movement": {"type": mtype.value, "quantity": int(quantity), "notes": notes},
        "updated_product": {
            "id": p["id"],
            "name": p["name"],
            "sku": p["sku"],
            "new_stock_quantity": p["stockQuantity"],
            "reorder_level": p["reorderLevel"],
            "is_low_stock": p["isLowStock"],
        },
    }


def get_stock_movements(client: StockApiClient, product_id: int) -> Dict:
    movements = [
        {
            "id": m["id"],
            "product_name": m["productName"],
            "movement_type": m["movementType"],
            "quantity": m["quantity"],
            "notes": m["notes"],
            "created_at": m["createdAt"],
        }
        for m in client.get_product_movements(int(product_id))
    ]
    return {
        "success": True,
        "product_id": int(product_id),
        "movements": movements,
        "count": len(movements),
    }


def check_api_health(client: StockApiClient) -> Dict:
    healthy = client.is_api_healthy()
    return {
        "success": True,
        "api_healthy": healthy,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "message": "Stock API is healthy and responding" if healthy else "Stock API is not responding",
    }


def _registry(*tools: Tool) -> Dict[str, Tool]:
    return {t.name: t for t in tools}


TOOLS: Dict[str, Tool] = _registry(
    Tool("list_products", "Get a list of all active products in the stock system",
         list_products, "Error retrieving products"),
    Tool("get_product", "Get details of a specific product by ID",
         get_product, "Error retrieving product"),
    Tool("list_low_stock_products", "Get a list of products that are at or below their reorder level",
         list_low_stock_products, "Error retrieving low stock products"),
    Tool("create_product", "Create a new product in the stock system",
         create_product, "Error creating product"),
    Tool("update_stock",
         "Apply a stock movement: 1=StockIn, 2=StockOut, 3=Adjustment (quantity is the new level)",
         update_stock, "Error updating stock"),
    Tool("get_stock_movements", "Get the stock movement history for a specific product",
         get_stock_movements, "Error retrieving stock movements"),
    Tool("check_api_health", "Check if the stock API is healthy and responding",
         check_api_health, "Error checking API health"),
)


def call_tool(name: str, arguments: Optional[Dict] = None, client: StockApiClient = None) -> Dict:
    tool = TOOLS.get(name)
    if tool is None:
        return {"success": False, "error": f"Unknown tool '{name}'"}
    client = client or StockApiClient()
    try:
        return tool.handler(client, **(arguments or {}))
    except (StockException, StockApiError) as e:
        log.info("Tool %s failed: %s", name, e.message)
        return {"success": False, "error": f"{tool.failure}: {e.message}"}
    except (TypeError, ValueError, KeyError) as e:
        return {"success": False, "error": f"{tool.failure}: invalid arguments ({e})"}
