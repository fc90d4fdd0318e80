import os
import sys
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import argparse
import concurrent.futures
from collections import Counter

import requests

BASE = os.environ.get("STOCK_API_URL", "http://127.0.0.1:8000")


def stock_out_task(i, product_id, qty):
    payload = {"movementType": "StockOut", "quantity": qty, "notes": f"concurrency worker {i}"}
    try:
        r = requests.put(f"{BASE}/api/products/{product_id}/stock", json=payload, timeout=20)
        return (i, r.status_code, r.json())
    except (requests.RequestException, ValueError) as e:
        return (i, "ERR", str(e))


def run_stock_out_concurrent(workers, product_id, qty):
    before = requests.get(f"{BASE}/api/products/{product_id}", timeout=10).json()
    print(f"Running StockOut test: workers={workers}, product={product_id}, qty={qty}, "
          f"stock before={before['stockQuantity']}")
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as ex:
        futures = [ex.submit(stock_out_task, i, product_id, qty) for i in range(workers)]
        results = [f.result() for f in futures]
    for r in results:
        print(r)
    print("Status counts:", dict(Counter(r[1] for r in results)))

    after = requests.get(f"{BASE}/api/products/{product_id}", timeout=10).json()
    succeeded = sum(1 for r in results if r[1] == 200)
    expected = before["stockQuantity"] - succeeded * qty
    print(f"stock after={after['stockQuantity']} expected={expected}")
    return after["stockQuantity"] == expected and after["stockQuantity"] >= 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Fire concurrent StockOut requests at one product.")
    parser.add_argument("--product-id", type=int, default=1)
    parser.add_argument("--qty", type=int, default=1)
    parser.add_argument("--workers", type=int, default=8)
    args = parser.parse_args()

    ok = run_stock_out_concurrent(args.workers, args.product_id, args.qty)
    sys.exit(0 if ok else 1)
