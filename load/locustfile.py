import os
import random
import uuid
from typing import Any, Dict, Optional

from locust import HttpUser, between, task

SEARCH_TERMS = os.getenv("LOAD_SEARCH_TERMS", "phone,laptop,fragrance,apple").split(",")
CATEGORIES = os.getenv("LOAD_CATEGORIES", "smartphones,laptops,fragrances,groceries").split(",")
MAX_PRODUCT_ID = int(os.getenv("LOAD_MAX_PRODUCT_ID", "30"))
RUN_ID = os.getenv("LOAD_RUN_ID", str(uuid.uuid4())[:8])  # tags created titles for later filtering


class ProductsLoadUser(HttpUser):
    """
    Locust user simulating storefront traffic against the products API.
    Mix:
      - read calls (listing pages / search / category filter / lookup by id)
      - simulated writes (add / patch) that the service answers without storing
    """
    wait_time = between(0.1, 0.6)

    def on_start(self):
        # warm up / verify endpoint
        self._get_json("/products/categories", name="categories")

    def _headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "X-Request-Id": str(uuid.uuid4()),
        }

    def _call(self, method: str, path: str, name: str, params=None, json=None) -> Optional[Any]:
        """
        Wraps one API call and marks failure if:
          - status is not 2xx
          - JSON parse fails
        """
        with self.client.request(
            method,
            path,
            params=params,
            json=json,
            headers=self._headers(),
            name=name,
            catch_response=True,
        ) as resp:
            if not 200 <= resp.status_code < 300:
                resp.failure(f"HTTP {resp.status_code}: {resp.text[:200]}")
                return None

            try:
                data = resp.json()
            except ValueError:
                resp.failure(f"Non-JSON response: {resp.text[:200]}")
                return None

            resp.success()
            return data

    def _get_json(self, path: str, name: str, params=None):
        return self._call("GET", path, name, params=params)

    # ----------------------------
    # Reads
    # ----------------------------
    @task(30)
    def list_page(self):
        skip = random.choice([0, 10, 20])
        data = self._get_json("/products", name="list", params={"limit": 10, "skip": skip})
        if data is not None and len(data.get("products", [])) > 10:
            # a page longer than its limit is a contract break, not a slow response
            self.environment.events.request.fire(
                request_type="CHECK", name="list:limit", response_time=0, response_length=0,
                exception=AssertionError(f"page exceeded limit: {len(data['products'])}"),
            )

    @task(25)
    def search(self):
        self._get_json("/products/search", name="search", params={"q": random.choice(SEARCH_TERMS)})

    @task(20)
    def by_category(self):
        self._get_json(f"/products/category/{random.choice(CATEGORIES)}", name="category")

    @task(15)
    def lookup(self):
        self._get_json(f"/products/{random.randint(1, MAX_PRODUCT_ID)}", name="product")

    # ----------------------------
    # Simulated writes
    # ----------------------------
    @task(7)
    def add_product(self):
        payload = {
            "title": f"load_{RUN_ID}_{uuid.uuid4().hex[:8]}",
            "price": round(random.uniform(10, 1000), 2),
            "category": random.choice(CATEGORIES),
        }
        self._call("POST", "/products/add", name="add", json=payload)

    @task(3)
    def patch_price(self):
        product_id = random.randint(1, MAX_PRODUCT_ID)
        self._call("PATCH", f"/products/{product_id}", name="patch",
                   json={"price": round(random.uniform(10, 1000), 2)})


"""How to run

Against the local emulator (python app.py serves on port 5001):

python3 -m locust -f load/locustfile.py \
  --headless \
  -u 25 \
  -r 5 \
  --run-time 30s \
  --host http://127.0.0.1:5001 \
  --csv load/locust_results

Against the real service swap the host for https://dummyjson.com and keep -u low;
it is a shared public API.
"""
