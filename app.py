"""
Local stand-in for the DummyJSON products API.

Serves data/products.json with the same routes and response shapes as
https://dummyjson.com/products so the suite can run without network access.
Like the real service, writes are simulated: the response echoes the change
but the seed data is never modified.
"""
import copy
from datetime import datetime, timezone

from flask import Flask, jsonify, request
from flask_restx import Api, Namespace, Resource

from load_data import load_seed_products
from models import Models

DEFAULT_LIMIT = 30
SEARCH_FIELDS = ("title", "description", "brand")

app = Flask(__name__)
app.config["ERROR_404_HELP"] = False
api = Api(app, version='1.0', title='Products API',
          description='A DummyJSON-compatible products API', doc='/docs')

models = Models(api)

products_ns = Namespace("products", description="Products info")
api.add_namespace(products_ns)

# In-memory data, read-only after start-up
PRODUCTS = load_seed_products()


def _find_product(product_id: int):
    product = next((p for p in PRODUCTS if p.get("id") == product_id), None)
    if product is None:
        api.abort(404, f"Product with id '{product_id}' not found")
    return product


def _int_arg(name: str, default: int) -> int:
    value = request.args.get(name, type=int)
    if value is None or value < 0:
        return default
    return value


def _paginate(items: list[dict]) -> dict:
    """
    Slice `items` the way DummyJSON does: limit=0 means "everything",
    skip and limit are echoed back, total counts the whole filtered set.
    """
    limit = _int_arg("limit", DEFAULT_LIMIT)
    skip = _int_arg("skip", 0)
    page = items[skip:] if limit == 0 else items[skip:skip + limit]
    return {
        "products": copy.deepcopy(page),
        "total": len(items),
        "skip": skip,
        "limit": limit or len(items),
    }


def _matches_search(item: dict, q: str) -> bool:
    ql = q.lower()
    for f in SEARCH_FIELDS:
        v = item.get(f)
        if v is None:
            continue
        if ql in str(v).lower():
            return True
    return False


def _category_slugs() -> list[str]:
    return sorted({p["category"] for p in PRODUCTS})


def _json_payload() -> dict:
    payload = request.get_json(silent=True)
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        api.abort(400, "Expected a JSON object")
    return payload


@products_ns.route('')
class ProductList(Resource):
    @products_ns.doc('list_products', params={'limit': 'Page size (0 = all)', 'skip': 'Offset'})
    @products_ns.response(200, 'Success', models.products_response_model)
    def get(self):
        """List products with pagination"""
        return _paginate(PRODUCTS)


@products_ns.route('/search')
class ProductSearch(Resource):
    @products_ns.doc('search_products', params={'q': 'Case-insensitive search term'})
    @products_ns.response(200, 'Success', models.products_response_model)
    def get(self):
        """Search title, description and brand"""
        q = request.args.get("q") or ""
        results = [p for p in PRODUCTS if _matches_search(p, q)] if q else PRODUCTS
        return _paginate(results)


@products_ns.route('/categories')
class CategoryList(Resource):
    @products_ns.doc('list_categories')
    @products_ns.response(200, 'Success', [models.category_model])
    def get(self):
        """List categories as {slug, name, url} records"""
        base = request.host_url.rstrip("/")
        return [
            {
                "slug": slug,
                "name": slug.replace("-", " ").title(),
                "url": f"{base}/products/category/{slug}",
            }
            for slug in _category_slugs()
        ]


@products_ns.route('/category-list')
class CategorySlugList(Resource):
    @products_ns.doc('list_category_slugs')
    def get(self):
        """List category slugs as plain strings"""
        return _category_slugs()


@products_ns.route('/category/<string:slug>')
@products_ns.param('slug', 'The category identifier')
class ProductsByCategory(Resource):
    @products_ns.doc('list_products_by_category')
    @products_ns.response(200, 'Success', models.products_response_model)
    def get(self, slug):
        """List products of one category (unknown category → empty listing)"""
        return _paginate([p for p in PRODUCTS if p.get("category") == slug])


@products_ns.route('/add')
class ProductCreate(Resource):
    @products_ns.doc('create_product')
    @products_ns.expect(models.product_model)
    @products_ns.response(201, 'Created (not persisted)', models.product_model)
    def post(self):
        """Simulate creating a product"""
        payload = _json_payload()
        return {"id": len(PRODUCTS) + 1, **payload}, 201


@products_ns.route('/<int:product_id>')
@products_ns.response(404, 'Product not found', models.error_model)
@products_ns.param('product_id', 'The product identifier')
class ProductItem(Resource):
    @products_ns.doc('get_product')
    @products_ns.response(200, 'Success', models.product_model)
    def get(self, product_id):
        """Fetch a product by id"""
        return copy.deepcopy(_find_product(product_id))

    @products_ns.doc('replace_product')
    @products_ns.expect(models.product_model)
    def put(self, product_id):
        """Simulate replacing a product"""
        return self._merged(product_id)

    @products_ns.doc('patch_product')
    @products_ns.expect(models.product_model)
    def patch(self, product_id):
        """Simulate updating some fields of a product"""
        return self._merged(product_id)

    @products_ns.doc('delete_product')
    @products_ns.response(200, 'Deleted (not persisted)', models.deleted_product_model)
    def delete(self, product_id):
        """Simulate deleting a product"""
        product = copy.deepcopy(_find_product(product_id))
        deleted_on = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
        return {**product, "isDeleted": True, "deletedOn": deleted_on}

    @staticmethod
    def _merged(product_id):
        product = copy.deepcopy(_find_product(product_id))
        payload = _json_payload()
        return {**product, **payload, "id": product_id}


@app.route('/health')
def health_check():
    """Health check endpoint for CI/CD monitoring"""
    return jsonify({
        "status": "healthy",
        "service": "products-api-emulator",
        "version": "1.0.0"
    }), 200


if __name__ == '__main__':
    app.run(debug=True, port=5001)
