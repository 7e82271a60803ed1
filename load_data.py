import json
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

DATA_DIR = Path(__file__).resolve().parent / "data"
SCHEMA_DIR = DATA_DIR / "schemas"
SEED_PRODUCTS_PATH = DATA_DIR / "products.json"


def load_json(path):
    """
    Purpose:  Low-level helper that reads and parses a single JSON file from disk.

    Why we do it this way:
    - Separates file I/O + JSON parsing from higher-level logic → the schema
      loader and the emulator seed both go through one function.
    - No error handling inside → FileNotFoundError / JSONDecodeError reach the
      caller (and pytest) with a clear traceback.

    Returns: the deserialized Python object (usually dict or list) from the JSON file
    """
    with open(path, "r", encoding="utf-8") as file:
        return json.load(file)


def load_schema_documents(directory=SCHEMA_DIR):
    """
    Purpose:  Loads every `<name>.schema.json` document in `directory` in parallel
              and returns them keyed by `<name>`.

    Why we do it this way:
    - ThreadPoolExecutor → the documents are independent, so they load side by side.
    - future_map → maps each future back to its schema name for result collection.
    - fut.result() re-raises → a broken schema file fails the whole suite early
      instead of silently dropping a contract.

    Returns: dict like {"product": {...}, "products_response": {...}, ...}
    """
    paths = {
        p.name[: -len(".schema.json")]: p
        for p in sorted(Path(directory).glob("*.schema.json"))
    }
    if not paths:
        raise FileNotFoundError(f"No *.schema.json documents found in {directory}")

    results = {}
    with ThreadPoolExecutor(max_workers=len(paths)) as executor:
        future_map = {executor.submit(load_json, p): key for key, p in paths.items()}
        for fut in as_completed(future_map):
            key = future_map[fut]
            results[key] = fut.result()  # raises if file missing / invalid JSON
    return results


def load_seed_products(path=SEED_PRODUCTS_PATH):
    """Products served by the local emulator, in id order."""
    data = load_json(path)
    products = data["products"] if isinstance(data, dict) else data
    return sorted(products, key=lambda p: p["id"])


# Follow-up notes for the loaders

# 1. Why not cache load_json with lru_cache?
#    → schemas.py already loads the documents once at import; the emulator seed is
#      loaded once per process. A cache would only hide edits made mid-session.

# 2. Why key schemas by file name instead of the "$id" inside the document?
#    → File names are what people grep for; "$id" is still there for tooling.
