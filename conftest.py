import os

import httpx
import pytest
import pytest_asyncio

import api_helpers
from logging_helper import log_status
from products_api import AsyncProductsAPI, ProductsAPI

LOCAL_BASE_URL = "http://dummyjson.local"

# (target, remote base url) resolved once per session
TARGET_KEY = pytest.StashKey[tuple]()


def pytest_addoption(parser):
    group = parser.getgroup("products-api")
    group.addoption(
        "--api-target",
        choices=api_helpers.TARGETS,
        default=None,
        help="local: in-process emulator (app.py); remote: the API at --base-url. "
             "Defaults to env API_TARGET, else remote when a base URL is given, else local",
    )
    group.addoption(
        "--base-url",
        default=None,
        help=f"Base URL of the remote products API (env BASE_URL, default {api_helpers.DEFAULT_BASE_URL})",
    )


def pytest_configure(config):
    try:
        config.stash[TARGET_KEY] = api_helpers.resolve_api_target(
            config.getoption("--api-target"), config.getoption("--base-url")
        )
    except ValueError as e:
        raise pytest.UsageError(str(e)) from e


def _retries() -> int:
    default = "2" if os.getenv("CI") else "1"
    return int(os.getenv("API_RETRIES", default))


def pytest_collection_modifyitems(config, items):
    """
    Remote runs get blind reruns for e2e tests (network blips look like failures);
    local runs skip anything that only makes sense against the real service.
    """
    target, _ = config.stash[TARGET_KEY]
    skip_remote_only = pytest.mark.skip(reason="needs --api-target=remote")
    retries = _retries()

    for item in items:
        if target == "local" and "remote_only" in item.keywords:
            item.add_marker(skip_remote_only)
        if target == "remote" and "e2e" in item.keywords and retries > 0:
            item.add_marker(pytest.mark.flaky(reruns=retries))


def pytest_report_header(config):
    target, remote_url = config.stash[TARGET_KEY]
    url = LOCAL_BASE_URL if target == "local" else remote_url
    return f"products api target: {target} ({url})"


def emulator_transport() -> httpx.MockTransport:
    """
    Route httpx requests into the Flask emulator through its test client.

    MockTransport accepts a plain function for both sync and async clients,
    so one bridge serves ProductsAPI and AsyncProductsAPI alike.
    """
    from app import app as emulator_app

    test_client = emulator_app.test_client()

    def handler(request: httpx.Request) -> httpx.Response:
        resp = test_client.open(
            request.url.raw_path.decode("ascii"),
            method=request.method,
            data=request.content,
            headers=[(k, v) for k, v in request.headers.items() if k.lower() not in ("host", "content-length")],
        )
        return httpx.Response(resp.status_code, headers=resp.headers.to_wsgi_list(), content=resp.get_data())

    return httpx.MockTransport(handler)


@pytest.fixture(scope="session")
def api_target(pytestconfig):
    target, _ = pytestconfig.stash[TARGET_KEY]
    log_status("good", f"Running products tests against the {target} API")
    return target


@pytest.fixture(scope="session")
def base_url(pytestconfig, api_target):
    return LOCAL_BASE_URL if api_target == "local" else pytestconfig.stash[TARGET_KEY][1]


@pytest.fixture
def http_client(api_target, base_url):
    """Fresh httpx.Client per test; also used directly for raw endpoint checks."""
    transport = emulator_transport() if api_target == "local" else None
    client = api_helpers.build_client(base_url, transport=transport)
    yield client
    client.close()


@pytest.fixture
def products_api(http_client):
    return ProductsAPI(http_client)


@pytest_asyncio.fixture
async def async_products_api(api_target, base_url):
    transport = emulator_transport() if api_target == "local" else None
    client = api_helpers.build_async_client(base_url, transport=transport)
    async with AsyncProductsAPI(client) as api:
        yield api
