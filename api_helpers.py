import logging
import os
import time
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Optional

import httpx

from logging_helper import get_api_logger, log_event

DEFAULT_BASE_URL = "https://dummyjson.com"
BASE_URL = os.getenv("BASE_URL", DEFAULT_BASE_URL).rstrip("/")
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "30"))

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}

logger = get_api_logger()

TARGETS = ("local", "remote")


def resolve_api_target(requested=None, base_url=None, environ=None) -> tuple[str, str]:
    """
    Decide which API the suite drives and the remote base URL to use.

    An explicit target (--api-target, then API_TARGET) wins. Without one, a base
    URL named on the command line or through BASE_URL selects the remote API;
    otherwise the in-process emulator is used. Asking for the emulator while also
    naming a base URL is rejected, since that URL would never be contacted.
    """
    environ = os.environ if environ is None else environ
    explicit_url = base_url or environ.get("BASE_URL")
    target = requested or environ.get("API_TARGET") or ("remote" if explicit_url else "local")

    if target not in TARGETS:
        raise ValueError(f"Unknown API target {target!r}; expected one of {', '.join(TARGETS)}")
    if target == "local" and explicit_url:
        raise ValueError(
            f"API target 'local' would ignore the base URL {explicit_url!r}; "
            "drop the URL or run with --api-target=remote"
        )
    return target, (explicit_url or DEFAULT_BASE_URL).rstrip("/")


class ApiTransportError(Exception):
    """The request never completed (DNS, connect, timeout, reset...)."""

    def __init__(self, method: str, url: str, cause: Exception):
        super().__init__(f"{method.upper()} {url} failed before a response arrived: {cause!r}")
        self.method = method.upper()
        self.url = url


@dataclass(frozen=True)
class ApiResponse:
    """Uniform envelope for one completed call, whatever its status."""

    status: int
    ok: bool
    status_text: str
    headers: Mapping[str, str]
    data: Any
    url: str = ""
    elapsed_ms: float = 0.0

    @classmethod
    def from_httpx(cls, response: httpx.Response, elapsed_ms: float = 0.0) -> "ApiResponse":
        return cls(
            status=response.status_code,
            ok=response.is_success,
            status_text=response.reason_phrase,
            headers=MappingProxyType({k.lower(): v for k, v in response.headers.items()}),
            data=_decode_body(response),
            url=str(response.request.url),
            elapsed_ms=elapsed_ms,
        )


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def build_client(base_url: Optional[str] = None, transport: Optional[httpx.BaseTransport] = None) -> httpx.Client:
    return httpx.Client(
        base_url=base_url or BASE_URL,
        headers=DEFAULT_HEADERS,
        timeout=REQUEST_TIMEOUT,
        transport=transport,
    )


def build_async_client(base_url: Optional[str] = None,
                       transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=base_url or BASE_URL,
        headers=DEFAULT_HEADERS,
        timeout=REQUEST_TIMEOUT,
        transport=transport,
    )


def _log_completed(method: str, response: httpx.Response, duration_ms: float) -> None:
    log_event(
        logger,
        "api_request",
        method=method.upper(),
        url=str(response.request.url),
        status=response.status_code,
        duration_ms=int(duration_ms),
    )


def _transport_failure(method: str, client, url: str, exc: httpx.RequestError) -> ApiTransportError:
    try:
        full_url = str(exc.request.url)
    except RuntimeError:  # error raised before a request object existed
        full_url = f"{client.base_url}{url}"
    log_event(logger, "api_transport_error", logging.ERROR, method=method.upper(), url=full_url, error=repr(exc))
    return ApiTransportError(method, full_url, exc)


def make_request(client: httpx.Client, method, url, params=None, json=None) -> ApiResponse:
    """
    Send exactly one request and wrap whatever comes back.

    Status codes are never raised on; tests assert them. Transport-level
    failures surface as ApiTransportError so they can't be mistaken for a 4xx/5xx.
    """
    started = time.perf_counter()
    try:
        response = client.request(method, url, params=params, json=json)
    except httpx.RequestError as e:
        raise _transport_failure(method, client, url, e) from e

    duration_ms = (time.perf_counter() - started) * 1000
    _log_completed(method, response, duration_ms)
    return ApiResponse.from_httpx(response, duration_ms)


async def make_request_async(client: httpx.AsyncClient, method, url, params=None, json=None) -> ApiResponse:
    """Awaitable twin of make_request."""
    started = time.perf_counter()
    try:
        response = await client.request(method, url, params=params, json=json)
    except httpx.RequestError as e:
        raise _transport_failure(method, client, url, e) from e

    duration_ms = (time.perf_counter() - started) * 1000
    _log_completed(method, response, duration_ms)
    return ApiResponse.from_httpx(response, duration_ms)
