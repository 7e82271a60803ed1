import pytest

import conftest
from api_helpers import DEFAULT_BASE_URL, resolve_api_target

DEAD_HOST = "http://127.0.0.1:9"


@pytest.mark.parametrize("requested, base_url, environ, expected", [
    (None, None, {}, ("local", DEFAULT_BASE_URL)),
    (None, None, {"BASE_URL": DEAD_HOST}, ("remote", DEAD_HOST)),
    (None, DEAD_HOST + "/", {}, ("remote", DEAD_HOST)),
    ("remote", None, {}, ("remote", DEFAULT_BASE_URL)),
    (None, None, {"API_TARGET": "remote"}, ("remote", DEFAULT_BASE_URL)),
    ("remote", DEAD_HOST, {"BASE_URL": "https://other.test"}, ("remote", DEAD_HOST)),
])
def test_target_resolution(requested, base_url, environ, expected):
    assert resolve_api_target(requested, base_url, environ) == expected


@pytest.mark.parametrize("requested, base_url, environ", [
    ("local", DEAD_HOST, {}),
    ("local", None, {"BASE_URL": DEAD_HOST}),
    (None, None, {"API_TARGET": "local", "BASE_URL": DEAD_HOST}),
])
def test_local_target_refuses_a_base_url(requested, base_url, environ):
    with pytest.raises(ValueError, match="would ignore the base URL"):
        resolve_api_target(requested, base_url, environ)


def test_unknown_target_from_env_is_rejected():
    with pytest.raises(ValueError, match="Unknown API target 'staging'"):
        resolve_api_target(None, None, {"API_TARGET": "staging"})


class _Config:
    """Just enough of pytest.Config for pytest_configure."""

    def __init__(self, **options):
        self.stash = pytest.Stash()
        self._options = options

    def getoption(self, name):
        return self._options.get(name)


@pytest.fixture
def clean_env(monkeypatch):
    monkeypatch.delenv("BASE_URL", raising=False)
    monkeypatch.delenv("API_TARGET", raising=False)
    return monkeypatch


def test_base_url_env_switches_session_to_remote(clean_env):
    clean_env.setenv("BASE_URL", DEAD_HOST)
    config = _Config()

    conftest.pytest_configure(config)

    assert config.stash[conftest.TARGET_KEY] == ("remote", DEAD_HOST)
    assert conftest.pytest_report_header(config) == f"products api target: remote ({DEAD_HOST})"


def test_default_session_uses_emulator(clean_env):
    config = _Config()

    conftest.pytest_configure(config)

    assert config.stash[conftest.TARGET_KEY][0] == "local"
    assert conftest.LOCAL_BASE_URL in conftest.pytest_report_header(config)


def test_local_session_with_base_url_is_a_usage_error(clean_env):
    config = _Config(**{"--api-target": "local", "--base-url": DEAD_HOST})

    with pytest.raises(pytest.UsageError, match="would ignore the base URL"):
        conftest.pytest_configure(config)
