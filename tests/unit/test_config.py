import pytest

from raygun.config import RaygunConfig, load_config

_ENV_VARS = [
    "RAYGUN_APP_NAME",
    "RAYGUN_API_KEY",
    "RAYGUN_ENABLED",
    "RAYGUN_ENDPOINT",
    "RAYGUN_WORKERS",
    "RAYGUN_QUEUE_SIZE",
    "RAYGUN_REQUEST_TIMEOUT",
    "RAYGUN_IDLE_TIMEOUT",
    "RAYGUN_MAX_IDLE_CONNS",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.mark.parametrize("api_key", ["", "your_raygun_api_key_here"])
def test_raygun_config_api_key_required_when_enabled(api_key: str):
    with pytest.raises(ValueError):
        RaygunConfig(app_name="app", api_key=api_key)


def test_raygun_config_api_key_optional_when_disabled():
    cfg = RaygunConfig(app_name="app", api_key="", enabled=False)
    assert cfg.enabled is False


@pytest.mark.parametrize("field", ["workers", "queue_size", "max_idle_conns"])
def test_raygun_config_rejects_non_positive_sizes(field: str):
    with pytest.raises(ValueError):
        RaygunConfig(api_key="k", **{field: 0})


def test_load_config_reads_required_and_defaults(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("RAYGUN_APP_NAME", "billing")
    monkeypatch.setenv("RAYGUN_API_KEY", "test_key")

    cfg = load_config().raygun
    assert cfg.app_name == "billing"
    assert cfg.api_key == "test_key"
    assert cfg.enabled is True
    assert cfg.endpoint == "https://api.raygun.io"
    assert cfg.workers == 1
    assert cfg.queue_size == 10000
    assert cfg.request_timeout == 5.0
    assert cfg.idle_timeout == 30.0
    assert cfg.max_idle_conns == 10


def test_load_config_parses_optional_fields(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("RAYGUN_API_KEY", "test_key")
    monkeypatch.setenv("RAYGUN_ENDPOINT", "http://localhost:9000")
    monkeypatch.setenv("RAYGUN_WORKERS", "4")
    monkeypatch.setenv("RAYGUN_QUEUE_SIZE", "50")
    monkeypatch.setenv("RAYGUN_REQUEST_TIMEOUT", "1.5")
    monkeypatch.setenv("RAYGUN_IDLE_TIMEOUT", "12.5")
    monkeypatch.setenv("RAYGUN_MAX_IDLE_CONNS", "3")

    cfg = load_config().raygun
    assert cfg.endpoint == "http://localhost:9000"
    assert cfg.workers == 4
    assert cfg.queue_size == 50
    assert cfg.request_timeout == 1.5
    assert cfg.idle_timeout == 12.5
    assert cfg.max_idle_conns == 3


def test_load_config_disabled_without_api_key(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("RAYGUN_ENABLED", "off")

    cfg = load_config().raygun
    assert cfg.enabled is False
    assert cfg.api_key == ""


def test_load_config_missing_api_key_is_actionable():
    with pytest.raises(ValueError, match="RAYGUN_API_KEY"):
        load_config()


@pytest.mark.parametrize(("name", "raw"), [("RAYGUN_WORKERS", "two"), ("RAYGUN_ENABLED", "maybe")])
def test_load_config_rejects_malformed_values(monkeypatch: pytest.MonkeyPatch, name: str, raw: str):
    monkeypatch.setenv("RAYGUN_API_KEY", "test_key")
    monkeypatch.setenv(name, raw)

    with pytest.raises(ValueError, match=name):
        load_config()
