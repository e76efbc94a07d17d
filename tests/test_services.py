from __future__ import annotations

from pathlib import Path

import pytest

from checkout.api_client import ApiClient
from checkout.persistence import LocalBackend
from checkout.services import get_backend


def test_get_backend_defaults_to_local(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("CHECKOUT_BACKEND", raising=False)
    monkeypatch.setenv("CHECKOUT_DB_PATH", str(tmp_path / "checkout.db"))

    backend = get_backend()

    assert isinstance(backend, LocalBackend)
    assert backend.db_path == tmp_path / "checkout.db"


def test_get_backend_http(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHECKOUT_BACKEND", "HTTP")
    monkeypatch.setenv("CHECKOUT_API_BASE_URL", "http://pos.test/api/v1")
    monkeypatch.setenv("CHECKOUT_API_TOKEN", "secret")

    backend = get_backend()
    try:
        assert isinstance(backend, ApiClient)
        assert str(backend.client.base_url) == "http://pos.test/api/v1/"
        assert backend.client.headers["Authorization"] == "Bearer secret"
    finally:
        backend.close()


def test_get_backend_rejects_unknown(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHECKOUT_BACKEND", "nope")
    with pytest.raises(ValueError, match="Unknown CHECKOUT_BACKEND"):
        get_backend()
