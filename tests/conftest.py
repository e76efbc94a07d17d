from __future__ import annotations

from pathlib import Path

import pytest

from checkout.persistence import LocalBackend
from checkout.session import OrderSession
from tests.fakes import FakeBackend


@pytest.fixture()
def session() -> OrderSession:
    return OrderSession()


@pytest.fixture()
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture()
def local_backend(tmp_path: Path) -> LocalBackend:
    return LocalBackend(tmp_path / "checkout.db")
