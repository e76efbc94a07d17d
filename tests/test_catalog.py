from __future__ import annotations

import pytest

from checkout.catalog import CatalogFilter, filter_products, matches_search
from checkout.errors import CatalogUnavailableError
from checkout.session import OrderSession
from tests.fakes import AMERICANO, CROISSANT, LATTE, SOLD_OUT, FakeBackend


@pytest.fixture()
def catalog(backend: FakeBackend, session: OrderSession) -> CatalogFilter:
    catalog = CatalogFilter(backend, session)
    assert catalog.refresh()
    return catalog


@pytest.mark.parametrize(
    ("name", "search", "expected"),
    [
        ("Palm Sugar Latte", "", True),
        ("Palm Sugar Latte", "   ", True),
        ("Palm Sugar Latte", "LATTE", True),
        ("Palm Sugar Latte", "sugar l", True),
        ("Palm Sugar Latte", "mocha", False),
    ],
)
def test_matches_search(name: str, search: str, expected: bool) -> None:
    assert matches_search(name, search) is expected


def test_filter_products_combines_category_and_search() -> None:
    products = [LATTE, AMERICANO, CROISSANT, SOLD_OUT]
    assert filter_products(products, None, "") == products
    assert filter_products(products, "cat-bakery", "") == [CROISSANT, SOLD_OUT]
    assert filter_products(products, "cat-coffee", "ameri") == [AMERICANO]
    assert filter_products(products, "cat-bakery", "latte") == []


def test_refresh_sorts_categories(catalog: CatalogFilter) -> None:
    assert [category.id for category in catalog.categories] == ["cat-coffee", "cat-bakery"]
    assert len(catalog.products) == 4
    assert catalog.error is None


def test_category_selection_lives_on_session(catalog: CatalogFilter, session: OrderSession) -> None:
    catalog.select_category("cat-bakery")

    assert session.selected_category_id == "cat-bakery"
    assert catalog.is_filter_active
    assert [product.id for product in catalog.filtered()] == [CROISSANT.id, SOLD_OUT.id]


def test_cycle_category_wraps_through_all(catalog: CatalogFilter) -> None:
    assert catalog.cycle_category(1) == "cat-coffee"
    assert catalog.cycle_category(1) == "cat-bakery"
    assert catalog.cycle_category(1) is None
    assert catalog.cycle_category(-1) == "cat-bakery"


def test_search_filter(catalog: CatalogFilter) -> None:
    catalog.set_search("croiss")
    assert catalog.filtered() == [CROISSANT]
    catalog.set_search("")
    assert not catalog.is_filter_active


def test_refresh_failure_keeps_snapshot(catalog: CatalogFilter, backend: FakeBackend) -> None:
    backend.catalog_error = CatalogUnavailableError("Connection failed")

    assert not catalog.refresh()
    assert catalog.error == "Connection failed"
    assert len(catalog.products) == 4


def test_refresh_drops_vanished_category(catalog: CatalogFilter, backend: FakeBackend) -> None:
    catalog.select_category("cat-bakery")
    backend.categories = [c for c in backend.categories if c.id != "cat-bakery"]

    catalog.refresh()

    assert catalog.selected_category_id is None


def test_lookups(catalog: CatalogFilter) -> None:
    assert catalog.category_by_id("cat-coffee") is not None
