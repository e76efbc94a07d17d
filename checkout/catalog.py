"""Read-only product catalog view filtered by category and search text."""

from __future__ import annotations

import logging

from checkout import config
from checkout.errors import CatalogUnavailableError
from checkout.models import Category, ProductSnapshot
from checkout.services import CatalogService
from checkout.session import OrderSession

log = logging.getLogger(__name__)


def matches_search(name: str, search: str) -> bool:
    """Case-insensitive substring match; blank search matches everything."""
    needle = search.strip().lower()
    if not needle:
        return True
    return needle in name.lower()


def filter_products(
    products: list[ProductSnapshot],
    category_id: str | None,
    search: str,
) -> list[ProductSnapshot]:
    return [
        product
        for product in products
        if (category_id is None or product.category_id == category_id)
        and matches_search(product.name, search)
    ]


class CatalogFilter:
    """Point-in-time catalog snapshot plus the terminal's browse filters.

    The selected category is owned by the order session so the cart and the
    product grid agree on it.
    """

    def __init__(self, service: CatalogService, session: OrderSession) -> None:
        self.service = service
        self.session = session
        self.products: list[ProductSnapshot] = []
        self.categories: list[Category] = []
        self.search = ""
        self.error: str | None = None

    @property
    def selected_category_id(self) -> str | None:
        return self.session.selected_category_id

    @property
    def is_filter_active(self) -> bool:
        return bool(self.selected_category_id or self.search.strip())

    def refresh(self) -> bool:
        """Reload products and categories; keep the last snapshot on failure."""
        try:
            categories = self.service.list_categories(page=1, page_size=config.CATALOG_PAGE_SIZE)
            products = self.service.list_products(page=1, page_size=config.CATALOG_PAGE_SIZE)
        except CatalogUnavailableError as exc:
            self.error = exc.message
            log.warning("catalog refresh failed: %s", exc)
            return False

        self.categories = sorted(categories, key=lambda category: category.sort_order)
        self.products = products
        self.error = None
        if self.selected_category_id is not None and self.category_by_id(self.selected_category_id) is None:
            self.session.set_selected_category(None)
        log.info("catalog refreshed products=%d categories=%d", len(products), len(categories))
        return True

    def filtered(self) -> list[ProductSnapshot]:
        return filter_products(self.products, self.selected_category_id, self.search)

    def set_search(self, text: str) -> None:
        self.search = text

    def select_category(self, category_id: str | None) -> None:
        self.session.set_selected_category(category_id)

    def cycle_category(self, delta: int) -> str | None:
        """Step through ``All`` followed by each category, wrapping around."""
        options: list[str | None] = [None] + [category.id for category in self.categories]
        try:
            idx = options.index(self.selected_category_id)
        except ValueError:
            idx = 0
        category_id = options[(idx + delta) % len(options)]
        self.select_category(category_id)
        return category_id

    def category_by_id(self, category_id: str) -> Category | None:
        for category in self.categories:
            if category.id == category_id:
                return category
        return None
