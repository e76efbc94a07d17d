"""SQLite backend serving the catalog and recording committed transactions."""

from __future__ import annotations

import logging
import random
import sqlite3
from collections import Counter
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Iterator
from uuid import uuid4

from checkout import config
from checkout.constant import INVOICE_LETTERS, TRANSACTION_STATUS_PAID, TRANSACTION_STATUS_PENDING
from checkout.data import DEMO_CATEGORIES, DEMO_PRODUCTS
from checkout.errors import CatalogUnavailableError, ServiceError, TransactionCommitError
from checkout.models import Category, ProductSnapshot
from checkout.schemas import CreateTransactionRequest, TransactionItemOut, TransactionOut

log = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def generate_invoice_number(now: datetime, rng: random.Random | None = None) -> str:
    """Format: DDMMYY followed by three uppercase letters, e.g. 130126JTY."""
    rng = rng or random.Random()
    suffix = "".join(rng.choice(INVOICE_LETTERS) for _ in range(3))
    return now.strftime("%d%m%y") + suffix


def _row_to_product(row: sqlite3.Row) -> ProductSnapshot:
    return ProductSnapshot(
        id=row["id"],
        name=row["name"],
        price=int(row["price"]),
        enable_stock=bool(row["enable_stock"]),
        stock_qty=row["stock_qty"],
        unit=row["unit"],
        image=row["image"],
        category_id=row["category_id"],
    )


class LocalBackend:
    """Catalog and transaction service backed by a local SQLite file."""

    def __init__(self, db_path: str | Path = config.DB_PATH, seed: bool = True) -> None:
        self.db_path = Path(db_path)
        self.bootstrap_schema()
        if seed:
            self.seed_demo_catalog()

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    @contextmanager
    def _session(self) -> Iterator[sqlite3.Connection]:
        conn = self._connect()
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def close(self) -> None:
        # Connections are opened per call.
        return

    def bootstrap_schema(self) -> None:
        """Create persistence schema if it does not already exist."""
        with self._session() as conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS categories (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    sort_order INTEGER NOT NULL DEFAULT 0
                );

                CREATE TABLE IF NOT EXISTS products (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    price INTEGER NOT NULL,
                    category_id TEXT,
                    is_active INTEGER NOT NULL DEFAULT 1,
                    enable_stock INTEGER NOT NULL DEFAULT 0,
                    stock_qty INTEGER,
                    unit TEXT,
                    image TEXT,
                    FOREIGN KEY(category_id) REFERENCES categories(id) ON DELETE SET NULL
                );

                CREATE TABLE IF NOT EXISTS transactions (
                    id TEXT PRIMARY KEY,
                    invoice_number TEXT NOT NULL,
                    total_amount INTEGER NOT NULL,
                    received_amount INTEGER NOT NULL,
                    change_amount INTEGER NOT NULL,
                    status TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    paid_at TEXT,
                    expired_at TEXT NOT NULL,
                    source TEXT NOT NULL DEFAULT 'tui'
                );

                CREATE TABLE IF NOT EXISTS transaction_items (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    transaction_id TEXT NOT NULL,
                    line_index INTEGER NOT NULL,
                    product_id TEXT,
                    product_name TEXT NOT NULL,
                    price INTEGER NOT NULL,
                    quantity INTEGER NOT NULL,
                    subtotal INTEGER NOT NULL,
                    FOREIGN KEY(transaction_id) REFERENCES transactions(id) ON DELETE CASCADE
                );

                CREATE INDEX IF NOT EXISTS idx_products_category_id
                    ON products(category_id);

                CREATE INDEX IF NOT EXISTS idx_transaction_items_transaction_id_line
                    ON transaction_items(transaction_id, line_index);
                """
            )
            transaction_columns = {row[1] for row in conn.execute("PRAGMA table_info(transactions)")}
            if "idempotency_key" not in transaction_columns:
                conn.execute("ALTER TABLE transactions ADD COLUMN idempotency_key TEXT")
            conn.execute(
                "CREATE UNIQUE INDEX IF NOT EXISTS idx_transactions_idempotency_key "
                "ON transactions(idempotency_key)"
            )

    def seed_demo_catalog(self) -> None:
        """Insert the demo catalog into an empty database."""
        with self._session() as conn:
            (count,) = conn.execute("SELECT COUNT(*) FROM products").fetchone()
            if count:
                return
            conn.executemany(
                "INSERT INTO categories (id, name, sort_order) VALUES (?, ?, ?)",
                [(c.id, c.name, c.sort_order) for c in DEMO_CATEGORIES],
            )
            conn.executemany(
                """
                INSERT INTO products (id, name, price, category_id, enable_stock, stock_qty, unit, image)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                [
                    (p.id, p.name, p.price, p.category_id, int(p.enable_stock), p.stock_qty, p.unit, p.image)
                    for p in DEMO_PRODUCTS
                ],
            )
        log.info("seeded demo catalog into %s", self.db_path)

    def add_product(self, product: ProductSnapshot, is_active: bool = True) -> None:
        with self._session() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO products
                    (id, name, price, category_id, is_active, enable_stock, stock_qty, unit, image)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    product.id,
                    product.name,
                    product.price,
                    product.category_id,
                    int(is_active),
                    int(product.enable_stock),
                    product.stock_qty,
                    product.unit,
                    product.image,
                ),
            )

    def list_categories(self, page: int = 1, page_size: int = config.CATALOG_PAGE_SIZE) -> list[Category]:
        offset = max(0, page - 1) * page_size
        try:
            with self._session() as conn:
                rows = conn.execute(
                    "SELECT id, name, sort_order FROM categories ORDER BY sort_order, name LIMIT ? OFFSET ?",
                    (page_size, offset),
                ).fetchall()
        except sqlite3.Error as exc:
            log.error("list_categories failed: %s", exc)
            raise CatalogUnavailableError(f"Database error: {exc}") from exc
        return [Category(id=row["id"], name=row["name"], sort_order=row["sort_order"]) for row in rows]

    def list_products(
        self,
        category_id: str | None = None,
        search: str | None = None,
        page: int = 1,
        page_size: int = config.CATALOG_PAGE_SIZE,
    ) -> list[ProductSnapshot]:
        offset = max(0, page - 1) * page_size
        pattern = f"%{(search or '').strip().lower()}%"
        try:
            with self._session() as conn:
                rows = conn.execute(
                    """
                    SELECT * FROM products
                    WHERE is_active = 1
                      AND (? IS NULL OR category_id = ?)
                      AND lower(name) LIKE ?
                    ORDER BY name
                    LIMIT ? OFFSET ?
                    """,
                    (category_id, category_id, pattern, page_size, offset),
                ).fetchall()
        except sqlite3.Error as exc:
            log.error("list_products failed: %s", exc)
            raise CatalogUnavailableError(f"Database error: {exc}") from exc
        return [_row_to_product(row) for row in rows]

    def get_product(self, product_id: str) -> ProductSnapshot | None:
        with self._session() as conn:
            row = conn.execute("SELECT * FROM products WHERE id = ?", (product_id,)).fetchone()
        return _row_to_product(row) if row is not None else None

    def create_transaction(
        self,
        request: CreateTransactionRequest,
        idempotency_key: str | None = None,
    ) -> TransactionOut:
        """Validate, price and persist a sale, decrementing tracked stock."""
        try:
            return self._record_transaction(request, idempotency_key)
        except sqlite3.Error as exc:
            log.error("create_transaction failed: %s", exc)
            raise TransactionCommitError(f"Database error: {exc}") from exc

    def get_transaction(self, transaction_id: str) -> TransactionOut:
        try:
            return self._read_transaction(transaction_id)
        except sqlite3.Error as exc:
            log.error("get_transaction %s failed: %s", transaction_id, exc)
            raise TransactionCommitError(f"Database error: {exc}") from exc

    def _record_transaction(
        self,
        request: CreateTransactionRequest,
        idempotency_key: str | None,
    ) -> TransactionOut:
        if idempotency_key:
            existing = self._transaction_id_for_key(idempotency_key)
            if existing is not None:
                log.info("replayed transaction %s for idempotency key", existing)
                return self._read_transaction(existing)

        requested = Counter()
        for item in request.items:
            requested[item.product_id] += item.quantity

        now = _utc_now()
        transaction_id = uuid4().hex

        with self._session() as conn:
            products: dict[str, sqlite3.Row] = {}
            for product_id in requested:
                row = conn.execute(
                    "SELECT id, name, price, is_active, enable_stock, stock_qty FROM products WHERE id = ?",
                    (product_id,),
                ).fetchone()
                if row is None:
                    raise TransactionCommitError(f"Product {product_id} not found", 400)
                if not row["is_active"]:
                    raise TransactionCommitError(f"Product {row['name']} is not active", 400)
                if row["enable_stock"] and row["stock_qty"] is not None and row["stock_qty"] < requested[product_id]:
                    raise TransactionCommitError(
                        f"Insufficient stock for product {row['name']}. "
                        f"Available: {row['stock_qty']}, Requested: {requested[product_id]}",
                        400,
                    )
                products[product_id] = row

            total_amount = sum(products[item.product_id]["price"] * item.quantity for item in request.items)

            status = TRANSACTION_STATUS_PENDING
            received_amount = change_amount = 0
            paid_at: str | None = None
            if request.is_cash_paid:
                if request.received_amount is None:
                    raise TransactionCommitError("Received amount is required", 400)
                received_amount = request.received_amount
                change_amount = received_amount - total_amount
                if change_amount < 0:
                    raise TransactionCommitError("Received amount is less than total amount", 400)
                status = TRANSACTION_STATUS_PAID
                paid_at = now.isoformat()

            conn.execute(
                """
                INSERT INTO transactions (
                    id, invoice_number, idempotency_key, total_amount, received_amount,
                    change_amount, status, created_at, paid_at, expired_at
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    transaction_id,
                    generate_invoice_number(now),
                    idempotency_key,
                    total_amount,
                    received_amount,
                    change_amount,
                    status,
                    now.isoformat(),
                    paid_at,
                    (now + timedelta(minutes=config.TRANSACTION_EXPIRY_MINUTES)).isoformat(),
                ),
            )

            for idx, item in enumerate(request.items):
                product = products[item.product_id]
                conn.execute(
                    """
                    INSERT INTO transaction_items
                        (transaction_id, line_index, product_id, product_name, price, quantity, subtotal)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        transaction_id,
                        idx,
                        item.product_id,
                        product["name"],
                        product["price"],
                        item.quantity,
                        product["price"] * item.quantity,
                    ),
                )

            for product_id, quantity in requested.items():
                if not products[product_id]["enable_stock"]:
                    continue
                conn.execute(
                    "UPDATE products SET stock_qty = stock_qty - ? WHERE id = ? AND stock_qty IS NOT NULL",
                    (quantity, product_id),
                )

        log.info("created transaction %s total=%d status=%s", transaction_id, total_amount, status)
        return self._read_transaction(transaction_id)

    def _read_transaction(self, transaction_id: str) -> TransactionOut:
        with self._session() as conn:
            row = conn.execute("SELECT * FROM transactions WHERE id = ?", (transaction_id,)).fetchone()
            if row is None:
                raise ServiceError("Transaction not found", 404)
            item_rows = conn.execute(
                "SELECT * FROM transaction_items WHERE transaction_id = ? ORDER BY line_index",
                (transaction_id,),
            ).fetchall()

        return TransactionOut(
            id=row["id"],
            invoice_number=row["invoice_number"],
            total_amount=row["total_amount"],
            received_amount=row["received_amount"],
            change_amount=row["change_amount"],
            status=row["status"],
            created_at=row["created_at"],
            paid_at=row["paid_at"],
            expired_at=row["expired_at"],
            items=[
                TransactionItemOut(
                    id=str(item["id"]),
                    product_id=item["product_id"],
                    product_name=item["product_name"],
                    price=item["price"],
                    quantity=item["quantity"],
                    subtotal=item["subtotal"],
                )
                for item in item_rows
            ],
        )

    def _transaction_id_for_key(self, idempotency_key: str) -> str | None:
        with self._session() as conn:
            row = conn.execute(
                "SELECT id FROM transactions WHERE idempotency_key = ?", (idempotency_key,)
            ).fetchone()
        return row["id"] if row is not None else None
