"""Runtime configuration defaults for services, persistence and logging."""

from __future__ import annotations

import os

# "local" runs against the bundled SQLite backend, "http" against the REST API.
BACKEND = os.environ.get("CHECKOUT_BACKEND", "local")

API_BASE_URL = os.environ.get("CHECKOUT_API_BASE_URL", "http://localhost:8080/api/v1")
API_TOKEN = os.environ.get("CHECKOUT_API_TOKEN", "")
HTTP_CONNECT_TIMEOUT_S = 5.0
HTTP_READ_TIMEOUT_S = float(os.environ.get("CHECKOUT_HTTP_TIMEOUT", "10.0"))

DB_PATH = os.environ.get("CHECKOUT_DB_PATH", "data/checkout.db")
LOG_PATH = os.environ.get("CHECKOUT_LOG_PATH", "data/checkout.log")

CATALOG_PAGE_SIZE = 100
TRANSACTION_EXPIRY_MINUTES = 15
