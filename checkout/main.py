"""Entry point for the checkout Textual app."""

from __future__ import annotations

from checkout.checkout_app import CheckoutApp
from checkout.logging_config import get_logger, setup_logging
from checkout.services import get_backend


def main() -> None:
    setup_logging()
    log = get_logger(__name__)

    backend = get_backend()
    log.info("starting checkout backend=%s", type(backend).__name__)
    try:
        CheckoutApp(backend).run()
    finally:
        backend.close()
        log.info("checkout stopped")


if __name__ == "__main__":
    main()
