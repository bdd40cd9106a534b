from .setup import setup_observability, configure_logging
from .metrics import (
    bookstore_checkout_total,
    bookstore_checkout_duration_seconds,
    bookstore_stock_restored_total,
    bookstore_order_status_transitions_total,
)
