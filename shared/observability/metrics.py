from prometheus_client import Counter, Histogram

# Business Metrics
bookstore_checkout_total = Counter(
    "bookstore_checkout_total",
    "Total checkouts processed",
    ["status"]  # Labels: 'success', 'failed'
)

bookstore_checkout_duration_seconds = Histogram(
    "bookstore_checkout_duration_seconds",
    "Checkout duration in seconds"
)

bookstore_stock_restored_total = Counter(
    "bookstore_stock_restored_total",
    "Units of stock returned to the catalog by order cancellations"
)

bookstore_order_status_transitions_total = Counter(
    "bookstore_order_status_transitions_total",
    "Order status transitions applied",
    ["to_status"]  # Labels: 'PAID', 'SHIPPED', 'CANCELLED', ...
)
