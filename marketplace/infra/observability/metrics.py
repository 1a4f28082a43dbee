from prometheus_client import Counter, Histogram


# Order Metrics
orders_placed_total = Counter("marketplace_orders_placed_total", "Total orders placed", ["status", "order_type"])
order_value = Histogram(
    "marketplace_order_value_inr",
    "Order total distribution in INR",
    buckets=[50, 100, 250, 500, 1000, 2500, 5000, 10000, float("inf")],
)
order_status_transitions_total = Counter(
    "marketplace_order_status_transitions_total", "Order status changes", ["from_status", "to_status"]
)
order_number_collisions_total = Counter(
    "marketplace_order_number_collisions_total", "Generated order numbers that collided and were regenerated"
)

# Stock Metrics
stock_reservation_failures = Counter(
    "marketplace_stock_reservation_failure", "Conditional stock decrements that matched no row"
)
stock_released_units = Counter("marketplace_stock_released_units_total", "Units returned to stock by cancellations")

# Cart Metrics
cart_operations_total = Counter("marketplace_cart_operations_total", "Cart mutations", ["operation", "status"])

# Review Metrics
reviews_submitted_total = Counter("marketplace_reviews_submitted_total", "Reviews created or updated", ["review_type"])

# Research Metrics
research_queries_total = Counter("marketplace_research_queries_total", "Research engine calls", ["kind"])
research_duration = Histogram("marketplace_research_duration_seconds", "Research engine latency", ["kind"])
