"""Orders service: orders in ``orders.db`` and the order-with-user read."""
