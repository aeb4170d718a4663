"""
Food delivery back-office services.

Three FastAPI applications cooperate over HTTP:

- ``food_delivery.users``: users service, CRUD over ``users.db``
- ``food_delivery.orders``: orders service, CRUD over ``orders.db`` plus the
  order-with-user read that calls the users service
- ``food_delivery.gateway``: public ``/api`` surface proxying to both
"""
__version__ = "2.0.0"
