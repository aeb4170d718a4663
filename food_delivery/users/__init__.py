"""Users service: customer records in ``users.db``."""
