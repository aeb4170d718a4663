"""API gateway: public ``/api`` surface over the users and orders services."""
