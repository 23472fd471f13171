"""Domain layer for user records.

Business logic for user entities split into public/private partitions,
decoupled from the authentication provider and the data store adapters.
"""
