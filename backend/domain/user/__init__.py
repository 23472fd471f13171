"""User domain module.

This domain manages application user records layered on top of an
external authentication provider and a hierarchical data store.
Each user is split into a public and a private partition.
"""
