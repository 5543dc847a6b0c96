"""
High-level use cases for the Shopper API.

Routers call these services instead of touching the repository or sessions.
"""
