"""
Core utilities shared across the Shopper API.

This package hosts configuration helpers (env vars, .env loading) and the
logging setup. Routers/services should depend on these primitives instead of
reading os.environ directly.
"""
