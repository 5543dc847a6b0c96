"""CRUD HTTP service for shopper profiles."""

__version__ = "0.1.0"
