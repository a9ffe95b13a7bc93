"""User Manager: a CRUD HTTP service for user records."""

__version__ = "0.1.0"
