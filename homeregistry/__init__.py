"""Registry of houses, rooms and devices in SQLite, served over HTTP, with a client."""

__version__ = "0.1.0"