"""Hash-linked chain, SQLite storage and queries for encrypted IoT weather sensor readings."""

__version__ = "0.1.0"