"""Personal contact directory: CRUD, search, filters and local persistence."""

__version__ = "0.1.0"
