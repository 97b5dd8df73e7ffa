"""HTTP playground for browsing, editing and defining PostgreSQL tables."""

__version__ = "0.1.0"
