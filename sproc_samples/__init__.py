"""Stored procedure samples: calling ``GetActiveUsers`` through SQLAlchemy."""

__version__ = "0.1.0"
